"""Wire Codec: builds and parses methodCall / methodResponse envelopes.

Invariants:
    - Stateless: every call builds its own tree, no shared parser object
    - Only i4 is accepted as a call parameter type; anything else is a TypeFault
    - Missing or duplicated structural elements are a ParseFault
    - Fault members are looked up by name, never by position

Design Decisions:
    - xml.etree.ElementTree for both directions: tags and text escaping are
      handled by the serializer, so no hand-built strings
"""

import re
import xml.etree.ElementTree as ET
from typing import Iterable

from calcrpc.core.domain_types import (
    Call, Fault, Int32, Response, Success, is_int32,
)
from calcrpc.core.errors import ParseFault, TypeFault


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

INT_TAG = "i4"
STRING_TAG = "string"

_INT_TEXT = re.compile(r"([+-]?)0*([1-9][0-9]*|0)")

# int32 magnitudes have at most 10 significant digits
_MAX_DIGITS = 10


# ─── Encode ──────────────────────────────────────────────────────

def _to_xml(root: ET.Element) -> str:
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def _append_value(parent: ET.Element, tag: str, text: str) -> None:
    value = ET.SubElement(parent, "value")
    ET.SubElement(value, tag).text = text


def encode_call(name: str, args: Iterable[int]) -> str:
    """methodCall with one param/value/i4 per argument, in order."""
    call = Call(name, tuple(args))
    root = ET.Element("methodCall")
    ET.SubElement(root, "methodName").text = call.name
    params = ET.SubElement(root, "params")
    for arg in call.args:
        _append_value(ET.SubElement(params, "param"), INT_TAG, str(arg))
    return _to_xml(root)


def encode_success(value: int) -> str:
    if not is_int32(value):
        raise ValueError(f"Result is not an int32: {value!r}")
    root = ET.Element("methodResponse")
    param = ET.SubElement(ET.SubElement(root, "params"), "param")
    _append_value(param, INT_TAG, str(value))
    return _to_xml(root)


def encode_fault(code: int, message: str) -> str:
    """methodResponse/fault with faultCode then faultString members."""
    root = ET.Element("methodResponse")
    value = ET.SubElement(ET.SubElement(root, "fault"), "value")
    struct = ET.SubElement(value, "struct")

    code_member = ET.SubElement(struct, "member")
    ET.SubElement(code_member, "name").text = "faultCode"
    _append_value(code_member, INT_TAG, str(int(code)))

    string_member = ET.SubElement(struct, "member")
    ET.SubElement(string_member, "name").text = "faultString"
    _append_value(string_member, STRING_TAG, message)
    return _to_xml(root)


def encode_response(response: Response) -> str:
    if isinstance(response, Fault):
        return encode_fault(response.code, response.message)
    return encode_success(response.value)


# ─── Decode helpers ──────────────────────────────────────────────

def _parse(xml: str | bytes, root_tag: str) -> ET.Element:
    try:
        root = ET.fromstring(xml)
    except (ET.ParseError, LookupError, ValueError) as e:
        raise ParseFault(f"not well-formed XML ({e})") from e
    if root.tag != root_tag:
        raise ParseFault(f"expected <{root_tag}> root, got <{root.tag}>")
    return root


def _exactly_one(parent: ET.Element, tag: str) -> ET.Element:
    found = parent.findall(tag)
    if len(found) != 1:
        raise ParseFault(
            f"<{parent.tag}> must contain exactly one <{tag}>, found {len(found)}",
        )
    return found[0]


def _first(parent: ET.Element, tag: str) -> ET.Element:
    found = parent.find(tag)
    if found is None:
        raise ParseFault(f"<{parent.tag}> is missing <{tag}>")
    return found


def _parse_int(text: str | None) -> Int32:
    text = (text or "").strip()
    match = _INT_TEXT.fullmatch(text)
    if not match:
        raise TypeFault(f"i4 text is not an integer: {text[:32]!r}")
    sign, digits = match.groups()
    if len(digits) > _MAX_DIGITS:
        raise TypeFault(f"i4 value out of range: {len(digits)} digits")
    number = int(sign + digits)
    if not is_int32(number):
        raise TypeFault(f"i4 value out of range: {number}")
    return Int32(number)


def _read_int_value(value: ET.Element) -> Int32:
    """<value> must wrap exactly one child and that child must be <i4>."""
    children = list(value)
    if len(children) != 1 or children[0].tag != INT_TAG:
        tags = [child.tag for child in children]
        raise TypeFault(f"expected a single <{INT_TAG}>, found {tags}")
    return _parse_int(children[0].text)


def _read_string_value(value: ET.Element) -> str:
    """<string> child, or bare text (XML-RPC default type)."""
    children = list(value)
    if not children:
        return value.text or ""
    if len(children) == 1 and children[0].tag == STRING_TAG:
        return children[0].text or ""
    raise ParseFault(f"faultString is not a string value: {[c.tag for c in children]}")


# ─── Decode ──────────────────────────────────────────────────────

def decode_call(xml: str | bytes) -> Call:
    """Parse a methodCall body into a Call. Raises ParseFault or TypeFault."""
    root = _parse(xml, "methodCall")
    name = (_exactly_one(root, "methodName").text or "").strip()
    params = _exactly_one(root, "params")

    args: list[Int32] = []
    for param in params.findall("param"):
        args.append(_read_int_value(_exactly_one(param, "value")))
    return Call(name, tuple(args))


def decode_response(xml: str | bytes) -> Response:
    """Parse a methodResponse body into Success or Fault.

    Raises ParseFault on missing structure and TypeFault when the success
    value is not a single i4.
    """
    root = _parse(xml, "methodResponse")
    fault = root.find("fault")
    if fault is not None:
        return _decode_fault(fault)

    param = _first(_first(root, "params"), "param")
    return Success(_read_int_value(_first(param, "value")))


def _decode_fault(fault: ET.Element) -> Fault:
    struct = _first(_first(fault, "value"), "struct")
    members: dict[str, ET.Element] = {}
    for member in struct.findall("member"):
        name = (_first(member, "name").text or "").strip()
        members.setdefault(name, _first(member, "value"))

    if "faultCode" not in members or "faultString" not in members:
        raise ParseFault(f"fault struct members incomplete: {sorted(members)}")
    try:
        code = _read_int_value(members["faultCode"])
    except TypeFault as e:
        raise ParseFault(f"faultCode is not an i4 ({e.detail})") from e
    return Fault(code, _read_string_value(members["faultString"]))
