"""Domain Types: call and response values shared by codec, dispatcher and client.

Invariants:
    - Call.args is a tuple of int32 values; bools and out-of-range ints are rejected
    - A Response is exactly one of Success or Fault (frozen dataclasses)
    - Arithmetic results are wrapped to 32-bit two's complement via wrap_int32

Design Decisions:
    - FaultCode as IntEnum: members compare equal to the raw wire integers
    - Unknown operation and wrong arity share UNEXPECTED_ARGUMENTS; existing
      clients match on that code, so new operations must keep it
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NewType, Union


# ─── Value Types ─────────────────────────────────────────────────

Int32 = NewType("Int32", int)

INT32_MIN: int = -(2 ** 31)
INT32_MAX: int = 2 ** 31 - 1


def is_int32(value: object) -> bool:
    """True for a plain int (not bool) inside the signed 32-bit range."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and INT32_MIN <= value <= INT32_MAX
    )


def wrap_int32(value: int) -> Int32:
    """Reduce an arbitrary int to its 32-bit two's complement value."""
    wrapped = (value - INT32_MIN) % (2 ** 32) + INT32_MIN
    return Int32(wrapped)


# ─── Enums ───────────────────────────────────────────────────────

class FaultCode(IntEnum):
    """faultCode values carried in Fault envelopes."""
    UNEXPECTED_ARGUMENTS = 1
    MALFORMED_REQUEST = 2
    UNSUPPORTED_TYPE = 3


class FaultMessage:
    """faultString texts. Clients compare against these verbatim."""
    UNEXPECTED_ARGUMENTS = "Unexpected arguments for the requested method type."
    DIVIDE_BY_ZERO = "Divide by zero"
    UNSUPPORTED_TYPE = (
        "A param was requested that is not of type i4, this is not supported."
    )
    MALFORMED_REQUEST = "Malformed XML-RPC request."


# ─── Call / Response ─────────────────────────────────────────────

@dataclass(frozen=True)
class Call:
    """A single methodCall: operation name plus ordered int32 operands."""
    name: str
    args: tuple[Int32, ...] = field(default_factory=tuple)

    def __post_init__(self):
        args = tuple(self.args)
        for index, arg in enumerate(args):
            if not is_int32(arg):
                raise ValueError(
                    f"Argument {index} of '{self.name}' is not an int32: {arg!r}",
                )
        object.__setattr__(self, "args", args)


@dataclass(frozen=True)
class Success:
    """Successful methodResponse carrying one int32."""
    value: Int32


@dataclass(frozen=True)
class Fault:
    """Fault methodResponse."""
    code: int
    message: str


Response = Union[Success, Fault]
