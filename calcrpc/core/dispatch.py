"""Dispatch: validates a decoded Call against the registry and computes it.

Invariants:
    - validate() is checked before any compute() runs
    - execute() never raises: every outcome is a Success or a Fault
    - Unknown names and arity mismatches produce the same Fault (code 1)
"""

from calcrpc.core.domain_types import Call, Response, Success, is_int32
from calcrpc.core.errors import CalcRpcError, ValidationFault
from calcrpc.core.operations import get_operation


def validate(call: Call) -> bool:
    """True when every arg is int32 and the named operation accepts the count."""
    if not all(is_int32(arg) for arg in call.args):
        return False
    spec = get_operation(call.name)
    if spec is None:
        return False
    return spec.arity.accepts(len(call.args))


def execute(call: Call) -> Response:
    if not validate(call):
        return ValidationFault(call.name, len(call.args)).to_fault()
    spec = get_operation(call.name)
    try:
        return Success(spec.compute(call.args))
    except CalcRpcError as e:
        return e.to_fault()
