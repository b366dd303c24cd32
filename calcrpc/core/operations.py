"""Operation Registry: the five arithmetic operations and their arity rules.

Invariants:
    - OPERATIONS is the single name -> OperationSpec mapping; adding an
      operation requires editing it
    - compute() is only called with an argument count the arity accepts
    - Results are 32-bit two's complement; division truncates toward zero and
      the remainder takes the sign of the dividend
    - divide/modulo raise DivideByZeroFault for a zero divisor
"""

import operator
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Sequence, Union

from calcrpc.core.domain_types import Int32, wrap_int32
from calcrpc.core.errors import DivideByZeroFault


@dataclass(frozen=True)
class FixedArity:
    count: int

    def accepts(self, arg_count: int) -> bool:
        return arg_count == self.count


@dataclass(frozen=True)
class VariadicArity:
    """Zero or more operands; an empty list folds to identity."""
    identity: int

    def accepts(self, arg_count: int) -> bool:
        return arg_count >= 0


Arity = Union[FixedArity, VariadicArity]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    arity: Arity
    compute: Callable[[Sequence[int]], Int32]


# ─── Compute functions ───────────────────────────────────────────

def _truncated_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    if divisor == 0:
        raise DivideByZeroFault()
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return quotient, dividend - quotient * divisor


def _variadic(
    name: str, step: Callable[[int, int], int], identity: int,
) -> OperationSpec:
    def compute(args: Sequence[int]) -> Int32:
        return wrap_int32(reduce(step, args, identity))

    return OperationSpec(name, VariadicArity(identity), compute)


def _subtract(args: Sequence[int]) -> Int32:
    return wrap_int32(args[0] - args[1])


def _divide(args: Sequence[int]) -> Int32:
    return wrap_int32(_truncated_divmod(args[0], args[1])[0])


def _modulo(args: Sequence[int]) -> Int32:
    return wrap_int32(_truncated_divmod(args[0], args[1])[1])


# ─── Registry ────────────────────────────────────────────────────

OPERATIONS: dict[str, OperationSpec] = {
    "add": _variadic("add", operator.add, 0),
    "multiply": _variadic("multiply", operator.mul, 1),
    "subtract": OperationSpec("subtract", FixedArity(2), _subtract),
    "divide": OperationSpec("divide", FixedArity(2), _divide),
    "modulo": OperationSpec("modulo", FixedArity(2), _modulo),
}


def get_operation(name: str) -> OperationSpec | None:
    return OPERATIONS.get(name)
