"""Error Hierarchy: typed, categorized exceptions for every calcrpc failure mode.

Invariants:
    - Every error has a code (int fault code or 0), category (ErrorCategory), severity (ErrorSeverity)
    - Server-side errors convert to a Fault value via to_fault(); nothing else reaches the wire
    - Client-side errors (TransportFault, RemoteFault) never produce a Fault envelope

Design Decisions:
    - Single hierarchy with CalcRpcError base: the service and the FastAPI
      handlers catch one type
    - Codec raises ParseFault/TypeFault at the parse boundary; everything
      after decode works with Success/Fault values
"""

from enum import Enum

from calcrpc.core.domain_types import Fault, FaultCode, FaultMessage


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    PARSE = "parse"
    TYPE = "type"
    VALIDATION = "validation"
    ARITHMETIC = "arithmetic"
    TRANSPORT = "transport"
    REMOTE = "remote"


class CalcRpcError(Exception):
    """Base exception for all calcrpc errors."""

    def __init__(
        self,
        message: str,
        code: int,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity

    def to_fault(self) -> Fault:
        """Convert to the Fault value written back to the caller."""
        return Fault(self.code, self.message)


# ─── Protocol Errors (become Fault envelopes) ───────────────────

class ParseFault(CalcRpcError):
    """Envelope is not well-formed XML or lacks a required element."""
    def __init__(self, detail: str):
        super().__init__(
            FaultMessage.MALFORMED_REQUEST, FaultCode.MALFORMED_REQUEST,
            ErrorCategory.PARSE, ErrorSeverity.WARNING,
        )
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.message} {self.detail}"


class TypeFault(CalcRpcError):
    """A value is not carried by exactly one i4 tag."""
    def __init__(self, detail: str = ""):
        super().__init__(
            FaultMessage.UNSUPPORTED_TYPE, FaultCode.UNSUPPORTED_TYPE,
            ErrorCategory.TYPE, ErrorSeverity.WARNING,
        )
        self.detail = detail


class ValidationFault(CalcRpcError):
    """Unknown operation name or wrong argument count."""
    def __init__(self, method_name: str, arg_count: int):
        super().__init__(
            FaultMessage.UNEXPECTED_ARGUMENTS, FaultCode.UNEXPECTED_ARGUMENTS,
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )
        self.method_name = method_name
        self.arg_count = arg_count


class DivideByZeroFault(CalcRpcError):
    """Second operand of divide/modulo is zero."""
    def __init__(self):
        super().__init__(
            FaultMessage.DIVIDE_BY_ZERO, FaultCode.UNEXPECTED_ARGUMENTS,
            ErrorCategory.ARITHMETIC, ErrorSeverity.WARNING,
        )


# ─── Client Errors ──────────────────────────────────────────────

class TransportFault(CalcRpcError):
    """Server answered with a non-200 status, or could not be reached.

    status_code is None when no HTTP response was received.
    """
    def __init__(self, status_code: int | None, body: str):
        if status_code is None:
            message = f"Transport failure: {body}"
        else:
            message = f"Responded with status {status_code}: {body}"
        super().__init__(
            message, 0, ErrorCategory.TRANSPORT, ErrorSeverity.CRITICAL,
        )
        self.status_code = status_code
        self.body = body


class RemoteFault(CalcRpcError):
    """Server answered with a Fault envelope."""
    def __init__(self, fault_code: int, fault_string: str):
        super().__init__(
            f"Server could not handle request. Fault code: {fault_code}. {fault_string}",
            fault_code, ErrorCategory.REMOTE, ErrorSeverity.ERROR,
        )
        self.fault_code = fault_code
        self.fault_string = fault_string

    def to_fault(self) -> Fault:
        return Fault(self.fault_code, self.fault_string)
