"""Error taxonomy and classification for the Selenium MCP server.

Leaf operations raise the domain exceptions defined here, carrying whatever
context they have (operation, locator, timeout, URL, resource id). The
dispatch boundary calls ``classify()`` exactly once per failure and converts
the resulting ``ErrorEnvelope`` into an ``McpError``, so every error leaving
the server has one taxonomy kind and one JSON-RPC error code.

    Kind               Protocol code
    -----------------  -----------------------
    SessionNotStarted  INVALID_REQUEST  -32600
    UnknownTool        METHOD_NOT_FOUND -32601
    InvalidArgument    INVALID_PARAMS   -32602
    ElementNotReady    INVALID_PARAMS   -32602
    OperationTimedOut  REQUEST_TIMEOUT  -32001
    UnderlyingFailure  INTERNAL_ERROR   -32603
    ResourceNotFound   INVALID_REQUEST  -32600
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import mcp.types
import pydantic
from mcp.server.fastmcp.exceptions import FastMCPError, ResourceError, ToolError, ValidationError
from mcp.shared.exceptions import McpError

__all__ = [
    'BrowserAutomationError',
    'ElementNotReadyError',
    'ErrorEnvelope',
    'ErrorKind',
    'InvalidArgumentError',
    'OperationTimedOutError',
    'ProtocolErrorCode',
    'ResourceNotFoundError',
    'SessionNotStartedError',
    'UnderlyingFailureError',
    'UnknownToolError',
    'classify',
    'format_validation_error',
]

logger = logging.getLogger(__name__)


class ProtocolErrorCode(enum.IntEnum):
    """JSON-RPC error codes used at the server boundary."""

    INVALID_REQUEST = mcp.types.INVALID_REQUEST
    METHOD_NOT_FOUND = mcp.types.METHOD_NOT_FOUND
    INVALID_PARAMS = mcp.types.INVALID_PARAMS
    INTERNAL_ERROR = mcp.types.INTERNAL_ERROR
    # MCP request-timeout code; mcp.types defines no constant for it
    REQUEST_TIMEOUT = -32001


class ErrorKind(enum.StrEnum):
    SESSION_NOT_STARTED = 'SessionNotStarted'
    UNKNOWN_TOOL = 'UnknownTool'
    INVALID_ARGUMENT = 'InvalidArgument'
    ELEMENT_NOT_READY = 'ElementNotReady'
    OPERATION_TIMED_OUT = 'OperationTimedOut'
    UNDERLYING_FAILURE = 'UnderlyingFailure'
    RESOURCE_NOT_FOUND = 'ResourceNotFound'

    @property
    def protocol_code(self) -> ProtocolErrorCode:
        return _PROTOCOL_CODES[self]


_PROTOCOL_CODES: dict[ErrorKind, ProtocolErrorCode] = {
    ErrorKind.SESSION_NOT_STARTED: ProtocolErrorCode.INVALID_REQUEST,
    ErrorKind.UNKNOWN_TOOL: ProtocolErrorCode.METHOD_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENT: ProtocolErrorCode.INVALID_PARAMS,
    ErrorKind.ELEMENT_NOT_READY: ProtocolErrorCode.INVALID_PARAMS,
    ErrorKind.OPERATION_TIMED_OUT: ProtocolErrorCode.REQUEST_TIMEOUT,
    ErrorKind.UNDERLYING_FAILURE: ProtocolErrorCode.INTERNAL_ERROR,
    ErrorKind.RESOURCE_NOT_FOUND: ProtocolErrorCode.INVALID_REQUEST,
}


# =============================================================================
# Domain exceptions
# =============================================================================


def _with_cause(message: str, cause: BaseException | None) -> str:
    """Append the low-level message (first line only, Selenium appends stacktraces)."""
    if cause is None:
        return message
    detail = _first_line(cause)
    return f'{message}: {detail}' if detail else message


def _first_line(exc: BaseException) -> str:
    # WebDriverException.msg excludes the "Message:" prefix and "Stacktrace:" block that __str__ adds
    text = (exc.msg or '') if hasattr(exc, 'msg') else str(exc)
    return text.strip().splitlines()[0] if text.strip() else ''


class BrowserAutomationError(FastMCPError):
    """Base class for every failure the server reports. ``kind`` selects the protocol code."""

    kind: ErrorKind = ErrorKind.UNDERLYING_FAILURE


class SessionNotStartedError(BrowserAutomationError, ToolError):
    kind = ErrorKind.SESSION_NOT_STARTED

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f'Browser not started. Please call start_browser first before using {operation}.')


class UnknownToolError(BrowserAutomationError, ToolError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f'Unknown tool: {tool_name}')


class InvalidArgumentError(BrowserAutomationError, ValidationError):
    """A parameter failed validation before any browser call was attempted."""

    kind = ErrorKind.INVALID_ARGUMENT


class ElementNotReadyError(BrowserAutomationError, ToolError):
    """Element could not be located, or did not reach the expected state, within its timeout."""

    kind = ErrorKind.ELEMENT_NOT_READY

    def __init__(
        self,
        by: str,
        value: str,
        timeout_ms: int | None,
        expected_state: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.by = by
        self.value = value
        self.timeout_ms = timeout_ms
        self.expected_state = expected_state
        within = f' within {timeout_ms}ms' if timeout_ms is not None else ''
        if expected_state is None:
            message = f'Element not found [{by}="{value}"]{within}'
        else:
            message = f'Element [{by}="{value}"] did not become {expected_state}{within}'
        super().__init__(_with_cause(message, cause))


class OperationTimedOutError(BrowserAutomationError, ToolError):
    kind = ErrorKind.OPERATION_TIMED_OUT

    def __init__(self, operation: str, timeout_ms: int | None, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.timeout_ms = timeout_ms
        after = f' after {timeout_ms}ms' if timeout_ms is not None else ''
        super().__init__(_with_cause(f'{operation} timed out{after}', cause))


class UnderlyingFailureError(BrowserAutomationError, ToolError):
    """The WebDriver reported an error that no other kind describes (crashed driver, stale element, ...)."""

    kind = ErrorKind.UNDERLYING_FAILURE

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        super().__init__(_with_cause(f'Failed to {operation}', cause))


class ResourceNotFoundError(BrowserAutomationError, ResourceError):
    kind = ErrorKind.RESOURCE_NOT_FOUND

    def __init__(self, message: str, uri: str) -> None:
        self.uri = uri
        super().__init__(message)


# =============================================================================
# Classification
# =============================================================================


@dataclass(frozen=True)
class ErrorEnvelope:
    kind: ErrorKind
    message: str

    @property
    def protocol_error_code(self) -> ProtocolErrorCode:
        return self.kind.protocol_code

    def to_mcp_error(self) -> McpError:
        return McpError(
            mcp.types.ErrorData(
                code=int(self.protocol_error_code),
                message=self.message,
                data={'kind': str(self.kind)},
            )
        )


def classify(exc: BaseException) -> ErrorEnvelope:
    """Assign a taxonomy kind to any exception reaching the dispatch boundary."""
    if isinstance(exc, BrowserAutomationError):
        return ErrorEnvelope(kind=exc.kind, message=str(exc))
    if isinstance(exc, pydantic.ValidationError):
        return ErrorEnvelope(kind=ErrorKind.INVALID_ARGUMENT, message=format_validation_error(exc))
    if isinstance(exc, McpError):
        # Already protocol-shaped (raised by the SDK); keep its message, classify by code
        return ErrorEnvelope(kind=_kind_for_code(exc.error.code), message=exc.error.message)
    logger.debug('Unclassified %s treated as UnderlyingFailure', type(exc).__name__)
    message = _first_line(exc) or type(exc).__name__
    return ErrorEnvelope(kind=ErrorKind.UNDERLYING_FAILURE, message=message)


def _kind_for_code(code: int) -> ErrorKind:
    # Shared codes resolve to the first kind listed, so the code round-trips unchanged
    for kind in (
        ErrorKind.SESSION_NOT_STARTED,
        ErrorKind.UNKNOWN_TOOL,
        ErrorKind.INVALID_ARGUMENT,
        ErrorKind.OPERATION_TIMED_OUT,
    ):
        if kind.protocol_code == code:
            return kind
    return ErrorKind.UNDERLYING_FAILURE


def format_validation_error(exc: pydantic.ValidationError, tool_name: str | None = None) -> str:
    """Render pydantic errors as ``Invalid arguments for <tool>: field: message; ...``."""
    parts = []
    for error in exc.errors(include_url=False):
        location = '.'.join(str(part) for part in error['loc']) or 'arguments'
        message = error['msg'].removeprefix('Value error, ')
        parts.append(f'{location}: {message}')
    subject = tool_name or exc.title
    return f'Invalid arguments for {subject}: ' + '; '.join(parts)
