"""Exceptions and JSON-RPC error codes of the RPC layer."""

from __future__ import annotations

import asyncio
import json
from enum import IntEnum


class RPCErrorCode(IntEnum):
    """Standard and server-defined JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_ERROR = -32000
    TIMEOUT = -32001
    RATE_LIMIT = -32002
    AUTHENTICATION = -32003
    AUTHORIZATION = -32004
    NOT_FOUND = -32005
    BAD_REQUEST = -32006
    SERVICE_UNAVAILABLE = -32007

    @property
    def message(self) -> str:
        """Human-readable description of the code."""
        return _MESSAGES[self]


_MESSAGES = {
    RPCErrorCode.PARSE_ERROR: "Parse error",
    RPCErrorCode.INVALID_REQUEST: "Invalid request",
    RPCErrorCode.METHOD_NOT_FOUND: "Method not found",
    RPCErrorCode.INVALID_PARAMS: "Invalid params",
    RPCErrorCode.INTERNAL_ERROR: "Internal error",
    RPCErrorCode.SERVER_ERROR: "Server error",
    RPCErrorCode.TIMEOUT: "Request timeout",
    RPCErrorCode.RATE_LIMIT: "Rate limit exceeded",
    RPCErrorCode.AUTHENTICATION: "Authentication failed",
    RPCErrorCode.AUTHORIZATION: "Authorization failed",
    RPCErrorCode.NOT_FOUND: "Resource not found",
    RPCErrorCode.BAD_REQUEST: "Bad request",
    RPCErrorCode.SERVICE_UNAVAILABLE: "Service unavailable",
}


class RPCError(Exception):
    """Base class for every RPC failure."""

    label = "RPC error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"{self.label}: {detail}")


class ServerError(RPCError):
    label = "Server error"


class RPCConfigError(RPCError):
    label = "Configuration error"


class JsonRPCError(RPCError):
    label = "JSON-RPC error"


class WebSocketError(RPCError):
    label = "WebSocket error"


class HTTPError(RPCError):
    label = "HTTP error"


class SerializationError(RPCError):
    label = "Serialization error"


class DeserializationError(RPCError):
    label = "Deserialization error"


class MethodNotFoundError(RPCError):
    label = "Method not found"


class InvalidParametersError(RPCError):
    label = "Invalid parameters"


class RPCInternalError(RPCError):
    label = "Internal error"


class RPCTimeoutError(RPCError):
    label = "Timeout error"


class RateLimitExceededError(RPCError):
    label = "Rate limit exceeded"

    def __init__(self) -> None:
        self.detail = ""
        Exception.__init__(self, self.label)


class AuthenticationError(RPCError):
    label = "Authentication failed"


class AuthorizationError(RPCError):
    label = "Authorization failed"


class NotFoundError(RPCError):
    label = "Resource not found"


class BadRequestError(RPCError):
    label = "Bad request"


class ServiceUnavailableError(RPCError):
    label = "Service unavailable"


def wrap_exception(exc: BaseException) -> RPCError:
    """Map a foreign exception onto the matching RPCError."""
    if isinstance(exc, RPCError):
        return exc
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return RPCTimeoutError("Request timed out")
    if isinstance(exc, json.JSONDecodeError):
        return SerializationError(str(exc))
    if isinstance(exc, OSError):
        return ServerError(str(exc))
    return RPCInternalError(str(exc))