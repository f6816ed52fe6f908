import asyncio
import json

import pytest

from coldl3.rpc.errors import (
    AuthenticationError,
    MethodNotFoundError,
    RateLimitExceededError,
    RPCError,
    RPCErrorCode,
    RPCInternalError,
    RPCTimeoutError,
    SerializationError,
    ServerError,
    wrap_exception,
)


@pytest.mark.parametrize(
    "value, member",
    [
        (-32700, "PARSE_ERROR"),
        (-32600, "INVALID_REQUEST"),
        (-32601, "METHOD_NOT_FOUND"),
        (-32602, "INVALID_PARAMS"),
        (-32603, "INTERNAL_ERROR"),
        (-32000, "SERVER_ERROR"),
    ],
)
def test_rpc_error_code_values(value, member):
    code = RPCErrorCode(value)
    assert code.name == member
    assert int(code) == value


@pytest.mark.parametrize(
    "value, message",
    [
        (-32700, "Parse error"),
        (-32601, "Method not found"),
        (-32603, "Internal error"),
        (-32001, "Request timeout"),
    ],
)
def test_rpc_error_code_messages(value, message):
    assert RPCErrorCode(value).message == message


def test_every_code_has_message():
    messages = [RPCErrorCode(value).message for value in range(-32007, -31999)]
    assert len(messages) == 8
    assert "" not in messages
    assert messages[0] == "Service unavailable"
    assert messages[-1] == "Server error"


def test_code_lookup_by_value():
    assert RPCErrorCode(-32007) is RPCErrorCode.SERVICE_UNAVAILABLE


@pytest.mark.parametrize(
    "error, text",
    [
        (ServerError("boom"), "Server error: boom"),
        (MethodNotFoundError("eth_foo"), "Method not found: eth_foo"),
        (AuthenticationError("bad"), "Authentication failed: bad"),
        (RateLimitExceededError(), "Rate limit exceeded"),
    ],
)
def test_error_display(error, text):
    assert str(error) == text
    assert isinstance(error, RPCError)


def test_wrap_oserror():
    wrapped = wrap_exception(OSError("disk gone"))
    assert isinstance(wrapped, ServerError)
    assert "disk gone" in str(wrapped)


def test_wrap_json_error():
    with pytest.raises(json.JSONDecodeError) as info:
        json.loads("{ invalid json }")
    wrapped = wrap_exception(info.value)
    assert isinstance(wrapped, SerializationError)
    assert str(wrapped).startswith("Serialization error: ")


@pytest.mark.parametrize("exc", [TimeoutError(), asyncio.TimeoutError()])
def test_wrap_timeout(exc):
    wrapped = wrap_exception(exc)
    assert isinstance(wrapped, RPCTimeoutError)
    assert str(wrapped) == "Timeout error: Request timed out"


def test_wrap_other_is_internal():
    wrapped = wrap_exception(RuntimeError("oops"))
    assert isinstance(wrapped, RPCInternalError)
    assert str(wrapped) == "Internal error: oops"


def test_wrap_passes_rpc_errors_through():
    original = ServerError("x")
    assert wrap_exception(original) is original