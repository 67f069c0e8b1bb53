import json
from http import HTTPStatus

import pytest

from oaskit.errors import (
    DecodeBodyError,
    DecodeParamError,
    DecodeParamsError,
    DecodeRequestError,
    OperationContext,
    OgenError,
    SecurityError,
    SecurityRequirementNotSatisfied,
    SkipClientSecurity,
    SkipServerSecurity,
    error_code,
    error_response,
)
from oaskit.middleware import ParameterLocation

OP = OperationContext(name="getPet", id="getPetById")


def test_operation_context_accessors():
    err = DecodeRequestError(OP, ValueError("bad"))
    assert err.operation_name == OP.name
    assert err.operation_id == OP.id


def test_security_error_message_and_code():
    inner = ValueError("denied")
    err = SecurityError(OP, "ApiKeyAuth", inner)
    assert str(err) == f'operation {OP.name}: security "ApiKeyAuth": {inner}'
    assert err.code() == HTTPStatus.UNAUTHORIZED
    assert err.unwrap() is inner


def test_decode_request_error():
    inner = ValueError("broken body")
    err = DecodeRequestError(OP, inner)
    assert str(err) == f"operation {OP.name}: decode request: {inner}"
    assert err.code() == HTTPStatus.BAD_REQUEST


def test_decode_params_error():
    inner = ValueError("broken params")
    err = DecodeParamsError(OP, inner)
    assert str(err) == f"operation {OP.name}: decode params: {inner}"
    assert err.code() == HTTPStatus.BAD_REQUEST


def test_decode_param_error():
    inner = ValueError("not a number")
    err = DecodeParamError("limit", ParameterLocation.QUERY, inner)
    assert str(err) == f'{ParameterLocation.QUERY.value}: "limit": {inner}'
    assert err.unwrap() is inner


def test_decode_body_error():
    inner = ValueError("unexpected end")
    err = DecodeBodyError("application/json", b"{", inner)
    assert str(err) == f"decode application/json: {inner}"
    assert err.body == b"{"


def test_sentinel_messages():
    assert str(SecurityRequirementNotSatisfied()) == "security requirement is not satisfied"
    assert str(SkipClientSecurity()) == "skip client security"
    assert str(SkipServerSecurity()) == "skip server security"


@pytest.mark.parametrize(
    "err, expected",
    [
        (ValueError("x"), HTTPStatus.INTERNAL_SERVER_ERROR),
        (NotImplementedError(), HTTPStatus.NOT_IMPLEMENTED),
        (SecurityError(OP, "ApiKeyAuth", ValueError("x")), HTTPStatus.UNAUTHORIZED),
        (DecodeRequestError(OP, ValueError("x")), HTTPStatus.BAD_REQUEST),
        (DecodeParamsError(OP, ValueError("x")), HTTPStatus.BAD_REQUEST),
        (DecodeRequestError(OP, NotImplementedError()), HTTPStatus.NOT_IMPLEMENTED),
    ],
)
def test_error_code(err, expected):
    assert error_code(err) == expected


def test_error_code_follows_cause():
    try:
        try:
            raise SecurityError(OP, "ApiKeyAuth", ValueError("x"))
        except SecurityError as exc:
            raise RuntimeError("wrapped") from exc
    except RuntimeError as outer:
        assert error_code(outer) == HTTPStatus.UNAUTHORIZED


def test_error_code_through_plain_wrapper():
    err = DecodeBodyError("application/json", b"", NotImplementedError())
    assert error_code(err) == HTTPStatus.NOT_IMPLEMENTED


def test_base_error_code():
    assert OgenError(OP, ValueError("x")).code() == HTTPStatus.INTERNAL_SERVER_ERROR


def test_error_response():
    err = DecodeRequestError(OP, ValueError('quote " and <tag>'))
    code, headers, body = error_response(err)
    assert code == HTTPStatus.BAD_REQUEST
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == {"error_message": str(err)}