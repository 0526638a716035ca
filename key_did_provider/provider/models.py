"""Request and response envelopes exchanged with a DID provider."""

from typing import Any, Mapping

from marshmallow import EXCLUDE, Schema, fields, validate

JSONRPC_VERSION = "2.0"


class RequestSchema(Schema):
    """Request envelope schema."""

    class Meta:
        """RequestSchema metadata."""

        unknown = EXCLUDE

    jsonrpc = fields.Str(required=True, validate=validate.Equal(JSONRPC_VERSION))
    id = fields.Raw(required=False, allow_none=True)
    method = fields.Str(required=True, validate=validate.Length(min=1))
    params = fields.Raw(required=False, allow_none=True)


class CreateJWSParamsSchema(Schema):
    """Parameters of did_createJWS."""

    class Meta:
        """CreateJWSParamsSchema metadata."""

        unknown = EXCLUDE

    payload = fields.Raw(required=True, allow_none=True)
    protected = fields.Dict(required=False, load_default=dict)
    did = fields.Str(required=True)


class DecryptJWEParamsSchema(Schema):
    """Parameters of did_decryptJWE."""

    class Meta:
        """DecryptJWEParamsSchema metadata."""

        unknown = EXCLUDE

    jwe = fields.Raw(required=True)
    did = fields.Str(required=False, allow_none=True)


class AuthenticateParamsSchema(Schema):
    """Parameters of did_authenticate."""

    class Meta:
        """AuthenticateParamsSchema metadata."""

        unknown = EXCLUDE

    nonce = fields.Str(required=True)
    aud = fields.Str(required=True)
    paths = fields.List(fields.Str(), required=False, load_default=list)


def result_response(request_id: Any, result: Any) -> Mapping[str, Any]:
    """Build a success response envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: Any, error: Mapping[str, Any]) -> Mapping[str, Any]:
    """Build an error response envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": dict(error)}
