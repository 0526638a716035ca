"""JSON-RPC error codes and exceptions for provider requests."""

from ..core.error import BaseError

DECRYPTION_FAILED = -32000
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

ERROR_MESSAGES = {
    DECRYPTION_FAILED: "Failed to decrypt",
    PARSE_ERROR: "Parse error",
    INVALID_REQUEST: "Invalid Request",
    METHOD_NOT_FOUND: "Method not found",
    INVALID_PARAMS: "Invalid params",
    INTERNAL_ERROR: "Internal error",
}


class RpcError(BaseError):
    """Error reported to the caller in the response envelope."""

    def __init__(self, code: int, message: str = None):
        """Initialize an RpcError, defaulting the message from the code."""
        super().__init__(message or ERROR_MESSAGES.get(code, "Server error"))
        self.code = code

    def serialize(self) -> dict:
        """Serialize to the response error member."""
        return {"code": self.code, "message": self.message}
