"""
Request dispatcher.

Validates request envelopes, routes them to method handlers and converts
every outcome, including failures, into a response envelope.
"""

import logging
from typing import Any, Mapping, Sequence

from marshmallow import ValidationError

from .base import DIDProvider
from .error import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND, RpcError
from .methods import DEFAULT_METHODS, MethodHandler
from .models import RequestSchema, error_response, result_response

LOGGER = logging.getLogger(__name__)


class RequestDispatcher:
    """Route request envelopes to registered method handlers."""

    def __init__(self, methods: Mapping[str, MethodHandler] = None):
        """Initialize the dispatcher with a method registry."""
        self._methods = dict(DEFAULT_METHODS if methods is None else methods)

    @property
    def methods(self) -> Sequence[str]:
        """Accessor for the supported method names."""
        return sorted(self._methods)

    def register_method(self, name: str, handler: MethodHandler):
        """Add or replace the handler for a method."""
        self._methods[name] = handler

    async def handle(
        self, provider: DIDProvider, request: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        """Answer a request envelope.

        Args:
            provider: The provider whose keys serve the request
            request: The request envelope

        Returns:
            A response envelope echoing the request id, never raises

        """
        request_id = request.get("id") if isinstance(request, Mapping) else None

        try:
            parsed = RequestSchema().load(request)
        except ValidationError as err:
            LOGGER.debug("Rejected request %r: %s", request_id, err.messages)
            return error_response(request_id, RpcError(INVALID_REQUEST).serialize())

        method = parsed["method"]
        handler = self._methods.get(method)
        if not handler:
            LOGGER.debug("Unsupported method %s for request %r", method, request_id)
            return error_response(request_id, RpcError(METHOD_NOT_FOUND).serialize())

        LOGGER.debug("Handling %s request %r", method, request_id)
        try:
            result = await handler(provider, parsed.get("params"))
        except RpcError as err:
            LOGGER.debug(
                "%s request %r failed with code %s", method, request_id, err.code
            )
            return error_response(request_id, err.serialize())
        except Exception:
            LOGGER.exception("Error handling %s request %r", method, request_id)
            return error_response(request_id, RpcError(INTERNAL_ERROR).serialize())

        return result_response(request_id, result)
