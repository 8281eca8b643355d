"""Centralized JSON error envelope handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, cast
from uuid import uuid4

from flask import Flask, Response, g, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from livefeed.services._shared.errors import ErrorKind, ServiceError
from livefeed.services._shared.validation import flatten_marshmallow_messages

log = logging.getLogger(__name__)


def _ensure_request_id() -> str:
    """
    Get or generate a request-scoped correlation identifier.

    The function reads standard correlation headers and falls back
    to a newly generated UUID4. The value is stored in ``g.request_id``.

    :returns: Correlation/request identifier.
    :rtype: str
    """
    if hasattr(g, "request_id"):
        return cast(str, g.request_id)

    hdr = request.headers.get("X-Request-Id") or request.headers.get("X-Correlation-Id")
    req_id = hdr or str(uuid4())
    g.request_id = req_id
    return req_id


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthenticated",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        422: "invalid_input",
        429: "too_many_requests",
        500: "internal",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def build_envelope(
    *,
    status: int,
    code: str,
    message: str,
    data: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """
    Build the error envelope returned to callers.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param data: Optional field-level messages.
    :returns: ``{"message", "status", "code", "data"?, "request_id"}``.
    :rtype: dict
    """
    envelope: dict[str, Any] = {
        "message": message,
        "status": int(status),
        "code": code,
    }
    if data:
        envelope["data"] = data
    envelope["request_id"] = _ensure_request_id()
    return envelope


def _envelope_response(envelope: dict[str, Any]) -> tuple[Response, int]:
    return jsonify(envelope), envelope["status"]


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error renders the same envelope shape.
    - Ensures a correlation ``request_id`` is present on every error.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        envelope = build_envelope(
            status=err.status,
            code=err.code,
            message=err.message,
            data=err.data,
        )
        if err.status >= 500:
            log.error(
                "ServiceError: code=%s status=%s msg=%s request_id=%s",
                err.code,
                err.status,
                err.message,
                envelope["request_id"],
                exc_info=err,
            )
        else:
            log.warning(
                "ServiceError: code=%s status=%s msg=%s request_id=%s",
                err.code,
                err.status,
                err.message,
                envelope["request_id"],
            )
        return _envelope_response(envelope)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        envelope = build_envelope(status=status, code=error_code, message=message)
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: code=%s status=%s detail=%s request_id=%s",
            error_code,
            status,
            message,
            envelope["request_id"],
        )
        return _envelope_response(envelope)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        kind = ErrorKind.INVALID_INPUT
        envelope = build_envelope(
            status=kind.status,
            code=kind.code,
            message=kind.default_message,
            data=flatten_marshmallow_messages(err.messages),
        )
        log.warning("ValidationError: request_id=%s", envelope["request_id"])
        return _envelope_response(envelope)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        envelope = build_envelope(
            status=HTTPStatus.CONFLICT,
            code=ErrorKind.CONFLICT.code,
            message="Resource conflict",
        )
        log.error("IntegrityError: request_id=%s", envelope["request_id"], exc_info=True)
        return _envelope_response(envelope)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # Store unavailable (connectivity, locked database): an Internal failure
        kind = ErrorKind.INTERNAL
        envelope = build_envelope(status=kind.status, code=kind.code, message=kind.default_message)
        log.error("OperationalError: request_id=%s", envelope["request_id"], exc_info=True)
        return _envelope_response(envelope)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        kind = ErrorKind.INTERNAL
        envelope = build_envelope(status=kind.status, code=kind.code, message=kind.default_message)
        log.error("Unhandled exception: request_id=%s", envelope["request_id"], exc_info=True)
        return _envelope_response(envelope)
