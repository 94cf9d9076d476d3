from __future__ import annotations

from typing import Union

from flask import jsonify, request

from ..core.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    CapacityExceededError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (CapacityExceededError, 409),
    (AlreadyExistsError, 409),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (StorageError, 500),
)


def error_status(exc: Union[DomainError, StorageError]) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def json_error(exc: Union[DomainError, StorageError]):
    """Render a domain or storage error as a JSON response tuple."""

    message = str(exc) if not isinstance(exc, StorageError) else "Failed to access club data"
    return jsonify({"success": False, "error": exc.kind, "message": message}), error_status(exc)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
