from __future__ import annotations

from flask import jsonify, request

from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError


def error_response(error: DomainError):
    """Map a domain error to a JSON body and HTTP status."""

    body = {"error": type(error).__name__, "message": str(error)}
    if isinstance(error, ConflictError):
        body["incumbent"] = {"id": error.incumbent_id, "name": error.incumbent_name}
        return jsonify(body), 409
    if isinstance(error, NotFoundError):
        return jsonify(body), 404
    if isinstance(error, ValidationError):
        return jsonify(body), 400
    return jsonify(body), 422


def json_field(name: str):
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return None
    return payload.get(name)
