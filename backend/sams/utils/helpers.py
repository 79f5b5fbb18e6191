"""Helper functions for the application."""
from datetime import datetime
from typing import Any, List, Optional

from flask import jsonify, request

from sams.utils.exceptions import ValidationError


def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    message = getattr(error, 'description', None) or getattr(error, 'message', None) or str(error)
    body = {
        'error': True,
        'message': message,
        'status_code': status_code
    }

    details = getattr(error, 'details', None)
    if details:
        body['details'] = details

    return jsonify(body), status_code


def success_response(data: Any = None, message: str = "Success", status_code: int = 200):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }

    if data is not None:
        response['data'] = data

    return jsonify(response), status_code


def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code


def serialize(items: List) -> List[dict]:
    return [item.to_dict() for item in items]


def query_int(name: str, *aliases: str) -> Optional[int]:
    """Read an integer query parameter, accepting camelCase and snake_case names."""
    for key in (name,) + aliases:
        raw = request.args.get(key)
        if raw is None or raw == '':
            continue
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(
                f"Query parameter '{key}' must be an integer",
                details=[{'field': key, 'message': 'must be an integer'}]
            )
    return None


def query_datetime(name: str) -> Optional[datetime]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError(
            f"Query parameter '{name}' must be an ISO date",
            details=[{'field': name, 'message': 'must be an ISO 8601 date or datetime'}]
        )
