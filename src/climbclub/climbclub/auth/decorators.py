from __future__ import annotations

from functools import wraps

from flask import session

from ..common.http import json_error
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def is_admin() -> bool:
    return session.get("role") == Role.ADMIN.value


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin():
            return json_error(AuthorizationError("Admin login required"))
        return view(*args, **kwargs)

    return wrapper
