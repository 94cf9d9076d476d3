from __future__ import annotations

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError


class AuthService:
    """Use case: admin login.

    The admin password is checked here on the server; the browser only ever
    learns the resulting role through the Flask session cookie.
    """

    def __init__(self, admin_password_hash: str):
        self._admin_password_hash = admin_password_hash

    def authenticate_admin(self, password: str) -> Role:
        if not self._admin_password_hash or not password:
            raise AuthenticationError("Wrong password")

        try:
            ok = check_password_hash(self._admin_password_hash, password)
        except ValueError:
            # e.g. a plain-text value configured where a hash was expected
            ok = False

        if not ok:
            raise AuthenticationError("Wrong password")
        return Role.ADMIN
