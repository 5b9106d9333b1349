# app/models/user.py
# Note: User is defined in core/auth.py next to the fastapi-users wiring.
# It is re-exported here so model imports can stay uniform.

from app.core.auth import User

__all__ = ["User"]
