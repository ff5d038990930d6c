"""
Staff Authentication
====================

HTTP Basic gate for staff-only endpoints.

Credentials are compared against ``Settings.admin_username`` and
``Settings.admin_password`` taken from ``app.state.settings``.
"""

import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from intake_service.core import AuthenticationException
from intake_service.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

# auto_error=False so a missing header reaches our own 401 handler
_security = HTTPBasic(auto_error=False)


async def require_staff(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(_security),
) -> str:
    """
    Verify staff credentials.

    Returns:
        The authenticated username

    Raises:
        AuthenticationException: If the header is missing or wrong
    """
    if credentials is None:
        raise AuthenticationException("Authentication required")

    settings = request.app.state.settings
    ok_user = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.admin_username.encode("utf-8")
    )
    ok_pass = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        settings.admin_password.get_secret_value().encode("utf-8"),
    )
    if not (ok_user and ok_pass):
        logger.warning(
            "Rejected staff credentials",
            extra={"correlation_id": getattr(request.state, "correlation_id", "unknown")}
        )
        raise AuthenticationException("Invalid credentials")

    return credentials.username
