"""
Session cookie helpers.

Parsing goes through Starlette's cookie parser (the same one behind
``Request.cookies``), which never raises on malformed input.
"""

from typing import Optional

from starlette.requests import cookie_parser

from storage_gateway.infra.config.settings import Settings


def extract_session_id(cookie_header: Optional[str], cookie_name: str) -> Optional[str]:
    """Return the session id from a raw ``Cookie`` header, or None.

    A present but empty cookie comes back as ``""`` and is rejected later as
    an unknown session.
    """
    if not cookie_header:
        return None
    return cookie_parser(cookie_header).get(cookie_name)


def session_cookie_header(session_id: str, settings: Settings) -> str:
    """Build the Set-Cookie value issued on login."""
    parts = [f"{settings.session_cookie_name}={session_id}", "HttpOnly"]
    if settings.production:
        parts.append("Secure")
    parts.append("Path=/")
    if settings.production and settings.cookie_domain:
        parts.append(f"Domain={settings.cookie_domain}")
    parts.append("SameSite=Lax")
    parts.append(f"Max-Age={settings.session_max_age}")
    return "; ".join(parts)


def clear_cookie_header(cookie_name: str) -> str:
    """Set-Cookie value that makes the browser drop the session cookie."""
    return f"{cookie_name}=; HttpOnly; Path=/; Max-Age=0"
