"""Request metadata recorded in the file access log."""

from fastapi import Request

from ..core.config import settings
from ..services.access_log_service import ClientInfo


def client_info(request: Request) -> ClientInfo:
    """FastAPI dependency: caller IP and user agent.

    ``X-Forwarded-For`` is only honoured when ``TRUST_FORWARDED_FOR`` is set,
    i.e. when the API sits behind a proxy that overwrites the header.
    """
    ip_address = request.client.host if request.client else None
    forwarded = request.headers.get("x-forwarded-for")
    if settings.trust_forwarded_for and forwarded:
        ip_address = forwarded.split(",")[0].strip()
    return ClientInfo(ip_address=ip_address, user_agent=request.headers.get("user-agent"))
