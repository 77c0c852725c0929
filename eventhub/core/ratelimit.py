"""Rate limiting of the OTP endpoints, owned by each application instance."""

import logging

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from slowapi.wrappers import Limit

from eventhub.core.config import Settings

logger = logging.getLogger(__name__)


def build_limiter(settings: Settings) -> Limiter:
    """In-memory limiter for one app, switched on or off by RATE_LIMIT_ENABLED."""
    return Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def otp_rate_limit(request: Request) -> None:
    """
    Dependency charging one hit against the app's RATE_LIMIT_OTP, per client
    address and path. Raises RateLimitExceeded once the window is spent.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    settings: Settings = request.app.state.settings
    item = parse(settings.RATE_LIMIT_OTP)
    key = get_remote_address(request)
    path = request.url.path

    if not limiter.limiter.hit(item, key, path):
        logger.warning(f"Rate limit {item} exceeded by {key} on {path}")
        raise RateLimitExceeded(Limit(
            limit=item,
            key_func=get_remote_address,
            scope=path,
            per_method=False,
            methods=None,
            error_message=None,
            exempt_when=None,
            cost=1,
            override_defaults=False,
        ))
