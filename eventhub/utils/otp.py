import secrets
from datetime import datetime, timedelta
from typing import Optional


def generate_otp(length: int = 6) -> str:
    """Return a numeric code of exactly `length` digits (no leading zero)."""
    lower = 10 ** (length - 1)
    return str(lower + secrets.randbelow(9 * lower))


def get_otp_expire_time(minutes: int, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.utcnow()
    return now + timedelta(minutes=minutes)
