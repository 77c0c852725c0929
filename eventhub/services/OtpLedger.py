"""Persistence of one-time codes, at most one live code per user and purpose."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.constants.constants import OtpPurpose
from eventhub.models.otp import OtpRecord

logger = logging.getLogger(__name__)


class OtpLedger:
    """
    Stores and consumes OTP records through the caller's session.

    None of these methods commit. Callers that replace a user's code should hold
    a lock on the user row for the whole transaction so that two concurrent
    issuances cannot both survive.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def issue(
        self,
        user_id: int,
        purpose: OtpPurpose,
        code: str,
        expires_at: datetime,
    ) -> OtpRecord:
        """Replace any record of the same purpose for the user with a new one."""
        removed = await self.delete_for(user_id, purpose)
        if removed:
            logger.info(f"Superseded {removed} {purpose.value} OTP(s) for user {user_id}")

        record = OtpRecord(
            user_id=user_id,
            otp_code=code,
            purpose=purpose,
            expires_at=expires_at,
        )
        self.db.add(record)
        await self.db.flush()
        return record

    async def consume(
        self,
        user_id: int,
        purpose: OtpPurpose,
        code: str,
        now: Optional[datetime] = None,
    ) -> Optional[OtpRecord]:
        """Return the live record matching `code` exactly, or None.

        Expired records never match; they stay in place until the next issue
        or successful verification for the same user and purpose.
        """
        now = now or datetime.utcnow()
        result = await self.db.execute(
            select(OtpRecord)
            .where(
                OtpRecord.user_id == user_id,
                OtpRecord.purpose == purpose,
                OtpRecord.otp_code == code,
                OtpRecord.expires_at >= now,
            )
            .order_by(OtpRecord.created_at.desc(), OtpRecord.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_for(self, user_id: int, purpose: OtpPurpose) -> int:
        result = await self.db.execute(
            delete(OtpRecord).where(
                OtpRecord.user_id == user_id,
                OtpRecord.purpose == purpose,
            )
        )
        return result.rowcount or 0

    async def active_for(
        self,
        user_id: int,
        purpose: OtpPurpose,
        now: Optional[datetime] = None,
    ) -> List[OtpRecord]:
        now = now or datetime.utcnow()
        result = await self.db.execute(
            select(OtpRecord).where(
                OtpRecord.user_id == user_id,
                OtpRecord.purpose == purpose,
                OtpRecord.expires_at >= now,
            )
        )
        return list(result.scalars().all())
