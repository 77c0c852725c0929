"""Registration, OTP login and OTP verification for mobile-number users."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.constants.constants import ErrorCode, OtpPurpose
from eventhub.core.config import Settings
from eventhub.core.exceptions import ConflictError, InvalidOtpError, NotFoundError
from eventhub.core.security import issue_session_token
from eventhub.models.user import User
from eventhub.schemas.authSchema import (
    LoginResponse,
    RegisterRequest,
    VerifyOtpResponse,
)
from eventhub.services.OtpLedger import OtpLedger
from eventhub.services.SendSmsOtp import send_sms_otp
from eventhub.utils.otp import generate_otp, get_otp_expire_time

logger = logging.getLogger(__name__)


class AuthService:
    """
    Drives a user through register -> login (OTP issued) -> verify (OTP consumed,
    token issued). Users are keyed by (mobile number, country code).
    """

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.otps = OtpLedger(db)

    async def find_user(self, mobile_no: str, country_code: str, for_update: bool = False) -> Optional[User]:
        query = select(User).where(
            User.mobile_number == mobile_no,
            User.country_code == country_code,
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def register(self, data: RegisterRequest) -> User:
        existing = await self.find_user(data.mobile_no, data.country_code)
        if existing:
            raise ConflictError("User already exists", ErrorCode.USER_ALREADY_EXISTS)

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email_id,
            mobile_number=data.mobile_no,
            country_code=data.country_code,
            gender=data.gender,
            age=data.age,
            is_verified=False,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration of the same number
            await self.db.rollback()
            raise ConflictError("User already exists", ErrorCode.USER_ALREADY_EXISTS)
        await self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.country_code} {user.mobile_number})")
        return user

    async def login(self, mobile_no: str, country_code: str) -> LoginResponse:
        # the row lock serializes concurrent issuances for the same user
        user = await self.find_user(mobile_no, country_code, for_update=True)
        if not user:
            raise NotFoundError(
                "Mobile number is not registered.",
                ErrorCode.MOBILE_NOT_REGISTERED,
                data={
                    "mobileNo": mobile_no,
                    "countryCode": country_code,
                    "isRegistered": False,
                },
            )

        code = generate_otp()
        await self.otps.issue(
            user.id,
            OtpPurpose.LOGIN,
            code,
            get_otp_expire_time(self.settings.OTP_EXPIRE_MINUTES),
        )
        await self.db.commit()

        await send_sms_otp(user.mobile_number, user.country_code, code, self.settings.OTP_EXPIRE_MINUTES)

        return LoginResponse(
            mobile_no=user.mobile_number,
            country_code=user.country_code,
            is_registered=True,
            otp_sent=True,
        )

    async def verify_otp(
        self,
        mobile_no: str,
        country_code: str,
        otp: str,
        now: Optional[datetime] = None,
    ) -> VerifyOtpResponse:
        user = await self.find_user(mobile_no, country_code, for_update=True)
        if not user:
            raise NotFoundError("User Not Found", ErrorCode.USER_NOT_FOUND, status_code=400)

        record = await self.otps.consume(user.id, OtpPurpose.LOGIN, otp, now=now)
        if not record:
            logger.info(f"Rejected OTP for user {user.id}")
            raise InvalidOtpError(data={"isVerified": False})

        user.is_verified = True
        # clears the consumed code and any duplicate left by a racing login
        await self.otps.delete_for(user.id, OtpPurpose.LOGIN)
        await self.db.commit()

        token = issue_session_token(user, settings=self.settings)
        logger.info(f"User {user.id} verified")

        return VerifyOtpResponse(
            user_id=user.id,
            mobile_no=user.mobile_number,
            country_code=user.country_code,
            is_registered=True,
            is_verified=True,
            token=token,
        )
