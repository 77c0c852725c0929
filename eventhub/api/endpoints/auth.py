from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from eventhub.core.config import Settings
from eventhub.core.database import aget_db
from eventhub.core.ratelimit import otp_rate_limit
from eventhub.core.security import get_request_settings
from eventhub.schemas.authSchema import (
    LoginRequest, LoginResponse,
    RegisterRequest, UserResponse,
    VerifyOtpRequest, VerifyOtpResponse,
)
from eventhub.schemas.responseSchema import ApiResponse
from eventhub.services.AuthService import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/user",
    tags=["auth"]
)


def get_auth_service(
    db: AsyncSession = Depends(aget_db),
    settings: Settings = Depends(get_request_settings),
) -> AuthService:
    return AuthService(db, settings)


@router.post("/register", response_model=ApiResponse[UserResponse])
async def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user, unverified until the first successful OTP login
    """
    user = await service.register(payload)
    return ApiResponse(message="User created successfully.", data=UserResponse.model_validate(user))


@router.post("/login", response_model=ApiResponse[LoginResponse], dependencies=[Depends(otp_rate_limit)])
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """
    Issue a login OTP to a registered mobile number. The code is never returned.
    """
    result = await service.login(payload.mobile_no, payload.country_code)
    return ApiResponse(message="OTP has been sent successfully.", data=result)


@router.post("/verify-otp", response_model=ApiResponse[VerifyOtpResponse], dependencies=[Depends(otp_rate_limit)])
async def verify_otp(payload: VerifyOtpRequest, service: AuthService = Depends(get_auth_service)):
    """
    Consume a login OTP and return a bearer session token
    """
    result = await service.verify_otp(payload.mobile_no, payload.country_code, payload.otp)
    return ApiResponse(message="OTP verified successfully.", data=result)
