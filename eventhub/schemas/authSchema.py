import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, EmailStr, Field, field_validator

from eventhub.constants.constants import Gender
from eventhub.schemas.responseSchema import CamelModel

MOBILE_RE = re.compile(r"^\d{10,15}$")
COUNTRY_CODE_RE = re.compile(r"^\+?\d{1,4}$")


def _check_mobile(v: str) -> str:
    v = v.strip()
    if not MOBILE_RE.match(v):
        raise ValueError("Mobile number must be at least 10 digits")
    return v


def _check_country_code(v: str) -> str:
    v = v.strip()
    if not COUNTRY_CODE_RE.match(v):
        raise ValueError("Country code is required, e.g. +91")
    return v


MobileNo = Annotated[str, AfterValidator(_check_mobile)]
CountryCode = Annotated[str, AfterValidator(_check_country_code)]


# Pydantic schemas
class RegisterRequest(CamelModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email_id: EmailStr
    mobile_no: MobileNo
    country_code: CountryCode
    gender: Gender
    age: int = Field(..., gt=0, lt=150)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class LoginRequest(CamelModel):
    mobile_no: MobileNo
    country_code: CountryCode


class VerifyOtpRequest(CamelModel):
    mobile_no: MobileNo
    country_code: CountryCode
    otp: str = Field(..., pattern=r"^\d{6}$")


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    mobile_number: str
    country_code: str
    gender: Gender
    age: int
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class LoginResponse(CamelModel):
    mobile_no: str
    country_code: str
    is_registered: bool
    otp_sent: bool


class VerifyOtpResponse(CamelModel):
    user_id: int
    mobile_no: str
    country_code: str
    is_registered: bool
    is_verified: bool
    token: str
