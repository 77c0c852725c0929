# services/SendSmsOtp.py

import logging

logger = logging.getLogger(__name__)


async def send_sms_otp(mobile_no: str, country_code: str, code: str, expires_in_minutes: int) -> dict:
    """
    Deliver an OTP verification code to a mobile number.

    No SMS provider is wired in; the code is written to the application log
    so it can be read during development.

    Args:
        mobile_no: Recipient mobile number
        country_code: Dial code of the recipient, e.g. "+91"
        code: Numeric OTP code
        expires_in_minutes: Validity window shown to the recipient

    Returns:
        dict with status information
    """
    logger.info(
        f"📱 LOGIN OTP for {country_code} {mobile_no}: {code} "
        f"(expires in {expires_in_minutes} minutes)"
    )
    return {"status": "logged", "recipient": f"{country_code}{mobile_no}"}
