import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).with_name(".env"))

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = os.getenv("JWT_SECRET", "change-me-in-production")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_exp_minutes: int = int(os.getenv("JWT_EXP_MINUTES", "60"))

    invite_ttl_days: int = int(os.getenv("INVITE_TTL_DAYS", "7"))
    expiry_threshold_days: int = int(os.getenv("EXPIRY_THRESHOLD_DAYS", "7"))

    twilio_account_sid: str = os.getenv("TWILIO_ACCOUNT_SID", "")
    twilio_auth_token: str = os.getenv("TWILIO_AUTH_TOKEN", "")
    twilio_phone_number: str = os.getenv("TWILIO_PHONE_NUMBER", "")
    twilio_whatsapp_number: str = os.getenv("TWILIO_WHATSAPP_NUMBER", "whatsapp:+14155238886")
    twilio_api_url: str = os.getenv("TWILIO_API_URL", "https://api.twilio.com/2010-04-01")

    resend_api_key: str = os.getenv("RESEND_API_KEY", "")
    resend_api_url: str = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
    email_from: str = os.getenv("EMAIL_FROM", "Cisem Dil Kursu <onboarding@resend.dev>")
    institute_name: str = os.getenv("INSTITUTE_NAME", "Cisem Dil Kursu")

    default_country_code: str = os.getenv("DEFAULT_COUNTRY_CODE", "+90")
    google_userinfo_url: str = os.getenv(
        "GOOGLE_USERINFO_URL", "https://www.googleapis.com/oauth2/v3/userinfo"
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def validate_settings(current: Settings = settings) -> list[str]:
    """
    Returns the names of provider settings that are missing.
    Missing providers only disable the matching endpoints, so nothing here is fatal.
    """
    required = {
        "TWILIO_ACCOUNT_SID": current.twilio_account_sid,
        "TWILIO_AUTH_TOKEN": current.twilio_auth_token,
        "TWILIO_PHONE_NUMBER": current.twilio_phone_number,
        "RESEND_API_KEY": current.resend_api_key,
    }
    missing = [name for name, value in required.items() if not value]
    for name in missing:
        logger.warning("Setting %s is not configured", name)
    if current.jwt_secret == "change-me-in-production":
        logger.warning("JWT_SECRET uses the development default")
    return missing
