import re

from kurstakip.config import settings

_SEPARATORS = re.compile(r"[\s-]")


def normalize_phone(raw: str, country_code: str = None) -> str:
    """
    Local numbers to international form: "0532 123 45 67" -> "+905321234567".
    Numbers already starting with "+" are only stripped of spaces and dashes.
    """
    country_code = country_code or settings.default_country_code
    phone = _SEPARATORS.sub("", raw or "")
    if phone.startswith("0"):
        return country_code + phone[1:]
    if not phone.startswith("+"):
        return country_code + phone
    return phone
