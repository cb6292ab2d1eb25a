import re

PHONE_MAX_DIGITS = 11


def sanitize_string(v: str) -> str:
    if not isinstance(v, str):
        return v
    # 1. Strip HTML tags
    v = re.sub(r'<[^>]*>', '', v)
    # 2. Trim whitespace
    return v.strip()


def phone_digits(v: str) -> str:
    return re.sub(r'\D', '', v or '')


def format_phone(v: str) -> str:
    """Display mask for Brazilian numbers: (DD) DDDD-DDDD or (DD) DDDDD-DDDD."""
    digits = phone_digits(v)[:PHONE_MAX_DIGITS]
    if len(digits) <= 2:
        return digits
    if len(digits) <= 6:
        return f"({digits[:2]}) {digits[2:]}"
    if len(digits) <= 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
