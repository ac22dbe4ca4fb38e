import re

# Safaricom / Airtel / Telkom mobile ranges: 07xx and 01xx
PHONE_REGEX = re.compile(r"^(?:\+254|254|0)?([17]\d{8})$")
PHONE_NOISE = re.compile(r"[\s\-\(\)]")


def normalize_phone(phone: str) -> str:
    phone = PHONE_NOISE.sub("", phone.strip())

    match = PHONE_REGEX.match(phone)
    if not match:
        raise ValueError("Invalid phone number format")

    return "+254" + match.group(1)


def normalize_email(email) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()
