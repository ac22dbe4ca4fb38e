# backend/config/constants.py

# -----------------------------
# PASSWORD RULES
# -----------------------------

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72              # bcrypt hard limit

# -----------------------------
# SELLER APPROVAL
# -----------------------------

DEFAULT_REJECTION_REASON = "Application does not meet requirements"
DEFAULT_SELLER_COUNTRY = "Kenya"

# -----------------------------
# ADMIN LISTINGS
# -----------------------------

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
