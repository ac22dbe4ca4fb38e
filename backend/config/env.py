import os
from dotenv import load_dotenv

load_dotenv()

# =====================================================
# ENV
# =====================================================
ENV = os.getenv("ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# =====================================================
# DATABASE
# =====================================================
MONGO_URI = os.getenv("MONGO_URI") or os.getenv("MONGODB_URI")
MONGODB_DB = os.getenv("MONGODB_DB", "ecoloop")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", 5000))

# =====================================================
# JWT
# =====================================================
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

BUYER_ACCESS_TOKEN_MINUTES = int(os.getenv("BUYER_ACCESS_TOKEN_MINUTES", 60 * 24))
SELLER_ACCESS_TOKEN_MINUTES = int(os.getenv("SELLER_ACCESS_TOKEN_MINUTES", 60 * 12))
ADMIN_ACCESS_TOKEN_MINUTES = int(os.getenv("ADMIN_ACCESS_TOKEN_MINUTES", 60))

# =====================================================
# PASSWORDS
# =====================================================
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

# =====================================================
# ADMIN
# =====================================================
ADMIN_API_KEY = os.getenv("ADMIN_API_KEY")

# =====================================================
# CORS
# =====================================================
CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")

# =====================================================
# WORKERS
# =====================================================
APPROVAL_AUDIT_INTERVAL_SECONDS = int(os.getenv("APPROVAL_AUDIT_INTERVAL_SECONDS", 60 * 60 * 6))


def validate_production_env() -> None:
    if (ENV or "").lower() != "production":
        return

    required = {
        "JWT_SECRET": JWT_SECRET,
        "ADMIN_API_KEY": ADMIN_API_KEY,
        "MONGODB_URI": MONGO_URI,
    }

    invalid = []
    for key, value in required.items():
        val = (value or "").strip()
        if not val or val.startswith("CHANGE_THIS"):
            invalid.append(key)

    if BCRYPT_ROUNDS < 10:
        invalid.append("BCRYPT_ROUNDS")

    if invalid:
        raise RuntimeError(f"Production env misconfigured. Invalid keys: {', '.join(sorted(invalid))}")
