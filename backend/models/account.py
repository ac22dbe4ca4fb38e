from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from enum import Enum

from config.constants import MIN_PASSWORD_LENGTH, MAX_PASSWORD_BYTES
from utils.validators import normalize_phone

class Role(str, Enum):
    BUYER = "user"
    SELLER = "seller"
    ADMIN = "admin"

class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

# role -> account store (collection name)
ROLE_STORES = {
    Role.BUYER: "users",
    Role.SELLER: "sellers",
    Role.ADMIN: "admins",
}

# values seen in the role/type marker of stored records
ROLE_MARKERS = {
    "user": Role.BUYER,
    "buyer": Role.BUYER,
    "seller": Role.SELLER,
    "admin": Role.ADMIN,
}

class NewPassword(BaseModel):
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password too long (max {MAX_PASSWORD_BYTES} bytes)")
        return value

# ======================
# Login
# ======================

class LoginRequest(BaseModel):
    email: str
    password: str
    # validated by the role resolver so the caller gets InvalidRole, not a 422
    role: str

# ======================
# Registration
# ======================

class BuyerCreate(NewPassword):
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    email: EmailStr
    phone: str

    streetAddress: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postalCode: Optional[str] = None
    country: Optional[str] = None
    preferences: Optional[dict] = None
    notifications: bool = True
    dateOfBirth: Optional[str] = None
    gender: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        return normalize_phone(value)

class SellerCreate(NewPassword):
    # personal
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None

    # business
    businessName: str = Field(..., min_length=1)
    businessType: str = "individual"
    businessDescription: str = ""
    businessAddress: str = ""
    businessCity: str = ""
    businessCountry: Optional[str] = None

    # store
    storeName: Optional[str] = None
    storeDescription: Optional[str] = None
    storeCategory: str = "general"

    # legal & banking
    businessLicense: str = ""
    taxIdentification: str = ""
    bankName: str = ""
    accountNumber: str = ""
    accountName: str = ""

    # online presence
    website: str = ""
    socialMedia: str = ""
    operatingHours: str = ""

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return normalize_phone(value)

class AdminCreate(NewPassword):
    email: EmailStr
    name: Optional[str] = "Administrator"

# ======================
# Admin actions
# ======================

class SellerDecision(BaseModel):
    adminEmail: Optional[EmailStr] = None
    reason: Optional[str] = None

class PasswordMigration(BaseModel):
    role: str = Role.SELLER.value
