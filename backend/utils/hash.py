import hmac
import re
from dataclasses import dataclass

from passlib.context import CryptContext

from config.env import BCRYPT_ROUNDS
from config.constants import MAX_PASSWORD_BYTES

# bcrypt configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)

BCRYPT_PREFIX = re.compile(r"^\$2[abxy]?\$")
BCRYPT_HASH = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")


@dataclass(frozen=True)
class CredentialCheck:
    valid: bool
    rehash_needed: bool = False


def _too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """
    Hash a password safely using bcrypt.
    Enforces bcrypt 72-byte limit.
    """
    if _too_long(password):
        raise ValueError(f"Password too long (max {MAX_PASSWORD_BYTES} bytes)")
    return pwd_context.hash(password)


def is_password_hash(stored) -> bool:
    return isinstance(stored, str) and bool(BCRYPT_HASH.match(stored))


def is_legacy_plaintext(stored) -> bool:
    if not isinstance(stored, str) or not stored:
        return False
    # bcrypt prefix with a broken body: corrupt hash, not a plaintext password
    return not BCRYPT_PREFIX.match(stored)


def verify_credential(submitted, stored) -> CredentialCheck:
    """
    Compare a submitted password with what the account store holds.

    Hashed values go through bcrypt. Anything else that is a non-empty
    string is legacy plaintext: compared in constant time and flagged
    for rehash when it matches. Malformed values never verify and
    never raise.
    """
    if not isinstance(submitted, str) or not submitted:
        return CredentialCheck(valid=False)

    if not isinstance(stored, str) or not stored:
        return CredentialCheck(valid=False)

    if is_password_hash(stored):
        if _too_long(submitted):
            return CredentialCheck(valid=False)
        try:
            return CredentialCheck(valid=pwd_context.verify(submitted, stored))
        except (ValueError, TypeError):
            return CredentialCheck(valid=False)

    if not is_legacy_plaintext(stored):
        return CredentialCheck(valid=False)

    matched = hmac.compare_digest(
        submitted.encode("utf-8"),
        stored.encode("utf-8"),
    )
    return CredentialCheck(valid=matched, rehash_needed=matched)
