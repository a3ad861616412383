"""
Password hashing utilities.

Passwords are hashed with passlib's pbkdf2_sha256 scheme. Verification
always runs a full hash computation, including for unknown users.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against a stored hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> bool:
    """
    Burn the same hashing work as a real verification.

    Used when the username does not exist so that response timing does not
    reveal which accounts are registered.
    """
    return pwd_context.dummy_verify()
