import hmac

from passlib.context import CryptContext

# New hashes use pbkdf2_sha256; bcrypt hashes created by earlier deployments still verify.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def is_hashed(stored: str) -> bool:
    return pwd_context.identify(stored) is not None


def verify_password(password: str, stored: str) -> bool:
    """
    Check a login password against the stored value.

    Seeded accounts may still hold plaintext passwords; those are compared in
    constant time instead of going through passlib.
    """
    if not password or not stored:
        return False
    if is_hashed(stored):
        return pwd_context.verify(password, stored)
    return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
