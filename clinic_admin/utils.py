from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# =========================
# Password Hashing
# =========================
def hash_password(password: str) -> str:
    """Hash a plain-text secret with bcrypt."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text secret against a stored bcrypt hash."""
    if not password or not password_hash:
        return False
    return pwd_context.verify(password, password_hash)
