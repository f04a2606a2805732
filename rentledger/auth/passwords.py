"""Password hashing for back-office accounts (bcrypt, no passlib wrapper)."""

import bcrypt


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password`` as text, ready to store."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
