"""
Password hashing with bcrypt.
"""

import bcrypt

MIN_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(plain: str, rounds: int = MIN_ROUNDS) -> str:
    """Hash a password with a fresh salt. Rounds below 12 are raised to 12."""
    salt = bcrypt.gensalt(rounds=max(rounds, MIN_ROUNDS))
    return bcrypt.hashpw(_encode(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        return False
