"""Password hashing for stored account credentials.

Two formats can live in the ``contrasena`` column: the legacy unsalted
SHA-256 hex digest and bcrypt hashes. New hashes use the scheme chosen in
``settings.password_scheme``; verification accepts either format.
"""
import hashlib
import hmac

import bcrypt

from app.config import settings

SCHEME_SHA256 = "sha256"
SCHEME_BCRYPT = "bcrypt"
PASSWORD_SCHEMES = (SCHEME_SHA256, SCHEME_BCRYPT)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
BCRYPT_MAX_BYTES = 72


def sha256_digest(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _bcrypt_input(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, scheme: str | None = None) -> str:
    scheme = scheme or settings.password_scheme
    if scheme == SCHEME_SHA256:
        return sha256_digest(password)
    if scheme == SCHEME_BCRYPT:
        return bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt()).decode()
    raise ValueError(f"Unknown password scheme: {scheme}")


def is_bcrypt_hash(stored: str) -> bool:
    return stored.startswith(_BCRYPT_PREFIXES)


def check_password(password: str, stored: str) -> bool:
    if is_bcrypt_hash(stored):
        try:
            return bcrypt.checkpw(_bcrypt_input(password), stored.encode("utf-8"))
        except ValueError:
            # Corrupt row: the prefix looks like bcrypt but the salt does not parse.
            return False
    return hmac.compare_digest(sha256_digest(password).encode(), stored.encode("utf-8"))
