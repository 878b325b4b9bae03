import bcrypt
from typing import Dict, Optional

from .errors import InvalidInput, UnsupportedMethod

BCRYPT = "BCRYPT"
DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def check_username(username: str):
    if not username:
        raise InvalidInput("username is required")
    if "\n" in username or "\r" in username:
        raise InvalidInput("username must not contain line breaks")


class PasswordHasher:
    """One password hashing method, selected by its tag in a PasswordContext."""

    def hash(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, password: str, digest: str) -> bool:
        raise NotImplementedError


class BcryptHasher(PasswordHasher):
    """Salted bcrypt hashes; every call to hash() draws a fresh salt.

    Passwords longer than 72 bytes are truncated, as bcrypt ignores the rest.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        secret = password.encode('utf-8')[:BCRYPT_MAX_BYTES]
        hashed = bcrypt.hashpw(secret, bcrypt.gensalt(self.rounds))
        return hashed.decode('utf-8')

    def verify(self, password: str, digest: str) -> bool:
        secret = password.encode('utf-8')[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(secret, digest.encode('utf-8'))
        except ValueError:
            # malformed digest
            return False


class PasswordContext:
    """Registry of hashing methods keyed by method tag."""

    def __init__(self, rounds: Optional[int] = None, default: str = BCRYPT):
        self.default = default
        self.hashers: Dict[str, PasswordHasher] = {
            BCRYPT: BcryptHasher(rounds or DEFAULT_BCRYPT_ROUNDS),
        }

    def register(self, method: str, hasher: PasswordHasher):
        self.hashers[method] = hasher

    def hasher_for(self, method: Optional[str] = None) -> PasswordHasher:
        method = method or self.default
        try:
            return self.hashers[method]
        except KeyError:
            raise UnsupportedMethod(method) from None

    def hash(self, password: str, method: Optional[str] = None) -> str:
        if not password:
            raise InvalidInput("password is required")
        return self.hasher_for(method).hash(password)

    def verify(self, password: str, hash: str, method: Optional[str] = None) -> bool:
        if not password or not hash:
            raise InvalidInput("password and hash are required")
        return self.hasher_for(method).verify(password, hash)

    def line(self, username: str, password: str, method: Optional[str] = None) -> str:
        """Format a ``username:hash`` credential line."""
        check_username(username)
        return f"{username}:{self.hash(password, method)}"


default_context = PasswordContext()


def hash(password: str, method: Optional[str] = None) -> str:
    return default_context.hash(password, method)


def verify(password: str, hash: str, method: Optional[str] = None) -> bool:
    return default_context.verify(password, hash, method)


def line(username: str, password: str, method: Optional[str] = None) -> str:
    return default_context.line(username, password, method)
