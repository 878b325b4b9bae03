from .auth import BCRYPT, BcryptHasher, PasswordContext, PasswordHasher, hash, line, verify
from .config import StoreConfig
from .errors import (
    HtAuthError,
    InvalidCredentials,
    InvalidInput,
    UnsupportedMethod,
    UserAlreadyExists,
    UserNotFound,
)
from .models import User
from .storage import FileStorage
from .store import AsyncCredentialStore, CredentialStore

__version__ = "0.1.0"

__all__ = [
    "BCRYPT",
    "BcryptHasher",
    "PasswordContext",
    "PasswordHasher",
    "hash",
    "line",
    "verify",
    "StoreConfig",
    "HtAuthError",
    "InvalidCredentials",
    "InvalidInput",
    "UnsupportedMethod",
    "UserAlreadyExists",
    "UserNotFound",
    "User",
    "FileStorage",
    "AsyncCredentialStore",
    "CredentialStore",
]
