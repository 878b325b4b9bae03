import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .auth import BCRYPT, DEFAULT_BCRYPT_ROUNDS

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_FILE = os.path.join(ROOT, ".htpasswd")


@dataclass(frozen=True)
class StoreConfig:
    """Settings for one credential store, fixed at construction."""

    file: str = DEFAULT_FILE
    method: str = BCRYPT
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    @classmethod
    def from_env(cls, **overrides) -> "StoreConfig":
        """Build a config from the environment (and a .env file if present).

        Keyword overrides take precedence over environment values.
        """
        load_dotenv()
        values = {
            "file": os.getenv("HTPASSWD_FILE", DEFAULT_FILE),
            "method": os.getenv("HTAUTH_METHOD", BCRYPT),
            "bcrypt_rounds": int(os.getenv("HTAUTH_BCRYPT_ROUNDS", str(DEFAULT_BCRYPT_ROUNDS))),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
