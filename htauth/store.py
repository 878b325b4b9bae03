"""File-backed htpasswd credential store.

Every operation reloads the whole file and every mutation rewrites it. There is
no locking: two writers working on the same file at once can lose updates.
"""
import asyncio
import functools
import logging
from typing import Callable, List, Optional, Union

from .auth import PasswordContext, check_username
from .config import StoreConfig
from .errors import InvalidCredentials, InvalidInput, UserAlreadyExists, UserNotFound
from .models import User, find_user_index, join_lines, split_lines
from .storage import FileStorage

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        storage: Optional[FileStorage] = None,
        context: Optional[PasswordContext] = None,
    ):
        self.config = config or StoreConfig.from_env()
        self.storage = storage or FileStorage()
        self.context = context or PasswordContext(
            rounds=self.config.bcrypt_rounds, default=self.config.method
        )

    @classmethod
    def create(cls, file: Optional[str] = None, **kwargs) -> "CredentialStore":
        """Build a store for ``file``, other settings coming from the environment."""
        return cls(StoreConfig.from_env(file=file, **kwargs))

    @property
    def file(self) -> str:
        return self.config.file

    def _load(self) -> List[str]:
        return split_lines(self.storage.read_all(self.file))

    def _load_or_empty(self) -> List[str]:
        try:
            return self._load()
        except FileNotFoundError:
            logger.debug("credential file %s not found, treating as empty", self.file)
            return []

    def _save(self, lines: List[str]):
        self.storage.write_all(self.file, join_lines(lines))

    def find(self, username: str) -> Optional[User]:
        if not username:
            return None
        lines = self._load_or_empty()
        index = find_user_index(username, lines)
        if index == -1:
            return None
        return User.from_line(lines[index])

    def find_all(self, parse: bool = False) -> Union[List[str], List[User]]:
        lines = self._load_or_empty()
        if parse:
            return [User.from_line(line) for line in lines]
        return lines

    def add(self, username: str, password: str, method: Optional[str] = None, force: bool = False):
        check_username(username)
        if not password:
            raise InvalidInput("password is required")
        self.context.hasher_for(method)

        lines = self._load_or_empty()
        index = find_user_index(username, lines)
        if index == -1:
            lines.append(self.context.line(username, password, method))
            logger.info("adding user %s to %s", username, self.file)
        elif force:
            lines[index] = self.context.line(username, password, method)
            logger.info("overwriting user %s in %s", username, self.file)
        else:
            raise UserAlreadyExists(username)
        self._save(lines)

    def remove(self, username: str):
        lines = self._load_or_empty()
        index = find_user_index(username, lines)
        if index == -1:
            return
        del lines[index]
        self._save(lines)
        logger.info("removed user %s from %s", username, self.file)

    def change_password(
        self,
        username: str,
        password: str,
        current_password: Optional[str] = None,
        method: Optional[str] = None,
        force: bool = False,
    ):
        if not username or not password:
            raise InvalidInput("username and password are required")
        if not force and not current_password:
            raise InvalidInput("current password is required")
        self.context.hasher_for(method)

        try:
            lines = self._load()
        except FileNotFoundError:
            raise UserNotFound(username) from None

        index = find_user_index(username, lines)
        if index == -1:
            raise UserNotFound(username)

        if not force:
            stored = User.from_line(lines[index]).password
            if not stored or not self.context.verify(current_password, stored):
                logger.warning("rejected password change for %s: invalid credentials", username)
                raise InvalidCredentials(username)

        lines[index] = self.context.line(username, password, method)
        self._save(lines)
        logger.info("changed password for %s in %s", username, self.file)

    def authenticate(self, username: str, password: str) -> bool:
        """True when ``username`` exists and ``password`` matches its hash."""
        if not password:
            return False
        user = self.find(username)
        if user is None or not user.password:
            return False
        return self.context.verify(password, user.password)


Callback = Callable[[Optional[BaseException], object], None]


def with_callback(func):
    """Let an awaitable store method also report through ``callback(err, result)``."""

    @functools.wraps(func)
    async def wrapper(self, *args, callback: Optional[Callback] = None, **kwargs):
        try:
            result = await func(self, *args, **kwargs)
        except Exception as e:
            if callback:
                callback(e, None)
            raise
        if callback:
            callback(None, result)
        return result

    return wrapper


class AsyncCredentialStore:
    """Awaitable wrapper running each CredentialStore operation on a worker thread."""

    def __init__(self, store: Optional[CredentialStore] = None, **kwargs):
        self.store = store or CredentialStore(**kwargs)

    @property
    def file(self) -> str:
        return self.store.file

    @with_callback
    async def find(self, username: str) -> Optional[User]:
        return await asyncio.to_thread(self.store.find, username)

    @with_callback
    async def find_all(self, parse: bool = False):
        return await asyncio.to_thread(self.store.find_all, parse)

    @with_callback
    async def add(self, username: str, password: str, method: Optional[str] = None, force: bool = False):
        return await asyncio.to_thread(self.store.add, username, password, method, force)

    @with_callback
    async def remove(self, username: str):
        return await asyncio.to_thread(self.store.remove, username)

    @with_callback
    async def change_password(
        self,
        username: str,
        password: str,
        current_password: Optional[str] = None,
        method: Optional[str] = None,
        force: bool = False,
    ):
        return await asyncio.to_thread(
            self.store.change_password, username, password, current_password, method, force
        )

    @with_callback
    async def authenticate(self, username: str, password: str) -> bool:
        return await asyncio.to_thread(self.store.authenticate, username, password)
