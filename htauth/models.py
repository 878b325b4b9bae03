from typing import List, Optional


class User:
    """Parsed view of a credential line. ``password`` holds the stored hash."""

    def __init__(self, username: str, password: Optional[str] = None):
        self.username = username
        self.password = password

    def to_line(self) -> str:
        return f"{self.username}:{self.password}"

    def to_dict(self):
        return {
            "username": self.username,
            "password": self.password,
        }

    @staticmethod
    def from_line(line: str) -> "User":
        username, _, password = line.partition(":")
        return User(username, password)

    def __eq__(self, other):
        if not isinstance(other, User):
            return NotImplemented
        return self.username == other.username and self.password == other.password

    def __repr__(self):
        return f"User(username={self.username!r})"


def split_lines(text: str) -> List[str]:
    # an empty file holds no lines; a trailing newline leaves a blank last entry
    if not text:
        return []
    return text.split("\n")


def join_lines(lines: List[str]) -> str:
    return "\n".join(lines)


def username_of(line: str) -> str:
    return line.split(":", 1)[0]


def find_user_index(username: str, lines: List[str]) -> int:
    """Index of the last line for ``username``, or -1. Last match wins."""
    for index in range(len(lines) - 1, -1, -1):
        if username_of(lines[index]) == username:
            return index
    return -1
