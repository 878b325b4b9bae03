class HtAuthError(Exception):
    """Base class for credential store errors."""


class InvalidInput(HtAuthError, ValueError):
    def __init__(self, message: str = "invalid input"):
        super().__init__(message)


class UnsupportedMethod(HtAuthError, ValueError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(f"unsupported method: {method}")


class UserAlreadyExists(HtAuthError):
    def __init__(self, username: str):
        self.username = username
        super().__init__("user already exists")


class UserNotFound(HtAuthError):
    def __init__(self, username: str):
        self.username = username
        super().__init__("user does not exist")


class InvalidCredentials(HtAuthError):
    def __init__(self, username: str):
        self.username = username
        super().__init__("invalid credentials")
