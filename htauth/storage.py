import os
import tempfile


class FileStorage:
    """Whole-file text access for the credential file.

    ``read_all`` raises ``FileNotFoundError`` for a missing file so callers can
    tell it apart from every other ``OSError``.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read_all(self, path: str) -> str:
        with open(path, "r", encoding=self.encoding, newline="") as f:
            return f.read()

    def write_all(self, path: str, text: str) -> None:
        # full overwrite; readers never see a partial file
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        # a new file takes its mode from the umask, an existing one keeps its mode
        open(path, "a", encoding=self.encoding).close()
        fd, tmp = tempfile.mkstemp(prefix=".htpasswd-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(text)
            os.chmod(tmp, os.stat(path).st_mode & 0o777)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
