import os
import stat

import pytest

from htauth import BCRYPT, FileStorage, StoreConfig
from htauth.config import DEFAULT_BCRYPT_ROUNDS, DEFAULT_FILE


def test_read_missing_file_raises_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileStorage().read_all(str(tmp_path / "nofile"))


def test_write_then_read_keeps_text_verbatim(tmp_path):
    path = str(tmp_path / ".htpasswd")
    storage = FileStorage()
    storage.write_all(path, "a:1\nb:2\n")
    assert storage.read_all(path) == "a:1\nb:2\n"


def test_write_overwrites_and_leaves_no_temp_files(tmp_path):
    path = str(tmp_path / ".htpasswd")
    storage = FileStorage()
    storage.write_all(path, "a:1\nb:2")
    storage.write_all(path, "c:3")
    assert storage.read_all(path) == "c:3"
    assert os.listdir(tmp_path) == [".htpasswd"]


def test_write_keeps_existing_mode(tmp_path):
    path = tmp_path / ".htpasswd"
    path.write_text("a:1")
    os.chmod(path, 0o640)
    FileStorage().write_all(str(path), "b:2")
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640


def test_config_defaults(monkeypatch):
    for name in ("HTPASSWD_FILE", "HTAUTH_METHOD", "HTAUTH_BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)
    config = StoreConfig.from_env()
    assert config.file == DEFAULT_FILE
    assert config.method == "BCRYPT"
    assert config.bcrypt_rounds == DEFAULT_BCRYPT_ROUNDS


def test_config_from_env_and_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("HTPASSWD_FILE", str(tmp_path / "env"))
    monkeypatch.setenv("HTAUTH_BCRYPT_ROUNDS", "6")
    config = StoreConfig.from_env()
    assert config.file == str(tmp_path / "env")
    assert config.bcrypt_rounds == 6
    assert StoreConfig.from_env(file="other", bcrypt_rounds=None).file == "other"
    assert StoreConfig.from_env(bcrypt_rounds=4).bcrypt_rounds == 4


def test_new_file_mode_follows_umask(tmp_path):
    path = tmp_path / ".htpasswd"
    old = os.umask(0o027)
    try:
        FileStorage().write_all(str(path), "a:1")
    finally:
        os.umask(old)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640
    assert path.read_text() == "a:1"


def test_config_default_method_is_bcrypt():
    assert StoreConfig().method == BCRYPT
