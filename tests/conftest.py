import pytest

from htauth import CredentialStore, PasswordContext, StoreConfig

NUM_USERS = 5
PASSWORD = "pass123"


def generate_file_data(context: PasswordContext, num_users: int = NUM_USERS) -> str:
    """admin, admin1 .. admin{n-1}, all with PASSWORD, no trailing newline."""
    lines = [context.line("admin", PASSWORD)]
    for i in range(1, num_users):
        lines.append(context.line(f"admin{i}", PASSWORD))
    return "\n".join(lines)


@pytest.fixture
def htpasswd(tmp_path):
    return tmp_path / ".htpasswd"


@pytest.fixture
def store(htpasswd):
    return CredentialStore(StoreConfig(file=str(htpasswd), bcrypt_rounds=4))


@pytest.fixture
def populated(store, htpasswd):
    htpasswd.write_text(generate_file_data(store.context), encoding="utf-8")
    return store


@pytest.fixture
def missing(tmp_path):
    return CredentialStore(StoreConfig(file=str(tmp_path / ".nofile"), bcrypt_rounds=4))
