import pytest

from config import ConfigError, Settings


def test_defaults():
    settings = Settings.from_env({"DATABASE_PATH": "/data/pastes.db"})
    assert settings.port == 3000
    assert settings.db_url == "sqlite+aiosqlite:////data/pastes.db"
    assert settings.auth_username == "admin"
    assert settings.auth_password == "changeme"
    assert settings.public_url == "http://localhost:3000"


def test_explicit_values():
    settings = Settings.from_env({
        "PORT": "8080",
        "DATABASE_PATH": "/tmp/p.db",
        "DB_URL": "sqlite+aiosqlite:///other.db",
        "AUTH_USERNAME": "me",
        "AUTH_PASSWORD": "pw",
        "BASE_URL": "https://strings.example.com/",
    })
    assert settings.port == 8080
    assert settings.db_url == "sqlite+aiosqlite:///other.db"
    assert settings.auth_username == "me"
    assert settings.auth_password == "pw"
    assert settings.public_url == "https://strings.example.com"


def test_password_file_wins_over_env(tmp_path):
    pw = tmp_path / "password"
    pw.write_text("from-file\n")
    settings = Settings.from_env({"AUTH_PASSWORD": "from-env", "AUTH_PASSWORD_FILE": str(pw)})
    assert settings.auth_password == "from-file"


def test_unreadable_password_file_is_fatal(tmp_path):
    with pytest.raises(ConfigError):
        Settings.from_env({"AUTH_PASSWORD_FILE": str(tmp_path / "missing")})


def test_bad_port():
    with pytest.raises(ConfigError):
        Settings.from_env({"PORT": "eighty"})
