import os
from typing import Mapping, Optional

from pydantic import BaseModel


class ConfigError(RuntimeError):
    pass


def default_db_path() -> str:
    # default to ./pastes/pastes.db
    return os.path.abspath(os.path.join(os.getcwd(), "pastes", "pastes.db"))


def load_password(env: Mapping[str, str]) -> str:
    """Password from AUTH_PASSWORD_FILE if set, else AUTH_PASSWORD."""
    password_file = env.get("AUTH_PASSWORD_FILE")
    if password_file:
        try:
            with open(password_file, "r", encoding="utf-8") as f:
                return f.read().strip()
        except OSError as e:
            raise ConfigError(f"Failed to read AUTH_PASSWORD_FILE: {e}") from e
    return env.get("AUTH_PASSWORD") or "changeme"


class Settings(BaseModel):
    port: int = 3000
    db_path: str
    db_url: str
    auth_username: str = "admin"
    auth_password: str = "changeme"
    base_url: Optional[str] = None
    max_char_content: int = 1_000_000

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings once at process start. Call load_dotenv() first."""
        if env is None:
            env = os.environ
        db_path = env.get("DATABASE_PATH") or default_db_path()
        try:
            port = int(env.get("PORT") or 3000)
            max_chars = int(env.get("MAX_CHAR_CONTENT") or 1_000_000)
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e
        return cls(
            port=port,
            db_path=db_path,
            db_url=env.get("DB_URL") or f"sqlite+aiosqlite:///{db_path}",
            auth_username=env.get("AUTH_USERNAME") or "admin",
            auth_password=load_password(env),
            base_url=env.get("BASE_URL") or None,
            max_char_content=max_chars,
        )

    @property
    def public_url(self) -> str:
        return (self.base_url or f"http://localhost:{self.port}").rstrip("/")
