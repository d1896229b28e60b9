from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./data/accounts.sqlite3"
    api_key: str = ""  # empty = no auth check (local dev)
    password_scheme: Literal["sha256", "bcrypt"] = "sha256"  # sha256 = legacy unsalted digest
    cors_origins: list[str] = ["http://localhost:8000", "http://127.0.0.1:8000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
