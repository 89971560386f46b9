"""secret-mcp configuration — loaded from environment / .env file."""

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "secret-mcp"


def default_data_dir() -> Path:
    """Platform application-data directory for the store."""
    home = Path.home()
    if sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA") or home / "AppData" / "Roaming")
    else:
        base = Path(os.environ.get("XDG_DATA_HOME") or home / ".local" / "share")
    return base / APP_DIR_NAME


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SECRET_MCP_", extra="ignore")

    env: str = "production"
    log_level: str = "INFO"

    # Store location
    data_dir: Path = Field(default_factory=default_data_dir)
    db_filename: str = "secrets.db"

    # HTTP surface (local only)
    host: str = "127.0.0.1"
    port: int = 8765
    cors_origins: list[str] = ["http://localhost:1420"]  # desktop shell dev server

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.db_filename


settings = Settings()
