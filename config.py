"""
Environment-driven configuration for the resource services.

Values are read once at import time. A ``.env`` file in the working
directory is loaded first so local runs do not need exported variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _database_url() -> Optional[str]:
    return os.getenv("DATABASE_URL") or os.getenv("MONGODB_URI")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    database_url: Optional[str] = field(default_factory=_database_url)
    database_name: str = os.getenv("DATABASE_NAME", "app")
    host: str = os.getenv("HOST", "0.0.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def port_for(self, env_var: str, default: int) -> int:
        """Port for one service: its own variable, then ``PORT``, then the default."""
        value = os.getenv(env_var) or os.getenv("PORT")
        return int(value) if value else default


settings = Settings()
