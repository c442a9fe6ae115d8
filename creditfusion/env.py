import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/baselines.db"


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def log_level() -> str:
    return os.getenv("CREDITFUSION_LOG_LEVEL", "INFO").upper()


def log_dir() -> Optional[Path]:
    value = os.getenv("CREDITFUSION_LOG_DIR")
    return Path(value) if value else None


def db_path() -> Path:
    return Path(os.getenv("CREDITFUSION_DB", DEFAULT_DB_PATH))
