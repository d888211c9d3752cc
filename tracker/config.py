"""Configuration management."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

PROJECT_ROOT = Path(__file__).parent.parent


class Config(BaseModel):
    """Application configuration."""

    data_path: Path = Path("data/local-storage.json")
    spreadsheet_id: Optional[str] = None
    sheet_name: str = "Calendar"
    digest_recipient: Optional[str] = None
    user_name: Optional[str] = None
    log_level: str = "INFO"
    upcoming_limit: int = Field(default=5, ge=1)
    reminder_hours_before: int = Field(default=24, ge=1)

    def resolved_data_path(self) -> Path:
        if self.data_path.is_absolute():
            return self.data_path
        return PROJECT_ROOT / self.data_path


_config: Optional[Config] = None


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file."""
    global _config

    if _config is not None:
        return _config

    if config_path is None:
        config_path = PROJECT_ROOT / "config" / "config.yaml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}. "
            "Copy config/config.yaml.example to config/config.yaml and fill in your settings."
        )

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    _config = Config(**data)
    return _config


def get_config() -> Config:
    """Get the loaded configuration."""
    if _config is None:
        return load_config()
    return _config

