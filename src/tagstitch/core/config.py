import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, Any, Tuple
from pathlib import Path


class Settings(BaseSettings):
    # Expansion tags
    DELIM_OPEN: str = "{{"
    DELIM_CLOSE: str = "}}"

    # Stitching
    HEADER_MARKER: str = "## ----"  # Prefix of a chunk header line in source
    LABEL_TOKEN: str = "CHUNK_LABEL_HERE"  # Inner token of the template marker
    DEFAULT_LABEL: str = "auto-report"  # Label used when no headers exist
    DEFAULT_TEMPLATE: str = "latex"  # Built-in template name or path
    TEMPLATE_DIR: Optional[str] = None  # Extra directory searched by name

    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("DELIM_OPEN", "DELIM_CLOSE", "HEADER_MARKER", "LABEL_TOKEN")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be a non-empty string")
        return value

    @property
    def delimiters(self) -> Tuple[str, str]:
        return (self.DELIM_OPEN, self.DELIM_CLOSE)

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path = Path(config_file)
        else:
            # Auto-discover .tagstitch.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".tagstitch.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        # Load config file if found
        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables override file values
        config_data = {
            k: v for k, v in config_data.items() if k not in os.environ
        }
        return cls(**config_data)


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()
