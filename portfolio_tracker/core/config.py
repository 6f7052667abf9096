"""
Configuration loader for the portfolio tracker.

Settings for data locations, import rules and logging, read from config.yaml.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


logger = logging.getLogger(__name__)


DEFAULT_CURRENCIES = ["USD", "CAD", "EUR", "GBP", "INR"]


@dataclass
class DataConfig:
    """Configuration for data paths."""
    base_path: str
    transactions_directory: str
    file_pattern: str = "*.csv"
    prices_file: Optional[str] = None
    default_account_id: Optional[str] = None

    @property
    def transactions_path(self) -> Path:
        return Path(self.base_path) / self.transactions_directory

    @property
    def prices_path(self) -> Optional[Path]:
        if not self.prices_file:
            return None
        return Path(self.base_path) / self.prices_file


@dataclass
class ImportConfig:
    """Rules applied when validating imported transaction rows."""
    valid_currencies: list[str] = field(default_factory=lambda: list(DEFAULT_CURRENCIES))
    max_symbol_length: int = 20
    max_notes_length: int = 500


@dataclass
class LoggingConfig:
    """Log level and formats passed to logging.basicConfig."""
    level: str
    format: str
    date_format: str


@dataclass
class Config:
    """All settings from one config file."""
    data: DataConfig
    importing: ImportConfig
    logging: LoggingConfig

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Build a Config from a YAML file. The import section is optional."""
        path = Path(path)
        logger.debug(f"Loading configuration from {path}")

        with open(path, "r") as f:
            raw = yaml.safe_load(f)

        return cls(
            data=DataConfig(**raw["data"]),
            importing=ImportConfig(**raw.get("import", {})),
            logging=LoggingConfig(**raw["logging"]),
        )


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
        datefmt=config.date_format,
    )
    logger.info("Logging configured successfully")


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load configuration and set up logging.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Loaded Config object.
    """
    config = Config.from_yaml(path)
    setup_logging(config.logging)
    return config
