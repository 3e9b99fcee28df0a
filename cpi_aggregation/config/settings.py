"""Settings configuration for CPI aggregation."""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Tuple
import json
import logging

from . import constants
from ..utils.exceptions import ConfigurationError
from ..utils.logging_config import setup_logging


@dataclass
class Settings:
    """Configuration settings for CPI tree construction and splicing."""

    # Index parameters
    base_index: float = constants.BASE_INDEX_VALUE

    # Classification hierarchy
    characters: Tuple[int, ...] = constants.DEFAULT_CHARACTERS
    root_code: str = constants.ROOT_CODE
    root_name: str = constants.ROOT_NAME

    # Numerical tolerances
    weight_tolerance: float = constants.WEIGHT_TOLERANCE

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        # JSON round-trips turn tuples into lists
        self.characters = tuple(self.characters)

    @classmethod
    def from_json(cls, json_path: str) -> "Settings":
        """Load settings from JSON file."""
        with open(json_path, 'r') as f:
            config = json.load(f)
        return cls(**config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Settings":
        """Create settings from dictionary."""
        return cls(**config_dict)

    def to_json(self, json_path: str) -> None:
        """Save settings to JSON file."""
        config_dict = {
            k: v for k, v in asdict(self).items()
            if v is not None
        }
        with open(json_path, 'w') as f:
            json.dump(config_dict, f, indent=2)

    def validate(self) -> None:
        """Validate settings consistency."""
        if self.base_index <= 0:
            raise ConfigurationError("Base index must be positive")

        if len(self.characters) < 2:
            raise ConfigurationError("Characters must define at least two hierarchy levels")

        if any(b <= a for a, b in zip(self.characters, self.characters[1:])):
            raise ConfigurationError("Characters must be strictly ascending")

        if not self.root_code:
            raise ConfigurationError("Root code cannot be empty")

        if self.weight_tolerance <= 0:
            raise ConfigurationError("Weight tolerance must be positive")

        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    def configure_logging(self) -> logging.Logger:
        """Configure the package logger from these settings."""
        return setup_logging(
            "cpi_aggregation",
            level=self.log_level,
            log_file=self.log_file
        )


def get_default_settings() -> Settings:
    """Get default settings instance."""
    return Settings()
