"""
Configuration Management

Handles loading configuration from environment variables and config files.
The resulting Config is passed explicitly into each split/merge call.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv

from .file.chunker import DEFAULT_BLOCK_SIZE

logger = logging.getLogger(__name__)


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Config:
    """
    fsplit Configuration.

    Configuration priority (highest to lowest):
    1. Command-line options
    2. Environment variables (FSPLIT_*)
    3. Config file (JSON)
    4. Default values
    """
    # Bytes per read/write call
    block_size: int = DEFAULT_BLOCK_SIZE

    # Logging
    log_level: str = 'INFO'

    def set_block_size(self, value: Any) -> int:
        """
        Set the block size.

        Non-positive or non-integer values are ignored and the
        previous block size is kept.

        Returns:
            The block size now in effect
        """
        parsed = _parse_int(value)
        if parsed is not None and parsed > 0:
            self.block_size = parsed
        else:
            logger.debug(f"Ignoring invalid block size {value!r}, keeping {self.block_size}")
        return self.block_size

    def apply_env(self) -> 'Config':
        """Override settings with the FSPLIT_* variables that are set."""
        load_dotenv()

        block_size = os.getenv('FSPLIT_BLOCK_SIZE')
        if block_size is not None:
            self.set_block_size(block_size)

        log_level = os.getenv('FSPLIT_LOG_LEVEL')
        if log_level:
            self.log_level = log_level.upper()

        return self

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables."""
        return cls().apply_env()

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        config = cls()
        if 'block_size' in data:
            config.set_block_size(data['block_size'])
        config.log_level = str(data.get('log_level', config.log_level)).upper()

        return config

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'block_size': self.block_size,
            'log_level': self.log_level,
        }

    def save(self, path: Path):
        """Save configuration to a JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from file and environment.

    Environment variables override file settings.
    """
    config = Config()

    if config_path and Path(config_path).exists():
        config = Config.from_file(config_path)

    return config.apply_env()


# Example config file template
EXAMPLE_CONFIG = """
{
  "block_size": 64000,
  "log_level": "INFO"
}
"""


if __name__ == "__main__":
    print("Example configuration file (fsplit.json):")
    print(EXAMPLE_CONFIG)
