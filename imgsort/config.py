"""
Configuration management for imgsort.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml

from .constants import PROGRAM, get_logger
from .file_operations import COLLISION_POLICIES, RENAME
from .grouping import KeyShape


class ConfigurationError(ValueError):
    """Run options that cannot be used to start a sort."""


@dataclass
class SortOptions:
    """Validated settings for a single sorting run."""
    source: Path
    dest: Path
    by_year: bool = True
    by_month: bool = True
    dry_run: bool = False
    list_plan: bool = False
    on_collision: str = RENAME

    def validate(self) -> "SortOptions":
        """Raise ConfigurationError unless the options describe a runnable sort."""
        if not self.source.exists():
            raise ConfigurationError(f"Source directory does not exist: {self.source}")
        if not self.source.is_dir():
            raise ConfigurationError(f"Source is not a directory: {self.source}")
        if not self.by_year and not self.by_month:
            raise ConfigurationError("Either the months or years flag must be set")
        if self.on_collision not in COLLISION_POLICIES:
            raise ConfigurationError(
                f"Unknown collision policy '{self.on_collision}' "
                f"(expected one of: {', '.join(COLLISION_POLICIES)})")
        return self

    @property
    def key_shape(self) -> KeyShape:
        return KeyShape.from_flags(self.by_year, self.by_month)


class Config:
    """Manages configuration file for storing user preferences."""

    def __init__(self, config_path: Optional[Path] = None):
        # Default config location: ~/.<PROGRAM>/config.yml
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / f".{PROGRAM}" / "config.yml"
        self.program_root = self.config_path.parent
        self.data = self._load_config()

    def _load_config(self) -> Dict:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            get_logger().warning(f"Could not load config: {e}")
            return {}

        if not isinstance(data, dict):
            get_logger().warning(f"Ignoring malformed config file: {self.config_path}")
            return {}
        return data

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            self.program_root.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                yaml.safe_dump(self.data, f, default_flow_style=False)
        except OSError as e:
            get_logger().error(f"Could not save config: {e}")

    def get_last_source(self) -> Optional[str]:
        """Get the last used source directory."""
        return self.data.get('last_source')

    def get_last_dest(self) -> Optional[str]:
        """Get the last used destination directory."""
        return self.data.get('last_dest')

    def get_collision_policy(self) -> Optional[str]:
        """Get the saved name-collision policy."""
        return self.data.get('on_collision')

    def update_paths(self, source: str, dest: str) -> None:
        """Update and save the last used paths."""
        self.data['last_source'] = source
        self.data['last_dest'] = dest
        self.save_config()

    def update_collision_policy(self, policy: str) -> None:
        """Update and save the name-collision policy."""
        self.data['on_collision'] = policy
        self.save_config()
