"""Scan configuration.

Settings come from a YAML file (``.towelie.yml``) or a legacy JSON ``.trc``
file, then from command-line overrides. Missing fields fall back to defaults.
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any

import yaml

from towelie.errors import ConfigurationError

CONFIG_FILENAMES = (".towelie.yml", ".towelie.yaml", ".trc")

# Legacy .trc keys -> field names. The old tool compared blocks against
# minLines - 1 newlines, so minLines is shifted down on the way in.
_LEGACY_KEYS = {
    "minLines": "min_lines",
    "minChars": "min_chars",
    "failureThreshold": "failure_threshold",
}


@dataclass
class ScanConfig:
    """Settings for one scan run."""

    pattern: str = "**/*.*"
    min_lines: int = 2  # Newline characters a block needs to be matched
    min_chars: int = 20  # Block length must exceed this
    failure_threshold: float = 95.0  # Minimum passing uniqueness percentage
    ignore: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "__pycache__", ".venv", "dist", "build",
    ])
    workers: int = 8

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check types and ranges, raising ConfigurationError."""
        self.min_lines = _as_int("min_lines", self.min_lines)
        self.min_chars = _as_int("min_chars", self.min_chars)
        self.workers = _as_int("workers", self.workers)
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")

        threshold = self.failure_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigurationError(f"failure_threshold must be a number, got {threshold!r}")
        if not 0 <= threshold <= 100:
            raise ConfigurationError(f"failure_threshold must be within [0, 100], got {threshold}")
        self.failure_threshold = float(threshold)

        if not isinstance(self.pattern, str) or not self.pattern:
            raise ConfigurationError("pattern must be a non-empty string")
        if PurePosixPath(self.pattern).is_absolute() or PureWindowsPath(self.pattern).is_absolute():
            raise ConfigurationError(
                f"pattern must be relative to the scan root, got {self.pattern!r}; use --root for the directory"
            )
        if not isinstance(self.ignore, list) or not all(isinstance(p, str) for p in self.ignore):
            raise ConfigurationError("ignore must be a list of strings")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanConfig":
        """Create from dictionary, accepting legacy camelCase keys."""
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config must be a mapping, got {type(data).__name__}")

        names = {f.name for f in dataclasses.fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key == "minLines" and isinstance(value, int) and not isinstance(value, bool) and value > 0:
                value -= 1
            key = _LEGACY_KEYS.get(key, key)
            if key in names and value is not None:
                values[key] = value
        return cls(**values)

    def merge_overrides(self, **overrides: Any) -> "ScanConfig":
        """Return a copy with non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ScanConfig.from_dict(data)


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value}")
    return value


def load_config(path: str | Path) -> ScanConfig:
    """Load scan configuration from a YAML (or JSON) file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid config {path}: {e}") from e

    if data is None:
        return ScanConfig()
    return ScanConfig.from_dict(data)


def find_config(root: str | Path) -> Path | None:
    """Locate the first known config file in ``root``."""
    for name in CONFIG_FILENAMES:
        candidate = Path(root) / name
        if candidate.is_file():
            return candidate
    return None


def config_to_yaml(config: ScanConfig) -> str:
    """Convert config to YAML string."""
    return yaml.dump(config.to_dict(), sort_keys=True, default_flow_style=False)
