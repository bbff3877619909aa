"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_OUTPUT = Path("facts.pl")
MIN_TOKEN_LENGTH = 2
# Megabytes.
MAX_FILE_SIZE = 10


class ConfigError(ValueError):
    """Raised when the indexing configuration cannot be used."""


@dataclass(slots=True)
class AppConfig:
    directories: list[Path] = field(default_factory=list)
    min_token_length: int = MIN_TOKEN_LENGTH
    max_file_size_mb: int = MAX_FILE_SIZE
    output_path: Path = DEFAULT_OUTPUT
    workers: int | None = None

    @property
    def max_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def resolve_output_path(self, base_dir: Path | None = None) -> Path:
        if Path(self.output_path).is_absolute() or base_dir is None:
            return Path(self.output_path)
        return base_dir / self.output_path

    def validate(self) -> None:
        """Check the configuration before any indexing work starts."""
        if not self.directories:
            raise ConfigError("At least one directory is required")
        if self.min_token_length < 1:
            raise ConfigError(f"min_token_length must be >= 1, got {self.min_token_length}")
        if self.max_file_size_mb < 0:
            raise ConfigError(f"max_file_size_mb must be >= 0, got {self.max_file_size_mb}")
        if self.workers is not None and self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
