"""Configuration management for the SR P3 MCP server.

Settings are read from environment variables. The channel, request timeout
and rate limit are fixed and deliberately not configurable.
"""
import os
from dataclasses import dataclass
from typing import Optional

from . import __version__

SR_API_BASE_URL = "http://api.sr.se/api/v2/playlists"
API_TIMEOUT_SECONDS = 10.0

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SRConfig:
    """Runtime configuration (reads from environment)."""

    base_url: str = SR_API_BASE_URL
    timeout_seconds: float = API_TIMEOUT_SECONDS
    user_agent: str = f"SR-P3-MCP-Server/{__version__}"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_file_max_bytes: int = 10485760  # 10 MB
    log_file_backup_count: int = 5

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.base_url or not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must be a valid HTTP/HTTPS URL")

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}. Must be one of {list(VALID_LOG_LEVELS)}")

        if self.log_file_max_bytes < 0 or self.log_file_backup_count < 0:
            raise ValueError("Log file rotation settings must not be negative")

    @classmethod
    def from_environment(cls) -> "SRConfig":
        """Load configuration from environment variables.

        Returns:
            SRConfig: Loaded configuration object

        Raises:
            ValueError: If a variable holds an invalid value
        """
        try:
            max_bytes = int(os.getenv("LOG_FILE_MAX_BYTES", "10485760"))
            backup_count = int(os.getenv("LOG_FILE_BACKUP_COUNT", "5"))
        except ValueError as e:
            raise ValueError(f"LOG_FILE_MAX_BYTES and LOG_FILE_BACKUP_COUNT must be integers: {e}") from e

        return cls(
            base_url=os.getenv("SR_API_BASE_URL", SR_API_BASE_URL),
            log_level=os.getenv("SR_P3_LOG_LEVEL", "INFO"),
            log_file=os.getenv("SR_P3_LOG_FILE") or None,
            log_file_max_bytes=max_bytes,
            log_file_backup_count=backup_count,
        )
