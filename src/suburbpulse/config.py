"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from suburbpulse.config import get_config

    config = get_config()
    db_path = config.database.path
    window = config.analysis.window()
"""

import math
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from suburbpulse.exceptions import ConfigurationError

# Load .env file if present
load_dotenv()

_DATE_KEY_RE = re.compile(r"^\d{8}$")


def _get_project_root() -> Path:
    """Get the project root directory."""
    # config.py -> suburbpulse -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent


def _validate_date_key(setting: str, value: str) -> str:
    """Ensure a window boundary is a YYYYMMDD string."""
    value = str(value).strip()
    if not _DATE_KEY_RE.match(value):
        raise ConfigurationError(
            f"{setting} must be a YYYYMMDD date, got {value!r}", setting=setting
        )
    return value


@dataclass(frozen=True)
class AnalysisWindow:
    """Date boundaries (YYYYMMDD, inclusive start) for one analysis run.

    The current window is ``settlement_date >= current_start``. The prior
    window is ``prior_start <= settlement_date < prior_end``; ``prior_end``
    defaults to ``current_start``. Outlier detection reads from
    ``outlier_start`` (defaults to ``current_start``) and the prediction
    feature table reads from ``history_start``.
    """

    current_start: str = "20250101"
    prior_start: str = "20240101"
    prior_end: Optional[str] = None
    history_start: str = "20240101"
    outlier_start: Optional[str] = None

    def __post_init__(self):
        for name in ("current_start", "prior_start", "history_start"):
            _validate_date_key(name, getattr(self, name))
        if self.prior_end is None:
            object.__setattr__(self, "prior_end", self.current_start)
        if self.outlier_start is None:
            object.__setattr__(self, "outlier_start", self.current_start)
        _validate_date_key("prior_end", self.prior_end)
        _validate_date_key("outlier_start", self.outlier_start)
        if self.prior_start > self.prior_end:
            raise ConfigurationError(
                "prior_start must not be after prior_end", setting="prior_start"
            )


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: str = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_DB_PATH",
        str(_get_project_root() / "suburbpulse.db")
    ))

    def __post_init__(self):
        # Resolve relative paths
        if not os.path.isabs(self.path):
            self.path = str(_get_project_root() / self.path)


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_API_HOST", "127.0.0.1"
    ))
    port: int = field(default_factory=lambda: int(os.getenv(
        "SUBURBPULSE_API_PORT", "3003"
    )))
    debug: bool = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_DEBUG", "false"
    ).lower() in ("true", "1", "yes"))


@dataclass
class AnalysisConfig:
    """Window boundaries and thresholds for the analytics engine."""

    current_start: str = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_CURRENT_START", "20250101"
    ))
    prior_start: str = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_PRIOR_START", "20240101"
    ))
    history_start: str = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_HISTORY_START", "20240101"
    ))
    outlier_threshold: float = field(default_factory=lambda: float(os.getenv(
        "SUBURBPULSE_OUTLIER_THRESHOLD", "2.0"
    )))

    def __post_init__(self):
        self.current_start = _validate_date_key("SUBURBPULSE_CURRENT_START", self.current_start)
        self.prior_start = _validate_date_key("SUBURBPULSE_PRIOR_START", self.prior_start)
        self.history_start = _validate_date_key("SUBURBPULSE_HISTORY_START", self.history_start)
        if not math.isfinite(self.outlier_threshold) or self.outlier_threshold <= 0:
            raise ConfigurationError(
                "SUBURBPULSE_OUTLIER_THRESHOLD must be a positive finite number",
                setting="SUBURBPULSE_OUTLIER_THRESHOLD",
            )

    def window(self) -> AnalysisWindow:
        """Build the analysis window described by this configuration."""
        return AnalysisWindow(
            current_start=self.current_start,
            prior_start=self.prior_start,
            history_start=self.history_start,
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "SUBURBPULSE_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    api: APIConfig = field(default_factory=APIConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
