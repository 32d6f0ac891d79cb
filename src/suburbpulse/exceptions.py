"""
Custom Exceptions for Suburb Pulse

Provides a hierarchy of exceptions for standardized error handling across all modules.

Thin samples, zero-variance prefixes and missing prior-year baselines are
handled by numeric policy inside the analytics modules and never raise.

Exception Hierarchy:
    SuburbPulseError (base)
    ├── ConfigurationError
    ├── DatabaseError
    │   └── DatabaseConnectionError
    ├── IngestionError
    └── ValidationError
"""


class SuburbPulseError(Exception):
    """Base exception for all Suburb Pulse errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(SuburbPulseError):
    """Raised when there's a configuration problem."""

    def __init__(self, message: str, setting: str = None):
        self.setting = setting
        super().__init__(message)


# Database Errors
class DatabaseError(SuburbPulseError):
    """Base exception for database-related errors."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when unable to connect to the database."""

    pass


# Ingestion Errors
class IngestionError(SuburbPulseError):
    """Raised when a sale record cannot be normalized."""

    def __init__(self, message: str, row: dict = None):
        self.row = row
        super().__init__(message)


# Validation Errors
class ValidationError(SuburbPulseError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)
