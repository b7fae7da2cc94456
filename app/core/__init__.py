"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the accounts and ledger
apps. It holds no business logic of its own.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - ConflictError: State conflicts (lock holders, immutable records)

Protocols (import from core.protocols):
    - CacheBackend: Generic cache interface

Helpers (import from core.helpers):
    - parse_uuid: UUID parsing that returns None for malformed input

Usage:
    from core.models import BaseModel
    from core.model_mixins import UUIDPrimaryKeyMixin
    from core.exceptions import ValidationError, NotFoundError
    from core.helpers import parse_uuid

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

# Helpers (no Django model dependencies)
from .helpers import parse_uuid

# Protocols (no Django dependencies)
from .protocols import CacheBackend

__all__ = [
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    # Protocols
    "CacheBackend",
    # Helpers
    "parse_uuid",
]
