"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    EditorError,
    MalformedImport,
    UnknownComponentKind,
    UnknownOperationKind,
    UnresolvedReference,
    AmbiguousCommand,
    InterpretationUnavailable,
    ConstraintViolation,
    DocumentValidationError,
    PersistenceError,
)
from .validate import (
    CommandRequest,
    ValidationResult,
    validate_document,
    validate_document_result,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    decode_object,
    extract_json,
    safe_json_dumps,
    strip_code_fence,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "EditorError",
    "MalformedImport",
    "UnknownComponentKind",
    "UnknownOperationKind",
    "UnresolvedReference",
    "AmbiguousCommand",
    "InterpretationUnavailable",
    "ConstraintViolation",
    "DocumentValidationError",
    "PersistenceError",
    # Validation
    "CommandRequest",
    "ValidationResult",
    "validate_document",
    "validate_document_result",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "decode_object",
    "extract_json",
    "safe_json_dumps",
    "strip_code_fence",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
]
