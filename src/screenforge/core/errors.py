"""Error taxonomy for the editing engine."""


class EditorError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class MalformedImport(EditorError):
    """Blueprint text is not parseable or misses required fields."""


class UnknownComponentKind(EditorError, ValueError):
    """A component kind outside the closed kind set was requested."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown component kind: {kind!r}")
        self.kind = kind


class UnknownOperationKind(EditorError):
    """An operation tag the applier does not recognize."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"Unknown operation kind: {tag!r}")
        self.tag = tag


class UnresolvedReference(EditorError):
    """An operation targets a node or screen id that no longer exists."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Unresolved reference: {ref}")
        self.ref = ref


class AmbiguousCommand(EditorError):
    """A command was recognized but a required argument is missing."""


class InterpretationUnavailable(EditorError):
    """The remote interpreter is not configured, reachable or readable."""


class ConstraintViolation(EditorError):
    """An action would break a document invariant."""


class DocumentValidationError(EditorError):
    """A document failed structural validation."""


class PersistenceError(EditorError):
    """Loading or saving the document failed."""
