"""Input and document validation with strong typing."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from returns.result import Result, Success, Failure

from pydantic import BaseModel, Field, field_validator, ConfigDict

from .errors import DocumentValidationError

if TYPE_CHECKING:
    from ..editor.models import ComponentNode, Document


# Document limits
MAX_SCREENS = 50
MAX_NODES = 5_000
MAX_TREE_DEPTH = 30
MAX_SCREEN_NAME_LENGTH = 80
MAX_ICON_LENGTH = 20
MAX_COMMAND_LENGTH = 2_000


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class CommandRequest(RequestValidator):
    """Validated free-text command."""

    prompt: str = Field(min_length=1, max_length=MAX_COMMAND_LENGTH)

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Ensure prompt is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Prompt cannot be empty")
        return stripped


def validate_document(
    document: "Document",
    max_screens: int = MAX_SCREENS,
    max_nodes: int = MAX_NODES,
    max_depth: int = MAX_TREE_DEPTH,
) -> None:
    """
    Check the structural invariants of a whole document.

    Raises:
        DocumentValidationError: On the first violation found
    """
    if not document.screens:
        raise DocumentValidationError("Document must contain at least one screen")
    if len(document.screens) > max_screens:
        raise DocumentValidationError(
            f"Document has {len(document.screens)} screens, maximum is {max_screens}"
        )

    screen_ids: set[str] = set()
    node_ids: set[str] = set()
    homes = 0
    for screen in document.screens:
        if screen.id in screen_ids:
            raise DocumentValidationError(f"Duplicate screen id: {screen.id}")
        screen_ids.add(screen.id)

        if not screen.name.strip() or len(screen.name) > MAX_SCREEN_NAME_LENGTH:
            raise DocumentValidationError(
                f"Screen name must be 1-{MAX_SCREEN_NAME_LENGTH} characters: {screen.name!r}"
            )
        if len(screen.icon) > MAX_ICON_LENGTH:
            raise DocumentValidationError(f"Screen icon too long on {screen.id}")
        homes += 1 if screen.is_home else 0

        _validate_nodes(screen.components, node_ids, max_depth, 1)
        if len(node_ids) > max_nodes:
            raise DocumentValidationError(f"Document exceeds maximum of {max_nodes} components")

    if homes > 1:
        raise DocumentValidationError(f"Document has {homes} home screens, expected one")


def _validate_nodes(
    nodes: list["ComponentNode"], seen: set[str], max_depth: int, level: int
) -> None:
    from ..editor.kinds import is_container

    if nodes and level > max_depth:
        raise DocumentValidationError(f"Component nesting exceeds maximum depth of {max_depth}")

    for node in nodes:
        if node.id in seen:
            raise DocumentValidationError(f"Duplicate component id: {node.id}")
        seen.add(node.id)

        if node.children is None:
            continue
        if node.children and not is_container(node.kind):
            raise DocumentValidationError(
                f"Component {node.id} of kind '{node.kind.value}' cannot have children"
            )
        _validate_nodes(node.children, seen, max_depth, level + 1)


def validate_document_result(document: "Document") -> Result[None, ValidationResult]:
    """
    Validate a document (Result pattern version).

    Returns:
        Result indicating success or the first validation error
    """
    try:
        validate_document(document)
        return Success(None)
    except DocumentValidationError as e:
        return Failure(ValidationResult(str(e), field="screens"))
