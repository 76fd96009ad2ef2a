"""Operation Models - immutable descriptions of one atomic edit."""

from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from ..core import get_logger
from ..core.errors import UnknownComponentKind, UnknownOperationKind
from .kinds import ComponentKind, parse_kind

logger = get_logger(__name__)


class BaseOperation(BaseModel):
    """Base operation with immutable configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class AddOp(BaseOperation):
    """Append a new node to a screen (the active screen when unset)."""

    op: Literal["add"] = "add"
    kind: ComponentKind
    props: dict[str, Any] = Field(default_factory=dict)
    screen_id: str | None = Field(default=None, alias="screenId")

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, v: Any) -> ComponentKind:
        return parse_kind(v)


class UpdatePropsByIdOp(BaseOperation):
    """Merge props into a node named by id."""

    op: Literal["update_by_id"] = "update_by_id"
    node_id: str = Field(..., alias="nodeId")
    props: dict[str, Any] = Field(default_factory=dict)


class UpdateSelectedOp(BaseOperation):
    """
    Merge props into the selected node.

    ``target_id`` pins the operation to the node that was selected when the
    command was issued; unset means "whatever is selected at apply time".
    """

    op: Literal["update_selected"] = "update_selected"
    props: dict[str, Any] = Field(default_factory=dict)
    target_id: str | None = Field(default=None, alias="targetId")


class DeleteSelectedOp(BaseOperation):
    """Delete the selected node (see ``UpdateSelectedOp.target_id``)."""

    op: Literal["delete_selected"] = "delete_selected"
    target_id: str | None = Field(default=None, alias="targetId")


class DeleteByIdOp(BaseOperation):
    """Delete a node named by id."""

    op: Literal["delete_by_id"] = "delete_by_id"
    node_id: str = Field(..., alias="nodeId")


class ReorderOp(BaseOperation):
    """Replace the top-level order of a screen."""

    op: Literal["reorder"] = "reorder"
    screen_id: str = Field(..., alias="screenId")
    order: list[str] = Field(default_factory=list)


Operation = Annotated[
    Union[AddOp, UpdatePropsByIdOp, UpdateSelectedOp, DeleteSelectedOp, DeleteByIdOp, ReorderOp],
    Field(discriminator="op"),
]

_operation_adapter: TypeAdapter[Operation] = TypeAdapter(Operation)

# Tag spellings seen in assistant output → canonical tag
_TAG_ALIASES = {
    "add": "add",
    "addcomponent": "add",
    "addnode": "add",
    "insert": "add",
    "create": "add",
    "updatebyid": "update_by_id",
    "updateprops": "update_by_id",
    "updatepropsbyid": "update_by_id",
    "updatecomponent": "update_by_id",
    "update": "update_by_id",
    "updateselected": "update_selected",
    "updateselectedcomponent": "update_selected",
    "deleteselected": "delete_selected",
    "deleteselectedcomponent": "delete_selected",
    "removeselected": "delete_selected",
    "deletebyid": "delete_by_id",
    "delete": "delete_by_id",
    "deletecomponent": "delete_by_id",
    "remove": "delete_by_id",
    "reorder": "reorder",
    "reordercomponents": "reorder",
}

# Field spellings → canonical field name
_FIELD_ALIASES = {
    "type": "kind",
    "component": "kind",
    "componenttype": "kind",
    "componentkind": "kind",
    "id": "node_id",
    "nodeid": "node_id",
    "componentid": "node_id",
    "targetid": "target_id",
    "screenid": "screen_id",
    "properties": "props",
    "updates": "props",
    "newprops": "props",
    "neworder": "order",
    "ids": "order",
}


def _fold(name: str) -> str:
    return name.replace("_", "").replace("-", "").replace(" ", "").lower()


def parse_operation(raw: Any) -> Operation:
    """
    Build a typed operation from loosely-shaped wire data.

    The tag may be given as ``op``, ``action`` or ``type``; common spellings
    of tags and fields are accepted.

    Raises:
        UnknownOperationKind: If the tag is missing or unrecognized
        UnknownComponentKind: If an add names an unknown kind
        ValueError: If required fields are missing
    """
    if isinstance(raw, BaseOperation):
        return raw  # type: ignore[return-value]
    if not isinstance(raw, dict):
        raise UnknownOperationKind(type(raw).__name__)

    tag_value = raw.get("op") or raw.get("action")
    uses_type_as_tag = False
    if tag_value is None and isinstance(raw.get("type"), str) and _fold(raw["type"]) in _TAG_ALIASES:
        tag_value = raw["type"]
        uses_type_as_tag = True

    tag = _TAG_ALIASES.get(_fold(tag_value)) if isinstance(tag_value, str) else None
    if tag is None:
        raise UnknownOperationKind(tag_value)

    data: dict[str, Any] = {"op": tag}
    for key, value in raw.items():
        if key in ("op", "action") or (key == "type" and uses_type_as_tag):
            continue
        field = _FIELD_ALIASES.get(_fold(key), key)
        data.setdefault(field, value)

    if tag in ("update_selected", "delete_selected"):
        if "node_id" in data:
            data.setdefault("target_id", data.pop("node_id"))
    elif "target_id" in data:
        data.setdefault("node_id", data.pop("target_id"))

    try:
        return _operation_adapter.validate_python(data)
    except ValidationError as e:
        for error in e.errors():
            ctx_error = (error.get("ctx") or {}).get("error")
            if isinstance(ctx_error, UnknownComponentKind):
                raise ctx_error from e
        raise ValueError(f"Invalid '{tag}' operation: {e.errors()[0]['msg']}") from e


def parse_operations(raw_items: Any) -> tuple[list[Operation], list[str]]:
    """
    Parse a list of wire operations, skipping the ones that cannot be used.

    Returns:
        (operations, problems) - problems describe each skipped item
    """
    if not isinstance(raw_items, list):
        return [], ["operations must be a list"]

    operations: list[Operation] = []
    problems: list[str] = []
    for index, raw in enumerate(raw_items):
        try:
            operations.append(parse_operation(raw))
        except (UnknownOperationKind, UnknownComponentKind, ValueError) as e:
            logger.warning("operation_skipped", index=index, error=str(e))
            problems.append(f"#{index}: {e}")
    return operations, problems


def operation_to_wire(operation: BaseOperation) -> dict[str, Any]:
    """Serialize an operation with its canonical tag and field names."""
    return operation.model_dump(mode="json", exclude_none=True)
