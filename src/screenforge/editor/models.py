"""Document Data Models."""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .kinds import ComponentKind, parse_kind


class ComponentNode(BaseModel):
    """A single element in a screen's component tree."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, max_length=200)
    kind: ComponentKind = Field(..., alias="type")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["ComponentNode"] | None = Field(default=None)

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, v: Any) -> ComponentKind:
        return parse_kind(v)

    @field_validator("props", mode="before")
    @classmethod
    def _coerce_props(cls, v: Any) -> dict[str, Any]:
        return dict(v) if isinstance(v, dict) else {}


class Screen(BaseModel):
    """One page/tab of the app being built."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, max_length=200)
    name: str = Field(..., min_length=1, max_length=80)
    icon: str = Field(default="📄", max_length=20)
    components: list[ComponentNode] = Field(default_factory=list)
    is_home: bool = Field(default=False, alias="isHome")


class Document(BaseModel):
    """The full multi-screen document owned by an editing session."""

    screens: list[Screen] = Field(default_factory=list)

    def screen(self, screen_id: str) -> Screen | None:
        """Look up a screen by id."""
        for screen in self.screens:
            if screen.id == screen_id:
                return screen
        return None

    def home_screen(self) -> Screen | None:
        """The screen flagged home, else the first screen."""
        for screen in self.screens:
            if screen.is_home:
                return screen
        return self.screens[0] if self.screens else None

    def snapshot(self) -> "Document":
        """Deep, independent copy used as a history entry."""
        return self.model_copy(deep=True)

    def to_wire(self) -> list[dict[str, Any]]:
        """Serialize screens in the persisted ``editorScreens`` shape."""
        return [screen_to_wire(screen) for screen in self.screens]

    @classmethod
    def from_wire(cls, screens: list[dict[str, Any]]) -> "Document":
        """Build a document from persisted ``editorScreens`` data."""
        return cls(screens=[Screen.model_validate(s) for s in screens])


def node_to_wire(node: ComponentNode) -> dict[str, Any]:
    """Serialize a node with ``type`` tags and without empty child slots."""
    data: dict[str, Any] = {"id": node.id, "type": node.kind.value, "props": dict(node.props)}
    if node.children is not None:
        data["children"] = [node_to_wire(child) for child in node.children]
    return data


def screen_to_wire(screen: Screen) -> dict[str, Any]:
    """Serialize a screen in the persisted shape."""
    return {
        "id": screen.id,
        "name": screen.name,
        "icon": screen.icon,
        "isHome": screen.is_home,
        "components": [node_to_wire(node) for node in screen.components],
    }


ComponentNode.model_rebuild()
