"""Interpreter contract: prompt + editing context → operations + message."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..editor.models import ComponentNode, Screen, node_to_wire
from ..editor.operations import Operation

if TYPE_CHECKING:
    from ..editor.session import EditorSession


@dataclass(frozen=True)
class InterpretationContext:
    """What an interpreter may look at: never the live document itself."""

    screen: Screen | None = None
    selected: ComponentNode | None = None
    app_name: str | None = None
    industry: str | None = None

    @classmethod
    def from_session(
        cls,
        session: "EditorSession",
        app_name: str | None = None,
        industry: str | None = None,
    ) -> "InterpretationContext":
        selected = session.selected_node
        return cls(
            screen=session.active_screen.model_copy(deep=True),
            selected=selected.model_copy(deep=True) if selected is not None else None,
            app_name=app_name,
            industry=industry,
        )

    def to_wire(self, node_cap: int) -> dict[str, Any]:
        """Assistant request context; top-level nodes are truncated to ``node_cap``."""
        screen = None
        if self.screen is not None:
            screen = {
                "id": self.screen.id,
                "name": self.screen.name,
                "components": [node_to_wire(node) for node in self.screen.components[:node_cap]],
            }
        return {
            "appName": self.app_name,
            "industry": self.industry,
            "screen": screen,
            "selected": node_to_wire(self.selected) if self.selected is not None else None,
        }


@dataclass(frozen=True)
class Interpretation:
    """Operations derived from one prompt and the reply shown to the user."""

    operations: list[Operation] = field(default_factory=list)
    message: str = ""
    source: str = "local"
    degraded: bool = False


@runtime_checkable
class Interpreter(Protocol):
    """A strategy that turns a prompt into operations."""

    name: str

    async def interpret(self, prompt: str, context: InterpretationContext) -> Interpretation:
        ...
