"""Local rule-based interpreter - pattern rules for the common commands."""

import re

from ..core import get_logger
from ..core.errors import AmbiguousCommand
from ..editor.kinds import ComponentKind, primary_text_key
from ..editor.normalize import canonical_key
from ..editor.models import ComponentNode
from ..editor.operations import AddOp, UpdateSelectedOp
from .base import Interpretation, InterpretationContext

logger = get_logger(__name__)

# Verb families
_ADD_VERB = re.compile(r"\b(add|insert|create)\b", re.IGNORECASE)
_CHANGE_VERB = re.compile(r"\b(change|set|update|make)\b", re.IGNORECASE)

# Quoted argument: double/curly quotes, or single quotes not inside a word
_QUOTED = re.compile(r"[\"“”]([^\"“”]+)[\"“”]|(?<!\w)'([^']+)'(?!\w)")

# Kinds the add family knows about; the earliest keyword in the prompt wins
_ADD_KINDS: list[tuple[ComponentKind, re.Pattern[str]]] = [
    (ComponentKind.HERO, re.compile(r"\b(hero|banner)s?\b", re.IGNORECASE)),
    (ComponentKind.BUTTON, re.compile(r"\bbuttons?\b", re.IGNORECASE)),
    (ComponentKind.HEADING, re.compile(r"\b(heading|title|header)s?\b", re.IGNORECASE)),
    (ComponentKind.DIVIDER, re.compile(r"\b(divider|separator|line)s?\b", re.IGNORECASE)),
    (ComponentKind.SPACER, re.compile(r"\b(spacer|space|gap)s?\b", re.IGNORECASE)),
    (ComponentKind.TEXT, re.compile(r"\b(text|paragraph)s?\b", re.IGNORECASE)),
]

# Property families the change family knows about, checked in order
_SUBTITLE_TARGET = re.compile(r"\b(subtitle|subheading|tagline)\b", re.IGNORECASE)
_COLOR_TARGET = re.compile(r"\b(colou?r|background|bg)\b", re.IGNORECASE)
_BACKGROUND_TARGET = re.compile(r"\b(background|bg)\b", re.IGNORECASE)
_TEXT_COLOR_TARGET = re.compile(r"\b(text|font)\s+colou?r\b", re.IGNORECASE)
_TEXT_TARGET = re.compile(r"\b(label|text|title|heading|caption|wording)\b", re.IGNORECASE)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})\b")

NAMED_COLORS = {
    "red": "#EF4444",
    "orange": "#F97316",
    "yellow": "#F59E0B",
    "green": "#10B981",
    "teal": "#14B8A6",
    "blue": "#3B82F6",
    "indigo": "#6366F1",
    "purple": "#8B5CF6",
    "pink": "#EC4899",
    "black": "#000000",
    "white": "#FFFFFF",
    "gray": "#6B7280",
    "grey": "#6B7280",
}
_NAMED_COLOR = re.compile(r"\b(" + "|".join(NAMED_COLORS) + r")\b", re.IGNORECASE)

ADD_HELP = "I can add a hero, button, heading, text, divider or spacer."
SELECT_FIRST = "Select a component first, then tell me what to change."
CHANGE_HELP = 'Tell me what to change: its text, color or subtitle, e.g. change the text to "Hello".'
GENERAL_HELP = 'Try "add a button" or, with a component selected, change its text to "Buy now".'


def find_quoted(prompt: str) -> str | None:
    """First quoted argument in a prompt."""
    match = _QUOTED.search(prompt)
    if match is None:
        return None
    value = match.group(1) if match.group(1) is not None else match.group(2)
    return value.strip() or None


def strip_quoted(prompt: str) -> str:
    """Prompt with quoted arguments removed, for keyword detection."""
    return _QUOTED.sub(" ", prompt)


def find_color(text: str) -> str | None:
    """A hex literal or named color in ``text``, as hex."""
    match = _HEX_COLOR.search(text)
    if match:
        return match.group(0)
    match = _NAMED_COLOR.search(text)
    if match:
        return NAMED_COLORS[match.group(1).lower()]
    return None


class LocalRuleInterpreter:
    """
    Pattern-rule interpreter for the commands that need no assistant.

    Never guesses: a recognized command with a missing or unrecognized
    argument raises AmbiguousCommand internally and comes back as zero
    operations plus the clarifying message.
    """

    name = "local"

    async def interpret(self, prompt: str, context: InterpretationContext) -> Interpretation:
        return self.interpret_sync(prompt, context)

    def interpret_sync(self, prompt: str, context: InterpretationContext) -> Interpretation:
        bare = strip_quoted(prompt)
        add = _ADD_VERB.search(bare)
        change = _CHANGE_VERB.search(bare)

        try:
            if add and (change is None or add.start() < change.start()):
                result = self._add(prompt, bare)
            elif change:
                result = self._change(prompt, bare, context.selected)
            else:
                raise AmbiguousCommand(GENERAL_HELP)
        except AmbiguousCommand as e:
            logger.debug("local_needs_clarification", reason=str(e))
            return Interpretation(message=str(e), source=self.name)

        logger.debug("local_interpreted", operations=len(result.operations))
        return result

    def _add(self, prompt: str, bare: str) -> Interpretation:
        kind = self._first_kind(bare)
        if kind is None:
            raise AmbiguousCommand(ADD_HELP)

        props = {}
        text = find_quoted(prompt)
        key = primary_text_key(kind)
        if text is not None and key is not None:
            props[key] = text

        label = "hero section" if kind is ComponentKind.HERO else kind.value
        return Interpretation(
            operations=[AddOp(kind=kind, props=props)],
            message=f"Added a {label}.",
            source=self.name,
        )

    @staticmethod
    def _first_kind(bare: str) -> ComponentKind | None:
        """Kind whose keyword appears earliest; list order breaks ties."""
        best: tuple[int, int, ComponentKind] | None = None
        for rank, (kind, pattern) in enumerate(_ADD_KINDS):
            match = pattern.search(bare)
            if match and (best is None or (match.start(), rank) < best[:2]):
                best = (match.start(), rank, kind)
        return best[2] if best is not None else None

    def _change(self, prompt: str, bare: str, selected: ComponentNode | None) -> Interpretation:
        if selected is None:
            raise AmbiguousCommand(SELECT_FIRST)

        quoted = find_quoted(prompt)

        if _SUBTITLE_TARGET.search(bare):
            if selected.kind is not ComponentKind.HERO:
                raise AmbiguousCommand("Only hero sections have a subtitle.")
            if quoted is None:
                raise AmbiguousCommand('Put the new subtitle in quotes, e.g. "Fresh every day".')
            return self._update({"subtitle": quoted}, "Updated the subtitle.")

        if _COLOR_TARGET.search(bare):
            color = find_color(quoted) if quoted is not None else find_color(bare)
            if color is None:
                raise AmbiguousCommand("I didn't recognize that color. Use a name like blue or a hex value like #2563EB.")
            return self._update({self._color_key(selected, bare): color}, f"Changed the color to {color}.")

        if _TEXT_TARGET.search(bare):
            if quoted is None:
                raise AmbiguousCommand('Put the new text in quotes, e.g. change the text to "Hello".')
            key = primary_text_key(selected.kind) or "text"
            return self._update({key: quoted}, f'Changed the {key} to "{quoted}".')

        raise AmbiguousCommand(CHANGE_HELP)

    @staticmethod
    def _color_key(selected: ComponentNode, bare: str) -> str:
        # same vocabulary as props arriving from the assistant
        if _BACKGROUND_TARGET.search(bare):
            return canonical_key(selected.kind, "backgroundColor")
        if _TEXT_COLOR_TARGET.search(bare):
            return canonical_key(selected.kind, "textColor")
        return canonical_key(selected.kind, "color")

    def _update(self, props: dict, message: str) -> Interpretation:
        return Interpretation(operations=[UpdateSelectedOp(props=props)], message=message, source=self.name)
