"""Property vocabulary normalization.

Assistant replies, local commands and property-panel edits name the same
property in different ways ("bg", "background_color", "label", ...). Each
kind has one canonical key per concept; everything is mapped onto it before
reaching the mutation API.
"""

import re
from typing import Any

from .kinds import SURFACE_KINDS, ComponentKind, primary_text_key

_CAMEL_BOUNDARY = re.compile(r"[_\-\s]+([a-zA-Z0-9])")


def camel_case(key: str) -> str:
    """
    ``background_color`` / ``background-color`` → ``backgroundColor``.

    Keys without separators (``bgColor``, ``URL``) are returned unchanged.
    """
    key = key.strip()
    if not _CAMEL_BOUNDARY.search(key):
        return key
    converted = _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), key)
    return converted[0].lower() + converted[1:]


# Concept → synonyms (compared after camel_case and lower-casing)
_TEXT_SYNONYMS = {"text", "label", "title", "content", "caption", "headline", "heading"}
_SUBTITLE_SYNONYMS = {"subtitle", "subheading", "subheadline", "tagline", "subtext"}
_BACKGROUND_SYNONYMS = {"backgroundcolor", "background", "bg", "bgcolor", "backgroundcolour", "fill", "fillcolor"}
_FOREGROUND_SYNONYMS = {"color", "colour", "textcolor", "fontcolor", "foreground", "foregroundcolor", "textcolour"}
_IMAGE_SYNONYMS = {"src", "image", "imageurl", "url", "source", "backgroundimage", "img"}
_BUTTON_TEXT_SYNONYMS = {"buttontext", "cta", "ctatext", "buttonlabel", "calltoaction"}


def canonical_key(kind: ComponentKind, key: str) -> str:
    """
    Map a property name onto the canonical key ``kind`` uses.

    Unknown names are returned camel-cased but otherwise untouched.
    """
    camel = camel_case(key)
    folded = camel.lower()

    if folded in _BACKGROUND_SYNONYMS:
        return "backgroundColor"

    if folded in _FOREGROUND_SYNONYMS:
        if kind in SURFACE_KINDS and folded in {"color", "colour"}:
            return "backgroundColor"
        if kind is ComponentKind.BUTTON:
            return "textColor"
        return "color"

    if kind is ComponentKind.HERO:
        if folded in _SUBTITLE_SYNONYMS:
            return "subtitle"
        if folded in _BUTTON_TEXT_SYNONYMS:
            return "buttonText"
        if folded in _IMAGE_SYNONYMS:
            return "backgroundImage"

    if kind in (ComponentKind.IMAGE, ComponentKind.VIDEO) and folded in _IMAGE_SYNONYMS:
        return "src"

    if folded in _TEXT_SYNONYMS:
        return primary_text_key(kind) or camel

    return camel


def normalize_props(kind: ComponentKind, props: dict[str, Any]) -> dict[str, Any]:
    """
    Canonicalize every key of a partial property bag for ``kind``.

    When two synonyms collide on one canonical key, the one spelled exactly
    like the canonical key wins; otherwise the later one does.
    """
    normalized: dict[str, Any] = {}
    exact: set[str] = set()
    for key, value in props.items():
        if not isinstance(key, str):
            continue
        target = canonical_key(kind, key)
        if target in exact:
            continue
        normalized[target] = value
        if key == target:
            exact.add(target)
    return normalized
