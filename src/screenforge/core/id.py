"""ID Generation System.

ULID-based identifiers for everything the editor creates.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: Type-specific prefixes for debugging (cmp_*, scr_*, ...)
"""

from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

NodeID = NewType("NodeID", str)
"""Component node identifier (unique across a whole document)"""

ScreenID = NewType("ScreenID", str)
"""Screen identifier"""

NavItemID = NewType("NavItemID", str)
"""Navigation tab identifier"""

SessionID = NewType("SessionID", str)
"""Editing session identifier"""

# ============================================================================
# ID Prefixes
# ============================================================================


class Prefix:
    """ID prefix constants."""

    NODE = "cmp"
    SCREEN = "scr"
    NAV = "nav"
    SESSION = "ses"


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


_generator = Generator()


# ============================================================================
# Typed ID Generators
# ============================================================================


def new_node_id() -> NodeID:
    """Generate new component node ID."""
    return NodeID(_generator.generate_with_prefix(Prefix.NODE))


def new_screen_id() -> ScreenID:
    """Generate new screen ID."""
    return ScreenID(_generator.generate_with_prefix(Prefix.SCREEN))


def new_nav_id() -> NavItemID:
    """Generate new navigation item ID."""
    return NavItemID(_generator.generate_with_prefix(Prefix.NAV))


def new_session_id() -> SessionID:
    """Generate new editing session ID."""
    return SessionID(_generator.generate_with_prefix(Prefix.SESSION))
