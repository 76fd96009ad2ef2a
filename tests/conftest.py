"""Pytest configuration and fixtures."""

import os
import pytest

import respx

from screenforge.core import create_container, get_settings
from screenforge.core.config import Settings
from screenforge.clients import MemoryStore
from screenforge.editor import ComponentKind, Document, EditorSession, OperationApplier, Screen
from screenforge.editor.mutations import build_node
from screenforge.interpreter import InterpretationContext, LocalRuleInterpreter


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["SCREENFORGE_LOG_LEVEL"] = "DEBUG"
    os.environ["SCREENFORGE_ASSISTANT_URL"] = "http://assistant.test"
    os.environ["SCREENFORGE_PERSISTENCE_URL"] = "http://persistence.test"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def offline_settings():
    """Settings with the assistant disabled and no app id."""
    return Settings(assistant_enabled=False, app_id="")


@pytest.fixture
def di_container(offline_settings):
    """Dependency injection container for testing."""
    return create_container(offline_settings)


# ============================================================================
# Document Fixtures
# ============================================================================

@pytest.fixture
def empty_document():
    """Document with one empty screen."""
    return Document(screens=[Screen(id="scr_home", name="Home", is_home=True)])


@pytest.fixture
def sample_document():
    """Two screens; the first holds a hero, a button and a container with a text child."""
    container = build_node(ComponentKind.CONTAINER)
    container.children = [build_node(ComponentKind.TEXT, {"text": "Inside"})]
    home = Screen(
        id="scr_home",
        name="Home",
        icon="🏠",
        is_home=True,
        components=[
            build_node(ComponentKind.HERO, {"title": "Welcome"}),
            build_node(ComponentKind.BUTTON, {"text": "Join"}),
            container,
        ],
    )
    about = Screen(
        id="scr_about",
        name="About",
        components=[build_node(ComponentKind.HEADING, {"text": "About us"})],
    )
    return Document(screens=[home, about])


@pytest.fixture
def session(empty_document):
    """Session over a single empty screen."""
    return EditorSession(document=empty_document)


@pytest.fixture
def sample_session(sample_document):
    """Session over the sample document."""
    return EditorSession(document=sample_document)


@pytest.fixture
def applier(sample_session):
    """Applier bound to the sample session."""
    return OperationApplier(sample_session)


@pytest.fixture
def memory_store():
    """In-memory document store."""
    return MemoryStore()


# ============================================================================
# Interpreter Fixtures
# ============================================================================

@pytest.fixture
def local_interpreter():
    return LocalRuleInterpreter()


@pytest.fixture
def make_context():
    """Build an interpretation context around an optional selected node."""

    def _make(selected=None, screen=None):
        return InterpretationContext(screen=screen, selected=selected, app_name="Test App")

    return _make


# ============================================================================
# HTTP/Network Fixtures
# ============================================================================

@pytest.fixture
def mock_httpx_client():
    """Mock httpx client."""
    with respx.mock:
        yield respx


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_blueprint():
    """Blueprint with three screens, one block per kind of expansion."""
    return """{
  "schema_version": "1.0",
  "app_name": "Fresh Market",
  "logo": {"icon": "🥕"},
  "theme": {"primary_color": "16a34a", "secondary_color": "#f59e0b"},
  "screens": [
    {
      "screen_id": "home",
      "title": "Home",
      "icon": "🏠",
      "components": [
        {"component_id": "hero1", "type": "hero_section"},
        {"component_id": "grid1", "type": "product_grid"}
      ]
    },
    {
      "screen_id": "cart",
      "title": "Cart",
      "icon": "🛒",
      "components": [{"component_id": "cart1", "type": "cart_summary"}]
    },
    {
      "screen_id": "account",
      "title": "Account",
      "icon": "👤",
      "components": [
        {"component_id": "menu1", "type": "account_menu"},
        {"type": "button", "props": {"label": "Sign out", "bg": "#111827"}}
      ]
    }
  ],
  "navigation": {
    "type": "bottom_tabs",
    "tabs": [
      {"tab_id": "t1", "label": "Shop", "icon": "🛍️", "screen_id": "home"},
      {"tab_id": "t2", "label": "Basket", "icon": "🛒", "screen_id": "cart"}
    ]
  },
  "data": {
    "products": [
      {"id": "p1", "name": "Apples", "price": 3.5, "image_keyword": "apples"},
      {"id": "p2", "name": "Bread", "price": 2}
    ],
    "cart": {
      "items": [{"product_id": "p1", "name": "Apples", "quantity": 2, "price": 3.5}],
      "subtotal": 7,
      "total": 7
    }
  },
  "content": {
    "hero": {"headline": "Fresh every day", "subheadline": "Local produce", "cta_text": "Shop now"},
    "account": {"menu_items": [{"id": "m1", "label": "Orders", "icon": "📦"}]}
  },
  "settings": {"currency": "EUR", "support": {"email": "help@fresh.test"}}
}"""
