"""Tests for industry starter documents."""

import pytest

from screenforge.clients import MemoryStore
from screenforge.core import validate_document
from screenforge.editor import ComponentKind, EditorSession, default_document
from screenforge.editor.industries import (
    INDUSTRY_TEMPLATES,
    is_placeholder_document,
    normalize_industry,
    personalize,
    seed_document,
)
from screenforge.editor.mutations import build_node
from screenforge.editor.tree import iter_document_nodes


@pytest.mark.unit
class TestNormalizeIndustry:
    """Test mapping free-form labels onto templates."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("salon", "salon"),
            ("Salon & Spa", "salon"),
            ("Beauty", "salon"),
            ("E-Commerce", "ecommerce"),
            ("Online store", "ecommerce"),
            ("Food truck", "restaurant"),
            ("  Real Estate ", "realestate"),
            ("Medical clinic", "healthcare"),
            ("Podcast network", "radio"),
            ("Wedding photographer", "photography"),
            ("Indie band", "music"),
            ("Corporate law", "business"),
        ],
    )
    def test_labels(self, raw, expected):
        assert normalize_industry(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "custom", "logistics"])
    def test_no_template(self, raw):
        assert normalize_industry(raw) is None


@pytest.mark.unit
class TestSeedDocument:
    """Test building personalized starter documents."""

    def test_unknown_industry_uses_generic_seed(self):
        document = seed_document("Bakery", "logistics")
        assert [s.name for s in document.screens] == ["Home", "About", "Contact"]
        assert is_placeholder_document(document)

    @pytest.mark.parametrize("industry_id", sorted(INDUSTRY_TEMPLATES))
    def test_every_template_is_valid(self, industry_id):
        document = seed_document("Acme", industry_id)
        validate_document(document)
        assert document.screens[0].is_home
        assert not is_placeholder_document(document)

    def test_personalized_for_app(self):
        document = seed_document("Glow", "Salon & Spa")
        hero = document.screens[0].components[0]
        headings = [
            node.props["text"]
            for _, node in iter_document_nodes(document)
            if node.kind is ComponentKind.HEADING
        ]

        assert hero.kind is ComponentKind.HERO
        assert hero.props["title"] == "Glow"
        assert hero.props["subtitle"] == "Book your perfect appointment"
        assert "About Glow" in headings
        assert "Contact Glow" in headings
        assert "About Us" not in headings

    def test_missing_app_name(self):
        hero = seed_document(None, "gym").screens[0].components[0]
        assert hero.props["title"] == "My App"

    def test_fresh_ids_each_time(self):
        first = seed_document("A", "news")
        second = seed_document("A", "news")
        assert {s.id for s in first.screens}.isdisjoint(s.id for s in second.screens)


@pytest.mark.unit
def test_personalize_walks_children():
    heading = build_node(ComponentKind.HEADING, {"text": "Contact Us"})
    container = build_node(ComponentKind.CONTAINER)
    container.children = [heading]
    hero = build_node(ComponentKind.HERO, {"title": "Welcome home", "subtitle": "x"})

    personalize([hero, container], "restaurant", "Luigi's")

    assert hero.props["title"] == "Luigi's"
    assert hero.props["subtitle"] == "Delicious food, delivered fresh"
    assert heading.props["text"] == "Contact Luigi's"


@pytest.mark.unit
def test_session_seeded_from_industry():
    session = EditorSession(app_name="Fresh", industry="grocery store")
    assert session.active_screen.components[0].props["title"] == "Fresh"
    assert "Cart" in [s.name for s in session.document.screens]


@pytest.mark.unit
class TestPlaceholderUpgrade:
    """A saved generic seed gives way to the industry template."""

    def test_placeholder_replaced(self):
        store = MemoryStore(seed=lambda: seed_document("Glow", "salon"))
        store.save(default_document("Glow"))

        loaded = store.load()

        assert not is_placeholder_document(loaded)
        assert loaded.screens[0].components[0].props["subtitle"] == "Book your perfect appointment"

    def test_edited_document_kept(self):
        store = MemoryStore(seed=lambda: seed_document("Glow", "salon"))
        edited = default_document("Glow")
        edited.screens[0].components[1].props["text"] = "Our own words"
        edited.screens[0].components[0].props["subtitle"] = "Handmade"
        store.save(edited)

        assert store.load() == edited

    def test_kept_without_industry(self):
        store = MemoryStore()
        saved = default_document("Glow")
        store.save(saved)

        assert store.load() == saved
