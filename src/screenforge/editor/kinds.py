"""Component kinds and their default properties."""

from enum import Enum
from typing import Any

from ..core.errors import UnknownComponentKind


class ComponentKind(str, Enum):
    """Closed set of component kinds the editor can place on a screen."""

    TEXT = "text"
    HEADING = "heading"
    IMAGE = "image"
    BUTTON = "button"
    CONTAINER = "container"
    FIXED_CONTAINER = "fixedContainer"
    GRID = "grid"
    GALLERY = "gallery"
    SECTION = "section"
    DIVIDER = "divider"
    SPACER = "spacer"
    ICON = "icon"
    CARD = "card"
    LIST = "list"
    FORM = "form"
    INPUT = "input"
    TABLE = "table"
    VIDEO = "video"
    MAP = "map"
    HERO = "hero"
    PRODUCT_GRID = "productGrid"
    PRODUCT_CARD = "productCard"
    CAROUSEL = "carousel"
    TESTIMONIAL = "testimonial"
    PRICING_CARD = "pricingCard"
    CONTACT_FORM = "contactForm"
    SOCIAL_LINKS = "socialLinks"
    FEATURE_LIST = "featureList"
    STATS = "stats"
    TEAM = "team"
    FAQ = "faq"


CONTAINER_KINDS: frozenset[ComponentKind] = frozenset(
    {
        ComponentKind.CONTAINER,
        ComponentKind.FIXED_CONTAINER,
        ComponentKind.GRID,
        ComponentKind.SECTION,
        ComponentKind.FORM,
    }
)

# Kinds whose plain "color" is their surface (background) color
SURFACE_KINDS: frozenset[ComponentKind] = frozenset(
    {
        ComponentKind.BUTTON,
        ComponentKind.HERO,
        ComponentKind.CONTAINER,
        ComponentKind.FIXED_CONTAINER,
        ComponentKind.SECTION,
    }
)


def parse_kind(value: Any) -> ComponentKind:
    """
    Resolve a kind tag to a ComponentKind.

    Accepts enum members, exact tags ("productGrid") and case/separator
    variants ("product_grid", "Product Grid").

    Raises:
        UnknownComponentKind: If the tag names no known kind
    """
    if isinstance(value, ComponentKind):
        return value
    if not isinstance(value, str) or not value.strip():
        raise UnknownComponentKind(value)

    raw = value.strip()
    try:
        return ComponentKind(raw)
    except ValueError:
        pass

    folded = raw.replace("_", "").replace("-", "").replace(" ", "").lower()
    for kind in ComponentKind:
        if kind.value.lower() == folded:
            return kind
    raise UnknownComponentKind(value)


def is_container(kind: ComponentKind) -> bool:
    """Only container kinds may own children."""
    return kind in CONTAINER_KINDS


def default_props(kind: ComponentKind) -> dict[str, Any]:
    """
    Return a fresh default property bag for a kind.

    Every kind has an explicit entry; unknown tags are rejected rather than
    given an empty bag.
    """
    match kind:
        case ComponentKind.TEXT:
            return {"text": "Enter your text here", "fontSize": 16, "color": "#333333"}
        case ComponentKind.HEADING:
            return {"text": "Heading", "level": 2, "color": "#000000"}
        case ComponentKind.IMAGE:
            return {"src": "", "alt": "Image", "width": "100%", "height": "auto"}
        case ComponentKind.BUTTON:
            return {
                "text": "Button",
                "variant": "primary",
                "action": "none",
                "backgroundColor": "#2563EB",
                "textColor": "#FFFFFF",
            }
        case ComponentKind.CONTAINER:
            return {"padding": 16, "backgroundColor": "transparent", "direction": "column", "gap": 12}
        case ComponentKind.FIXED_CONTAINER:
            return {
                "padding": 12,
                "backgroundColor": "#ffffff",
                "direction": "row",
                "gap": 12,
                "top": 0,
                "zIndex": 20,
                "shadow": True,
            }
        case ComponentKind.GRID:
            return {"columns": 2, "gap": 16}
        case ComponentKind.GALLERY:
            return {"columns": 2, "images": []}
        case ComponentKind.SECTION:
            return {"title": "Section Title", "padding": 20}
        case ComponentKind.DIVIDER:
            return {"color": "#e5e7eb", "thickness": 1}
        case ComponentKind.SPACER:
            return {"height": 20}
        case ComponentKind.ICON:
            return {"icon": "⭐", "size": 24}
        case ComponentKind.CARD:
            return {"title": "Card Title", "description": "Card description", "icon": "📦"}
        case ComponentKind.LIST:
            return {"items": ["Item 1", "Item 2", "Item 3"], "ordered": False}
        case ComponentKind.FORM:
            return {"submitText": "Submit"}
        case ComponentKind.INPUT:
            return {"label": "Label", "placeholder": "Enter value", "type": "text", "required": False}
        case ComponentKind.TABLE:
            return {
                "columns": ["Item", "Price"],
                "rows": [["Fresh Tomatoes", "$3.99"], ["Organic Apples", "$5.49"], ["Farm Eggs", "$4.25"]],
                "striped": True,
            }
        case ComponentKind.VIDEO:
            return {"src": "", "autoplay": False, "controls": True}
        case ComponentKind.MAP:
            return {"latitude": 0, "longitude": 0, "zoom": 15}
        case ComponentKind.HERO:
            return {
                "title": "Welcome",
                "subtitle": "Your app is ready to customize",
                "backgroundImage": "",
                "backgroundColor": "#2563EB",
                "overlayColor": "rgba(0,0,0,0.35)",
                "buttonText": "Get Started",
                "buttonLink": "#",
                "height": 200,
            }
        case ComponentKind.PRODUCT_GRID:
            return {"columns": 2, "products": []}
        case ComponentKind.PRODUCT_CARD:
            return {"name": "Product", "price": "$0.00", "image": "", "rating": 0}
        case ComponentKind.CAROUSEL:
            return {"items": []}
        case ComponentKind.TESTIMONIAL:
            return {"quote": "Great service!", "author": "Happy Customer", "rating": 5}
        case ComponentKind.PRICING_CARD:
            return {"title": "Basic", "price": "$9.99", "period": "month", "features": [], "buttonText": "Choose"}
        case ComponentKind.CONTACT_FORM:
            return {"title": "Contact Us", "fields": ["name", "email", "message"], "submitText": "Send"}
        case ComponentKind.SOCIAL_LINKS:
            return {"links": []}
        case ComponentKind.FEATURE_LIST:
            return {"title": "Features", "features": []}
        case ComponentKind.STATS:
            return {"items": []}
        case ComponentKind.TEAM:
            return {"title": "Our Team", "members": []}
        case ComponentKind.FAQ:
            return {"title": "FAQ", "items": []}
        case _:
            raise UnknownComponentKind(kind)


def primary_text_key(kind: ComponentKind) -> str | None:
    """Property holding the kind's main visible text, if it has one."""
    match kind:
        case ComponentKind.TEXT | ComponentKind.HEADING | ComponentKind.BUTTON:
            return "text"
        case (
            ComponentKind.HERO
            | ComponentKind.SECTION
            | ComponentKind.CARD
            | ComponentKind.PRICING_CARD
            | ComponentKind.CONTACT_FORM
            | ComponentKind.FEATURE_LIST
            | ComponentKind.TEAM
            | ComponentKind.FAQ
        ):
            return "title"
        case ComponentKind.INPUT:
            return "label"
        case ComponentKind.FORM:
            return "submitText"
        case ComponentKind.PRODUCT_CARD:
            return "name"
        case ComponentKind.TESTIMONIAL:
            return "quote"
        case ComponentKind.IMAGE:
            return "alt"
        case _:
            return None
