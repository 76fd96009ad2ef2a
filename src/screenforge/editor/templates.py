"""Pre-built sections and the seed document for new apps."""

from ..core.id import new_screen_id
from .kinds import ComponentKind
from .models import ComponentNode, Document, Screen
from .mutations import build_node

HERO_IMAGE = "https://images.unsplash.com/photo-1618005182384-a83a8bd57fbe?w=800"
TEAM_IMAGE = "https://images.unsplash.com/photo-1522071820081-009f0129c71c?w=800"


def template_node(kind: ComponentKind, props: dict, children: list[ComponentNode] | None = None) -> ComponentNode:
    node = build_node(kind, props)
    if children is not None:
        node.children = children
    return node


class SectionTemplates:
    """Section templates offered in the palette."""

    @staticmethod
    def hero_banner() -> list[ComponentNode]:
        return [
            template_node(
                ComponentKind.CONTAINER,
                {"padding": 40, "backgroundColor": "#f8f9fa"},
                [
                    template_node(ComponentKind.HEADING, {"text": "Welcome to Our App", "level": 1, "color": "#000"}),
                    template_node(
                        ComponentKind.TEXT,
                        {"text": "Discover amazing features and services", "fontSize": 16, "color": "#666"},
                    ),
                    template_node(ComponentKind.BUTTON, {"text": "Get Started", "variant": "primary"}),
                ],
            )
        ]

    @staticmethod
    def features_grid() -> list[ComponentNode]:
        cards = [
            template_node(
                ComponentKind.CARD, {"title": f"Feature {i}", "description": "Description here", "icon": icon}
            )
            for i, icon in enumerate(["⚡", "🚀", "💡"], start=1)
        ]
        return [
            template_node(
                ComponentKind.SECTION,
                {"title": "Our Features", "padding": 20},
                [template_node(ComponentKind.GRID, {"columns": 3, "gap": 16}, cards)],
            )
        ]

    @staticmethod
    def contact_form() -> list[ComponentNode]:
        fields = [
            template_node(ComponentKind.INPUT, {"label": "Name", "placeholder": "Your name", "required": True}),
            template_node(
                ComponentKind.INPUT,
                {"label": "Email", "placeholder": "your@email.com", "type": "email", "required": True},
            ),
            template_node(ComponentKind.BUTTON, {"text": "Send Message", "variant": "primary"}),
        ]
        return [
            template_node(
                ComponentKind.SECTION,
                {"title": "Contact Us", "padding": 20},
                [template_node(ComponentKind.FORM, {"submitText": "Submit"}, fields)],
            )
        ]


SECTION_TEMPLATES = {
    "hero-1": SectionTemplates.hero_banner,
    "features-grid": SectionTemplates.features_grid,
    "contact-form": SectionTemplates.contact_form,
}


def default_document(app_name: str | None = None) -> Document:
    """Seed document used when an app has no saved screens."""
    name = app_name or "Us"
    home = Screen(
        id=new_screen_id(),
        name="Home",
        icon="🏠",
        is_home=True,
        components=[
            template_node(
                ComponentKind.HERO,
                {
                    "title": app_name or "Welcome",
                    "subtitle": "Your app is ready to customize",
                    "backgroundImage": HERO_IMAGE,
                    "buttonText": "Get Started",
                    "buttonLink": "#",
                    "height": 200,
                },
            ),
            template_node(
                ComponentKind.TEXT,
                {
                    "text": "Start customizing your app by adding components from the left panel. "
                    "Drag and drop to rearrange, and click to edit properties.",
                    "fontSize": 14,
                    "color": "#6B7280",
                },
            ),
        ],
    )
    about = Screen(
        id=new_screen_id(),
        name="About",
        icon="ℹ️",
        components=[
            template_node(ComponentKind.HEADING, {"text": f"About {name}", "level": 1, "color": "#1F2937"}),
            template_node(
                ComponentKind.TEXT,
                {
                    "text": "Welcome to our app! We're dedicated to providing you with the best "
                    "experience. Edit this section to tell your story.",
                    "fontSize": 14,
                    "color": "#6B7280",
                },
            ),
            template_node(ComponentKind.IMAGE, {"src": TEAM_IMAGE, "alt": "Our Team"}),
        ],
    )
    contact = Screen(
        id=new_screen_id(),
        name="Contact",
        icon="📞",
        components=[
            template_node(ComponentKind.HEADING, {"text": f"Contact {name}", "level": 1, "color": "#1F2937"}),
            template_node(
                ComponentKind.TEXT,
                {
                    "text": "We'd love to hear from you! Reach out using the information below.",
                    "fontSize": 14,
                    "color": "#6B7280",
                },
            ),
            template_node(
                ComponentKind.BUTTON,
                {
                    "text": "📧 Email Us",
                    "url": "mailto:contact@example.com",
                    "backgroundColor": "#2563EB",
                    "textColor": "#FFFFFF",
                },
            ),
            template_node(
                ComponentKind.BUTTON,
                {
                    "text": "📞 Call Us",
                    "url": "tel:+1234567890",
                    "backgroundColor": "#059669",
                    "textColor": "#FFFFFF",
                },
            ),
        ],
    )
    return Document(screens=[home, about, contact])
