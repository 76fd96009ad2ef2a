"""
Industry starter documents.

A new app whose industry is known starts from that industry's template
instead of the generic seed. Templates are personalized with the app name:
the hero carries the name and an industry subtitle, and the "About Us" /
"Contact Us" headings name the app.
"""

import re
from dataclasses import dataclass, field

from ..core import get_logger
from ..core.id import new_screen_id
from .kinds import ComponentKind
from .models import ComponentNode, Document, Screen
from .templates import default_document, template_node

logger = get_logger(__name__)

PLACEHOLDER_TITLE = "Welcome"

# Sentences only the generic seed contains
_PLACEHOLDER_MARKERS = ("your app is ready to customize", "start customizing your app")


@dataclass(frozen=True)
class IndustryTemplate:
    """Starter content for one industry."""

    id: str
    name: str
    subtitle: str
    image: str
    cta: str
    highlights: tuple[tuple[str, str], ...]
    # (name, icon, intro text) of the screens between Home and About
    screens: tuple[tuple[str, str, str], ...] = field(default_factory=tuple)
    accent: str = "#2563EB"


def _unsplash(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}?w=800"


INDUSTRY_TEMPLATES: dict[str, IndustryTemplate] = {
    t.id: t
    for t in (
        IndustryTemplate(
            "ecommerce", "E-Commerce Store", "Shop the best products online",
            _unsplash("photo-1542838132-92c53300491e"), "Shop Now",
            (("Vegetables", "🥬"), ("Fruits", "🍎"), ("Dairy", "🥛")),
            (("Products", "🛍️", "Browse our full catalog."), ("Cart", "🛒", "Your cart is empty.")),
            accent="#10B981",
        ),
        IndustryTemplate(
            "salon", "Salon & Spa", "Book your perfect appointment",
            _unsplash("photo-1560066984-138dadb4c035"), "Book Now",
            (("Haircut & Styling", "✂️"), ("Hair Color", "🎨"), ("Nail Art", "💅")),
            (
                ("Services", "💇", "Treatments for every occasion."),
                ("Book Now", "📅", "Pick a time that suits you."),
            ),
            accent="#EC4899",
        ),
        IndustryTemplate(
            "restaurant", "Restaurant", "Delicious food, delivered fresh",
            _unsplash("photo-1517248135467-4c7edcad34c4"), "View Menu",
            (("Starters", "🥗"), ("Mains", "🍝"), ("Desserts", "🍰")),
            (("Menu", "📋", "Seasonal dishes made in house."), ("Reservations", "📅", "Reserve your table.")),
            accent="#F97316",
        ),
        IndustryTemplate(
            "church", "Church & Ministry", "Join our community of faith",
            _unsplash("photo-1438232992991-995b7058bbb3"), "Plan a Visit",
            (("Sunday Service", "⛪"), ("Youth Group", "🙌"), ("Prayer", "🙏")),
            (("Sermons", "🎧", "Listen to recent messages."), ("Events", "📅", "What's happening this week.")),
            accent="#8B5CF6",
        ),
        IndustryTemplate(
            "fitness", "Fitness & Gym", "Transform your body and mind",
            _unsplash("photo-1534438327276-14e5300c3a48"), "Start Training",
            (("Strength", "🏋️"), ("Cardio", "🏃"), ("Yoga", "🧘")),
            (("Classes", "📅", "Find a class that fits your schedule."), ("Trainers", "💪", "Meet our coaches.")),
            accent="#EF4444",
        ),
        IndustryTemplate(
            "education", "Education", "Learn something new today",
            _unsplash("photo-1523050854058-8df90110c9f1"), "Explore Courses",
            (("Courses", "📚"), ("Tutors", "🎓"), ("Certificates", "📜")),
            (("Courses", "📚", "Programs for every level."),),
            accent="#3B82F6",
        ),
        IndustryTemplate(
            "healthcare", "Healthcare", "Your health, our priority",
            _unsplash("photo-1519494026892-80bbd2d6fd0d"), "Book Appointment",
            (("Primary Care", "🩺"), ("Pediatrics", "👶"), ("Lab Tests", "🧪")),
            (("Doctors", "👩‍⚕️", "Meet our care team."), ("Appointments", "📅", "Book a visit online.")),
            accent="#14B8A6",
        ),
        IndustryTemplate(
            "realestate", "Real Estate", "Find your dream home",
            _unsplash("photo-1560518883-ce09059eeffa"), "Browse Listings",
            (("Buy", "🏠"), ("Rent", "🔑"), ("Sell", "💰")),
            (("Listings", "🏘️", "Homes currently on the market."),),
            accent="#0EA5E9",
        ),
        IndustryTemplate(
            "photography", "Photography Studio", "Capturing moments that matter",
            _unsplash("photo-1452587925148-ce544e77e70d"), "View Portfolio",
            (("Weddings", "💍"), ("Portraits", "📷"), ("Events", "🎉")),
            (
                ("Portfolio", "🖼️", "A selection of recent work."),
                ("Pricing", "💲", "Packages for every budget."),
            ),
            accent="#1F2937",
        ),
        IndustryTemplate(
            "music", "Music & Artist", "Feel the rhythm",
            _unsplash("photo-1511379938547-c1f69419868d"), "Listen Now",
            (("New Releases", "🎵"), ("Tour Dates", "🎤"), ("Merch", "👕")),
            (("Music", "🎧", "Stream the latest tracks."), ("Tour", "🗓️", "Catch a show near you.")),
            accent="#A855F7",
        ),
        IndustryTemplate(
            "business", "Business Services", "Professional services for you",
            _unsplash("photo-1497366216548-37526070297c"), "Get a Quote",
            (("Consulting", "💼"), ("Strategy", "📈"), ("Support", "🤝")),
            (("Services", "💼", "How we help businesses grow."),),
        ),
        IndustryTemplate(
            "news", "News & Magazine", "Stay informed, stay ahead",
            _unsplash("photo-1504711434969-e33886168f5c"), "Read Latest",
            (("Top Stories", "📰"), ("Opinion", "💬"), ("Sports", "⚽")),
            (("Latest", "🗞️", "Fresh stories from our newsroom."),),
            accent="#DC2626",
        ),
        IndustryTemplate(
            "radio", "Radio Station", "Tune in to great music",
            _unsplash("photo-1478737270239-2f02b77fc618"), "Listen Live",
            (("Live", "📻"), ("Shows", "🎙️"), ("Podcasts", "🎧")),
            (("Schedule", "🗓️", "Our weekly lineup."),),
            accent="#F59E0B",
        ),
    )
}

# Checked in order after an exact id match; the first rule that matches wins
_INDUSTRY_SYNONYMS: list[tuple[str, tuple[str, ...]]] = [
    ("salon", ("salon", "spa", "beauty")),
    ("restaurant", ("restaurant", "food", "cafe")),
    ("ecommerce", ("ecommerce", "e commerce", "store", "shop")),
    ("church", ("church", "ministry")),
    ("fitness", ("fitness", "gym")),
    ("education", ("education", "school", "college")),
    ("radio", ("radio", "station", "podcast")),
    ("healthcare", ("health", "clinic", "medical", "hospital")),
    ("realestate", ("real estate", "realestate", "property")),
    ("photography", ("photo", "studio")),
    ("music", ("music", "band", "artist")),
    ("news", ("news", "magazine", "blog")),
    ("business", ("business", "company", "corporate")),
]


def normalize_industry(raw: str | None) -> str | None:
    """
    Map a free-form industry label onto a template id.

    ``"Salon & Spa"`` → ``"salon"``, ``"Food truck"`` → ``"restaurant"``.
    Returns None when no template fits.
    """
    if not raw:
        return None
    text = raw.strip().lower().replace("&", "and")
    text = re.sub(r"[^a-z0-9 ]", "", re.sub(r"\s+", " ", text)).strip()
    if text in INDUSTRY_TEMPLATES:
        return text
    for industry_id, words in _INDUSTRY_SYNONYMS:
        if any(word in text for word in words):
            return industry_id
    return None


def _build_screens(template: IndustryTemplate) -> list[Screen]:
    cards = [
        template_node(ComponentKind.CARD, {"title": title, "icon": icon, "compact": True})
        for title, icon in template.highlights
    ]
    home = Screen(
        id=new_screen_id(),
        name="Home",
        icon="🏠",
        is_home=True,
        components=[
            template_node(
                ComponentKind.HERO,
                {
                    "title": PLACEHOLDER_TITLE,
                    "subtitle": template.name,
                    "backgroundImage": template.image,
                    "buttonText": template.cta,
                    "buttonLink": "#",
                    "height": 220,
                },
            ),
            template_node(
                ComponentKind.SECTION,
                {"title": "Highlights", "padding": 16},
                [template_node(ComponentKind.GRID, {"columns": len(cards), "gap": 12}, cards)],
            ),
            template_node(
                ComponentKind.BUTTON,
                {"text": template.cta, "backgroundColor": template.accent, "textColor": "#FFFFFF"},
            ),
        ],
    )

    screens = [home]
    for name, icon, intro in template.screens:
        screens.append(
            Screen(
                id=new_screen_id(),
                name=name,
                icon=icon,
                components=[
                    template_node(ComponentKind.HEADING, {"text": name, "level": 1, "color": "#1F2937"}),
                    template_node(ComponentKind.TEXT, {"text": intro, "fontSize": 14, "color": "#6B7280"}),
                ],
            )
        )

    screens.append(
        Screen(
            id=new_screen_id(),
            name="About",
            icon="ℹ️",
            components=[
                template_node(ComponentKind.HEADING, {"text": "About Us", "level": 1, "color": "#1F2937"}),
                template_node(
                    ComponentKind.TEXT, {"text": "Tell your customers your story.", "fontSize": 14, "color": "#6B7280"}
                ),
            ],
        )
    )
    screens.append(
        Screen(
            id=new_screen_id(),
            name="Contact",
            icon="📞",
            components=[
                template_node(ComponentKind.HEADING, {"text": "Contact Us", "level": 1, "color": "#1F2937"}),
                template_node(ComponentKind.CONTACT_FORM, {"submitText": "Send Message"}),
            ],
        )
    )
    return screens


def personalize(nodes: list[ComponentNode], industry_id: str, app_name: str) -> None:
    """Rewrite placeholder hero titles, subtitles and company headings in place."""
    template = INDUSTRY_TEMPLATES.get(industry_id)
    for node in nodes:
        props = node.props
        if node.kind is ComponentKind.HERO:
            title = props.get("title")
            if isinstance(title, str) and PLACEHOLDER_TITLE in title:
                props["title"] = app_name
            if props.get("subtitle") and template is not None:
                props["subtitle"] = template.subtitle
        elif node.kind is ComponentKind.HEADING:
            if props.get("text") == "About Us":
                props["text"] = f"About {app_name}"
            elif props.get("text") == "Contact Us":
                props["text"] = f"Contact {app_name}"
        if node.children:
            personalize(node.children, industry_id, app_name)


def seed_document(app_name: str | None = None, industry: str | None = None) -> Document:
    """
    Starter document for a new app.

    Uses the industry template when ``industry`` names one, otherwise the
    generic seed.
    """
    industry_id = normalize_industry(industry)
    if industry_id is None:
        return default_document(app_name)

    template = INDUSTRY_TEMPLATES[industry_id]
    screens = _build_screens(template)
    for screen in screens:
        personalize(screen.components, industry_id, app_name or "My App")

    logger.info("industry_seeded", industry=industry_id, screens=len(screens))
    return Document(screens=screens)


def is_placeholder_document(document: Document) -> bool:
    """True when the document still holds the untouched generic seed text."""
    text = " ".join(
        str(value).lower()
        for screen in document.screens
        for node in screen.components
        for value in node.props.values()
        if isinstance(value, str)
    )
    return any(marker in text for marker in _PLACEHOLDER_MARKERS)
