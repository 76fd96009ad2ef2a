"""Blueprint Builder - expands a parsed blueprint into screens and an app patch."""

import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from ..core import get_logger
from ..core.errors import UnknownComponentKind
from ..core.id import new_nav_id, new_screen_id
from ..editor.kinds import ComponentKind, is_container, parse_kind
from ..editor.models import ComponentNode, Document, Screen
from ..editor.mutations import build_node, ensure_single_home
from ..editor.normalize import normalize_props
from .schema import Blueprint, BlueprintBlock, BlueprintScreen

logger = get_logger(__name__)

DEFAULT_PRIMARY_COLOR = "#2563EB"
DEFAULT_APP_ICON = "🛍️"
DEFAULT_SCREEN_ICON = "📄"
MUTED_TEXT_COLOR = "#6b7280"

_HEX_COLOR = re.compile(r"^#?[0-9a-fA-F]{3,8}$")

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def normalize_hex_color(value: Any, fallback: str) -> str:
    """``"2563eb"`` → ``"#2563eb"``; anything that is not hex yields ``fallback``."""
    text = value.strip() if isinstance(value, str) else ""
    if not text or not _HEX_COLOR.match(text):
        return fallback
    return text if text.startswith("#") else f"#{text}"


def money(amount: float | int | None, currency: str | None) -> str:
    """Format an amount as ``$12.99`` / ``€3.00`` / ``CHF 4.50``."""
    try:
        value = float(amount) if amount is not None else 0.0
    except (TypeError, ValueError):
        value = 0.0
    code = (currency or "USD").upper()
    symbol = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    return f"{symbol}{value:.2f}"


def placeholder_image(keyword: str | None) -> str:
    """Deterministic placeholder photo for a keyword."""
    seed = quote((keyword or "image").strip()[:60] or "image", safe="")
    return f"https://picsum.photos/seed/{seed}/800/600"


@dataclass
class BuildResult:
    """Screens built from a blueprint plus the app patch to persist."""

    screens: list[Screen]
    patch: dict[str, Any]
    resolved_images: dict[str, Any] = field(default_factory=dict)
    skipped_blocks: list[str] = field(default_factory=list)

    @property
    def document(self) -> Document:
        return Document(screens=self.screens)


class BlueprintBuilder:
    """
    Builds editor screens from a blueprint.

    Every screen and node gets a fresh id; ids declared in the blueprint only
    link tabs to screens and are never reused. Unknown block types are
    skipped and reported in ``BuildResult.skipped_blocks``.
    """

    def build(self, blueprint: Blueprint) -> BuildResult:
        self._blueprint = blueprint
        self._taken: set[str] = set()
        self._skipped: list[str] = []

        settings = blueprint.settings
        self._currency = settings.currency or "USD"
        self._primary = normalize_hex_color(blueprint.theme.primary_color, DEFAULT_PRIMARY_COLOR)
        icon_color = normalize_hex_color(blueprint.theme.secondary_color, self._primary)
        self._images = self._resolve_images()

        screens: list[Screen] = []
        key_to_id: dict[str, str] = {}
        for index, declared in enumerate(blueprint.screens):
            screen = self._build_screen(declared)
            screens.append(screen)
            key_to_id.setdefault(declared.screen_id or f"screen-{index}", screen.id)

        document = Document(screens=screens)
        ensure_single_home(document)

        patch = {
            "name": blueprint.app_name,
            "icon": blueprint.logo.icon or DEFAULT_APP_ICON,
            "primaryColor": self._primary,
            "iconColor": icon_color,
            "isNativeOnly": True,
            "url": "native://app",
            "editorScreens": document.to_wire(),
            "navigation": {
                "style": "bottom-tabs",
                "items": self._navigation_items(screens, key_to_id),
            },
            "features": {"bottomNav": True},
        }

        logger.info(
            "blueprint_built",
            app=blueprint.app_name,
            screens=len(screens),
            skipped=len(self._skipped),
        )
        return BuildResult(
            screens=document.screens,
            patch=patch,
            resolved_images=self._images,
            skipped_blocks=list(self._skipped),
        )

    # ========================================================================
    # Screens and navigation
    # ========================================================================

    def _build_screen(self, declared: BlueprintScreen) -> Screen:
        components: list[ComponentNode] = []
        for block in declared.components:
            components.extend(self._expand_block(block, declared.title))
        return Screen(
            id=new_screen_id(),
            name=declared.title,
            icon=declared.icon or DEFAULT_SCREEN_ICON,
            components=components,
            is_home=declared.home,
        )

    def _navigation_items(self, screens: list[Screen], key_to_id: dict[str, str]) -> list[dict[str, Any]]:
        overrides: dict[str, dict[str, str | None]] = {}
        for tab in self._blueprint.navigation.tabs:
            screen_id = key_to_id.get(tab.screen_id)
            if screen_id is None:
                logger.warning("tab_unresolved", screen=tab.screen_id)
                continue
            overrides.setdefault(screen_id, {"label": tab.label, "icon": tab.icon})

        items = []
        for declared, screen in zip(self._blueprint.screens, screens):
            if not declared.navigable:
                continue
            override = overrides.get(screen.id, {})
            items.append(
                {
                    "id": new_nav_id(),
                    "label": override.get("label") or screen.name,
                    "icon": override.get("icon") or screen.icon,
                    "kind": "screen",
                    "screenId": screen.id,
                }
            )
        return items

    # ========================================================================
    # Blocks
    # ========================================================================

    def _expand_block(self, block: BlueprintBlock, screen_title: str) -> list[ComponentNode]:
        match block.type:
            case "hero_section":
                return [self._hero(), self._spacer(14)]
            case "featured_categories":
                return [*self._categories(), self._spacer(14)]
            case "product_grid":
                return [*self._product_grid(), self._spacer(8)]
            case "cart_summary":
                return self._cart_summary()
            case "orders_list":
                return self._orders_list()
            case "account_menu":
                return self._account_menu()

        try:
            kind = parse_kind(block.type)
        except UnknownComponentKind:
            logger.warning("block_skipped", type=block.type, screen=screen_title)
            self._skipped.append(block.type)
            return []
        return [self._component(kind, block, screen_title)]

    def _component(self, kind: ComponentKind, block: BlueprintBlock, screen_title: str) -> ComponentNode:
        node = self._node(kind, normalize_props(kind, block.props))
        if block.children and not is_container(kind):
            logger.warning("children_dropped", type=block.type, screen=screen_title)
        elif block.children:
            children: list[ComponentNode] = []
            for child in block.children:
                children.extend(self._expand_block(child, screen_title))
            node.children = children
        return node

    def _node(self, kind: ComponentKind, props: dict[str, Any]) -> ComponentNode:
        node = build_node(kind, {k: v for k, v in props.items() if v is not None}, taken=self._taken)
        self._taken.add(node.id)
        return node

    def _spacer(self, height: int) -> ComponentNode:
        return self._node(ComponentKind.SPACER, {"height": height})

    def _heading(self, text: str, level: int) -> ComponentNode:
        return self._node(ComponentKind.HEADING, {"text": text, "level": level})

    def _hero(self) -> ComponentNode:
        hero = self._blueprint.content.hero
        return self._node(
            ComponentKind.HERO,
            {
                "title": (hero.headline if hero else None) or self._blueprint.app_name,
                "subtitle": hero.subheadline if hero else None,
                "buttonText": hero.cta_text if hero else None,
                "backgroundImage": self._images.get("hero"),
                "overlayColor": "rgba(0,0,0,0.35)",
                "height": 190,
                "backgroundColor": self._primary,
            },
        )

    def _categories(self) -> list[ComponentNode]:
        items = [
            {
                "title": category.name,
                "image": self._images["categories"].get(category.id),
                "subtitle": "Browse",
            }
            for category in self._blueprint.data.categories
        ]
        return [self._heading("Categories", 3), self._node(ComponentKind.CAROUSEL, {"items": items})]

    def _product_grid(self) -> list[ComponentNode]:
        data = self._blueprint.data
        category_names = {category.id: category.name for category in data.categories}
        products = [
            {
                "id": product.id,
                "name": product.name,
                "price": money(product.price, product.currency or self._currency),
                "image": self._images["products"].get(product.id),
                "category": category_names.get(product.category_id or "", ""),
                "rating": product.rating,
            }
            for product in data.products
        ]
        return [
            self._heading("Featured", 3),
            self._node(ComponentKind.PRODUCT_GRID, {"products": products, "columns": 2}),
        ]

    def _cart_summary(self) -> list[ComponentNode]:
        cart = self._blueprint.data.cart
        product_images = self._images["products"]
        items = []
        for item in cart.items if cart else []:
            keyword = (item.image_keyword or item.name or "").strip()
            if keyword:
                image = placeholder_image(keyword)
            else:
                image = product_images.get(item.product_id or "")
            items.append(
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": money(item.price, self._currency),
                    "image": image,
                }
            )
        total = cart.total if cart else 0
        return [
            self._heading("Your Cart", 2),
            self._node(ComponentKind.LIST, {"variant": "cart", "items": items}),
            self._spacer(10),
            self._node(
                ComponentKind.TEXT,
                {"text": f"Total: {money(total, self._currency)}", "fontSize": 14, "color": "#111827"},
            ),
            self._spacer(10),
            self._node(
                ComponentKind.BUTTON,
                {
                    "text": "Checkout",
                    "variant": "primary",
                    "backgroundColor": self._primary,
                    "textColor": "#ffffff",
                    "size": "md",
                },
            ),
        ]

    def _orders_list(self) -> list[ComponentNode]:
        items = [
            {"name": f"Order {order.id}", "status": order.status, "total": money(order.total, self._currency)}
            for order in self._blueprint.data.orders
        ]
        return [
            self._heading("Orders", 2),
            self._node(ComponentKind.LIST, {"variant": "orders", "items": items}),
        ]

    def _account_menu(self) -> list[ComponentNode]:
        account = self._blueprint.content.account
        items = [
            {"icon": item.icon or "⚙️", "label": item.label}
            for item in (account.menu_items if account else [])
        ]
        nodes = [
            self._heading("Account", 2),
            self._node(ComponentKind.LIST, {"variant": "menu", "items": items}),
        ]

        support = self._blueprint.settings.support
        parts = []
        if support and support.email:
            parts.append(f"Email: {support.email}")
        if support and support.phone:
            parts.append(f"Phone: {support.phone}")
        if parts:
            nodes.append(self._spacer(12))
            nodes.append(
                self._node(
                    ComponentKind.TEXT,
                    {"text": " • ".join(parts), "fontSize": 12, "color": MUTED_TEXT_COLOR},
                )
            )
        return nodes

    def _resolve_images(self) -> dict[str, Any]:
        data = self._blueprint.data
        hero = self._blueprint.content.hero
        return {
            "categories": {c.id: placeholder_image(c.image_keyword or c.name) for c in data.categories},
            "products": {p.id: placeholder_image(p.image_keyword or p.name) for p in data.products},
            "hero": placeholder_image(hero.image_keyword) if hero and hero.image_keyword else None,
        }
