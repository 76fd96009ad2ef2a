"""Blueprint document schema."""

from typing import Any
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class BlueprintModel(BaseModel):
    """Base for blueprint sections; unknown keys are tolerated."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BlueprintTheme(BlueprintModel):
    primary_color: str | None = None
    secondary_color: str | None = None
    background_color: str | None = None
    surface_color: str | None = None
    text_color: str | None = None
    muted_text_color: str | None = None
    border_color: str | None = None


class BlueprintLogo(BlueprintModel):
    icon: str | None = None
    style: str | None = None


class BlueprintHero(BlueprintModel):
    headline: str | None = None
    subheadline: str | None = None
    cta_text: str | None = None
    image_keyword: str | None = None


class BlueprintCategory(BlueprintModel):
    id: str
    name: str
    image_keyword: str | None = None


class BlueprintProduct(BlueprintModel):
    id: str
    name: str
    price: float = 0.0
    currency: str | None = None
    image_keyword: str | None = None
    category_id: str | None = None
    rating: float | None = None


class BlueprintCartItem(BlueprintModel):
    product_id: str | None = None
    name: str
    quantity: int = 1
    price: float = 0.0
    image_keyword: str | None = None


class BlueprintCart(BlueprintModel):
    items: list[BlueprintCartItem] = Field(default_factory=list)
    subtotal: float = 0.0
    shipping_fee: float | None = None
    tax: float | None = None
    total: float = 0.0


class BlueprintOrder(BlueprintModel):
    id: str
    status: str = ""
    date: str = ""
    total: float = 0.0


class BlueprintMenuItem(BlueprintModel):
    id: str | None = None
    label: str
    icon: str | None = None
    action: str | None = None


class BlueprintAccount(BlueprintModel):
    menu_items: list[BlueprintMenuItem] = Field(default_factory=list)


class BlueprintContent(BlueprintModel):
    hero: BlueprintHero | None = None
    account: BlueprintAccount | None = None


class BlueprintData(BlueprintModel):
    categories: list[BlueprintCategory] = Field(default_factory=list)
    products: list[BlueprintProduct] = Field(default_factory=list)
    cart: BlueprintCart | None = None
    orders: list[BlueprintOrder] = Field(default_factory=list)


class BlueprintSupport(BlueprintModel):
    email: str | None = None
    phone: str | None = None


class BlueprintSettings(BlueprintModel):
    currency: str = "USD"
    language: str | None = None
    support: BlueprintSupport | None = None


class BlueprintBlock(BlueprintModel):
    """
    One content block of a screen.

    Either a section block (``hero_section``, ``product_grid``, ...) that
    expands into several nodes, or a plain component block whose ``type``
    is a component kind.
    """

    type: str = Field(..., min_length=1)
    component_id: str | None = None
    data_binding: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["BlueprintBlock"] = Field(default_factory=list)

    @field_validator("props", mode="before")
    @classmethod
    def _coerce_props(cls, v: Any) -> dict[str, Any]:
        return v if isinstance(v, dict) else {}


class BlueprintScreen(BlueprintModel):
    screen_id: str | None = Field(default=None, validation_alias=AliasChoices("screen_id", "id"))
    title: str = Field(..., min_length=1, max_length=80, validation_alias=AliasChoices("title", "name"))
    icon: str | None = Field(default=None, max_length=20)
    components: list[BlueprintBlock] = Field(default_factory=list)
    navigable: bool = True
    home: bool = False


class BlueprintTab(BlueprintModel):
    tab_id: str | None = None
    label: str | None = None
    icon: str | None = None
    screen_id: str


class BlueprintNavigation(BlueprintModel):
    type: str = "bottom_tabs"
    tabs: list[BlueprintTab] = Field(default_factory=list)


class Blueprint(BlueprintModel):
    """A complete app blueprint, consumed once by the builder."""

    schema_version: str = "1.0"
    app_name: str = Field(..., min_length=1)
    logo: BlueprintLogo = Field(default_factory=BlueprintLogo)
    theme: BlueprintTheme = Field(default_factory=BlueprintTheme)
    screens: list[BlueprintScreen] = Field(..., min_length=1)
    navigation: BlueprintNavigation = Field(default_factory=BlueprintNavigation)
    data: BlueprintData = Field(default_factory=BlueprintData)
    content: BlueprintContent = Field(default_factory=BlueprintContent)
    settings: BlueprintSettings = Field(default_factory=BlueprintSettings)


BlueprintBlock.model_rebuild()
