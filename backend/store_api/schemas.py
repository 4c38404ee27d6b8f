"""
Pydantic schemas for the store API.

Kept outside the routers so services can build outputs without
importing router modules. Every schema serializes as camelCase.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import AfterValidator, Field, StringConstraints, field_validator

from shared.config.constants import Allergens, ExtraType, Limits, Locales
from shared.utils.schemas import CamelModel
from shared.utils.validators import validate_image_url

MultilingualText = Union[str, dict[str, str]]
ExtraTypeLiteral = Literal["size", "topping", "side", "sauce", "drink", "other"]


def check_multilingual(value: Any, required: bool) -> Any:
    if value is None:
        return value
    if isinstance(value, dict):
        unknown = [k for k in value if k not in Locales.SUPPORTED]
        if unknown:
            raise ValueError(f"unknown locale codes: {', '.join(sorted(unknown))}")
        if required and not any(v.strip() for v in value.values()):
            raise ValueError("at least one locale must have a value")
    elif required and not value.strip():
        raise ValueError("must not be empty")
    return value


def check_allergens(value: list[str] | None) -> list[str] | None:
    if value is None:
        return value
    unknown = [a for a in value if a not in Allergens.ALL]
    if unknown:
        raise ValueError(f"unknown allergens: {', '.join(unknown)}")
    # keep first occurrence order
    return list(dict.fromkeys(value))


# Input-side types
ImageUrl = Annotated[str | None, AfterValidator(validate_image_url)]
AllergenList = Annotated[list[str], AfterValidator(check_allergens)]
OptionalAllergenList = Annotated[list[str] | None, AfterValidator(check_allergens)]


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryOutput(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image: str | None = None
    display_order: int
    is_active: bool
    parent_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryTreeOutput(CategoryOutput):
    children: list["CategoryTreeOutput"] = Field(default_factory=list)


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image: ImageUrl = None
    display_order: int = 0
    is_active: bool = True
    parent_id: str | None = None


class CategoryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image: ImageUrl = None
    display_order: int | None = None
    is_active: bool | None = None
    parent_id: str | None = None


# =============================================================================
# Ingredient Schemas
# =============================================================================


class IngredientOutput(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image: str | None = None
    allergens: list[str] = Field(default_factory=list)
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    created_at: datetime | None = None


class IngredientCreate(CamelModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image: ImageUrl = None
    allergens: AllergenList = Field(default_factory=list)
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False


class IngredientUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image: ImageUrl = None
    allergens: OptionalAllergenList = None
    is_vegetarian: bool | None = None
    is_vegan: bool | None = None
    is_gluten_free: bool | None = None


# =============================================================================
# Extra Schemas
# =============================================================================


class ExtraOutput(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image: str | None = None
    type: str
    price: float
    max_quantity: int
    is_available: bool
    allergens: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class ExtraCreate(CamelModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image: ImageUrl = None
    type: ExtraTypeLiteral = ExtraType.OTHER
    price: float = Field(default=0.0, ge=0)
    max_quantity: int = Field(default=1, ge=1)
    is_available: bool = True
    allergens: AllergenList = Field(default_factory=list)


class ExtraUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image: ImageUrl = None
    type: ExtraTypeLiteral | None = None
    price: float | None = Field(default=None, ge=0)
    max_quantity: int | None = Field(default=None, ge=1)
    is_available: bool | None = None
    allergens: OptionalAllergenList = None


# =============================================================================
# Product Schemas
# =============================================================================


class ProductIngredientLink(CamelModel):
    ingredient_id: str
    is_optional: bool = False
    is_removable: bool = True
    quantity: str | None = Field(default=None, max_length=50)


class ProductExtraLink(CamelModel):
    extra_id: str
    price: float | None = Field(default=None, ge=0)  # overrides the extra's price


class ProductIngredientOutput(CamelModel):
    ingredient_id: str
    name: str
    allergens: list[str] = Field(default_factory=list)
    is_optional: bool
    is_removable: bool
    quantity: str | None = None


class ProductExtraOutput(CamelModel):
    extra_id: str
    name: str
    type: str
    price: float


class ProductOutput(CamelModel):
    """Listing item. name/description keep every locale, display* are resolved."""

    id: str
    name: MultilingualText
    description: MultilingualText | None = None
    display_name: str
    display_description: str
    slug: str
    price: float
    image: str | None = None
    is_available: bool
    category_id: str | None = None
    rating: float | None = None
    rating_count: int = 0
    is_featured: bool
    is_popular: bool
    is_trending: bool
    popularity_score: int
    display_order: int
    preparation_time: int
    created_at: datetime | None = None


class ProductDetailOutput(ProductOutput):
    category: CategoryOutput | None = None
    ingredients: list[ProductIngredientOutput] = Field(default_factory=list)
    extras: list[ProductExtraOutput] = Field(default_factory=list)
    updated_at: datetime | None = None


class ProductCreate(CamelModel):
    name: MultilingualText
    description: MultilingualText | None = None
    price: float = Field(ge=0)
    image: ImageUrl = None
    is_available: bool = True
    category_id: str | None = None
    is_featured: bool = False
    is_popular: bool = False
    is_trending: bool = False
    popularity_score: int = Field(default=0, ge=0, le=Limits.MAX_POPULARITY_SCORE)
    display_order: int = 0
    preparation_time: int = Field(default=15, ge=1)
    ingredients: list[ProductIngredientLink] = Field(default_factory=list)
    extras: list[ProductExtraLink] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Any) -> Any:
        return check_multilingual(value, required=True)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: Any) -> Any:
        return check_multilingual(value, required=False)


class ProductUpdate(CamelModel):
    """Partial update. ingredients/extras replace the links when given."""

    name: MultilingualText | None = None
    description: MultilingualText | None = None
    price: float | None = Field(default=None, ge=0)
    image: ImageUrl = None
    is_available: bool | None = None
    category_id: str | None = None
    is_featured: bool | None = None
    is_popular: bool | None = None
    is_trending: bool | None = None
    popularity_score: int | None = Field(default=None, ge=0, le=Limits.MAX_POPULARITY_SCORE)
    display_order: int | None = None
    preparation_time: int | None = Field(default=None, ge=1)
    ingredients: list[ProductIngredientLink] | None = None
    extras: list[ProductExtraLink] | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Any) -> Any:
        return check_multilingual(value, required=True)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: Any) -> Any:
        return check_multilingual(value, required=False)


class BulkUpdateItem(CamelModel):
    id: str
    is_featured: bool | None = None
    is_popular: bool | None = None
    is_trending: bool | None = None


class BulkUpdateRequest(CamelModel):
    updates: list[BulkUpdateItem] = Field(min_length=1, max_length=Limits.MAX_BULK_UPDATE_ITEMS)


class BulkUpdateResult(CamelModel):
    id: str
    success: bool
    error: str | None = None


# =============================================================================
# Engagement Schemas
# =============================================================================


class ReviewCreate(CamelModel):
    rating: int = Field(ge=Limits.MIN_REVIEW_RATING, le=Limits.MAX_RATING)
    comment: str | None = Field(default=None, max_length=Limits.MAX_COMMENT_LENGTH)


class ReviewOutput(CamelModel):
    id: str
    product_id: str
    user_id: str
    user_name: str | None = None
    rating: int
    comment: str | None = None
    created_at: datetime | None = None


class ReviewPage(CamelModel):
    reviews: list[ReviewOutput]
    average_rating: float | None = None
    total_reviews: int
    page: int
    limit: int
    total_pages: int


class FavoriteStatus(CamelModel):
    product_id: str
    is_favorite: bool


class FavoriteOutput(CamelModel):
    id: str
    product_id: str
    created_at: datetime | None = None
    product: ProductOutput


# =============================================================================
# Settings Schemas
# =============================================================================


class LanguageSettings(CamelModel):
    is_multilingual: bool
    supported_languages: list[str]
    default_language: str


class SiteSettingsOutput(LanguageSettings):
    id: str
    title: str
    updated_at: datetime | None = None


class AdminPreferencesOutput(LanguageSettings):
    id: str
    updated_at: datetime | None = None


class LanguageSettingsUpdate(CamelModel):
    is_multilingual: bool | None = None
    supported_languages: list[str] | None = Field(default=None, min_length=1)
    default_language: str | None = None

    @field_validator("supported_languages")
    @classmethod
    def check_languages(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        unknown = [code for code in value if code not in Locales.SUPPORTED]
        if unknown:
            raise ValueError(f"unsupported languages: {', '.join(unknown)}")
        return list(dict.fromkeys(value))

    @field_validator("default_language")
    @classmethod
    def check_default_language(cls, value: str | None) -> str | None:
        if value is not None and value not in Locales.SUPPORTED:
            raise ValueError(f"unsupported language: {value}")
        return value


class SiteSettingsUpdate(LanguageSettingsUpdate):
    title: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)


class AdminPreferencesUpdate(LanguageSettingsUpdate):
    pass


# =============================================================================
# Home Content Schemas
# =============================================================================


def _required_text(value: Any) -> Any:
    return check_multilingual(value, required=True)


def _optional_text(value: Any) -> Any:
    return check_multilingual(value, required=False)


RequiredText = Annotated[MultilingualText, AfterValidator(_required_text)]
OptionalText = Annotated[MultilingualText | None, AfterValidator(_optional_text)]
# Button targets and icons may be site-relative ("/menu")
LinkUrl = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=Limits.MAX_URL_LENGTH)
]


class HeroBanner(CamelModel):
    is_active: bool = True
    hero_title: RequiredText
    hero_description: RequiredText
    primary_button_text: RequiredText
    primary_button_url: LinkUrl
    secondary_button_text: RequiredText
    secondary_button_url: LinkUrl
    hero_image_desktop: ImageUrl = None
    hero_image_mobile: ImageUrl = None
    hero_image_alt: OptionalText = None
    background_image_desktop: ImageUrl = None
    background_image_mobile: ImageUrl = None


class FeatureItem(CamelModel):
    title: RequiredText
    icon_url: LinkUrl
    order: int = 0


class FeaturesSection(CamelModel):
    is_active: bool = True
    feature_items: list[FeatureItem] = Field(
        default_factory=list, max_length=Limits.MAX_FEATURE_ITEMS
    )

    @field_validator("feature_items")
    @classmethod
    def sort_items(cls, value: list[FeatureItem]) -> list[FeatureItem]:
        return sorted(value, key=lambda item: item.order)


class SeoMetadata(CamelModel):
    seo_title: OptionalText = None
    seo_description: OptionalText = None
    og_image: ImageUrl = None


class HomeContentUpdate(CamelModel):
    """Sections that are given replace the stored ones whole."""

    hero_banner: HeroBanner | None = None
    features_section: FeaturesSection | None = None
    seo_metadata: SeoMetadata | None = None


class HomeContentOutput(CamelModel):
    id: str
    hero_banner: HeroBanner | None = None
    features_section: FeaturesSection | None = None
    seo_metadata: SeoMetadata | None = None
    updated_at: datetime | None = None


# =============================================================================
# Translation Schemas
# =============================================================================


TranslationKey = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
]


class TranslationUpsert(CamelModel):
    key: TranslationKey
    category: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
    translations: dict[str, str] = Field(min_length=1)

    @field_validator("translations")
    @classmethod
    def check_locales(cls, value: dict[str, str]) -> dict[str, str]:
        return check_multilingual(value, required=False)


class TranslationOutput(CamelModel):
    id: str
    key: str
    category: str
    translations: dict[str, str] = Field(validation_alias="texts")
    updated_at: datetime | None = None
