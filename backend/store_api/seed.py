"""
Seed data for development and demos.
Creates staff and customer accounts, a small bilingual menu and the
settings singletons.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from shared.config.constants import SINGLETON_KEY, ExtraType, Locales, Roles
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.security.password import hash_password
from store_api.models import (
    AdminPreferences,
    Category,
    Extra,
    Ingredient,
    Product,
    ProductExtra,
    ProductIngredient,
    SiteSettings,
    User,
)

logger = get_logger(__name__)

DEMO_PASSWORD = "bistro123"

USERS = [
    ("admin@bistro.local", "Admin", Roles.ADMIN),
    ("staff@bistro.local", "Camille", Roles.EMPLOYEE),
    ("client@bistro.local", "Louis", Roles.USER),
]

# slug -> (name, display_order, parent slug)
CATEGORIES = {
    "pizzas": ("Pizzas", 1, None),
    "pizzas-blanches": ("Pizzas blanches", 1, "pizzas"),
    "pates": ("Pâtes", 2, None),
    "desserts": ("Desserts", 3, None),
    "boissons": ("Boissons", 4, None),
}

# slug -> (name, allergens, vegetarian, vegan, gluten free)
INGREDIENTS = {
    "mozzarella": ("Mozzarella", ["lactose"], True, False, True),
    "tomate": ("Tomate", [], True, True, True),
    "basilic": ("Basilic", [], True, True, True),
    "jambon": ("Jambon", [], False, False, True),
    "pate-a-pizza": ("Pâte à pizza", ["gluten"], True, True, False),
    "creme": ("Crème fraîche", ["lactose"], True, False, True),
    "oeufs": ("Oeufs", ["eggs"], True, False, True),
}

# slug -> (name, type, price)
EXTRAS = {
    "grande-taille": ("Grande taille", ExtraType.SIZE, 3.0),
    "supplement-fromage": ("Supplément fromage", ExtraType.TOPPING, 1.5),
    "sauce-piquante": ("Sauce piquante", ExtraType.SAUCE, 0.5),
}

# (slug, name, description, price, category, flags, popularity, ingredients, extras)
PRODUCTS = [
    (
        "margherita",
        {"fr": "Margherita", "en": "Margherita"},
        {"fr": "Tomate, mozzarella et basilic frais", "en": "Tomato, mozzarella and fresh basil"},
        9.5, "pizzas", {"is_featured": True, "is_popular": True}, 92,
        ["pate-a-pizza", "tomate", "mozzarella", "basilic"],
        ["grande-taille", "supplement-fromage", "sauce-piquante"],
    ),
    (
        "regina",
        {"fr": "Regina", "en": "Regina"},
        {"fr": "Tomate, mozzarella et jambon", "en": "Tomato, mozzarella and ham"},
        11.0, "pizzas", {"is_popular": True}, 80,
        ["pate-a-pizza", "tomate", "mozzarella", "jambon"],
        ["grande-taille", "supplement-fromage"],
    ),
    (
        "bianca",
        {"fr": "Bianca", "en": "Bianca"},
        {"fr": "Crème fraîche, mozzarella et jambon", "en": "Cream, mozzarella and ham"},
        12.0, "pizzas-blanches", {"is_trending": True}, 64,
        ["pate-a-pizza", "creme", "mozzarella", "jambon"],
        ["grande-taille"],
    ),
    (
        "carbonara",
        {"fr": "Spaghetti carbonara", "en": "Spaghetti carbonara"},
        {"fr": "Crème, oeufs et jambon", "en": "Cream, eggs and ham"},
        13.5, "pates", {"is_featured": True}, 71,
        ["creme", "oeufs", "jambon"],
        [],
    ),
    (
        "tiramisu",
        {"fr": "Tiramisu", "en": "Tiramisu"},
        {"fr": "Le classique italien au café"},
        6.5, "desserts", {"is_trending": True}, 58,
        ["oeufs", "creme"],
        [],
    ),
    (
        "citronnade",
        "Citronnade maison",
        None,
        4.0, "boissons", {}, 30,
        [],
        [],
    ),
]


def seed_users(db: Session) -> None:
    for email, name, role in USERS:
        db.add(User(email=email, name=name, role=role, password=hash_password(DEMO_PASSWORD)))


def seed_catalog(db: Session) -> None:
    categories: dict[str, Category] = {}
    for slug, (name, order, parent_slug) in CATEGORIES.items():
        category = Category(
            name=name,
            slug=slug,
            display_order=order,
            parent=categories.get(parent_slug) if parent_slug else None,
        )
        db.add(category)
        categories[slug] = category

    ingredients: dict[str, Ingredient] = {}
    for slug, (name, allergens, vegetarian, vegan, gluten_free) in INGREDIENTS.items():
        ingredient = Ingredient(
            name=name,
            slug=slug,
            allergens=allergens,
            is_vegetarian=vegetarian,
            is_vegan=vegan,
            is_gluten_free=gluten_free,
        )
        db.add(ingredient)
        ingredients[slug] = ingredient

    extras: dict[str, Extra] = {}
    for slug, (name, extra_type, price) in EXTRAS.items():
        extra = Extra(name=name, slug=slug, type=extra_type, price=price)
        db.add(extra)
        extras[slug] = extra

    for order, (slug, name, description, price, category, flags, popularity,
                ingredient_slugs, extra_slugs) in enumerate(PRODUCTS, start=1):
        product = Product(
            name=name,
            description=description,
            slug=slug,
            price=price,
            category=categories[category],
            popularity_score=popularity,
            display_order=order,
            **flags,
        )
        product.product_ingredients = [
            ProductIngredient(ingredient=ingredients[s], is_removable=s != "pate-a-pizza")
            for s in ingredient_slugs
        ]
        product.product_extras = [ProductExtra(extra=extras[s]) for s in extra_slugs]
        db.add(product)


def seed_settings(db: Session) -> None:
    db.add(SiteSettings(
        id=SINGLETON_KEY,
        title="Bistro",
        is_multilingual=True,
        supported_languages=[Locales.FR, Locales.EN],
        default_language=Locales.FR,
    ))
    db.add(AdminPreferences(id=SINGLETON_KEY))


def seed(db: Session) -> None:
    """
    Seed the database with demo data.
    Idempotent: does nothing when any user exists.
    """
    if db.scalar(select(User.id).limit(1)):
        logger.info("Database already seeded, skipping")
        return

    logger.info("Seeding database")
    seed_users(db)
    seed_catalog(db)
    if db.get(SiteSettings, SINGLETON_KEY) is None:
        seed_settings(db)
    safe_commit(db)

    logger.info(
        "Database seeded",
        users=len(USERS),
        categories=len(CATEGORIES),
        products=len(PRODUCTS),
    )
