import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.models import DiningTable, MenuCategoryEnum, MenuItem, RoleEnum, TableStatusEnum, User
from restaurant_pos.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN = ("System Administrator", "admin@restaurant.com", "admin123")
SAMPLE_PASSWORD = "password123"

SAMPLE_STAFF = [
    ("John Smith", "host@restaurant.com", RoleEnum.host),
    ("Emma Johnson", "waiter@restaurant.com", RoleEnum.waiter),
    ("Robert Wilson", "chef@restaurant.com", RoleEnum.chef),
    ("Maria Garcia", "manager@restaurant.com", RoleEnum.manager),
    ("David Chen", "owner@restaurant.com", RoleEnum.owner),
    ("Lisa Brown", "lisa@restaurant.com", RoleEnum.waiter),
]

SAMPLE_MENU = [
    ("Garlic Bread", "Toasted bread with garlic butter", "4.95", MenuCategoryEnum.appetizer),
    ("Mozzarella Sticks", "Breaded mozzarella with marinara sauce", "6.95", MenuCategoryEnum.appetizer),
    ("Chicken Wings", "Spicy buffalo wings with blue cheese dip", "8.95", MenuCategoryEnum.appetizer),
    ("Calamari", "Fried squid rings with lemon aioli", "9.95", MenuCategoryEnum.appetizer),
    ("Grilled Salmon", "Atlantic salmon with seasonal vegetables", "18.95", MenuCategoryEnum.main_course),
    ("Beef Burger", "Beef patty with cheddar, lettuce and tomato", "12.95", MenuCategoryEnum.main_course),
    ("Chicken Alfredo", "Fettuccine in a creamy parmesan sauce", "14.95", MenuCategoryEnum.main_course),
    ("Vegetable Stir Fry", "Seasonal vegetables in a ginger soy glaze", "13.95", MenuCategoryEnum.main_course),
    ("French Fries", "Crispy fries with sea salt", "3.95", MenuCategoryEnum.side),
    ("Onion Rings", "Beer-battered onion rings", "4.95", MenuCategoryEnum.side),
    ("Side Salad", "Mixed greens with house dressing", "4.95", MenuCategoryEnum.side),
    ("Chocolate Cake", "Rich chocolate layer cake", "6.95", MenuCategoryEnum.dessert),
    ("Cheesecake", "New York style cheesecake", "7.95", MenuCategoryEnum.dessert),
    ("Soft Drink", "Cola, lemonade or iced tea", "2.95", MenuCategoryEnum.drink),
    ("Coffee", "Freshly brewed coffee", "2.50", MenuCategoryEnum.drink),
]


def sample_capacity(number: int) -> int:
    if number % 3 == 0:
        return 6
    return 4 if number % 2 == 0 else 2


async def seed_sample_data(db: AsyncSession, table_count: int = 20) -> bool:
    """
    Заполняет пустую базу демо-данными: админ, по сотруднику на роль,
    столы на двух этажах и меню. Если пользователи уже есть - ничего не делает.
    """
    users = await db.scalar(select(func.count(User.id)))
    if users:
        return False

    logger.info("Initializing database with sample data...")

    name, email, password = DEFAULT_ADMIN
    db.add(User(name=name, email=email, password_hash=hash_password(password), role=RoleEnum.admin, active=True))

    staff_hash = hash_password(SAMPLE_PASSWORD)
    for name, email, role in SAMPLE_STAFF:
        db.add(User(name=name, email=email, password_hash=staff_hash, role=role, active=True))

    for number in range(1, table_count + 1):
        db.add(
            DiningTable(
                number=number,
                capacity=sample_capacity(number),
                floor=(number - 1) // 10 + 1,
                status=TableStatusEnum.available,
            )
        )

    for name, description, price, category in SAMPLE_MENU:
        db.add(
            MenuItem(
                name=name,
                description=description,
                price=Decimal(price),
                category=category,
                available=True,
                is_special=False,
            )
        )

    await db.commit()
    logger.info("Database initialization complete.")
    return True
