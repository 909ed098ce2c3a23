import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, Enum as SAEnum, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class MenuCategoryEnum(str, enum.Enum):
    appetizer = "appetizer"
    main_course = "main_course"
    side = "side"
    dessert = "dessert"
    drink = "drink"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(SAEnum(MenuCategoryEnum, name="menu_category"), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # цена
    available = Column(Boolean, default=True, nullable=False)
    is_special = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # связь с OrderItem
    order_items = relationship("OrderItem", back_populates="menu_item")
