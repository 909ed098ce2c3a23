import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from ..db.base import Base


class TableStatusEnum(str, enum.Enum):
    available = "available"
    occupied = "occupied"
    reserved = "reserved"


class DiningTable(Base):
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(Integer, nullable=False, unique=True)
    capacity = Column(Integer, nullable=False)
    floor = Column(Integer, nullable=False, default=1)
    status = Column(
        SAEnum(TableStatusEnum, name="table_status"), nullable=False, default=TableStatusEnum.available
    )

    # только для occupied
    waiter_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    guest_count = Column(Integer, nullable=True)

    # только для reserved
    reservation_name = Column(String(100), nullable=True)
    reservation_phone = Column(String(32), nullable=True)
    reservation_time = Column(DateTime(timezone=True), nullable=True)

    # связи: заказы не удаляются вместе со столом
    waiter = relationship("User", back_populates="tables")
    orders = relationship("Order", back_populates="table")
