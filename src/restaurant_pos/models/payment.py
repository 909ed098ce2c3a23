from sqlalchemy import Column, Integer, Numeric, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..db.base import Base, utcnow


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    # одна оплата на заказ, после создания не меняется
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, unique=True)
    amount = Column(Numeric(10, 2), nullable=False)
    tip = Column(Numeric(10, 2), nullable=False, default=0)
    payment_method = Column(String(32), nullable=False)
    payment_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    order = relationship("Order", back_populates="payment")
