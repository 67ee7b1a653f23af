from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, List

from sqlalchemy import (
    Integer,
    ForeignKey,
    DateTime,
    Enum as SQLEnum,
    DECIMAL,
    String,
    Text
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.base import Base
from database.models.accounts import UserModel


class OrderStatusEnum(Enum):
    """Enumeration for order status values.

    - OPEN: Order placed, not yet processed
    - COMPLETED: Order shipped and paid
    - CANCELED: Order has been canceled
    """
    OPEN = "open"
    COMPLETED = "completed"
    CANCELED = "canceled"


class OrderModel(Base):
    """Model representing shop orders.

    ``transaction_id`` holds the id of the Stripe charge when the order was
    paid with Stripe. ``internal_comment`` is a free-text audit field that
    refunds append to.
    """
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    number: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True
    )
    status: Mapped[OrderStatusEnum] = mapped_column(
        SQLEnum(OrderStatusEnum),
        nullable=False,
        default=OrderStatusEnum.OPEN
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    invoice_amount: Mapped[Optional[Decimal]] = mapped_column(
        DECIMAL(10, 2),
        nullable=True
    )
    currency: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        default="EUR"
    )
    transaction_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )
    internal_comment: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=""
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    user: Mapped["UserModel"] = relationship(
        "UserModel",
        back_populates="orders"
    )
    details: Mapped[List["OrderDetailModel"]] = relationship(
        "OrderDetailModel",
        back_populates="order",
        order_by="OrderDetailModel.id"
    )

    def __repr__(self) -> str:
        return (f"<OrderModel(id={self.id}, number={self.number}, "
                f"status={self.status}, transaction_id={self.transaction_id})>")


class OrderDetailModel(Base):
    """A single position (article line) of an order."""
    __tablename__ = "order_details"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    article_number: Mapped[str] = mapped_column(
        String(64),
        nullable=False
    )
    article_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1
    )
    price: Mapped[Decimal] = mapped_column(
        DECIMAL(10, 2),
        nullable=False
    )

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False
    )

    order: Mapped[OrderModel] = relationship(
        OrderModel,
        back_populates="details"
    )

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity

    def __repr__(self) -> str:
        return (f"<OrderDetailModel(id={self.id}, "
                f"article_number={self.article_number}, "
                f"quantity={self.quantity}, price={self.price}, "
                f"order_id={self.order_id})>")
