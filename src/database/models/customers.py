from typing import Optional

from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship

from database.models.accounts import UserModel
from database.models.base import Base


class CustomerBillingModel(Base):
    """Billing address of a customer, used to derive the Stripe display name."""
    __tablename__ = "customer_billings"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    company: Mapped[Optional[str]] = mapped_column(String(255))
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    user: Mapped[UserModel] = relationship(
        UserModel,
        back_populates="billing"
    )

    @property
    def display_name(self) -> str:
        if self.company:
            return self.company
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self) -> str:
        return (
            f"<CustomerBillingModel(id={self.id}, company={self.company}, "
            f"first_name={self.first_name}, last_name={self.last_name})>"
        )


class CustomerAttributeModel(Base):
    """Plugin-owned attributes of a customer.

    Holds the id of the Stripe customer created on the first card save. It
    is only replaced when that Stripe customer was deleted in Stripe.
    """
    __tablename__ = "customer_attributes"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    stripe_customer_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    user: Mapped[UserModel] = relationship(
        UserModel,
        back_populates="attribute"
    )

    def __repr__(self) -> str:
        return (
            f"<CustomerAttributeModel(id={self.id}, user_id={self.user_id}, "
            f"stripe_customer_id={self.stripe_customer_id})>"
        )
