from datetime import datetime
from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import EmailStr
from sqlalchemy import (
    Integer,
    Enum as SqlEnum,
    String,
    Boolean,
    DateTime,
    func,
    ForeignKey
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from database.models.base import Base
from database.validators.accounts import (
    validate_email,
    validate_password_strength
)
from security.utils import verify_password, hash_password


class UserGroupEnum(Enum):
    """Enumeration for user group types.

    - CUSTOMER: Shop customer using the storefront and account pages
    - ADMIN: Backend user allowed to issue refunds
    """
    CUSTOMER = "customer"
    ADMIN = "admin"


class AccountModeEnum(IntEnum):
    """Account mode of a shop customer.

    Guest customers are created by the fast checkout and never get a
    Stripe customer or stored cards.
    """
    PERMANENT = 0
    GUEST = 1


class UserGroupModel(Base):
    """Model representing user groups in the system."""
    __tablename__ = "user_groups"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    name: Mapped[UserGroupEnum] = mapped_column(
        SqlEnum(UserGroupEnum), nullable=False, unique=True
    )

    users: Mapped[List["UserModel"]] = relationship(
        "UserModel", back_populates="group"
    )

    def __repr__(self) -> str:
        return f"<UserGroupModel(id={self.id}, name={self.name})>"


class UserModel(Base):
    """Shop customer (or backend user) with login credentials.

    Billing data and the Stripe customer reference live in separate
    one-to-one tables, see ``database.models.customers``.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    email: Mapped[EmailStr] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    _hashed_password: Mapped[str] = mapped_column(
        "hashed_password", String(255), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    account_mode: Mapped[int] = mapped_column(
        Integer, nullable=False, default=AccountModeEnum.PERMANENT
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    group_id: Mapped[int] = mapped_column(
        ForeignKey("user_groups.id", ondelete="CASCADE"),
        nullable=False
    )
    group: Mapped[UserGroupModel] = relationship(
        UserGroupModel,
        back_populates="users"
    )

    billing: Mapped[Optional["CustomerBillingModel"]] = relationship(
        "CustomerBillingModel",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    attribute: Mapped[Optional["CustomerAttributeModel"]] = relationship(
        "CustomerAttributeModel",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    orders: Mapped[List["OrderModel"]] = relationship(
        "OrderModel",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return (f"<UserModel(id={self.id}, email={self.email}, "
                f"account_mode={self.account_mode})>")

    @property
    def has_permanent_account(self) -> bool:
        return self.account_mode != AccountModeEnum.GUEST

    def has_group(self, group_name: UserGroupEnum) -> bool:
        """Check if the user belongs to a specific group.

        Args:
            group_name (UserGroupEnum): The group to check for.

        Returns:
            bool: True if user belongs to the specified group, False otherwise.
        """
        return self.group.name == group_name

    @classmethod
    def create(
        cls,
        email: EmailStr,
        raw_password: str,
        group_id: int | Mapped[int],
        account_mode: AccountModeEnum = AccountModeEnum.PERMANENT
    ) -> "UserModel":
        """Create a new user instance with hashed password.

        Args:
            email (EmailStr): User's email address.
            raw_password (str): Plain text password to be hashed.
            group_id (int | Mapped[int]): ID of the user's group.
            account_mode (AccountModeEnum): Permanent or guest account.

        Returns:
            UserModel: New user instance with hashed password.
        """
        user = cls(email=email, group_id=group_id, account_mode=account_mode)
        user.password = raw_password
        return user

    @property
    def password(self) -> None:
        raise AttributeError(
            "Password is write-only. Use the setter to set the password."
        )

    @password.setter
    def password(self, raw_password: str) -> None:
        validate_password_strength(raw_password)
        self._hashed_password = hash_password(raw_password)

    def verify_password(self, raw_password: str) -> bool:
        return verify_password(raw_password, self._hashed_password)

    @validates("email")
    def validate_email_field(self, field_name: str, email: str) -> str:
        return validate_email(email)
