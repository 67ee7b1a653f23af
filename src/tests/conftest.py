import os

os.environ.setdefault("ENVIRONMENT", "testing")

from decimal import Decimal
from typing import AsyncGenerator, Any, cast

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from pydantic import EmailStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import get_stripe_gateway
from config.settings import get_settings, BaseAppSettings
from database import (
    get_db_contextmanager,
    reset_database,
    CustomerAttributeModel,
    CustomerBillingModel
)
from database.models.accounts import (
    AccountModeEnum,
    UserModel,
    UserGroupModel,
    UserGroupEnum
)
from database.models.orders import OrderModel, OrderDetailModel
from main import create_app
from security.interfaces import JWTManagerInterface
from security.manager import JWTManager
from tests.doubles.fakes.stripe import FakeStripeGateway


@pytest.fixture(scope="session")
def settings() -> BaseAppSettings:
    """Session-scoped application settings."""
    return get_settings()


@pytest.fixture(scope="session")
def app(settings) -> FastAPI:
    """
    Session-scoped fixture to create and return a FastAPI app instance for testing.
    """
    return create_app(settings)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def reset_db():
    """Reset the database to a clean state before each test function."""
    await reset_database()
    yield


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, Any]:
    """
    Function-scoped fixture to provide a database session for each test function.
    """
    async with get_db_contextmanager() as session:
        yield session


@pytest.fixture(scope="function")
def stripe_gateway_fake() -> FakeStripeGateway:
    """Provide a fake Stripe gateway for testing."""
    return FakeStripeGateway()


@pytest.fixture(scope="function")
def jwt_manager(settings: BaseAppSettings) -> JWTManagerInterface:
    return JWTManager(
        access_secret_key=settings.SECRET_KEY_ACCESS,
        access_expires_delta=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_SIGNING_ALGORITHM
    )


@pytest_asyncio.fixture(scope="function")
async def client(
    app,
    stripe_gateway_fake
) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provide an asynchronous HTTP client for testing.
    Overrides the Stripe gateway with the in-memory fake.
    """
    app.dependency_overrides[get_stripe_gateway] = lambda: stripe_gateway_fake

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def seed_user_groups(db_session: AsyncSession) -> AsyncSession:
    """Insert all UserGroupEnum values as groups."""
    db_session.add_all(
        [UserGroupModel(name=group) for group in UserGroupEnum]
    )
    await db_session.commit()
    return db_session


async def create_user(
    db_session: AsyncSession,
    email: str,
    group: UserGroupEnum,
    jwt_manager: JWTManagerInterface,
    account_mode: AccountModeEnum = AccountModeEnum.PERMANENT,
    company: str | None = None
) -> dict[str, Any]:
    result = await db_session.execute(
        select(UserGroupModel).where(UserGroupModel.name == group)
    )
    user_group = result.scalars().first()

    user = UserModel.create(
        email=cast(EmailStr, email),
        raw_password="StrongPass123!",
        group_id=user_group.id,
        account_mode=account_mode
    )
    user.is_active = True
    db_session.add(user)
    await db_session.flush()

    db_session.add(
        CustomerBillingModel(
            user_id=user.id,
            company=company,
            first_name="Max",
            last_name="Mustermann"
        )
    )
    await db_session.commit()
    await db_session.refresh(user)

    access_token = jwt_manager.create_access_token({"user_id": user.id})
    return {
        "user_id": user.id,
        "email": user.email,
        "password": "StrongPass123!",
        "access_token": access_token,
        "headers": {"Authorization": f"Bearer {access_token}"}
    }


@pytest_asyncio.fixture(scope="function")
async def customer_user(
    db_session,
    seed_user_groups,
    jwt_manager
) -> dict[str, Any]:
    """A customer with a permanent account and no Stripe customer yet."""
    return await create_user(
        db_session,
        "customer@example.com",
        UserGroupEnum.CUSTOMER,
        jwt_manager
    )


@pytest_asyncio.fixture(scope="function")
async def guest_user(
    db_session,
    seed_user_groups,
    jwt_manager
) -> dict[str, Any]:
    """A fast-checkout customer without a permanent account."""
    return await create_user(
        db_session,
        "guest@example.com",
        UserGroupEnum.CUSTOMER,
        jwt_manager,
        account_mode=AccountModeEnum.GUEST
    )


@pytest_asyncio.fixture(scope="function")
async def admin_user(
    db_session,
    seed_user_groups,
    jwt_manager
) -> dict[str, Any]:
    return await create_user(
        db_session,
        "admin@example.com",
        UserGroupEnum.ADMIN,
        jwt_manager
    )


@pytest_asyncio.fixture(scope="function")
async def stripe_customer_user(
    db_session,
    customer_user,
    stripe_gateway_fake
) -> dict[str, Any]:
    """A customer already linked to a Stripe customer with two cards."""
    stripe_customer = stripe_gateway_fake.add_customer(cards=2)
    db_session.add(
        CustomerAttributeModel(
            user_id=customer_user["user_id"],
            stripe_customer_id=stripe_customer.id
        )
    )
    await db_session.commit()
    return {**customer_user, "stripe_customer_id": stripe_customer.id}


async def create_order(
    db_session: AsyncSession,
    user_id: int,
    number: str,
    transaction_id: str | None,
    internal_comment: str = ""
) -> OrderModel:
    order = OrderModel(
        user_id=user_id,
        number=number,
        invoice_amount=Decimal("25.00"),
        transaction_id=transaction_id,
        internal_comment=internal_comment
    )
    db_session.add(order)
    await db_session.flush()

    db_session.add_all(
        [
            OrderDetailModel(
                order_id=order.id,
                article_number="SW10001",
                article_name="Espresso cup",
                quantity=2,
                price=Decimal("5.00")
            ),
            OrderDetailModel(
                order_id=order.id,
                article_number="SW10002",
                article_name="Coffee beans 1kg",
                quantity=1,
                price=Decimal("15.00")
            ),
        ]
    )
    await db_session.commit()
    await db_session.refresh(order)
    return order


@pytest_asyncio.fixture(scope="function")
async def paid_order(
    db_session,
    customer_user,
    stripe_gateway_fake
) -> dict[str, Any]:
    """An order paid with a 25.00 Stripe charge and an existing comment."""
    charge_id = stripe_gateway_fake.add_charge(2500)
    order = await create_order(
        db_session,
        customer_user["user_id"],
        "20001",
        charge_id,
        internal_comment="X"
    )
    return {"order_id": order.id, "charge_id": charge_id}


@pytest_asyncio.fixture(scope="function")
async def unpaid_order(db_session, customer_user) -> dict[str, Any]:
    """An order that was not paid with Stripe."""
    order = await create_order(
        db_session,
        customer_user["user_id"],
        "20002",
        None
    )
    return {"order_id": order.id}
