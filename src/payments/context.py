from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models.accounts import UserModel
from schemas.cards import StripeCustomerSchema


@dataclass
class StripeCustomerContext:
    """Request-scoped state shared by the card gateway calls of one request.

    ``customer`` is the logged-in shop customer (``None`` for anonymous
    requests). ``stripe_customer`` memoizes the Stripe customer resolved
    for it; it is never shared between requests.
    """
    customer: Optional[UserModel] = None
    stripe_customer: Optional[StripeCustomerSchema] = None

    @property
    def stripe_customer_id(self) -> Optional[str]:
        if self.customer is None or self.customer.attribute is None:
            return None
        return self.customer.attribute.stripe_customer_id


async def load_customer_context(
    db: AsyncSession,
    user_id: Optional[int]
) -> StripeCustomerContext:
    """Build the context for the customer with the given session user id.

    Billing data and the customer attribute are loaded eagerly, since the
    card service reads both outside of any lazy-loading scope.
    """
    if not user_id:
        return StripeCustomerContext()

    stmt = (
        select(UserModel)
        .options(
            selectinload(UserModel.billing),
            selectinload(UserModel.attribute)
        )
        .where(UserModel.id == user_id)
    )
    result = await db.execute(stmt)
    return StripeCustomerContext(customer=result.scalars().first())
