import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from database.models.customers import CustomerAttributeModel
from payments.context import StripeCustomerContext
from payments.interfaces import StripeGatewayInterface
from schemas.cards import StripeCardSchema, StripeCustomerSchema

logger = logging.getLogger(__name__)


class CardService:
    """Stored credit cards of the logged-in customer.

    Cards are owned by Stripe and re-fetched on every request. The only
    local state is the Stripe customer id kept on the customer attribute
    record, and the Stripe customer memoized on the request context.
    Stripe failures propagate as PaymentGatewayError; nothing is retried.
    """

    def __init__(
        self,
        gateway: StripeGatewayInterface,
        db: AsyncSession
    ) -> None:
        self._gateway = gateway
        self._db = db

    async def get_stripe_customer(
        self,
        context: StripeCustomerContext
    ) -> Optional[StripeCustomerSchema]:
        """Resolve the Stripe customer of the logged-in customer.

        Args:
            context (StripeCustomerContext): The request context.

        Returns:
            Optional[StripeCustomerSchema]: The Stripe customer, or None if
                nobody is logged in, the customer has no permanent account
                or no Stripe customer was created for them yet.
        """
        if context.stripe_customer is not None:
            return context.stripe_customer

        customer = context.customer
        if customer is None or not customer.has_permanent_account:
            return None
        stripe_customer_id = context.stripe_customer_id
        if not stripe_customer_id:
            return None

        context.stripe_customer = await self._gateway.retrieve_customer(
            stripe_customer_id
        )
        return context.stripe_customer

    async def list_cards(
        self,
        context: StripeCustomerContext
    ) -> List[StripeCardSchema]:
        """Return all cards of the customer, oldest first.

        Stripe ids grow with the creation time, so sorting by id keeps the
        order in which the cards were added.
        """
        stripe_customer = await self.get_stripe_customer(context)
        if stripe_customer is None or stripe_customer.deleted:
            return []

        return sorted(stripe_customer.sources, key=lambda card: card.id)

    async def default_card(
        self,
        context: StripeCustomerContext
    ) -> Optional[StripeCardSchema]:
        stripe_customer = await self.get_stripe_customer(context)
        if stripe_customer is None or stripe_customer.deleted:
            return None

        for card in await self.list_cards(context):
            if card.id == stripe_customer.default_source:
                return card
        return None

    async def save_card(
        self,
        context: StripeCustomerContext,
        token: str
    ) -> Optional[StripeCardSchema]:
        """Store a new card for the logged-in customer.

        Adds the card to the existing Stripe customer. If there is none yet
        (or it was deleted in Stripe), a Stripe customer is created with the
        card and its id is saved on the customer attribute record.

        Args:
            context (StripeCustomerContext): The request context.
            token (str): One-time card token created by Stripe.js.

        Returns:
            Optional[StripeCardSchema]: The new card, or None if there is no
                logged-in customer with a permanent account.
        """
        stripe_customer = await self.get_stripe_customer(context)
        if stripe_customer is not None and not stripe_customer.deleted:
            card = await self._gateway.create_source(stripe_customer.id, token)
            stripe_customer.sources.append(card)
            logger.info(
                "Added card %s to Stripe customer %s",
                card.id,
                stripe_customer.id
            )
            return card

        customer = context.customer
        if customer is None or not customer.has_permanent_account:
            return None

        stripe_customer = await self._gateway.create_customer(
            description=(
                customer.billing.display_name if customer.billing else None
            ),
            email=customer.email,
            source=token
        )
        card = stripe_customer.sources[0]

        if customer.attribute is None:
            customer.attribute = CustomerAttributeModel(user_id=customer.id)
        customer.attribute.stripe_customer_id = stripe_customer.id
        await self._db.commit()

        context.stripe_customer = stripe_customer
        logger.info(
            "Saved Stripe customer %s for customer %s",
            stripe_customer.id,
            customer.id
        )
        return card

    async def delete_card(
        self,
        context: StripeCustomerContext,
        card_id: str
    ) -> None:
        """Delete a card of the logged-in customer in Stripe.

        Does nothing if no Stripe customer can be resolved.
        """
        stripe_customer = await self.get_stripe_customer(context)
        if stripe_customer is None:
            return

        await self._gateway.delete_source(stripe_customer.id, card_id)
        stripe_customer.sources = [
            card for card in stripe_customer.sources if card.id != card_id
        ]
        logger.info(
            "Deleted card %s of Stripe customer %s",
            card_id,
            stripe_customer.id
        )
