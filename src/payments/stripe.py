import logging
from typing import Dict, Any, Optional

import stripe

from exceptions.payments import PaymentGatewayError
from payments.interfaces import StripeGatewayInterface
from schemas.cards import StripeCardSchema, StripeCustomerSchema

logger = logging.getLogger(__name__)


def extract_error_message(error: Exception) -> str:
    """Return the message of a failed Stripe API call.

    Stripe errors carry the decoded response body in ``json_body``; its
    ``error.message`` is preferred over the exception text, which is
    prefixed with the request id.

    Args:
        error (Exception): The exception raised by the Stripe SDK.

    Returns:
        str: The message to show to the backend user.
    """
    body = getattr(error, "json_body", None)
    if isinstance(body, dict):
        message = (body.get("error") or {}).get("message")
        if message:
            return message
    return str(error)


def card_to_schema(card: Any) -> StripeCardSchema:
    return StripeCardSchema(
        id=card.id,
        name=getattr(card, "name", None),
        brand=getattr(card, "brand", None),
        last4=getattr(card, "last4", None),
        exp_month=getattr(card, "exp_month", None),
        exp_year=getattr(card, "exp_year", None)
    )


def customer_to_schema(customer: Any) -> StripeCustomerSchema:
    sources = getattr(customer, "sources", None)
    cards = getattr(sources, "data", None) or []
    return StripeCustomerSchema(
        id=customer.id,
        deleted=bool(getattr(customer, "deleted", False)),
        email=getattr(customer, "email", None),
        description=getattr(customer, "description", None),
        default_source=getattr(customer, "default_source", None),
        sources=[card_to_schema(card) for card in cards]
    )


class StripeGateway(StripeGatewayInterface):
    """Stripe SDK implementation of the gateway interface.

    The secret key and the pinned API version are applied to the SDK when
    the gateway is created, so every request uses the plugin configuration
    regardless of the version selected in the Stripe dashboard.
    """

    def __init__(self, secret_key: str, api_version: str) -> None:
        """Initialize the Stripe gateway.

        Args:
            secret_key (str): Stripe secret key for API authentication.
            api_version (str): Stripe API version to pin requests to.
        """
        self.secret_key = secret_key
        self.api_version = api_version
        stripe.api_key = secret_key
        stripe.api_version = api_version

    async def retrieve_customer(
        self,
        customer_id: str
    ) -> StripeCustomerSchema:
        try:
            customer = stripe.Customer.retrieve(
                customer_id,
                expand=["sources"]
            )
        except Exception as e:
            logger.warning(
                "Loading Stripe customer %s failed: %s", customer_id, e
            )
            raise PaymentGatewayError(extract_error_message(e)) from e
        return customer_to_schema(customer)

    async def create_customer(
        self,
        description: Optional[str],
        email: str,
        source: str
    ) -> StripeCustomerSchema:
        try:
            customer = stripe.Customer.create(
                description=description,
                email=email,
                source=source
            )
        except Exception as e:
            logger.warning("Creating Stripe customer for %s failed: %s", email, e)
            raise PaymentGatewayError(extract_error_message(e)) from e
        logger.info("Created Stripe customer %s for %s", customer.id, email)
        return customer_to_schema(customer)

    async def create_source(
        self,
        customer_id: str,
        token: str
    ) -> StripeCardSchema:
        try:
            card = stripe.Customer.create_source(customer_id, source=token)
        except Exception as e:
            logger.warning(
                "Adding a card to Stripe customer %s failed: %s",
                customer_id,
                e
            )
            raise PaymentGatewayError(extract_error_message(e)) from e
        return card_to_schema(card)

    async def delete_source(self, customer_id: str, card_id: str) -> None:
        try:
            stripe.Customer.retrieve_source(customer_id, card_id)
            stripe.Customer.delete_source(customer_id, card_id)
        except Exception as e:
            logger.warning(
                "Deleting card %s of Stripe customer %s failed: %s",
                card_id,
                customer_id,
                e
            )
            raise PaymentGatewayError(extract_error_message(e)) from e

    async def refund_charge(
        self,
        charge_id: str,
        amount: int
    ) -> Dict[str, Any]:
        try:
            charge = stripe.Charge.retrieve(charge_id)
            refund = stripe.Refund.create(charge=charge.id, amount=amount)
        except Exception as e:
            logger.error(
                "Refunding %d of Stripe charge %s failed: %s",
                amount,
                charge_id,
                e
            )
            raise PaymentGatewayError(extract_error_message(e)) from e

        return {
            "id": refund.id,
            "amount": refund.amount,
            "status": getattr(refund, "status", None),
            "charge": charge_id
        }
