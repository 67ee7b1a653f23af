from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from schemas.cards import StripeCardSchema, StripeCustomerSchema


class StripeGatewayInterface(ABC):
    """Abstract interface for the Stripe API calls used by the shop.

    Implementations return typed schemas instead of raw SDK objects and
    raise PaymentGatewayError when the Stripe API call fails.
    """

    @abstractmethod
    async def retrieve_customer(
        self,
        customer_id: str
    ) -> StripeCustomerSchema:
        """Load a Stripe customer including its card sources.

        Args:
            customer_id (str): Stripe customer id stored on the shop customer.

        Returns:
            StripeCustomerSchema: The customer. Deleted customers are
                returned with ``deleted`` set.
        """
        pass

    @abstractmethod
    async def create_customer(
        self,
        description: Optional[str],
        email: str,
        source: str
    ) -> StripeCustomerSchema:
        """Create a Stripe customer with an initial card.

        Args:
            description (Optional[str]): Display name of the customer.
            email (str): Email address of the customer.
            source (str): One-time card token created by Stripe.js.

        Returns:
            StripeCustomerSchema: The new customer with its first card.
        """
        pass

    @abstractmethod
    async def create_source(
        self,
        customer_id: str,
        token: str
    ) -> StripeCardSchema:
        """Attach a new card to an existing Stripe customer.

        Args:
            customer_id (str): Stripe customer id.
            token (str): One-time card token created by Stripe.js.

        Returns:
            StripeCardSchema: The created card.
        """
        pass

    @abstractmethod
    async def delete_source(self, customer_id: str, card_id: str) -> None:
        """Retrieve and delete a card from a Stripe customer.

        Args:
            customer_id (str): Stripe customer id.
            card_id (str): Id of the card source to delete.
        """
        pass

    @abstractmethod
    async def refund_charge(
        self,
        charge_id: str,
        amount: int
    ) -> Dict[str, Any]:
        """Retrieve a charge and refund part of it.

        Args:
            charge_id (str): Id of the Stripe charge.
            amount (int): Amount to refund in minor currency units.

        Returns:
            Dict[str, Any]: Refund data including id, amount and status.
        """
        pass
