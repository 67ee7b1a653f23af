from typing import Any, Dict, List, Optional

from payments.cards import CardService
from payments.context import StripeCustomerContext
from schemas.cards import StripeCardSchema


class StripePaymentMethod:
    """Checkout payment method paying with a Stripe credit card.

    The customer either enters a new card, which Stripe.js turns into a
    one-time token, or picks one of their stored cards.
    """
    TOKEN_FIELD = "stripeTransactionToken"
    CARD_ID_FIELD = "stripeCardId"

    def validate(self, payment_data: Dict[str, Any]) -> List[str]:
        """Return the names of the missing payment fields.

        An empty list means the payment data can be used for a charge.
        """
        if payment_data.get(self.TOKEN_FIELD) or payment_data.get(self.CARD_ID_FIELD):
            return []
        return [self.TOKEN_FIELD, self.CARD_ID_FIELD]

    async def current_payment_data(
        self,
        card_service: CardService,
        context: StripeCustomerContext
    ) -> Optional[StripeCardSchema]:
        """Card preselected in the checkout: the customer's default card."""
        return await card_service.default_card(context)
