import importlib
import logging
from typing import Dict

from exceptions.payments import PaymentClassNotFoundError

logger = logging.getLogger(__name__)

STRIPE_PAYMENT_METHOD_KEY = "StripePaymentMethod"
STRIPE_PAYMENT_METHOD_CLASS = "payments.methods.StripePaymentMethod"
MIN_TEMPLATE_VERSION = 3


class PaymentClassRegistry:
    """Payment method classes available to the checkout, keyed by name.

    Values are fully qualified class names; they are imported lazily by
    ``resolve``.
    """

    def __init__(self) -> None:
        self._classes: Dict[str, str] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def register(self, key: str, class_path: str) -> None:
        self._classes[key] = class_path

    def as_dict(self) -> Dict[str, str]:
        return dict(self._classes)

    def resolve(self, key: str) -> type:
        """Import and return the class registered under ``key``.

        Raises:
            PaymentClassNotFoundError: If nothing is registered for the key.
        """
        try:
            class_path = self._classes[key]
        except KeyError:
            raise PaymentClassNotFoundError(
                f"No payment class registered for '{key}'"
            )
        module_name, _, class_name = class_path.rpartition(".")
        return getattr(importlib.import_module(module_name), class_name)


def register_payment_classes(
    registry: PaymentClassRegistry,
    template_version: int
) -> None:
    """Publish the Stripe payment method class.

    The Stripe checkout templates need template version 3 or newer; older
    shops keep their payment classes unchanged.
    """
    if template_version < MIN_TEMPLATE_VERSION:
        logger.info(
            "Template version %d is too old, Stripe payment method not registered",
            template_version
        )
        return
    registry.register(STRIPE_PAYMENT_METHOD_KEY, STRIPE_PAYMENT_METHOD_CLASS)
