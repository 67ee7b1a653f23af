from fastapi import APIRouter, status, Depends, HTTPException

from config.dependencies import (
    get_card_service,
    get_customer_context,
    get_payment_class_registry
)
from exceptions.payments import PaymentClassNotFoundError, PaymentError
from payments.cards import CardService
from payments.context import StripeCustomerContext
from payments.registry import PaymentClassRegistry
from schemas.checkout import (
    CurrentPaymentDataSchema,
    PaymentClassListSchema,
    PaymentDataValidationRequestSchema,
    PaymentDataValidationResponseSchema
)

router = APIRouter()


def get_payment_method(registry: PaymentClassRegistry, payment_class: str):
    """Instantiate the payment method registered under ``payment_class``.

    Raises:
        HTTPException: If the class is not registered (404 Not Found).
    """
    try:
        method_class = registry.resolve(payment_class)
    except PaymentClassNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return method_class()


@router.get(
    "/payment-classes/",
    response_model=PaymentClassListSchema,
    status_code=status.HTTP_200_OK,
    summary="List payment method classes",
    description="Payment method classes registered at startup, keyed by "
                "name. The Stripe method is only present for shops using "
                "template version 3 or newer."
)
async def get_payment_classes(
    registry: PaymentClassRegistry = Depends(get_payment_class_registry)
) -> PaymentClassListSchema:
    return PaymentClassListSchema(payment_classes=registry.as_dict())


@router.post(
    "/payment-data/validate/",
    response_model=PaymentDataValidationResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Validate checkout payment data",
    description="Check the payment fields posted by the checkout against "
                "the registered payment class. The Stripe method needs "
                "either a new card token or a stored card id.",
    responses={
        404: {
            "description": "Payment class not registered",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "No payment class registered for 'StripePaymentMethod'"
                    }
                }
            }
        }
    }
)
async def validate_payment_data(
    data: PaymentDataValidationRequestSchema,
    registry: PaymentClassRegistry = Depends(get_payment_class_registry)
) -> PaymentDataValidationResponseSchema:
    payment_method = get_payment_method(registry, data.payment_class)
    missing_fields = payment_method.validate(data.payment_data)
    return PaymentDataValidationResponseSchema(
        valid=not missing_fields,
        missing_fields=missing_fields
    )


@router.get(
    "/payment-data/{payment_class}/",
    response_model=CurrentPaymentDataSchema,
    status_code=status.HTTP_200_OK,
    summary="Current payment data of the customer",
    description="Payment data preselected in the checkout for the logged-in "
                "customer. For the Stripe method this is the default card, "
                "or null when the customer has no stored card.",
    responses={
        400: {
            "description": "Stripe request failed",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Failed to load payment data: No such customer: cus_123"
                    }
                }
            }
        },
        404: {
            "description": "Payment class not registered",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "No payment class registered for 'StripePaymentMethod'"
                    }
                }
            }
        }
    }
)
async def get_current_payment_data(
    payment_class: str,
    registry: PaymentClassRegistry = Depends(get_payment_class_registry),
    context: StripeCustomerContext = Depends(get_customer_context),
    card_service: CardService = Depends(get_card_service)
) -> CurrentPaymentDataSchema:
    """Return the payment data the checkout preselects.

    Args:
        payment_class (str): Key of the registered payment class.
        registry (PaymentClassRegistry): Payment classes of the shop.
        context (StripeCustomerContext): Request context of the customer.
        card_service (CardService): Card service dependency.

    Returns:
        CurrentPaymentDataSchema: The preselected card, if any.
    """
    payment_method = get_payment_method(registry, payment_class)
    try:
        card = await payment_method.current_payment_data(card_service, context)
    except PaymentError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to load payment data: {str(e)}"
        )

    return CurrentPaymentDataSchema(payment_class=payment_class, card=card)
