from fastapi import APIRouter, status, Depends, HTTPException, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from config.dependencies import get_card_service, get_customer_context
from config.settings import get_settings
from exceptions.payments import PaymentError
from payments.cards import CardService
from payments.context import StripeCustomerContext
from schemas.cards import (
    CardListSchema,
    SaveCardRequestSchema,
    StripeCardSchema
)

router = APIRouter()

templates = Jinja2Templates(directory=get_settings().TEMPLATES_DIR)


@router.get(
    "/cards/",
    response_model=CardListSchema,
    status_code=status.HTTP_200_OK,
    summary="List stored credit cards",
    description="Get the credit cards stored in Stripe for the logged-in "
                "customer, oldest first, and the id of the default card.",
    responses={
        200: {
            "description": "Cards returned successfully",
            "content": {
                "application/json": {
                    "example": {
                        "cards": [
                            {
                                "id": "card_16xHq22eZvKYlo2C8mBb1GtY",
                                "name": "Max Mustermann",
                                "brand": "Visa",
                                "last4": "4242",
                                "exp_month": 12,
                                "exp_year": 2027
                            }
                        ],
                        "default_card_id": "card_16xHq22eZvKYlo2C8mBb1GtY"
                    }
                }
            }
        },
        400: {
            "description": "Stripe request failed",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Failed to load cards: No such customer: cus_123"
                    }
                }
            }
        }
    }
)
async def get_cards(
    context: StripeCustomerContext = Depends(get_customer_context),
    card_service: CardService = Depends(get_card_service)
) -> CardListSchema:
    """List the stored cards of the logged-in customer.

    Args:
        context (StripeCustomerContext): Request context of the customer.
        card_service (CardService): Card service dependency.

    Returns:
        CardListSchema: The cards and the default card id.
    """
    try:
        cards = await card_service.list_cards(context)
        default_card = await card_service.default_card(context)
    except PaymentError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to load cards: {str(e)}"
        )

    return CardListSchema(
        cards=cards,
        default_card_id=default_card.id if default_card else None
    )


@router.post(
    "/cards/",
    response_model=StripeCardSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Store a credit card",
    description="Store the card behind a one-time Stripe.js token. The first "
                "card creates the customer in Stripe.",
    responses={
        400: {
            "description": "Stripe request failed",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Failed to save card: Your card was declined."
                    }
                }
            }
        },
        403: {
            "description": "Customer has no permanent account",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Storing cards requires a customer account."
                    }
                }
            }
        }
    }
)
async def save_card(
    data: SaveCardRequestSchema,
    context: StripeCustomerContext = Depends(get_customer_context),
    card_service: CardService = Depends(get_card_service)
) -> StripeCardSchema:
    """Store a new card for the logged-in customer.

    Args:
        data (SaveCardRequestSchema): The one-time card token.
        context (StripeCustomerContext): Request context of the customer.
        card_service (CardService): Card service dependency.

    Returns:
        StripeCardSchema: The stored card.
    """
    try:
        card = await card_service.save_card(context, data.token)
    except PaymentError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to save card: {str(e)}"
        )

    if card is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Storing cards requires a customer account."
        )
    return card


@router.post(
    "/cards/delete/",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Delete a stored credit card",
    description="Form endpoint used by the delete buttons of the credit card "
                "page. Redirects back to that page.",
    response_class=RedirectResponse
)
async def delete_card(
    request: Request,
    card_id: str = Form(alias="cardId"),
    context: StripeCustomerContext = Depends(get_customer_context),
    card_service: CardService = Depends(get_card_service)
) -> RedirectResponse:
    """Delete a card and redirect to the credit card page.

    Args:
        request (Request): The incoming request, used to build the redirect.
        card_id (str): Id of the card, from the hidden ``cardId`` form field.
        context (StripeCustomerContext): Request context of the customer.
        card_service (CardService): Card service dependency.

    Returns:
        RedirectResponse: Redirect to the credit card page.
    """
    try:
        await card_service.delete_card(context, card_id)
    except PaymentError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to delete card: {str(e)}"
        )

    return RedirectResponse(
        url=str(request.url_for("get_credit_cards_page")),
        status_code=status.HTTP_303_SEE_OTHER
    )


@router.get(
    "/credit-cards/",
    response_class=HTMLResponse,
    summary="Credit card account page",
    description="HTML table of the stored cards with a delete form per card."
)
async def get_credit_cards_page(
    request: Request,
    context: StripeCustomerContext = Depends(get_customer_context),
    card_service: CardService = Depends(get_card_service)
) -> HTMLResponse:
    try:
        cards = await card_service.list_cards(context)
        default_card = await card_service.default_card(context)
    except PaymentError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to load cards: {str(e)}"
        )

    return templates.TemplateResponse(
        request,
        "account/credit_cards.html",
        {
            "cards": cards,
            "default_card_id": default_card.id if default_card else None,
            "delete_url": request.url_for("delete_card")
        }
    )
