from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .exapmles.cards import (
    stripe_card_schema_example,
    card_list_schema_example,
    save_card_request_schema_example
)


class StripeCardSchema(BaseModel):
    """The subset of a Stripe card source the shop displays."""
    id: str
    name: Optional[str] = None
    brand: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": stripe_card_schema_example
        }
    )


class StripeCustomerSchema(BaseModel):
    """The subset of a Stripe customer the card gateway relies on."""
    id: str
    deleted: bool = False
    email: Optional[str] = None
    description: Optional[str] = None
    default_source: Optional[str] = None
    sources: List[StripeCardSchema] = Field(default_factory=list)


class CardListSchema(BaseModel):
    cards: List[StripeCardSchema]
    default_card_id: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": card_list_schema_example
        }
    )


class SaveCardRequestSchema(BaseModel):
    token: str = Field(min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": save_card_request_schema_example
        }
    )
