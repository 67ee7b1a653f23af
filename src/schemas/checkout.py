from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .cards import StripeCardSchema
from .exapmles.checkout import (
    current_payment_data_schema_example,
    payment_class_list_schema_example,
    payment_data_validation_request_schema_example,
    payment_data_validation_response_schema_example
)


class PaymentClassListSchema(BaseModel):
    payment_classes: Dict[str, str]

    model_config = ConfigDict(
        json_schema_extra={
            "example": payment_class_list_schema_example
        }
    )


class PaymentDataValidationRequestSchema(BaseModel):
    """Payment fields posted by the checkout for one payment class."""
    payment_class: str = Field(alias="paymentClass")
    payment_data: Dict[str, Any] = Field(default_factory=dict, alias="paymentData")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": payment_data_validation_request_schema_example
        }
    )


class PaymentDataValidationResponseSchema(BaseModel):
    valid: bool
    missing_fields: List[str] = Field(default_factory=list, alias="missingFields")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": payment_data_validation_response_schema_example
        }
    )


class CurrentPaymentDataSchema(BaseModel):
    """Payment data the checkout preselects for the logged-in customer."""
    payment_class: str = Field(alias="paymentClass")
    card: Optional[StripeCardSchema] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": current_payment_data_schema_example
        }
    )
