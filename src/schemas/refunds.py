from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .exapmles.refunds import (
    refund_position_schema_example,
    refund_request_schema_example,
    refund_response_schema_example,
    refund_line_item_schema_example
)


class RefundPositionSchema(BaseModel):
    """An order position selected for refund in the backend grid."""
    id: Optional[int] = None
    article_number: str = Field(alias="articleNumber")
    article_name: Optional[str] = Field(default=None, alias="articleName")
    quantity: int
    price: Decimal
    total: Decimal

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": refund_position_schema_example
        }
    )


class RefundRequestSchema(BaseModel):
    """Body of the backend refund action.

    Values are taken as sent. Presence and type checks happen in the
    action itself, so that every bad parameter is answered with a 400
    ``{"success": false, "message": ...}`` body.
    """
    order_id: Any = Field(default=None, alias="orderId")
    amount: Any = None
    positions: Any = None
    comment: Any = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": refund_request_schema_example
        }
    )


class RefundResponseSchema(BaseModel):
    success: bool
    internal_comment: Optional[str] = Field(
        default=None,
        alias="internalComment"
    )
    message: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": refund_response_schema_example
        }
    )


class RefundLineItemSchema(BaseModel):
    """Row of the backend refund grid, projected from an order position."""
    id: int
    article_number: str = Field(alias="articleNumber")
    article_name: str = Field(alias="articleName")
    quantity: int
    price: Decimal
    total: Decimal

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": refund_line_item_schema_example
        }
    )
