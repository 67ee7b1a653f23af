import logging
from typing import List, Optional

from fastapi import APIRouter, Body, status, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config.dependencies import RoleChecker, get_stripe_gateway
from config.settings import BaseAppSettings, get_settings
from database import get_db
from database.models.accounts import UserGroupEnum
from database.models.orders import OrderModel
from exceptions.payments import PaymentError
from payments.interfaces import StripeGatewayInterface
from payments.refunds import (
    build_refund_comment,
    parse_amount,
    parse_order_id,
    parse_positions,
    to_minor_units
)
from schemas.refunds import (
    RefundRequestSchema,
    RefundResponseSchema,
    RefundLineItemSchema
)

logger = logging.getLogger(__name__)

router = APIRouter()

admin_only = RoleChecker([UserGroupEnum.ADMIN])


def refund_failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message}
    )


@router.post(
    "/refund/",
    response_model=RefundResponseSchema,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(admin_only)],
    summary="Refund order positions",
    description="Refund part of the Stripe charge of an order and log the "
                "refund in the order's internal comment.",
    responses={
        200: {
            "description": "Refund issued, new internal comment returned",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "internalComment": "\n------...\nStripe Rückerstattung "
                                           "(17.10.2026, 9:41:07)\nBetrag: 10,00 €\n..."
                    }
                }
            }
        },
        400: {
            "description": "Missing or invalid request parameter",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Required parameter \"orderId\" not found"
                    }
                }
            }
        },
        404: {
            "description": "Order not found or not paid with Stripe",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Order with id 57 has no Stripe charge"
                    }
                }
            }
        },
        500: {
            "description": "Stripe rejected the refund",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Refund amount ($20.00) is greater than "
                                   "unrefunded amount on charge ($10.00)"
                    }
                }
            }
        }
    }
)
async def refund_order(
    data: Optional[RefundRequestSchema] = Body(default=None),
    settings: BaseAppSettings = Depends(get_settings),
    gateway: StripeGatewayInterface = Depends(get_stripe_gateway),
    db: AsyncSession = Depends(get_db)
) -> RefundResponseSchema | JSONResponse:
    """Refund part of an order's Stripe charge.

    The refund is issued first; the comment is only written when Stripe
    accepted it. There is no compensation if saving the comment fails.

    Args:
        data (RefundRequestSchema): Order id, amount, positions and comment.
        settings (BaseAppSettings): Application settings.
        gateway (StripeGatewayInterface): Stripe gateway dependency.
        db (AsyncSession): Database session dependency.

    Returns:
        RefundResponseSchema: Success flag and the new internal comment.
    """
    data = data or RefundRequestSchema()
    if data.order_id is None:
        return refund_failure(
            status.HTTP_400_BAD_REQUEST,
            "Required parameter \"orderId\" not found"
        )
    order_id = parse_order_id(data.order_id)
    if order_id is None:
        return refund_failure(
            status.HTTP_400_BAD_REQUEST,
            "Required parameter \"orderId\" must be an integer"
        )
    amount = parse_amount(data.amount)
    if amount <= 0:
        return refund_failure(
            status.HTTP_400_BAD_REQUEST,
            "Required parameter \"amount\" must be greater zero"
        )
    if not data.positions:
        return refund_failure(
            status.HTTP_400_BAD_REQUEST,
            "Required parameter \"positions\" not found or empty"
        )
    try:
        positions = parse_positions(data.positions)
    except ValidationError:
        return refund_failure(
            status.HTTP_400_BAD_REQUEST,
            "Required parameter \"positions\" contains an invalid position"
        )
    comment = None if data.comment is None else str(data.comment)

    order = await db.get(OrderModel, order_id)
    if order is None:
        return refund_failure(
            status.HTTP_404_NOT_FOUND,
            f"Order with id {order_id} not found"
        )
    if order.transaction_id is None:
        return refund_failure(
            status.HTTP_404_NOT_FOUND,
            f"Order with id {order_id} has no Stripe charge"
        )

    try:
        refund = await gateway.refund_charge(
            order.transaction_id,
            to_minor_units(amount)
        )
    except PaymentError as e:
        return refund_failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    logger.info(
        "Refund %s of %s issued for order %s",
        refund.get("id"),
        amount,
        order.id
    )

    order.internal_comment = (order.internal_comment or "") + build_refund_comment(
        amount=amount,
        positions=positions,
        comment=comment,
        currency_symbol=settings.CURRENCY_SYMBOL
    )
    await db.commit()

    return RefundResponseSchema(
        success=True,
        internal_comment=order.internal_comment
    )


@router.get(
    "/orders/{order_id}/positions/",
    response_model=List[RefundLineItemSchema],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(admin_only)],
    summary="Refundable positions of an order",
    description="Rows of the refund grid: the order positions with unit "
                "price and line total.",
    responses={
        404: {
            "description": "Order not found",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Order with id 57 not found"
                    }
                }
            }
        }
    }
)
async def get_refund_positions(
    order_id: int,
    db: AsyncSession = Depends(get_db)
) -> List[RefundLineItemSchema]:
    stmt = (
        select(OrderModel)
        .options(selectinload(OrderModel.details))
        .where(OrderModel.id == order_id)
    )
    result = await db.execute(stmt)
    order = result.scalars().first()

    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id {order_id} not found"
        )

    return [
        RefundLineItemSchema.model_validate(detail) for detail in order.details
    ]
