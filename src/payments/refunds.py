from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional

from pydantic import TypeAdapter

from schemas.refunds import RefundPositionSchema

COMMENT_SEPARATOR = "-" * 62

_SEPARATOR_SWAP = str.maketrans({",": ".", ".": ","})

_positions_adapter = TypeAdapter(List[RefundPositionSchema])


def to_minor_units(amount: Decimal) -> int:
    """Convert a major currency amount to Stripe minor units.

    The value is truncated, not rounded: ``12.345`` becomes ``1234``.
    Callers are expected to send amounts already quantized to cents.
    """
    return int(Decimal(amount) * 100)


def parse_amount(value: Any) -> Decimal:
    """Read the refund amount from the request.

    Anything that is not a finite number counts as zero, so it fails the
    "greater zero" check instead of being rejected as malformed.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def parse_order_id(value: Any) -> Optional[int]:
    """Return the order id as an integer, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_positions(value: Any) -> List[RefundPositionSchema]:
    """Validate the refunded positions sent by the backend grid.

    Raises:
        pydantic.ValidationError: If the value is not a list of positions.
    """
    return _positions_adapter.validate_python(value)


def format_amount(amount: Decimal) -> str:
    """Format an amount the German way, e.g. ``1.234,50``."""
    quantized = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{quantized:,.2f}".translate(_SEPARATOR_SWAP)


def build_refund_comment(
    amount: Decimal,
    positions: Iterable[RefundPositionSchema],
    comment: Optional[str] = None,
    refunded_at: Optional[datetime] = None,
    currency_symbol: str = "€"
) -> str:
    """Build the block appended to an order's internal comment on refund.

    Args:
        amount (Decimal): Refunded amount in major units.
        positions (Iterable[RefundPositionSchema]): Refunded positions, one
            line each, in the given order.
        comment (Optional[str]): Free text entered by the backend user.
        refunded_at (Optional[datetime]): Time of the refund, now if omitted.
        currency_symbol (str): Symbol printed after every amount.

    Returns:
        str: The comment block, framed by separator lines.
    """
    refunded_at = refunded_at or datetime.now()
    timestamp = f"{refunded_at:%d.%m.%Y}, {refunded_at.hour}:{refunded_at:%M:%S}"

    lines = [
        "",
        COMMENT_SEPARATOR,
        f"Stripe Rückerstattung ({timestamp})",
        f"Betrag: {format_amount(amount)} {currency_symbol}",
        f"Kommentar: {comment or ''}",
        "Positionen:",
    ]
    for position in positions:
        lines.append(
            f" - {position.quantity} x {position.article_number}, "
            f"je {format_amount(position.price)} {currency_symbol}, "
            f"Gesamt: {format_amount(position.total)} {currency_symbol}"
        )
    lines.append(COMMENT_SEPARATOR)

    return "\n".join(lines) + "\n"
