from decimal import Decimal

import pytest
from pydantic import ValidationError

from payments.refunds import parse_amount, parse_order_id, parse_positions
from schemas.cards import SaveCardRequestSchema, StripeCustomerSchema
from schemas.refunds import (
    RefundPositionSchema,
    RefundRequestSchema,
    RefundResponseSchema
)


@pytest.mark.validation
class TestRefundRequestValidation:
    """Test parsing of the backend refund request."""

    def test_valid_request(self):
        request = RefundRequestSchema.model_validate(
            {
                "orderId": 57,
                "amount": "10.00",
                "comment": "Kulanz",
                "positions": [
                    {
                        "articleNumber": "SW10001",
                        "articleName": "Espresso cup",
                        "quantity": 2,
                        "price": "5.00",
                        "total": "10.00"
                    }
                ]
            }
        )
        assert parse_order_id(request.order_id) == 57
        assert parse_amount(request.amount) == Decimal("10.00")
        positions = parse_positions(request.positions)
        assert positions[0].article_number == "SW10001"
        assert positions[0].total == Decimal("10.00")

    def test_missing_fields_are_accepted(self):
        """Presence checks happen in the refund action."""
        request = RefundRequestSchema.model_validate({})
        assert request.order_id is None
        assert request.amount is None
        assert request.positions is None

    def test_malformed_values_are_accepted(self):
        request = RefundRequestSchema.model_validate(
            {"orderId": "abc", "amount": "ten", "positions": "SW10001"}
        )
        assert request.order_id == "abc"
        assert request.amount == "ten"

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10.00", Decimal("10.00")),
            (12.5, Decimal("12.5")),
            (3, Decimal("3")),
            (" 7.25 ", Decimal("7.25")),
            ("ten", Decimal(0)),
            ("", Decimal(0)),
            ("Infinity", Decimal(0)),
            (None, Decimal(0)),
            (True, Decimal(0)),
            ([1], Decimal(0)),
        ]
    )
    def test_parse_amount(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (57, 57),
            ("57", 57),
            (57.0, 57),
            (57.5, None),
            ("abc", None),
            ("-1", None),
            (False, None),
            (None, None),
        ]
    )
    def test_parse_order_id(self, value, expected):
        assert parse_order_id(value) == expected

    def test_parse_positions_rejects_incomplete_position(self):
        with pytest.raises(ValidationError):
            parse_positions([{"quantity": 1}])

    def test_position_requires_article_number(self):
        with pytest.raises(ValidationError):
            RefundPositionSchema.model_validate(
                {"quantity": 1, "price": "1.00", "total": "1.00"}
            )

    def test_response_uses_camel_case(self):
        response = RefundResponseSchema(success=True, internal_comment="X")
        assert response.model_dump(by_alias=True, exclude_none=True) == {
            "success": True,
            "internalComment": "X"
        }


@pytest.mark.validation
class TestCardValidation:
    """Test card schemas."""

    def test_empty_token(self):
        with pytest.raises(ValidationError):
            SaveCardRequestSchema(token="")

    def test_customer_defaults(self):
        customer = StripeCustomerSchema(id="cus_123")
        assert customer.deleted is False
        assert customer.sources == []
        assert customer.default_source is None
