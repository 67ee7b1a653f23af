import pytest
from httpx import AsyncClient, ASGITransport

from main import create_app
from payments.registry import (
    STRIPE_PAYMENT_METHOD_CLASS,
    STRIPE_PAYMENT_METHOD_KEY
)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_stripe_payment_class_registered(client):
    resp = await client.get("/api/v1/checkout/payment-classes/")
    assert resp.status_code == 200
    assert resp.json() == {
        "payment_classes": {
            STRIPE_PAYMENT_METHOD_KEY: STRIPE_PAYMENT_METHOD_CLASS
        }
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_no_payment_class_for_old_templates(settings):
    old_shop_settings = settings.model_copy(update={"SHOP_TEMPLATE_VERSION": 2})
    app = create_app(old_shop_settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        resp = await async_client.get("/api/v1/checkout/payment-classes/")

    assert resp.status_code == 200
    assert resp.json() == {"payment_classes": {}}


VALIDATE_URL = "/api/v1/checkout/payment-data/validate/"
PAYMENT_DATA_URL = "/api/v1/checkout/payment-data/{}/"


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payment_data",
    [
        {"stripeTransactionToken": "tok_visa"},
        {"stripeCardId": "card_test_00000001"},
        {"stripeTransactionToken": "", "stripeCardId": "card_test_00000001"},
    ]
)
async def test_validate_payment_data(client, payment_data):
    resp = await client.post(
        VALIDATE_URL,
        json={
            "paymentClass": STRIPE_PAYMENT_METHOD_KEY,
            "paymentData": payment_data
        }
    )
    assert resp.status_code == 200
    assert resp.json() == {"valid": True, "missingFields": []}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_validate_payment_data_missing_fields(client):
    resp = await client.post(
        VALIDATE_URL,
        json={"paymentClass": STRIPE_PAYMENT_METHOD_KEY}
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "valid": False,
        "missingFields": ["stripeTransactionToken", "stripeCardId"]
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_validate_unknown_payment_class(client):
    resp = await client.post(
        VALIDATE_URL,
        json={"paymentClass": "PaypalPaymentMethod", "paymentData": {}}
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == (
        "No payment class registered for 'PaypalPaymentMethod'"
    )


@pytest.mark.integration
@pytest.mark.asyncio
async def test_validate_payment_data_for_old_templates(settings):
    old_shop_settings = settings.model_copy(update={"SHOP_TEMPLATE_VERSION": 2})
    app = create_app(old_shop_settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        resp = await async_client.post(
            VALIDATE_URL,
            json={
                "paymentClass": STRIPE_PAYMENT_METHOD_KEY,
                "paymentData": {"stripeTransactionToken": "tok_visa"}
            }
        )

    assert resp.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_current_payment_data_is_default_card(
    client,
    stripe_customer_user,
    stripe_gateway_fake
):
    """Test that the checkout preselects the customer's default card."""
    stripe_customer = stripe_gateway_fake.customers[
        stripe_customer_user["stripe_customer_id"]
    ]

    resp = await client.get(
        PAYMENT_DATA_URL.format(STRIPE_PAYMENT_METHOD_KEY),
        headers=stripe_customer_user["headers"]
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["paymentClass"] == STRIPE_PAYMENT_METHOD_KEY
    assert data["card"]["id"] == stripe_customer.default_source
    assert data["card"]["last4"] == "4242"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_current_payment_data_without_stripe_customer(client, customer_user):
    resp = await client.get(
        PAYMENT_DATA_URL.format(STRIPE_PAYMENT_METHOD_KEY),
        headers=customer_user["headers"]
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "paymentClass": STRIPE_PAYMENT_METHOD_KEY,
        "card": None
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_current_payment_data_stripe_error(
    client,
    stripe_customer_user,
    stripe_gateway_fake
):
    stripe_gateway_fake.error_message = "API connection failed"

    resp = await client.get(
        PAYMENT_DATA_URL.format(STRIPE_PAYMENT_METHOD_KEY),
        headers=stripe_customer_user["headers"]
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == (
        "Failed to load payment data: API connection failed"
    )


@pytest.mark.integration
@pytest.mark.asyncio
async def test_current_payment_data_unknown_class(client, customer_user):
    resp = await client.get(
        PAYMENT_DATA_URL.format("PaypalPaymentMethod"),
        headers=customer_user["headers"]
    )
    assert resp.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_current_payment_data_requires_authentication(client):
    resp = await client.get(PAYMENT_DATA_URL.format(STRIPE_PAYMENT_METHOD_KEY))
    assert resp.status_code == 401
