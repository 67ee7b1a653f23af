from typing import Dict, Any

payment_class_list_schema_example: Dict[str, Any] = {
    "payment_classes": {
        "StripePaymentMethod": "payments.methods.StripePaymentMethod"
    }
}

payment_data_validation_request_schema_example: Dict[str, Any] = {
    "paymentClass": "StripePaymentMethod",
    "paymentData": {
        "stripeTransactionToken": "tok_16xHq22eZvKYlo2CGcYKmQhL"
    }
}

payment_data_validation_response_schema_example: Dict[str, Any] = {
    "valid": False,
    "missingFields": ["stripeTransactionToken", "stripeCardId"]
}

current_payment_data_schema_example: Dict[str, Any] = {
    "paymentClass": "StripePaymentMethod",
    "card": {
        "id": "card_16xHq22eZvKYlo2C8mBb1GtY",
        "name": "Max Mustermann",
        "brand": "Visa",
        "last4": "4242",
        "exp_month": 12,
        "exp_year": 2027
    }
}
