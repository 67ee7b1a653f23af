from typing import Dict, Any

stripe_card_schema_example: Dict[str, Any] = {
    "id": "card_16xHq22eZvKYlo2C8mBb1GtY",
    "name": "Max Mustermann",
    "brand": "Visa",
    "last4": "4242",
    "exp_month": 12,
    "exp_year": 2027
}

card_list_schema_example: Dict[str, Any] = {
    "cards": [
        {
            "id": "card_16xHq22eZvKYlo2C8mBb1GtY",
            "name": "Max Mustermann",
            "brand": "Visa",
            "last4": "4242",
            "exp_month": 12,
            "exp_year": 2027
        },
        {
            "id": "card_16xHr82eZvKYlo2CPh7sK4wE",
            "name": "Max Mustermann",
            "brand": "MasterCard",
            "last4": "4444",
            "exp_month": 3,
            "exp_year": 2026
        }
    ],
    "default_card_id": "card_16xHq22eZvKYlo2C8mBb1GtY"
}

save_card_request_schema_example: Dict[str, Any] = {
    "token": "tok_16xHq22eZvKYlo2CGcYKmQhL"
}
