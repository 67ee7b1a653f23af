from typing import Dict, Any

refund_position_schema_example: Dict[str, Any] = {
    "quantity": 2,
    "articleNumber": "SW10001",
    "price": "5.00",
    "total": "10.00"
}

refund_request_schema_example: Dict[str, Any] = {
    "orderId": 57,
    "amount": "10.00",
    "positions": [
        {
            "quantity": 2,
            "articleNumber": "SW10001",
            "price": "5.00",
            "total": "10.00"
        }
    ],
    "comment": "Damaged on delivery"
}

refund_response_schema_example: Dict[str, Any] = {
    "success": True,
    "internalComment": (
        "\n--------------------------------------------------------------\n"
        "Stripe Rückerstattung (17.10.2026, 9:41:07)\n"
        "Betrag: 10,00 €\n"
        "Kommentar: Damaged on delivery\n"
        "Positionen:\n"
        " - 2 x SW10001, je 5,00 €, Gesamt: 10,00 €\n"
        "--------------------------------------------------------------\n"
    )
}

refund_line_item_schema_example: Dict[str, Any] = {
    "id": 113,
    "articleNumber": "SW10001",
    "articleName": "Espresso cup",
    "quantity": 2,
    "price": "5.00",
    "total": "10.00"
}
