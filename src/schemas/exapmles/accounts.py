from typing import Dict, Any

user_login_request_schema_example: Dict[str, Any] = {
    "email": "customer@example.com",
    "password": "StrongPass123!"
}

user_login_response_schema_example: Dict[str, Any] = {
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_type": "bearer"
}
