from pydantic import BaseModel, EmailStr, ConfigDict, field_validator

from .exapmles.accounts import (
    user_login_request_schema_example,
    user_login_response_schema_example
)


class UserLoginRequestSchema(BaseModel):
    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_login_request_schema_example
        }
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return value.lower()


class UserLoginResponseSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_login_response_schema_example
        }
    )
