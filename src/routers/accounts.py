import logging

from fastapi import APIRouter, status, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import ACCESS_TOKEN_COOKIE, get_jwt_manager
from config.settings import BaseAppSettings, get_settings
from database import get_db
from database.models.accounts import UserModel
from schemas.accounts import UserLoginRequestSchema, UserLoginResponseSchema
from security.interfaces import JWTManagerInterface

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login/",
    response_model=UserLoginResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate a customer or backend user and return a JWT "
                "access token identifying the session. The token is also set "
                "as the `access_token` cookie used by the account pages.",
    responses={
        200: {
            "description": "User successfully authenticated",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer"
                    }
                }
            }
        },
        401: {
            "description": "Invalid credentials",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Invalid email or password"
                    }
                }
            }
        },
        403: {
            "description": "Account not activated",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "User account is not activated."
                    }
                }
            }
        }
    },
)
async def login_user(
    data: UserLoginRequestSchema,
    response: Response,
    settings: BaseAppSettings = Depends(get_settings),
    jwt_manager: JWTManagerInterface = Depends(get_jwt_manager),
    db: AsyncSession = Depends(get_db)
) -> UserLoginResponseSchema:
    """Authenticate user and return a JWT access token.

    Args:
        data: Login credentials (email, password).
        response: Response the session cookie is set on.
        settings: Application settings, for the cookie lifetime.
        jwt_manager: JWT manager service.
        db: Database session.

    Returns:
        UserLoginResponseSchema: JWT access token for the user.
    """
    stmt = select(UserModel).where(UserModel.email == data.email)
    result = await db.execute(stmt)
    user: UserModel | None = result.scalars().first()

    if not user or not user.verify_password(data.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is not activated."
        )

    access_token = jwt_manager.create_access_token({"user_id": user.id})
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax"
    )

    logger.info("User %s logged in", user.id)
    return UserLoginResponseSchema(access_token=access_token)
