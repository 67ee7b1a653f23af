from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import (
    APIKeyCookie,
    HTTPBearer,
    HTTPAuthorizationCredentials
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config.settings import BaseAppSettings, get_settings
from database import get_db
from database.models.accounts import UserModel, UserGroupEnum
from exceptions.security import BaseSecurityError, TokenExpiredError
from payments.cards import CardService
from payments.context import StripeCustomerContext, load_customer_context
from payments.interfaces import StripeGatewayInterface
from payments.registry import PaymentClassRegistry
from payments.stripe import StripeGateway
from security.interfaces import JWTManagerInterface
from security.manager import JWTManager

ACCESS_TOKEN_COOKIE = "access_token"

bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=ACCESS_TOKEN_COOKIE, auto_error=False)


def get_jwt_manager(
    settings: BaseAppSettings = Depends(get_settings)
) -> JWTManagerInterface:
    """Get JWT manager instance with application settings.

    Args:
        settings (BaseAppSettings): Application settings containing JWT configuration.

    Returns:
        JWTManagerInterface: Configured JWT manager instance.
    """
    return JWTManager(
        access_secret_key=settings.SECRET_KEY_ACCESS,
        access_expires_delta=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_SIGNING_ALGORITHM
    )


async def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Depends(cookie_scheme)
) -> str:
    """Extract the JWT token of the session.

    The Authorization header is preferred. Browser requests, such as the
    delete form of the credit card page and the redirect that follows it,
    carry the token in the cookie set at login instead.

    Raises:
        HTTPException: If neither is present (401 Unauthorized).
    """
    if credentials:
        return credentials.credentials
    if cookie_token:
        return cookie_token
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    token: str = Depends(get_token),
    jwt_manager: JWTManagerInterface = Depends(get_jwt_manager)
) -> int:
    """Get the session user id from the JWT token.

    Args:
        token (str): The JWT token to decode.
        jwt_manager (JWTManagerInterface): JWT manager for token decoding.

    Returns:
        int: The user ID from the decoded token.

    Raises:
        HTTPException: If token is expired or invalid (401 Unauthorized).
    """
    try:
        decoded_token = jwt_manager.decode_access_token(token=token)
        user_id = decoded_token.get("user_id")
        if user_id is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token format",
                headers={"WWW-Authenticate": "Bearer"},
            )
    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except BaseSecurityError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db)
) -> UserModel:
    """Get the current authenticated user with its group.

    Raises:
        HTTPException: If user is not found (401 Unauthorized).
    """
    query = (
        select(UserModel)
        .options(selectinload(UserModel.group))
        .where(UserModel.id == user_id)
    )
    result = await session.execute(query)
    user = result.scalars().first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


class RoleChecker:
    """Role-based access control checker.

    This class provides role-based authorization by checking if the current
    user belongs to one of the allowed user groups.
    """

    def __init__(self, allowed_groups: list[UserGroupEnum]):
        """Initialize the role checker with allowed groups.

        Args:
            allowed_groups (list[UserGroupEnum]): List of user groups that are
                allowed to access the protected resource.
        """
        self.allowed_groups = allowed_groups

    def __call__(self, user: UserModel = Depends(get_current_user)):
        """Check if the current user has the required role.

        Raises:
            HTTPException: If user doesn't have required privileges (403 Forbidden).
        """
        if not any(user.has_group(group) for group in self.allowed_groups):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="The user does not have privileges to access this resource."
            )


def get_stripe_gateway(
    settings: BaseAppSettings = Depends(get_settings)
) -> StripeGatewayInterface:
    """Get the Stripe gateway configured with the plugin's API credentials.

    Args:
        settings (BaseAppSettings): Application settings containing Stripe configuration.

    Returns:
        StripeGatewayInterface: Configured Stripe gateway instance.
    """
    return StripeGateway(
        secret_key=settings.STRIPE_SECRET_KEY,
        api_version=settings.STRIPE_API_VERSION
    )


async def get_customer_context(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> StripeCustomerContext:
    """Create the per-request context of the logged-in customer.

    A new context is built for every request, so the memoized Stripe
    customer never outlives it.
    """
    return await load_customer_context(db, user_id)


def get_card_service(
    gateway: StripeGatewayInterface = Depends(get_stripe_gateway),
    db: AsyncSession = Depends(get_db)
) -> CardService:
    return CardService(gateway=gateway, db=db)


def get_payment_class_registry(request: Request) -> PaymentClassRegistry:
    """Return the registry populated by ``create_app``."""
    registry: Optional[PaymentClassRegistry] = getattr(
        request.app.state, "payment_classes", None
    )
    if registry is None:
        registry = PaymentClassRegistry()
    return registry
