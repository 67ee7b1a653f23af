"""Database module for the Stripe payment service.

This module provides database configuration and session management for the
application. It supports different database backends based on the environment:

- Development/production: PostgreSQL with asyncpg
- Testing: SQLite with aiosqlite

The module exports:
- get_db: Dependency injection function for database sessions
- AsyncSessionLocal: Session factory for async database operations
- All database models
"""
import os

from database.models.accounts import (
    UserGroupEnum,
    AccountModeEnum,
    UserGroupModel,
    UserModel
)
from database.models.base import Base
from database.models.customers import (
    CustomerBillingModel,
    CustomerAttributeModel
)
from database.models.orders import (
    OrderStatusEnum,
    OrderModel,
    OrderDetailModel
)
from database.session_sqlite import reset_sqlite_database as reset_database

environment = os.getenv("ENVIRONMENT", "developing")

if environment == "developing":
    from database.session_postgresql import (
        get_postgresql_db as get_db,
        AsyncPostgresqlSessionLocal as AsyncSessionLocal,
        get_postgresql_db_contextmanager as get_db_contextmanager
    )
else:
    from .session_sqlite import (
        get_sqlite_db as get_db,
        AsyncSQLiteSessionLocal as AsyncSessionLocal,
        get_sqlite_db_contextmanager as get_db_contextmanager
    )
