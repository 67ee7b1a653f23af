"""Configuration module for the Stripe payment service.

This module contains the configuration settings and dependency injection
functions for the application. It provides:

- Application settings management with environment variable support
- Dependency injection functions for FastAPI
- JWT access token configuration
- Stripe gateway configuration and the per-request customer context
- Role-based access control

The module uses Pydantic settings for type-safe configuration management
and automatic environment variable loading.
"""
