"""Security module for the Stripe payment service.

This module provides the session layer of the application: JWT access
tokens identifying the logged-in customer and bcrypt password hashing
for the login endpoint.
"""
