"""Custom exceptions for the Stripe payment service.

- Security exceptions for authentication errors
- Payment exceptions for Stripe gateway and refund errors
"""
