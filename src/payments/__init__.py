"""Payments module for the Stripe payment service.

This module wires the shop to Stripe:
- StripeGatewayInterface: Abstract interface for the Stripe calls used by the shop
- StripeGateway: Stripe SDK implementation of the interface
- StripeCustomerContext: Per-request cache of the resolved Stripe customer
- CardService: Stored credit cards of the logged-in customer
- Refund helpers: minor unit conversion and the order comment block
- PaymentClassRegistry: Payment method classes published at startup
"""
