class PaymentError(Exception):
    """Base exception class for payment-related errors.

    This is the parent class for all payment exceptions in the application.
    """
    pass


class PaymentGatewayError(PaymentError):
    """Exception raised when a call to the Stripe API fails.

    The message is the one from the Stripe error body when the API returned
    one, otherwise the text of the underlying exception.
    """
    pass


class PaymentClassNotFoundError(PaymentError):
    """Exception raised when a payment class key is not registered."""
    pass
