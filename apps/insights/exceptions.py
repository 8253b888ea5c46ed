"""
Domain exceptions for insights app.

AI gateway errors map one-to-one onto the HTTP status the client sees.
"""


class InsightsServiceError(Exception):
    """Base exception for insights service errors."""
    pass


class AIGatewayError(InsightsServiceError):
    """The AI gateway failed or returned an unusable answer."""
    pass


class AIGatewayNotConfiguredError(AIGatewayError):
    """Raised when AI_GATEWAY_API_KEY is empty."""
    pass


class AIRateLimitError(AIGatewayError):
    """Gateway answered 429."""
    pass


class AICreditsExhaustedError(AIGatewayError):
    """Gateway answered 402."""
    pass


class InvalidReportTypeError(InsightsServiceError):
    pass
