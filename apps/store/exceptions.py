"""Domain exceptions for store app."""


class StoreServiceError(Exception):
    """Base exception for store service errors."""
    pass


class EmptyOrderError(StoreServiceError):
    pass


class ProductUnavailableError(StoreServiceError):
    """Raised when a product is inactive or belongs to another school."""
    pass


class InsufficientStockError(StoreServiceError):
    pass


class InvalidQuantityError(StoreServiceError):
    pass


class OrderNotPendingError(StoreServiceError):
    pass
