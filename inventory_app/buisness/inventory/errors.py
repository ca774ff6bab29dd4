"""
Domain exceptions for inventory business logic

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business layer and mapped to HTTP statuses by the routes.
"""


class InventoryDomainError(Exception):
    """Base exception for all inventory domain errors"""
    status_code = 500


class NotFoundError(InventoryDomainError):
    """Raised when an entity cannot be found by id or key"""
    status_code = 404


class InvalidArgumentError(InventoryDomainError):
    """Raised for bad input such as negative stock or a malformed enum value"""
    status_code = 400


class OutOfStockError(InventoryDomainError):
    """Raised when a stock reduction asks for more than is available"""
    status_code = 400

    def __init__(self, product_name, available, requested, order_number=None):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        self.order_number = order_number
        message = (
            f"Insufficient stock for product: {product_name}. "
            f"Available: {available}, Requested: {requested}"
        )
        if order_number:
            message = f"Cannot process order {order_number}: {message}"
        super().__init__(message)


class InvalidStateError(InventoryDomainError):
    """Raised when an order status transition is not allowed"""
    status_code = 400


class ConflictError(InventoryDomainError):
    """Raised on duplicate unique keys or deletes blocked by referencing rows"""
    status_code = 409


class UnauthorizedError(InventoryDomainError):
    """Raised when credentials or a bearer token are missing or invalid"""
    status_code = 401
