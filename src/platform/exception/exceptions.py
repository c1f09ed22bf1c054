from typing import Iterable


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidArgumentError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InsufficientStockError(DomainError):
    def __init__(self, *, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f'Insufficient stock for product "{product_name}". '
            f'Available: {available}, Requested: {requested}',
            400,
        )


class InvalidTransitionError(DomainError):
    def __init__(self, *, current: str, requested: str, allowed: Iterable[str]) -> None:
        self.current = current
        self.requested = requested
        self.allowed = tuple(allowed)
        super().__init__(
            f'Invalid status transition from "{current}" to "{requested}". '
            f'Allowed transitions: {", ".join(self.allowed) or "none"}',
            400,
        )


class InvalidStateError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class InternalError(CustomBaseError):
    """Opaque failure surfaced to callers; the real cause is only in the logs"""

    DEFAULT_MESSAGE = 'Unexpected error occurred. Please check server logs'

    def __init__(self, message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(message, 500)
