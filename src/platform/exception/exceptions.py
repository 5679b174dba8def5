class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: str = 'ERROR'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    code = 'DOMAIN_ERROR'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationFailedError(DomainError):
    """Malformed or missing input, raised before any side effect"""

    code = 'VALIDATION_FAILED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    code = 'FORBIDDEN'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = 'NOT_FOUND'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = 'CONFLICT'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    code = 'UNAUTHENTICATED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class TransientError(CustomBaseError):
    """Infrastructure hiccup (timeout, aborted transaction); safe for the caller to retry"""

    code = 'TRANSIENT'

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class OperationTimeoutError(TransientError):
    code = 'TIMEOUT'


class InternalError(CustomBaseError):
    code = 'INTERNAL'

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
