"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when an activation request is malformed or missing fields."""

    def __init__(self, message: str = "Invalid activation request", field: str = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


CONFLICT_MESSAGE = (
    "Registration error: multiple devices are already registered with this serial number"
)


class ActivationException(DomainException):
    """Base exception for activation-related errors."""

    pass


class ActivationConflictError(ActivationException):
    """Raised when every device slot of a serial is held by other devices."""

    def __init__(self, message: str = CONFLICT_MESSAGE):
        super().__init__(message, code="ACTIVATION_CONFLICT")


class BindingNotFoundError(ActivationException):
    """Raised when a binding expected to exist is missing."""

    def __init__(self, message: str = "Binding not found"):
        super().__init__(message, code="BINDING_NOT_FOUND")


class DuplicateBindingError(ActivationException):
    """Raised when a binding for the same serial and device already exists."""

    def __init__(self, message: str = "Device is already bound to this serial"):
        super().__init__(message, code="DUPLICATE_BINDING")


class StoreError(DomainException):
    """Raised when the binding store or audit store cannot complete an operation."""

    def __init__(self, message: str = "Store unavailable", code: str = "STORE_ERROR"):
        super().__init__(message, code=code)


class StoreTimeoutError(StoreError):
    """Raised when a store call exceeds its time budget."""

    def __init__(self, message: str = "Store operation timed out"):
        super().__init__(message, code="STORE_TIMEOUT")
