"""Application-level exceptions.

Per-record data problems met during a replay are never raised; they are
reported as replay issues. The exceptions here are for caller mistakes
that must surface immediately.
"""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ConfigurationError(AppError):
    """Raised when required reference data or settings are absent."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")


class MissingExchangeRateError(AppError):
    """Raised when an explicit currency conversion has no rate to use."""

    def __init__(self, currency: str):
        super().__init__(
            f"No exchange rate supplied for {currency}",
            code="MISSING_FX_RATE",
        )
        self.currency = currency
