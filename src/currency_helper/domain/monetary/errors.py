"""Errors raised by monetary operations."""


class MoneyError(Exception):
    """Base class for all errors raised by `Money` and its conversion registry."""


class UnknownConversionRateError(MoneyError, LookupError):
    """Raised when no conversion rate is configured for the requested currency pair."""

    def __init__(self, source: str, target: str):
        self.source = source
        self.target = target
        super().__init__(f"No conversion rate is configured from '{source}' to '{target}'")


class InvalidOperandError(MoneyError, ValueError):
    """Raised when an arithmetic operation receives an operand it cannot use.

    This covers operands that are neither a number nor a `Money` and division by zero.
    """

    def __init__(self, operation: str, operand: object, reason: str | None = None):
        self.operation = operation
        self.operand = operand
        self.reason = reason

        message = f"Cannot call `{operation}` with operand {operand!r}"
        if reason:
            message += f" - {reason}"

        super().__init__(message)
