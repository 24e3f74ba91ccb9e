from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal, getcontext, InvalidOperation

from currency_helper import config
from currency_helper.domain.monetary.conversion_rate_registry import ConversionRateRegistry, default_registry
from currency_helper.domain.monetary.errors import InvalidOperandError, UnknownConversionRateError
from currency_helper.utils.decimal_tools import DecimalLike, Scalar, as_decimal, is_scalar

logger = logging.getLogger(__name__)

# Set high precision for financial calculations
getcontext().prec = config.DECIMAL_PRECISION


class Money:
    """Represents a monetary amount with currency.

    Uses Python's Decimal for precision arithmetic. The currency is a free-form
    string ("EUR", "USD", "Bitcoin", ...) compared by exact match.

    When an operation mixes two currencies, the right operand is first
    converted into the currency of the left operand using the conversion rates
    of the right operand's registry. The result always has the currency and
    the registry of the left operand.

    Money is not hashable: equality between different currencies depends on
    conversion rates, which can change at any time.

    Examples:
        >>> Money.conversion_rates("EUR", {"USD": 1.11, "Bitcoin": 0.0047})
        >>> Money(50, "EUR").convert_to("USD").display()
        '55.50 USD'
        >>> (Money(50, "EUR") + Money(20, "USD")).display()
        '68.02 EUR'
    """

    def __init__(self, amount: DecimalLike, currency: str, registry: ConversionRateRegistry | None = None):
        """Initialize Money with amount and currency.

        Args:
            amount: Numeric amount (Decimal-like scalar).
            currency (str): Currency identifier, stored verbatim.
            registry (ConversionRateRegistry | None): Conversion rates used by this
                value. Defaults to the process-wide `default_registry`.

        Raises:
            ValueError: If amount cannot be converted to Decimal.
            TypeError: If currency is not a string.
        """
        # Raise: currency must be a string
        if not isinstance(currency, str):
            raise TypeError(f"$currency must be a string, but provided value is: {currency!r}")

        # Raise: $amount must be convertible to Decimal
        try:
            decimal_amount = as_decimal(amount)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Cannot init `Money` because $amount ({amount!r}) cannot be converted to Decimal") from e

        # Raise: amount must be a finite number
        if not decimal_amount.is_finite():
            raise ValueError(f"Cannot init `Money` because $amount ({amount!r}) is not a finite number")

        self._amount = decimal_amount
        self._currency = currency
        self._registry = registry if registry is not None else default_registry

    @property
    def amount(self) -> Decimal:
        """Get the decimal amount."""
        return self._amount

    @property
    def currency(self) -> str:
        """Get the currency."""
        return self._currency

    @property
    def registry(self) -> ConversionRateRegistry:
        """Get the conversion rates used by this value."""
        return self._registry

    @classmethod
    def conversion_rates(cls, base_currency: str, rates: Mapping[str, DecimalLike]) -> None:
        """Configure rates from $base_currency in the process-wide `default_registry`.

        See `ConversionRateRegistry.set_rates` for how reciprocal rates are derived.
        """
        default_registry.set_rates(base_currency, rates)

    def _new(self, amount: Decimal, currency: str | None = None) -> Money:
        return self.__class__(amount, self._currency if currency is None else currency, registry=self._registry)

    def display(self) -> str:
        """Return string like '50.00 EUR' with the amount fixed to two decimal places.

        Only the rendering goes through float formatting; the amount itself stays exact.
        Decimal ties such as 0.235 have no exact binary form and show as "0.23",
        while exact binary ties such as 0.375 round up to "0.38".
        """
        return f"{float(self._amount):.{config.DISPLAY_DECIMAL_PLACES}f} {self._currency}"

    # region Conversion

    def convert_to(self, target_currency: str) -> Money:
        """Convert this Money into $target_currency.

        The rate is always looked up in the registry, also when $target_currency
        is the currency of this Money; an identity conversion needs an identity rate.

        Args:
            target_currency (str): Currency to convert into.

        Returns:
            Money: New instance with the converted amount in $target_currency.

        Raises:
            UnknownConversionRateError: If no rate is configured for the pair.
        """
        factor = self._registry.lookup(self._currency, target_currency)

        # Raise: conversion needs a configured rate for the pair
        if factor is None:
            raise UnknownConversionRateError(self._currency, target_currency)

        result = self._new(self._amount * factor, target_currency)
        logger.debug(f"Converted {self!r} to {result!r} at rate {factor}")
        return result

    def _amount_in_own_currency(self, other: Money) -> Decimal:
        """Return amount of $other expressed in the currency of this Money."""
        if other.currency == self._currency:
            return other.amount
        return other.convert_to(self._currency).amount

    def _require_money(self, other: object, operation: str) -> Money:
        # Raise: operand must be a Money object
        if not isinstance(other, Money):
            raise InvalidOperandError(operation, other, "operand must be a Money object")
        return other

    # endregion

    # region Arithmetic

    def add(self, other: Money) -> Money:
        """Return the sum of two Money objects in the currency of this Money.

        Raises:
            InvalidOperandError: If $other is not a Money object.
            UnknownConversionRateError: If $other cannot be converted.
        """
        other = self._require_money(other, "add")
        return self._new(self._amount + self._amount_in_own_currency(other))

    def subtract(self, other: Money) -> Money:
        """Return the difference of two Money objects in the currency of this Money.

        Raises:
            InvalidOperandError: If $other is not a Money object.
            UnknownConversionRateError: If $other cannot be converted.
        """
        other = self._require_money(other, "subtract")
        return self._new(self._amount - self._amount_in_own_currency(other))

    def multiply(self, value: Scalar | Money) -> Money:
        """Multiply by a number or by the amount of another Money object.

        Args:
            value: Number (int, float, Decimal) or Money. A Money in a different
                currency is converted into the currency of this Money first.

        Returns:
            Money: New instance in the currency of this Money.

        Raises:
            InvalidOperandError: If $value is neither a number nor a Money object.
            UnknownConversionRateError: If $value is Money that cannot be converted.
        """
        if is_scalar(value):
            return self._new(self._amount * as_decimal(value))

        if isinstance(value, Money):
            return self._new(self._amount * self._amount_in_own_currency(value))

        raise InvalidOperandError("multiply", value, "operand must be a number or a Money object")

    def divide(self, value: Scalar | Money) -> Money:
        """Divide by a number or by the amount of another Money object.

        Args:
            value: Non-zero number (int, float, Decimal) or Money with non-zero
                amount. A Money in a different currency is converted into the
                currency of this Money first.

        Returns:
            Money: New instance in the currency of this Money.

        Raises:
            InvalidOperandError: If $value is zero, has zero amount, or is neither
                a number nor a Money object.
            UnknownConversionRateError: If $value is Money that cannot be converted.
        """
        if is_scalar(value):
            divisor = as_decimal(value)
            # Raise: cannot divide by zero
            if divisor == 0:
                raise InvalidOperandError("divide", value, "division by zero")
            return self._new(self._amount / divisor)

        if isinstance(value, Money):
            # Raise: cannot divide by zero Money (checked before conversion too)
            if value.amount == 0:
                raise InvalidOperandError("divide", value, "division by zero Money")
            divisor = self._amount_in_own_currency(value)
            if divisor == 0:
                raise InvalidOperandError("divide", value, "division by zero Money after conversion")
            return self._new(self._amount / divisor)

        raise InvalidOperandError("divide", value, "operand must be a number or a Money object")

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        return self.multiply(other)

    def __truediv__(self, other):
        return self.divide(other)

    def __neg__(self):
        return self._new(-self._amount)

    def __pos__(self):
        return self._new(self._amount)

    def __abs__(self):
        return self._new(abs(self._amount))

    # endregion

    # region Comparison

    def greater_than(self, other: Money) -> bool:
        """Check if this Money is greater than $other after converting $other into this currency."""
        other = self._require_money(other, "greater_than")
        return self._amount > self._amount_in_own_currency(other)

    def less_than(self, other: Money) -> bool:
        """Check if this Money is less than $other after converting $other into this currency."""
        other = self._require_money(other, "less_than")
        return self._amount < self._amount_in_own_currency(other)

    def equals(self, other: Money) -> bool:
        """Check if this Money equals $other after converting $other into this currency.

        Equality across currencies needs a conversion rate: comparing two Money
        objects whose currencies have no rate raises instead of returning False.

        Raises:
            InvalidOperandError: If $other is not a Money object.
            UnknownConversionRateError: If $other cannot be converted.
        """
        other = self._require_money(other, "equals")
        return self._amount == self._amount_in_own_currency(other)

    def __eq__(self, other) -> bool:
        """Check equality with another Money object (converting its currency if needed)."""
        if not isinstance(other, Money):
            return False
        return self.equals(other)

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.greater_than(other)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.less_than(other)

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._amount >= self._amount_in_own_currency(other)

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._amount <= self._amount_in_own_currency(other)

    # Equality depends on mutable conversion rates
    __hash__ = None

    # endregion

    # String representations
    def __str__(self) -> str:
        """Return string like '50.00 EUR'."""
        return self.display()

    def __repr__(self) -> str:
        """Return string like 'Money(50, EUR)'."""
        return f"{self.__class__.__name__}({self._amount}, {self._currency})"
