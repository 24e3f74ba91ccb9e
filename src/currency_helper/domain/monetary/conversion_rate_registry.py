from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from threading import Lock

from currency_helper.utils.decimal_tools import DecimalLike, as_decimal

logger = logging.getLogger(__name__)


class ConversionRateRegistry:
    """Table of conversion rates between currencies.

    Rates are kept per base currency as a forward table of multipliers, so that
    `amount_in_dest = amount_in_base * rate[base][dest]`.

    Configuring a base currency also stores the reciprocal rate under each
    destination currency, which makes conversion back to the base currency
    possible without configuring it explicitly. Rates are never chained:
    converting A -> C needs a direct A -> C entry (or its reciprocal), having
    A -> B and B -> C is not enough.

    Attributes:
        base_currencies (list[str]): Currencies that have a rate table.

    Thread Safety:
        Updates and lookups are serialized by an internal lock.
    """

    def __init__(self):
        self._rates: dict[str, dict[str, Decimal]] = {}
        self._lock = Lock()

    def set_rates(self, base_currency: str, rates: Mapping[str, DecimalLike]) -> None:
        """Configure conversion rates from $base_currency.

        The forward table of $base_currency is replaced as a whole. For every
        non-zero factor the reciprocal `1 / factor` is written under the
        destination currency; only the key $base_currency is touched there,
        other entries of the destination table are left as they are. Zero
        factors are stored forward only.

        Args:
            base_currency (str): Currency the rates convert from.
            rates (Mapping[str, DecimalLike]): Multiplier for each destination currency.

        Raises:
            TypeError: If $base_currency is not a string.
            ValueError: If a rate cannot be converted to Decimal or is negative.
        """
        # Raise: base currency must be a string
        if not isinstance(base_currency, str):
            raise TypeError(f"$base_currency must be a string, but provided value is: {base_currency!r}")

        forward: dict[str, Decimal] = {}
        for dest_currency, rate in rates.items():
            # Raise: $rate must be convertible to Decimal
            try:
                factor = as_decimal(rate)
            except (ValueError, TypeError, InvalidOperation) as e:
                raise ValueError(f"Cannot call `set_rates` because rate for '{dest_currency}' ({rate!r}) cannot be converted to Decimal") from e

            # Raise: rates are multipliers and cannot be negative
            if factor < 0:
                raise ValueError(f"Cannot call `set_rates` because rate for '{dest_currency}' ({factor}) is negative")

            forward[dest_currency] = factor

        with self._lock:
            self._rates[base_currency] = forward

            for dest_currency, factor in forward.items():
                if factor == 0:
                    continue
                reciprocal = Decimal(1) / factor
                self._rates.setdefault(dest_currency, {})[base_currency] = reciprocal
                logger.debug(f"Derived reciprocal rate {dest_currency} -> {base_currency}: {reciprocal}")

        logger.info(f"Configured {len(forward)} conversion rate(s) for base currency '{base_currency}'")

    def lookup(self, base_currency: str, dest_currency: str) -> Decimal | None:
        """Return the multiplier from $base_currency to $dest_currency, or None if not configured."""
        with self._lock:
            table = self._rates.get(base_currency)
            if table is None:
                return None
            return table.get(dest_currency)

    def has_rate(self, base_currency: str, dest_currency: str) -> bool:
        return self.lookup(base_currency, dest_currency) is not None

    def rates_for(self, base_currency: str) -> dict[str, Decimal]:
        """Return a copy of the rate table stored under $base_currency (empty if there is none)."""
        with self._lock:
            return dict(self._rates.get(base_currency, {}))

    @property
    def base_currencies(self) -> list[str]:
        with self._lock:
            return list(self._rates.keys())

    def clear(self) -> None:
        """Remove all configured rates."""
        with self._lock:
            self._rates.clear()
        logger.info("Cleared all conversion rates")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_currencies={self.base_currencies})"


# Registry shared by all `Money` instances that are not given one explicitly
default_registry = ConversionRateRegistry()
