__version__ = "0.1.0"

from currency_helper.domain.monetary.conversion_rate_registry import ConversionRateRegistry, default_registry
from currency_helper.domain.monetary.errors import InvalidOperandError, MoneyError, UnknownConversionRateError
from currency_helper.domain.monetary.money import Money

__all__ = [
    "ConversionRateRegistry",
    "InvalidOperandError",
    "Money",
    "MoneyError",
    "UnknownConversionRateError",
    "default_registry",
]
