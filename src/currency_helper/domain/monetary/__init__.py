"""Monetary domain package.

This package contains the `Money` value object, the `ConversionRateRegistry`
used to convert between currencies, and the errors raised by both.
"""
