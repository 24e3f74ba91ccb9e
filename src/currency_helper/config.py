# Significant digits of the decimal context used for monetary arithmetic
DECIMAL_PRECISION: int = 28

# Number of fractional digits shown by `Money.display`
DISPLAY_DECIMAL_PLACES: int = 2
