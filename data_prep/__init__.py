"""
Data preparation: loading local price histories and validating inputs.
"""

from .loader import CsvPriceSource, load_price_csv
from .validators import ValidationResult, check_inputs, validate_inputs, validate_price_series

__all__ = [
    "CsvPriceSource",
    "load_price_csv",
    "ValidationResult",
    "check_inputs",
    "validate_inputs",
    "validate_price_series",
]
