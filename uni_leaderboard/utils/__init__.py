from .helpers import *

__all__ = [
    "normalize_address", "is_valid_address", "to_checksum_address",
    "parse_decimal", "format_amount", "format_usd", "format_signed_amount"
]
