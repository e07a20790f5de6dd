import re
from decimal import Decimal, InvalidOperation
from typing import Union

from web3 import Web3

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def normalize_address(address: str) -> str:
    """
    Normalize Ethereum address to the lowercase form used by the subgraph
    """
    return address.strip().lower()


def is_valid_address(address: str) -> bool:
    """
    Check if address is a 0x-prefixed 20-byte hex string
    """
    return bool(ADDRESS_PATTERN.match(address or ""))


def to_checksum_address(address: str) -> str:
    """
    Convert address to EIP-55 checksum format for display
    """
    return Web3.to_checksum_address(address.lower())


def parse_decimal(value: Union[str, int, Decimal]) -> Decimal:
    """
    Parse a subgraph BigDecimal string into a Decimal
    """
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Failed to parse decimal '{value}'")
    if not result.is_finite():
        raise ValueError(f"Failed to parse decimal '{value}'")
    return result


def format_amount(amount: Decimal) -> str:
    """Token amounts are rendered with 4 decimal places"""
    return f"{amount:.4f}"


def format_usd(amount: Decimal) -> str:
    """USD amounts are rendered with 2 decimal places"""
    return f"{amount:.2f}"


def format_signed_amount(amount: Decimal) -> str:
    """Token amount with an explicit +/- prefix"""
    return f"{amount:+.4f}"
