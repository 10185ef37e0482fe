"""Display helpers for addresses, hashes and base-unit amounts."""

from __future__ import annotations

import re

from eth_utils import is_hex_address, to_checksum_address

from fundme.constants import NATIVE_DECIMALS, SHORT_HEX_END, SHORT_HEX_START

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def shorten_hex(value: object, *, start: int = SHORT_HEX_START, end: int = SHORT_HEX_END) -> str:
    """Return ``value`` as ``head…tail``; short strings pass through unchanged."""

    if not isinstance(value, str) or not value:
        return ""
    if len(value) <= start + end:
        return value
    return f"{value[:start]}…{value[-end:]}"


def format_units(value: int, decimals: int = NATIVE_DECIMALS) -> str:
    """Render a base-unit integer as an exact decimal string without trailing zeros."""

    negative = value < 0
    whole, fraction = divmod(abs(value), 10**decimals)
    text = str(whole)
    if fraction:
        text = f"{text}.{str(fraction).rjust(decimals, '0').rstrip('0')}"
    return f"-{text}" if negative else text


def normalize_address(value: str) -> str:
    """Validate a 0x-prefixed 20-byte address and return its checksum form."""

    if not isinstance(value, str) or not _ADDRESS_RE.fullmatch(value) or not is_hex_address(value):
        raise ValueError("Must be a 0x-prefixed hexadecimal address (20 bytes).")
    return to_checksum_address(value)


def same_address(left: str | None, right: str | None) -> bool:
    if not left or not right:
        return False
    return left.lower() == right.lower()
