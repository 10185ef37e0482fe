"""Amount validation and exact decimal-to-base-unit conversion."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from fundme.constants import NATIVE_DECIMALS
from fundme.funding.schemas import AmountInput

_PLAIN_DECIMAL_RE = re.compile(r"^(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?$")


def parse_amount(raw: str | None, decimals: int = NATIVE_DECIMALS) -> AmountInput:
    """Validate ``raw`` and convert it to base units.

    Two passes: a lenient numeric check that the text is a finite positive
    number, then an exact conversion that only accepts plain decimal notation.
    A value can look positive yet round to zero base units, and coercion
    accepts notations (exponents, underscores) the exact pass refuses.
    """

    text = (raw or "").strip()
    if not text:
        return AmountInput.rejected(text, "empty")

    try:
        as_number = Decimal(text)
    except (InvalidOperation, ValueError):
        return AmountInput.rejected(text, "nonPositive")
    if not as_number.is_finite() or as_number <= 0:
        return AmountInput.rejected(text, "nonPositive")

    match = _PLAIN_DECIMAL_RE.fullmatch(text)
    if match is None:
        return AmountInput.rejected(text, "invalid")
    whole = match.group("whole") or ""
    fraction = match.group("fraction") or ""
    if not whole and not fraction:
        return AmountInput.rejected(text, "invalid")

    kept, excess = fraction[:decimals], fraction[decimals:]
    try:
        value = int(whole or "0") * 10**decimals + int(kept.ljust(decimals, "0") or "0")
    except ValueError:
        # Past the interpreter's integer string conversion limit
        return AmountInput.rejected(text, "invalid")
    if excess.strip("0"):
        # Digits below the smallest unit: an underflow when nothing else remains
        return AmountInput.rejected(text, "nonPositive" if value == 0 else "invalid")

    if value <= 0:
        return AmountInput.rejected(text, "nonPositive")
    return AmountInput(raw=text, ok=True, value=value)
