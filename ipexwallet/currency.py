"""Currency description and amount formatting."""

from __future__ import annotations

from dataclasses import dataclass

_MAX_AMOUNT = 2**64 - 1


@dataclass(frozen=True)
class Currency:
    """A currency with a fixed number of decimal places in its atomic units."""

    decimal_places: int
    minimum_fee: int = 0
    name: str = "IPExDark"
    display_name: str = "IPExDark"
    ticker: str = "IPExDark"

    def format_amount(self, amount: int) -> str:
        """Render atomic units as a decimal string with thousands separators.

        Trailing zeros of the fraction are dropped, keeping at least two digits.
        """
        if amount < 0:
            raise ValueError("amount must not be negative")
        places = self.decimal_places
        digits = str(amount).rjust(places + 1, "0")
        if places:
            whole, fraction = digits[:-places], digits[-places:]
        else:
            whole, fraction = digits, ""
        fraction = fraction[:2] + fraction[2:].rstrip("0")
        return f"{int(whole):,}.{fraction}"

    def parse_amount(self, text: str) -> int:
        """Turn a decimal string into atomic units; 0 when it cannot be read."""
        amount = text.strip().replace(",", "")
        places = self.decimal_places
        point = amount.find(".")
        if point != -1:
            fraction_size = len(amount) - point - 1
            while places < fraction_size and amount.endswith("0"):
                amount = amount[:-1]
                fraction_size -= 1
            if places < fraction_size:
                return 0
            amount = amount[:point] + amount[point + 1 :]
        else:
            fraction_size = 0

        if not amount:
            return 0

        amount += "0" * (places - fraction_size)
        if not (amount.isascii() and amount.isdigit()):
            return 0
        value = int(amount)
        return value if value <= _MAX_AMOUNT else 0