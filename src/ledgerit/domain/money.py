"""Exact multi-currency money values.

``Number`` is a fixed-point decimal stored as an integer ``value`` and a
scale ``n_decimals``; ``Amount`` maps currencies to Numbers. Neither ever
rounds, so balances computed from them are exact.

Equality of Numbers is structural: ``Number(10, 1)`` and ``Number(1, 0)``
are different values even though both mean one. Parsing and arithmetic
always produce the canonical (minimal scale) form, so this only shows up for
Numbers built directly at a non-minimal scale.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

from ledgerit.domain.errors import ParseError

Currency = str

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FRACTION_RE = re.compile(r"[0-9]*")


@dataclass(frozen=True)
class Number:
    """Exact decimal scalar equal to ``value * 10 ** -n_decimals``."""

    value: int = 0
    n_decimals: int = 0

    def __post_init__(self):
        if self.n_decimals < 0:
            raise ValueError(f"Scale must be non-negative, got {self.n_decimals}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise OverflowError(f"Number value {self.value} does not fit in 64 bits")

    @classmethod
    def canonical(cls, value: int, n_decimals: int) -> "Number":
        """Build a Number with trailing zero decimals trimmed."""
        if value == 0:
            return cls(0, 0)
        while n_decimals > 0 and value % 10 == 0:
            value //= 10
            n_decimals -= 1
        return cls(value, n_decimals)

    @classmethod
    def parse(cls, text: str) -> "Number":
        """Parse a decimal literal such as ``"-12.50"`` or ``"3,2"``.

        A comma is taken as the decimal separator whenever the text contains
        one, otherwise a dot is. Thousands separators are therefore not
        accepted.

        Raises:
            ParseError: If the literal is malformed
        """
        if "," in text:
            separator = ","
        elif "." in text:
            separator = "."
        else:
            return cls(_parse_integer(text, text), 0)

        parts = text.split(separator)
        if len(parts) != 2:
            raise ParseError(
                f"Could not parse number '{text}': expected a single '{separator}' separator"
            )
        units_str, decimals_str = parts
        units = _parse_integer(units_str, text)

        decimals_str = decimals_str.rstrip("0")
        if not _FRACTION_RE.fullmatch(decimals_str):
            raise ParseError(f"Could not parse number '{text}': invalid decimal digits")

        n_decimals = len(decimals_str)
        value = units * 10**n_decimals
        if n_decimals:
            fraction = int(decimals_str)
            # the sign lives on the integer part, which may be "-0"
            value += -fraction if units_str.startswith("-") else fraction
        if not INT64_MIN <= value <= INT64_MAX:
            raise ParseError(f"Could not parse number '{text}': out of range")
        return cls.canonical(value, n_decimals)

    def _rescaled(self, n_decimals: int) -> int:
        return self.value * 10 ** (n_decimals - self.n_decimals)

    def __add__(self, other: "Number") -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        n_decimals = max(self.n_decimals, other.n_decimals)
        return Number.canonical(
            self._rescaled(n_decimals) + other._rescaled(n_decimals), n_decimals
        )

    def __sub__(self, other: "Number") -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "Number":
        return Number(-self.value, self.n_decimals)

    def is_zero(self) -> bool:
        return self.value == 0

    def __str__(self) -> str:
        sign = "-" if self.value < 0 else ""
        digits = str(abs(self.value)).rjust(self.n_decimals + 1, "0")
        if self.n_decimals:
            units, fraction = digits[: -self.n_decimals], digits[-self.n_decimals :]
        else:
            units, fraction = digits, ""
        return f"{sign}{int(units):,}.{fraction.ljust(2, '0')}"


def _parse_integer(segment: str, text: str) -> int:
    if not _INTEGER_RE.fullmatch(segment):
        raise ParseError(f"Could not parse number '{text}': '{segment}' is not an integer")
    units = int(segment)
    if not INT64_MIN <= units <= INT64_MAX:
        raise ParseError(f"Could not parse number '{text}': out of range")
    return units


class Amount:
    """Mapping of currency to Number with no zero entries.

    The empty mapping is the one and only zero Amount. Every operation
    returns a new Amount; instances are never mutated after construction.
    """

    __slots__ = ("_amounts",)

    def __init__(self, amounts: Optional[Mapping[Currency, Number]] = None):
        self._amounts: dict[Currency, Number] = {}
        for currency, number in (amounts or {}).items():
            if not currency:
                raise ValueError("Currency must be a non-empty string")
            if not isinstance(number, Number):
                raise TypeError(f"Expected Number for {currency}, got {type(number).__name__}")
            if not number.is_zero():
                self._amounts[currency] = number

    @classmethod
    def parse(cls, text: str) -> "Amount":
        """Parse ``"<number> <currency>"`` entries separated by ``", "``.

        Examples:
            "12.50 EUR"
            "-132 SEK, 15.3 USD"

        Zero entries are dropped.

        Raises:
            ParseError: If an entry is malformed or a currency repeats
        """
        amounts: dict[Currency, Number] = {}
        seen: set[Currency] = set()
        for segment in text.split(", "):
            parts = segment.split(" ")
            if len(parts) != 2 or not parts[1]:
                raise ParseError(
                    f"Could not parse amount '{text}': expected '<number> <currency>', got '{segment}'"
                )
            number_str, currency = parts
            number = Number.parse(number_str)
            if currency in seen:
                raise ParseError(
                    f"Could not parse amount '{text}': currency {currency} appears twice"
                )
            seen.add(currency)
            if not number.is_zero():
                amounts[currency] = number
        return cls(amounts)

    def is_zero(self) -> bool:
        return not self._amounts

    def in_currency(self, currency: Currency) -> Number:
        """Return the Number held in ``currency`` (zero when absent)."""
        return self._amounts.get(currency, Number())

    def currencies(self) -> list[Currency]:
        return sorted(self._amounts)

    def items(self) -> list[tuple[Currency, Number]]:
        return sorted(self._amounts.items())

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        result = dict(self._amounts)
        for currency, number in other._amounts.items():
            if currency in result:
                result[currency] = result[currency] + number
            else:
                result[currency] = number
        return Amount(result)

    def __sub__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "Amount":
        return Amount({currency: -number for currency, number in self._amounts.items()})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self._amounts == other._amounts

    def __hash__(self) -> int:
        return hash(frozenset(self._amounts.items()))

    def __len__(self) -> int:
        return len(self._amounts)

    def __iter__(self) -> Iterator[Currency]:
        return iter(self.currencies())

    def __contains__(self, currency: object) -> bool:
        return currency in self._amounts

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        if self.is_zero():
            return "0.00"
        return ", ".join(f"{number} {currency}" for currency, number in self.items())

    def __repr__(self) -> str:
        return f"Amount({self._amounts!r})"
