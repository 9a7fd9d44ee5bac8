"""Parsing of unit-suffixed numbers such as ``"0.5 day"``, ``"512kB"`` or ``"25 s"``."""

import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple

from .exceptions import SettingParseError

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


@dataclass(frozen=True)
class Unit:
    """A unit with its exact multiplier relative to the base unit of its table."""

    name: str
    multiplier: int
    aliases: Tuple[str, ...]


class UnitTable:
    """Closed registry of unit aliases for one parsing domain.

    Args:
        name: Domain name, used for display only
        units: Units in the order their aliases are listed in error messages
        bits: Width of the signed integer results must fit in
    """

    def __init__(self, name: str, units: Sequence[Unit], bits: int = 64):
        self.name = name
        self.units = tuple(units)
        self.min_value = -(2 ** (bits - 1))
        self.max_value = 2 ** (bits - 1) - 1
        self._by_alias: Dict[str, Unit] = {}
        for unit in self.units:
            for alias in unit.aliases:
                self._by_alias.setdefault(alias, unit)

    @property
    def aliases(self) -> List[str]:
        """All accepted aliases, in table order."""
        return [alias for unit in self.units for alias in unit.aliases]

    def find(self, alias: str) -> Optional[Unit]:
        return self._by_alias.get(alias)

    def parse(self, text: str) -> int:
        """Parse ``<number><optional whitespace><optional unit>`` into a count of base units.

        Args:
            text: Raw setting value

        Returns:
            Exact integer quantity of the table's base unit  # (fractional results are truncated toward zero, so "-1.5 B" is -1)

        Raises:
            SettingParseError: If the number is missing or invalid, the unit is unknown,
                or the result does not fit the table's integer width
        """
        number, alias = split_value_with_unit(text)

        unit = self.find(alias)
        if unit is None:
            accepted = ", ".join(f'"{accepted_alias}"' for accepted_alias in self.aliases)
            raise SettingParseError(f'the unit "{alias}" must be one of [{accepted}]')

        if INTEGER_PATTERN.fullmatch(number):
            result = unit.multiplier * int(number)
        elif DECIMAL_PATTERN.fullmatch(number):
            # Fraction keeps the product exact, int() truncates toward zero
            result = int(Fraction(number) * unit.multiplier)
        else:
            raise SettingParseError(f'"{number}" is not a number')

        if not self.min_value <= result <= self.max_value:
            raise SettingParseError(f'"{number}" {unit.name} is out of range')
        return result


def split_value_with_unit(text: str) -> Tuple[str, str]:
    """Split a raw value at its first letter into a number part and a unit alias.

    Raises:
        SettingParseError: If nothing precedes the unit
    """
    unit_index = next((index for index, char in enumerate(text) if char.isalpha()), -1)
    if unit_index > -1:
        number, alias = text[:unit_index].strip(), text[unit_index:]
    else:
        number, alias = text.strip(), ""
    if not number:
        raise SettingParseError("it is missing a number")
    return number, alias


NANOS_PER_MICROSECOND = 1000
NANOS_PER_MILLISECOND = 1000 * NANOS_PER_MICROSECOND
NANOS_PER_SECOND = 1000 * NANOS_PER_MILLISECOND
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR

# A bare number is read as milliseconds
TIME_UNITS = UnitTable(
    "time",
    [
        Unit("milliseconds", NANOS_PER_MILLISECOND, ("", "ms", "millis", "milliseconds")),
        Unit("microseconds", NANOS_PER_MICROSECOND, ("us", "micros", "microseconds")),
        Unit("nanoseconds", 1, ("ns", "nanos", "nanoseconds")),
        Unit("seconds", NANOS_PER_SECOND, ("s", "second", "seconds")),
        Unit("minutes", NANOS_PER_MINUTE, ("m", "minute", "minutes")),
        Unit("hours", NANOS_PER_HOUR, ("h", "hour", "hours")),
        Unit("days", NANOS_PER_DAY, ("d", "day", "days")),
    ],
)

# Months are a fixed 30 days and years a fixed 365 days
PERIOD_UNITS = UnitTable(
    "period",
    [
        Unit("days", 1, ("", "d", "day", "days")),
        Unit("weeks", 7, ("w", "week", "weeks")),
        Unit("months", 30, ("m", "month", "months")),
        Unit("years", 365, ("y", "year", "years")),
    ],
    bits=32,
)

DECIMAL_PREFIXES = ("kilo", "mega", "giga", "tera", "peta", "exa", "zetta", "yotta")
BINARY_PREFIXES = ("kibi", "mebi", "gibi", "tebi", "pebi", "exbi", "zebi", "yobi")


def _byte_aliases(prefix: str, power_of: int, power: int) -> Tuple[str, ...]:
    aliases = [f"{prefix}byte", f"{prefix}bytes"]
    if not prefix:
        aliases += ["b", "B", ""]
        return tuple(aliases)

    first = prefix[0]
    if power_of == 1024:
        aliases += [first, first.upper(), f"{first.upper()}i", f"{first.upper()}iB"]  # 512m 512M 512Mi 512MiB
    elif power == 1:
        aliases.append(f"{first}B")  # 512kB
    else:
        aliases.append(f"{first.upper()}B")  # 512MB
    return tuple(aliases)


def _create_byte_units() -> List[Unit]:
    units = [Unit("bytes", 1, _byte_aliases("", 1024, 0))]  # Base unit, no prefix

    # Decimal family first, then binary, each ordered by increasing power
    for power_of, prefixes in ((1000, DECIMAL_PREFIXES), (1024, BINARY_PREFIXES)):
        for power, prefix in enumerate(prefixes, start=1):
            # e.g. mega -> 1000 ** 2, mebi -> 1024 ** 2
            units.append(Unit(f"{prefix}bytes", power_of**power, _byte_aliases(prefix, power_of, power)))
    return units


BYTE_UNITS = UnitTable("bytes", _create_byte_units())


def parse_duration_nanos(text: str) -> int:
    """Parse a duration into nanoseconds."""
    return TIME_UNITS.parse(text)


def parse_period_days(text: str) -> int:
    """Parse a calendar period into days."""
    return PERIOD_UNITS.parse(text)


def parse_bytes(text: str) -> int:
    """Parse a memory size into bytes."""
    return BYTE_UNITS.parse(text)
