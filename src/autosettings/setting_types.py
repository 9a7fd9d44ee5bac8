"""Setting types: transforms from stored values to typed Python values."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Callable, Generic, List, Set, Type, TypeVar

from .exceptions import SettingParseError
from .units import BYTE_UNITS, INTEGER_PATTERN, PERIOD_UNITS, TIME_UNITS
from .values import ComplexType, ComplexValue, SimpleValue, Value, wrap

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

TRUTHY_STRINGS = ("true", "yes", "on", "1")
FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class SettingType(Generic[T]):
    """A named conversion applied to a stored value.

    The transform raises SettingParseError with a human readable reason on failure.
    """

    transform: Callable[[Value], T]


def simple(value: Value) -> str:
    """Return the text of a simple value, rejecting structured ones."""
    if isinstance(value, SimpleValue):
        return value.value
    raise SettingParseError(f'is unexpectedly of type "{value.type}"')


def _map_string(value: Value) -> str:
    return simple(value)


def _map_int(value: Value) -> int:
    text = simple(value)
    # int() alone would also accept "1_000" and surrounding whitespace
    if not INTEGER_PATTERN.fullmatch(text):
        raise SettingParseError("must be an integer number")
    return int(text)


def _map_float(value: Value) -> float:
    text = simple(value)
    if not FLOAT_PATTERN.fullmatch(text):
        raise SettingParseError("must be a float number")
    return float(text)


def _map_decimal(value: Value) -> Decimal:
    text = simple(value)
    if not FLOAT_PATTERN.fullmatch(text):
        raise SettingParseError("must be a decimal number")
    return Decimal(text)


def _map_bool(value: Value) -> bool:
    return simple(value) in TRUTHY_STRINGS


def _map_enum(value: Value, enum: Type[E]) -> E:
    text = simple(value)
    members = enum.__members__
    if text in members:
        return members[text]
    for name, member in members.items():
        if name.lower() == text.lower():
            return member
    raise SettingParseError(f"possible values are [{', '.join(members)}]")


def _map_datetime(value: Value) -> datetime:
    try:
        text = simple(value)
        # A trailing Z (UTC instant) is only understood by fromisoformat from Python 3.11
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise SettingParseError("must be an ISO 8601 datetime") from e


def _map_date(value: Value) -> date:
    try:
        return date.fromisoformat(simple(value))
    except ValueError as e:
        raise SettingParseError("must be an ISO 8601 date") from e


def _map_time(value: Value) -> time:
    try:
        return time.fromisoformat(simple(value))
    except ValueError as e:
        raise SettingParseError("must be an ISO 8601 time") from e


def _map_duration_nanos(value: Value) -> int:
    return TIME_UNITS.parse(simple(value))


def _map_duration(value: Value) -> timedelta:
    seconds, nanos = divmod(_map_duration_nanos(value), 1_000_000_000)
    return timedelta(seconds=seconds, microseconds=nanos // 1000)


def _map_period(value: Value) -> timedelta:
    days = PERIOD_UNITS.parse(simple(value))
    # timedelta is narrower than the 32-bit day count the period table allows
    if abs(days) > timedelta.max.days:
        raise SettingParseError(f"{days} days is out of range")
    return timedelta(days=days)


def _map_bytes(value: Value) -> int:
    return BYTE_UNITS.parse(simple(value))


def _map_list(value: Value, type: SettingType[T]) -> List[T]:
    if not isinstance(value, ComplexValue) or value.type is not ComplexType.LIST:
        raise SettingParseError("is not a list")

    result = []
    for node in value.value:
        element = wrap(node)
        try:
            result.append(type.transform(element))
        except SettingParseError as e:
            raise SettingParseError(f'list element "{element}" {e.reason}') from e
    return result


StringSettingType: SettingType[str] = SettingType(_map_string)
IntSettingType: SettingType[int] = SettingType(_map_int)
FloatSettingType: SettingType[float] = SettingType(_map_float)
DecimalSettingType: SettingType[Decimal] = SettingType(_map_decimal)
BooleanSettingType: SettingType[bool] = SettingType(_map_bool)
DateTimeSettingType: SettingType[datetime] = SettingType(_map_datetime)
DateSettingType: SettingType[date] = SettingType(_map_date)
TimeSettingType: SettingType[time] = SettingType(_map_time)
DurationSettingType: SettingType[timedelta] = SettingType(_map_duration)
DurationNanosSettingType: SettingType[int] = SettingType(_map_duration_nanos)
PeriodSettingType: SettingType[timedelta] = SettingType(_map_period)
BytesSettingType: SettingType[int] = SettingType(_map_bytes)


def EnumSettingType(enum: Type[E]) -> SettingType[E]:  # noqa: N802
    return SettingType(lambda value: _map_enum(value, enum))


def ListSettingType(type: SettingType[T]) -> SettingType[List[T]]:  # noqa: N802
    return SettingType(lambda value: _map_list(value, type))


def SetSettingType(type: SettingType[T]) -> SettingType[Set[T]]:  # noqa: N802
    return SettingType(lambda value: set(_map_list(value, type)))
