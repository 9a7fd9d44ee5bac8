"""AutoSettings - Uniform typed access to settings from many sources.

Settings are merged from config files, environment variables and the command line,
then read through typed getters that tolerate camelCase, snake_case and kebab-case
spellings and report where each value came from.
"""
# ruff: noqa: F401

from .case import to_camel_case, to_kebab_case, to_snake_case
from .exceptions import (
    AutoSettingsError,
    InvalidSettingError,
    MissingSettingError,
    SettingParseError,
    SourceLoadError,
)
from .groups import Group, Setting
from .setting_types import (
    BooleanSettingType,
    BytesSettingType,
    DateSettingType,
    DateTimeSettingType,
    DecimalSettingType,
    DurationNanosSettingType,
    DurationSettingType,
    EnumSettingType,
    FloatSettingType,
    IntSettingType,
    ListSettingType,
    PeriodSettingType,
    SetSettingType,
    SettingType,
    StringSettingType,
    TimeSettingType,
)
from .settings import AutoSettings, get_default_settings
from .sources import CommandLineParser, ConfigFileLocator
from .store import KeySource, SettingStore
from .units import BYTE_UNITS, PERIOD_UNITS, TIME_UNITS, UnitTable, parse_bytes, parse_duration_nanos, parse_period_days
from .values import ComplexType, ComplexValue, SimpleValue

__version__ = "0.1.0"
