"""AutoSettings: uniform typed access to settings from many sources."""

from __future__ import annotations

import logging
import os
import sys
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Type, TypeVar, Union

import yaml

from .exceptions import InvalidSettingError, MissingSettingError, SettingParseError, SourceLoadError
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
from .sources import CommandLineParser, ConfigFileLocator
from .store import KeySource, SettingStore
from .utils import flatten_nested_map, get_reflective_source, load_dotenv_file, load_yaml
from .values import SimpleValue, Value

logger = logging.getLogger(__name__)

T = TypeVar("T")
PathLike = Union[str, Path]

# ".env" alone has no suffix, so names are matched too
DOTENV_EXTENSIONS = (".env", ".properties")


class AutoSettings:
    """Merged settings from files, environment and command line, read through typed getters.

    Sources are applied in call order and later sources win on key collisions. Keys may be
    requested in any naming convention: ``serverPort`` finds ``SERVER_PORT`` or ``server-port``.
    """

    def __init__(self):
        self._store = SettingStore()

    # Store boundary

    def add_property(self, key: str, value: Union[Value, str], source: str) -> None:
        if isinstance(value, str):
            value = SimpleValue(value)
        self._store.add_property(key, value, source)

    def add_flag(self, flag: str, source: str) -> None:
        self._store.add_flag(flag, source)

    def clear(self) -> "AutoSettings":
        self._store.clear()
        return self

    def get_value(self, key: str) -> Optional[Value]:
        """Return the raw stored value for a key, or None if no spelling of it is stored."""
        return self._store.find_value(key)

    def get_source(self, key: str) -> Optional[KeySource]:
        return self._store.get_source(key)

    def get_key_source(self, key: str) -> str:
        """Describe where a key was read from.

        Returns:
            ``Key "<key>" was read from <source>``, ``Key "<key>" was read as "<matched>" from <source>``
            or ``Key "<key>" not found``
        """
        key_source = self._store.get_source(key)
        return str(key_source) if key_source is not None else f'Key "{key}" not found'

    def get_all(self) -> Dict[str, str]:
        return self._store.get_all()

    def __getitem__(self, key: str) -> str:
        """Dict-style getter returning the value as a string."""
        return self.get_string(key)

    def __contains__(self, key: str) -> bool:
        return self._store.find_value(key) is not None

    # Loading

    def with_defaults(self) -> "AutoSettings":
        """Load environment variables, then discovered config files in the working directory."""
        return self.with_environment_variables().with_discovered_configs()

    def with_discovered_configs(self, base_path: PathLike = ".") -> "AutoSettings":
        return self.with_configs(*ConfigFileLocator(base_path).get_config_files())

    def with_configs(self, *paths: PathLike) -> "AutoSettings":
        """Load several config files, the first one taking precedence over the rest."""
        for path in reversed(paths):
            self.with_config(path)
        return self

    def with_config(self, path: PathLike) -> "AutoSettings":
        """Load a YAML, JSON, ``.env`` or ``.properties`` file.

        Raises:
            SourceLoadError: If the file cannot be read or parsed
        """
        path = Path(path).resolve()  # Absolute path, shown in the source descriptor
        source = f'config file at "{path}"'
        try:
            if path.suffix in DOTENV_EXTENSIONS or path.name in DOTENV_EXTENSIONS:
                # dotenv_values returns nothing for a missing file, so check it first
                if not path.is_file():
                    raise FileNotFoundError(f"No such file: '{path}'")
                return self.with_map(load_dotenv_file(path), source)
            # Everything else is YAML, which also covers JSON
            with open(path, "r", encoding="utf-8") as f:
                data = load_yaml(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise SourceLoadError(f"Failed to read file: {path}\n{e}") from e

        # An empty file loads as None
        if data is not None and not isinstance(data, dict):
            raise SourceLoadError(f"Failed to read file: {path}\nThe top level must be a mapping")
        return self.with_nested_map(data or {}, source)

    def with_resource_config(self, package: str, resource: str) -> "AutoSettings":
        """Load a YAML or JSON config file shipped inside a Python package.

        Raises:
            SourceLoadError: If the resource cannot be read or parsed
        """
        try:
            data = load_yaml(resources.files(package).joinpath(resource).read_text(encoding="utf-8"))
        except (OSError, ModuleNotFoundError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise SourceLoadError(f"Failed to read resource: {resource}\n{e}") from e

        if data is not None and not isinstance(data, dict):
            raise SourceLoadError(f"Failed to read resource: {resource}\nThe top level must be a mapping")
        return self.with_nested_map(data or {}, f'config file resource at "{resource}"')

    def with_environment_variables(self) -> "AutoSettings":
        return self.with_map(os.environ, "environment variables")

    def with_command_line_arguments(self, args: Optional[Sequence[str]] = None) -> "AutoSettings":
        """Load ``-key value`` pairs and ``--flag`` switches.

        Args:
            args: Command line arguments (defaults to sys.argv[1:])
        """
        if args is None:
            args = sys.argv[1:]

        source = "command line parameters"
        for key, value in CommandLineParser().parse(args).items():
            if value is not None:
                self.add_property(key, SimpleValue(value), source)
            else:
                self.add_flag(key, source)
        return self

    def with_map(self, mapping: Mapping[str, Any], source: Optional[str] = None) -> "AutoSettings":
        """Load a flat mapping, every value stored as its string form."""
        if source is None:
            source = get_reflective_source("a map")

        for key, value in mapping.items():
            self.add_property(str(key), SimpleValue(str(value)), source)
        logger.debug("Loaded %d settings from %s", len(mapping), source)
        return self

    def with_nested_map(self, mapping: Mapping[str, Any], source: Optional[str] = None) -> "AutoSettings":
        """Load an already parsed structured document, flattening nested keys with dots."""
        if source is None:
            source = get_reflective_source("a map")

        count = 0
        for key, value in flatten_nested_map(dict(mapping)):
            self.add_property(key, value, source)
            count += 1
        logger.debug("Loaded %d settings from %s", count, source)
        return self

    # Typed access

    def get(self, type: SettingType[T], key: str, default: Optional[T] = None) -> T:
        """Get a typed setting.

        Args:
            type: Conversion to apply  # (e.g. IntSettingType)
            key: Key in any naming convention
            default: Value to return when the key is absent

        Returns:
            Converted value

        Raises:
            InvalidSettingError: If the stored value cannot be converted
            MissingSettingError: If the key is absent and no default was given
        """
        value = self.get_optional(type, key)
        if value is not None:
            return value
        if default is not None:
            return default
        raise MissingSettingError(key)

    def get_optional(self, type: SettingType[T], key: str) -> Optional[T]:
        """Get a typed setting, or None if the key is absent.

        Raises:
            InvalidSettingError: If the stored value cannot be converted
        """
        value = self._store.find_value(key)
        if value is None:
            return None
        try:
            return type.transform(value)
        except SettingParseError as e:
            raise InvalidSettingError(key, str(value), e.reason) from e

    def get_string(self, key: str, default: Optional[str] = None) -> str:
        return self.get(StringSettingType, key, default)

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        return self.get(IntSettingType, key, default)

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        return self.get(FloatSettingType, key, default)

    def get_decimal(self, key: str, default: Optional[Decimal] = None) -> Decimal:
        return self.get(DecimalSettingType, key, default)

    def get_bool(self, key: str, default: Optional[bool] = None) -> bool:
        return self.get(BooleanSettingType, key, default)

    def get_flag(self, key: str) -> bool:
        """True if the flag or a truthy value is set, False when absent."""
        return self.get_bool(key, False)

    def get_enum(self, enum: Type[Any], key: str, default: Optional[Any] = None) -> Any:
        return self.get(EnumSettingType(enum), key, default)

    def get_datetime(self, key: str, default: Optional[datetime] = None) -> datetime:
        return self.get(DateTimeSettingType, key, default)

    def get_date(self, key: str, default: Optional[date] = None) -> date:
        return self.get(DateSettingType, key, default)

    def get_time(self, key: str, default: Optional[time] = None) -> time:
        return self.get(TimeSettingType, key, default)

    def get_duration(self, key: str, default: Optional[timedelta] = None) -> timedelta:
        """Duration such as ``"25 s"``; a bare number is milliseconds."""
        return self.get(DurationSettingType, key, default)

    def get_duration_nanos(self, key: str, default: Optional[int] = None) -> int:
        return self.get(DurationNanosSettingType, key, default)

    def get_period(self, key: str, default: Optional[timedelta] = None) -> timedelta:
        """Whole-day period such as ``"2 weeks"``; a bare number is days."""
        return self.get(PeriodSettingType, key, default)

    def get_bytes(self, key: str, default: Optional[int] = None) -> int:
        """Memory size such as ``"512kB"`` or ``"1 GiB"``; a bare number is bytes."""
        return self.get(BytesSettingType, key, default)

    def get_list(self, type: SettingType[T], key: str, default: Optional[List[T]] = None) -> List[T]:
        return self.get(ListSettingType(type), key, default)

    def get_set(self, type: SettingType[T], key: str, default: Optional[Set[T]] = None) -> Set[T]:
        return self.get(SetSettingType(type), key, default)

    # Declared settings

    def setting(
        self, type: SettingType[T], name: str, default: Optional[T] = None, group: Optional[Group] = None
    ) -> Setting[T]:
        """Declare a setting read on every ``get()``.

        Raises:
            MissingSettingError: If the setting has no default and is absent at declaration time
        """
        key = group.key(name) if group is not None else name
        setting = Setting(self, type, key, default)
        if default is None:
            setting.get()
        return setting

    def optional_setting(self, type: SettingType[T], name: str, group: Optional[Group] = None) -> Setting[Optional[T]]:
        key = group.key(name) if group is not None else name
        return Setting(self, type, key, optional=True)

    def __repr__(self) -> str:
        return f"AutoSettings({self._store.get_all()})"


@lru_cache(maxsize=None)
def get_default_settings() -> AutoSettings:
    """Process-wide settings loaded from environment variables and discovered config files."""
    return AutoSettings().with_defaults()
