"""Merged key/value store with convention-tolerant key resolution."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .case import to_camel_case, to_kebab_case, to_snake_case
from .values import TRUE_VALUE, Value


@dataclass(frozen=True)
class KeySource:
    """Provenance of a resolved key.

    Attributes:
        key: Key as requested by the caller
        matching_key: Physical key that satisfied the lookup
        source: Descriptor of where the physical key was read from
    """

    key: str
    matching_key: str
    source: str

    def __str__(self) -> str:
        if self.key == self.matching_key:
            return f'Key "{self.key}" was read from {self.source}'
        return f'Key "{self.key}" was read as "{self.matching_key}" from {self.source}'


class SettingStore:
    """Holds properties, flags and their sources.

    Keys are stored exactly as given. A later write to the same physical key replaces
    the earlier value and source, whether it was a property or a flag.
    """

    def __init__(self):
        self.properties: Dict[str, Value] = {}
        self.flags: Dict[str, None] = {}  # (insertion-ordered set of flag keys)
        self.sources: Dict[str, str] = {}

    def add_property(self, key: str, value: Value, source: str) -> None:
        self.flags.pop(key, None)
        self.properties[key] = value
        self.sources[key] = source

    def add_flag(self, flag: str, source: str) -> None:
        self.properties.pop(flag, None)
        self.flags[flag] = None
        self.sources[flag] = source

    def clear(self) -> None:
        self.properties.clear()
        self.flags.clear()
        self.sources.clear()

    def get_source(self, key: str) -> Optional[KeySource]:
        """Resolve a key and report which physical key and source satisfied it."""
        matching_key = self.find_matching_key(key)
        if matching_key is None or matching_key not in self.sources:
            return None
        return KeySource(key, matching_key, self.sources[matching_key])

    def find_value(self, key: str) -> Optional[Value]:
        matching_key = self.find_matching_key(key)
        if matching_key is None:
            return None
        return self._get_value(matching_key)

    def get_all(self) -> Dict[str, str]:
        """Return every stored key with its value rendered as a string; flags read as ``"true"``."""
        result = {key: str(value) for key, value in self.properties.items()}
        result.update((flag, str(TRUE_VALUE)) for flag in self.flags)
        return result

    def find_matching_key(self, key: str) -> Optional[str]:
        """Find the physical key that should satisfy a requested key.

        Tries, in order: the key verbatim, its spellings in each naming convention,
        then the same spellings compared case-insensitively.

        Args:
            key: Requested key  # (e.g. "serverPort")

        Returns:
            Stored key  # (e.g. "SERVER_PORT"), or None when nothing matches
        """
        # Verbatim spelling needs no conversion
        if self._contains_key(key):
            return key

        # Same key in another naming convention
        candidates = get_key_representations(key)
        for candidate in candidates:
            if self._contains_key(candidate):
                return candidate

        # Last resort: scan every stored key, ignoring case
        for candidate in candidates:
            matching_key = self._find_matching_key_ignoring_case(candidate)
            if matching_key is not None:
                return matching_key
        return None

    def _find_matching_key_ignoring_case(self, key: str) -> Optional[str]:
        lower_key = key.lower()
        for stored_key in self.properties:
            if stored_key.lower() == lower_key:
                return stored_key
        for stored_key in self.flags:
            if stored_key.lower() == lower_key:
                return stored_key
        return None

    def _get_value(self, key: str) -> Optional[Value]:
        if key in self.properties:
            return self.properties[key]
        return TRUE_VALUE if key in self.flags else None

    def _contains_key(self, key: str) -> bool:
        return key in self.properties or key in self.flags


def get_key_representations(key: str) -> List[str]:
    """Spellings of a key to try, in precedence order."""
    return [key, to_snake_case(key), to_kebab_case(key), to_camel_case(key)]
