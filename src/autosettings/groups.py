"""Setting groups and declared settings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from .setting_types import SettingType
    from .settings import AutoSettings

T = TypeVar("T")


class Group:
    """A named scope that prefixes the keys of the settings declared in it.

    Args:
        name: Name of this scope
        parent: Enclosing scope, if any

    Example:
        >>> server = Group("server")
        >>> Group("tls", parent=server).key("port")
        'server.tls.port'
    """

    def __init__(self, name: str, parent: Optional[Group] = None):
        self.name = name
        self.parent = parent

    @property
    def full_name(self) -> str:
        """Dotted path from the outermost scope down to this one."""
        names: List[str] = []
        group: Optional[Group] = self
        while group is not None:
            names.append(group.name)
            group = group.parent
        return ".".join(reversed(names))

    def key(self, name: str) -> str:
        return f"{self.full_name}.{name}"

    def __repr__(self) -> str:
        return f"Group({self.full_name!r})"


class Setting(Generic[T]):
    """Handle to one setting, resolved again on every ``get()`` so it follows ``clear()`` and reloads."""

    def __init__(
        self,
        settings: AutoSettings,
        type: SettingType[T],
        key: str,
        default: Optional[T] = None,
        optional: bool = False,
    ):
        self.settings = settings
        self.type = type
        self.key = key
        self.default = default
        self.optional = optional

    def get(self) -> T:
        if self.optional:
            return self.settings.get_optional(self.type, self.key)
        return self.settings.get(self.type, self.key, self.default)

    def __repr__(self) -> str:
        return f"Setting({self.key!r})"
