"""Setting values as stored by the settings store."""

from enum import Enum
from typing import Any, Union


class ComplexType(Enum):
    OBJECT = "object"
    LIST = "list"

    def __str__(self) -> str:
        return self.value


class SimpleValue:
    """A literal textual value, exactly as it appeared in its source."""

    def __init__(self, value: str):
        self.value = value

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, SimpleValue) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"SimpleValue({self.value!r})"


class ComplexValue:
    """A structured node (mapping or list) from a structured config document."""

    def __init__(self, value: Any, type: ComplexType):
        self.value = value
        self.type = type

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, ComplexValue) and other.type == self.type and other.value == self.value

    def __str__(self) -> str:
        return render_node(self.value)

    def __repr__(self) -> str:
        return f"ComplexValue({self.value!r}, {self.type.name})"


Value = Union[SimpleValue, ComplexValue]

TRUE_VALUE = SimpleValue("true")


def wrap(node: Any) -> Value:
    """Wrap a parsed structured-config node into a setting value.

    Args:
        node: Mapping, list or scalar from a parsed document

    Returns:
        ComplexValue for mappings and lists, SimpleValue otherwise
    """
    if isinstance(node, dict):
        return ComplexValue(node, ComplexType.OBJECT)
    elif isinstance(node, list):
        return ComplexValue(node, ComplexType.LIST)
    else:
        return SimpleValue(render_scalar(node))


def render_scalar(node: Any) -> str:
    """Render a scalar the way it would be written in a config file."""
    if node is None:
        return "null"
    elif isinstance(node, bool):
        return "true" if node else "false"
    return str(node)


def render_node(node: Any) -> str:
    """Render a structured node as ``[a, b]`` or ``{key=value}`` for diagnostics."""
    if isinstance(node, dict):
        return "{" + ", ".join(f"{key}={render_node(value)}" for key, value in node.items()) + "}"
    elif isinstance(node, list):
        return "[" + ", ".join(render_node(item) for item in node) + "]"
    return render_scalar(node)
