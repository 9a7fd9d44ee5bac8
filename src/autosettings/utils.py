"""Utility functions for AutoSettings."""

import inspect
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

import yaml
from dotenv import dotenv_values

from .values import Value, wrap

PACKAGE_NAME = __name__.split(".")[0]


def load_yaml(stream: Any) -> Any:
    """Load YAML content from a stream.

    Args:
        stream: Stream to read YAML from  # (file-like object or string)
    Returns:
        Parsed YAML content  # (nested dicts and lists with all scalars kept as their source text)
    """
    # BaseLoader resolves no implicit types, so "yes" or "1e3" stay exactly as written
    return yaml.load(stream, Loader=yaml.BaseLoader)


def load_dotenv_file(path: Path) -> Dict[str, str]:
    """Load a ``key=value`` file (``.env`` or ``.properties``).

    Returns:
        Mapping of keys to values, keys without a value map to an empty string
    """
    return {key: "" if value is None else value for key, value in dotenv_values(path, interpolate=False).items()}


def flatten_nested_map(data: Dict[Any, Any], prefix: str = "") -> Iterator[Tuple[str, Value]]:
    """Flatten a nested mapping into dotted keys.

    Args:
        data: Parsed structured document  # (nested dict structure)
        prefix: Current key prefix  # (dot-separated path prefix)

    Yields:
        (key, value) pairs  # lists are kept whole as ComplexValue leaves, empty mappings yield nothing
    """
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            # Recursively flatten nested mappings
            yield from flatten_nested_map(value, full_key)
        else:
            yield full_key, wrap(value)


def get_reflective_source(partial_source: str) -> str:
    """Describe a source by the first caller outside this package.

    Args:
        partial_source: What was inserted  # (e.g. "a map")

    Returns:
        Descriptor like ``a map inserted by app.main#configure in main.py:12``
    """
    frame: Optional[Any] = inspect.currentframe()
    try:
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if module != PACKAGE_NAME and not module.startswith(f"{PACKAGE_NAME}."):
                file_name = os.path.basename(frame.f_code.co_filename)
                return f"{partial_source} inserted by {module}#{frame.f_code.co_name} in {file_name}:{frame.f_lineno}"
            frame = frame.f_back
        return partial_source
    finally:
        del frame
