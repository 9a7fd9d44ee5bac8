"""Helpers that turn external inputs into key/value pairs for the store."""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class CommandLineParser:
    """Tokenizer for ``-key value`` / ``--flag`` style command lines."""

    def parse(self, args: Sequence[str]) -> Dict[str, Optional[str]]:
        """Parse command line tokens into keys with optional values.

        Args:
            args: Command line arguments  # (e.g. ["-a", "b", "--verbose"])

        Returns:
            Mapping of keys to values  # (None for flags, e.g. {"a": "b", "verbose": None})
        """
        result: Dict[str, Optional[str]] = {}
        for index, arg in enumerate(args):
            if not arg.startswith("-"):
                # Values are picked up together with their key, other tokens are ignored
                continue
            key = arg.lstrip("-")
            if "=" in key:
                key, value = key.split("=", 1)
                result[key] = value
            else:
                result[key] = self._get_value(args, index)
        return result

    def _get_value(self, args: Sequence[str], index: int) -> Optional[str]:
        if index + 1 < len(args) and not args[index + 1].startswith("-"):
            return args[index + 1]
        return None


class ConfigFileLocator:
    """Finds conventionally named config files in a directory.

    Args:
        base_path: Directory to search
    """

    VALID_EXTENSIONS = ("yaml", "yml", "json", "env", "properties")
    VALID_NAMES = ("autosettings", "config", "app", "application")

    def __init__(self, base_path: Union[str, Path] = "."):
        self.base_path = Path(base_path)

    def get_config_files(self) -> List[Path]:
        """Return matching readable files, sorted by name."""
        files = [
            path
            for path in self._get_readable_files()
            if path.suffix.lstrip(".") in self.VALID_EXTENSIONS and path.stem in self.VALID_NAMES
        ]
        files.sort(key=lambda path: path.name)
        logger.debug("Discovered config files in %s: %s", self.base_path, [path.name for path in files])
        return files

    def _get_readable_files(self) -> List[Path]:
        if not self.base_path.is_dir():
            return []
        return [path for path in self.base_path.iterdir() if path.is_file() and os.access(path, os.R_OK)]
