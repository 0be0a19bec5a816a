from __future__ import annotations

from pathlib import Path
from typing import Union


class CascadeError(Exception):
    """Base class for every failure raised while assembling cascade data."""


class DataDirectoryError(CascadeError):
    """The configured input/data directory is missing or not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Could not find data path directory: {self.path}")


class DataFileParseError(CascadeError, ValueError):
    """A data file (or its rendered template output) is not valid JSON."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid JSON in data file {self.path}: {reason}")


class TemplateEngineError(CascadeError):
    """No template engine is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown data template engine: {name}")
