from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import aiofiles

from datacascade.domain.errors import DataFileParseError
from datacascade.services.template_engines import TemplateEngine

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DataFileReader:
    """
    Reads JSON data files, optionally passing them through a template engine first.

    A file that does not exist is not an error: it contributes an empty mapping.
    Invalid JSON is an error and is raised to the caller.
    """

    def __init__(self, template_engine: Optional[TemplateEngine] = None):
        self.template_engine = template_engine

    async def read_raw(self, path: PathLike) -> Optional[str]:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None

    async def get_json_raw(self, path: PathLike) -> Dict[str, Any]:
        """Parse a file as plain JSON, never running it through the template engine."""
        raw = await self.read_raw(path)
        return self._parse(path, raw) if raw else {}

    async def get_json(
        self,
        path: PathLike,
        context: Optional[Mapping[str, Any]] = None,
        ignore_processing: bool = False,
    ) -> Dict[str, Any]:
        """
        Read and parse a data file.

        Unless ``ignore_processing`` is set (or no engine is configured) the raw
        text is compiled as a template and rendered with ``context`` before
        parsing. The context is the imported metadata only, never the global
        data that is being assembled from these files.
        """
        raw = await self.read_raw(path)
        if not raw:
            return {}

        engine = None if ignore_processing else self.template_engine
        if engine is not None:
            render = engine.compile(raw)
            text = await render(context or {})
            logger.debug(f"Rendered data file {path} with {engine.name}")
        else:
            text = raw

        return self._parse(path, text)

    @staticmethod
    def _parse(path: PathLike, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse data file {path}: {e}")
            raise DataFileParseError(path, str(e)) from e
