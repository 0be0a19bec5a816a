"""
Assembly of the data cascade for a site build.

``TemplateData`` owns one build generation's view of the data:

* global data: every ``*.json`` under the data directory, placed at an object
  path derived from its location, then overridden by ``config_data``
* imported metadata: the project metadata file, exposed under ``keys.package``
* local data: ``<dir>/<dir>.json`` files along a content file's directory chain
  plus ``<dir>/<stem>.json`` next to the content file itself

Precedence, lowest first: data files, config data, imported metadata,
local data from the outermost directory inward, the content file's own data.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from datacascade.data.config import get_config
from datacascade.data.paths import (
    DATA_FILE_EXTENSION,
    local_data_paths,
    object_path_for_data_file,
    object_path_segments,
)
from datacascade.domain.cascade_utils import deep_merge, set_at_path
from datacascade.domain.errors import DataDirectoryError
from datacascade.domain.models import CascadeConfig
from datacascade.services.template_engines import TemplateEngine, get_template_engine
from datacascade.storage.data_file_reader import DataFileReader

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


class TemplateData:
    def __init__(
        self,
        input_dir: Optional[PathLike] = None,
        config: Optional[CascadeConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.config = config or get_config()
        self.data_template_engine = self.config.data_template_engine

        if template_engine is None and self.data_template_engine:
            template_engine = get_template_engine(self.data_template_engine)
        self.reader = DataFileReader(template_engine)

        self._explicit_data_dir = False
        self.set_input_dir(input_dir if input_dir is not None else self.config.dir.input)

        self.fetched_raw_imports = False
        self.raw_imports: Dict[str, Any] = {}
        self._imports_lock = asyncio.Lock()

        self.global_data: Optional[Dict[str, Any]] = None
        self._generation = 0
        self._build_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Directories and engine
    # ------------------------------------------------------------------

    def set_input_dir(self, input_dir: PathLike) -> None:
        self.input_dir = str(input_dir)
        data_subdir = self.config.dir.data
        if data_subdir in ("", "."):
            self.data_dir = Path(self.input_dir)
        else:
            self.data_dir = Path(self.input_dir) / data_subdir
        self._explicit_data_dir = False

    def set_data_directory(self, path: PathLike) -> None:
        """Point global data discovery at ``path``, independent of the input dir."""
        self.data_dir = Path(path)
        self._explicit_data_dir = True
        self.clear_data()

    def get_data_dir(self) -> Path:
        return self.data_dir

    def set_data_template_engine(self, engine_name: Optional[str]) -> None:
        self.data_template_engine = engine_name or None
        self.reader.template_engine = (
            get_template_engine(engine_name) if engine_name else None
        )

    # ------------------------------------------------------------------
    # Imported metadata
    # ------------------------------------------------------------------

    def get_metadata_path(self) -> Path:
        return Path.cwd() / self.config.metadata_file

    async def get_raw_imports(self) -> Dict[str, Any]:
        if not self.fetched_raw_imports:
            async with self._imports_lock:
                if not self.fetched_raw_imports:
                    metadata = await self.reader.get_json_raw(self.get_metadata_path())
                    self.raw_imports = {self.config.keys.package: metadata}
                    self.fetched_raw_imports = True
        return self.raw_imports

    # ------------------------------------------------------------------
    # Global data
    # ------------------------------------------------------------------

    def _check_data_dir(self) -> None:
        if self._explicit_data_dir:
            if not self.data_dir.is_dir():
                raise DataDirectoryError(self.data_dir)
        elif self.input_dir and not Path(self.input_dir).is_dir():
            raise DataDirectoryError(self.input_dir)

    async def get_global_data_files(self) -> List[Path]:
        """All global data files, in lexicographic order of their POSIX paths."""
        self._check_data_dir()
        if not self.data_dir.is_dir():
            return []
        files = [
            p
            for p in self.data_dir.rglob(f"*{DATA_FILE_EXTENSION}")
            if p.is_file() and not _is_hidden(p.relative_to(self.data_dir))
        ]
        return sorted(files, key=lambda p: p.as_posix())

    def get_object_path_for_data_file(self, path: PathLike) -> str:
        return object_path_for_data_file(path, self.data_dir)

    def get_config_data(self) -> Dict[str, Any]:
        data = self.config.config_data
        if callable(data):
            data = data()
        if isinstance(data, dict):
            return data
        return {}

    async def get_all_global_data(self) -> Dict[str, Any]:
        raw_imports = await self.get_raw_imports()
        files = await self.get_global_data_files()

        # Reads run concurrently; placement stays in sorted path order.
        contents = await asyncio.gather(
            *(self.reader.get_json(path, raw_imports) for path in files)
        )

        global_data: Dict[str, Any] = {}
        for path, data in zip(files, contents):
            segments = object_path_segments(path, self.data_dir)
            logger.debug(f"Found global data file {path} and adding as: {'.'.join(segments)}")
            set_at_path(global_data, segments, data)

        deep_merge(global_data, self.get_config_data())
        return global_data

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    async def get_data(self, template_path: Optional[PathLike] = None) -> Dict[str, Any]:
        """
        Return the cached global data merged with imported metadata.

        With ``template_path`` the local cascade for that content file is
        merged on top (see ``get_local_data``).
        """
        if template_path is not None:
            return await self.get_local_data(template_path)

        raw_imports = await self.get_raw_imports()
        if self.global_data is None:
            async with self._build_lock:
                # A clear_data() during the build discards its result.
                while self.global_data is None:
                    generation = self._generation
                    global_json = await self.get_all_global_data()
                    built = deep_merge({}, global_json, raw_imports)
                    if generation != self._generation:
                        logger.debug("Global data cleared during build, rebuilding")
                        continue
                    self.global_data = built
                    logger.info(f"Built global data from {self.data_dir} ({len(self.global_data)} top-level keys)")
        return self.global_data

    def clear_data(self) -> None:
        self.global_data = None
        self._generation += 1

    async def cache_data(self) -> Dict[str, Any]:
        self.clear_data()
        return await self.get_data()

    # ------------------------------------------------------------------
    # Local data
    # ------------------------------------------------------------------

    def get_local_data_paths(self, template_path: PathLike) -> List[str]:
        return local_data_paths(template_path, self.input_dir)

    async def combine_local_data(
        self, local_data_paths: Union[PathLike, Iterable[PathLike]]
    ) -> Dict[str, Any]:
        raw_imports = await self.get_raw_imports()
        if isinstance(local_data_paths, (str, Path)):
            local_data_paths = [local_data_paths]

        local_data: Dict[str, Any] = {}
        for path in local_data_paths:
            data_for_path = await self.reader.get_json(path, raw_imports, ignore_processing=True)
            if not isinstance(data_for_path, dict):
                logger.warning(f"Ignoring local data file {path}: top-level value is not an object")
                continue
            deep_merge(local_data, data_for_path)
        return local_data

    async def get_local_data(self, template_path: PathLike) -> Dict[str, Any]:
        local_paths = self.get_local_data_paths(template_path)
        imported_data = await self.combine_local_data(local_paths)
        global_data = await self.get_data()
        return deep_merge({}, global_data, imported_data)
