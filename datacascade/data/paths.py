"""
Path arithmetic for the data cascade.

* Global data files are addressed by an object path derived from their
  location under the data directory (``_data/nav/main.json`` -> ``nav.main``).
* Content files look up local data files named after their own stem and after
  each enclosing directory, up to (not including) the input directory.

All returned paths are POSIX strings so they compare equal across platforms.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

from datacascade.domain.cascade_utils import unique

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DATA_FILE_EXTENSION = ".json"


def _normalize(path: PathLike) -> PurePosixPath:
    return PurePosixPath(os.path.normpath(str(path)).replace(os.sep, "/"))


def object_path_segments(path: PathLike, data_dir: PathLike) -> List[str]:
    """
    Split a data file's location into object path segments.

    Files outside ``data_dir`` keep their full directory portion. Dots inside
    directory or file names also separate segments (``site.config.json`` ->
    ``["site", "config"]``).
    """
    file_path = _normalize(path)
    root = _normalize(data_dir)

    if root != PurePosixPath(".") and root in file_path.parents:
        reduced = file_path.relative_to(root)
    else:
        reduced = file_path

    parts = [part for part in reduced.parent.parts if part not in (".", "/")]
    parts.append(reduced.stem)
    return [segment for part in parts for segment in part.split(".") if segment]


def object_path_for_data_file(path: PathLike, data_dir: PathLike) -> str:
    return ".".join(object_path_segments(path, data_dir))


def _is_inside(directory: PurePosixPath, input_dir: PurePosixPath) -> bool:
    return directory != input_dir and input_dir in directory.parents


def local_data_paths(template_path: PathLike, input_dir: Optional[PathLike] = None) -> List[str]:
    """
    Candidate local data files for a content file, lowest precedence first.

    For ``pages/blog/post1.md`` under ``.`` this is::

        pages/pages.json
        pages/blog/blog.json
        pages/blog/post1.json

    A content file at the top of the input directory has no candidates.
    """
    parsed = _normalize(template_path)
    directory = parsed.parent
    if directory == PurePosixPath("."):
        logger.debug(f"local_data_paths({template_path}): []")
        return []

    paths = [str(directory / f"{parsed.stem}{DATA_FILE_EXTENSION}")]

    root = _normalize(input_dir) if input_dir else None
    for current in [directory, *directory.parents]:
        if current.name == "":
            continue
        if root is not None and not _is_inside(current, root):
            continue
        paths.append(str(current / f"{current.name}{DATA_FILE_EXTENSION}"))

    result = list(reversed(unique(paths)))
    logger.debug(f"local_data_paths({template_path}): {result}")
    return result
