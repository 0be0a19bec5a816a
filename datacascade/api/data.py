"""
Inspection endpoints for the data cascade.

These expose the same operations a site build uses, so the merged data for any
content file can be checked without running the build itself.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from datacascade.core.dependencies import get_template_data
from datacascade.data.template_data import TemplateData
from datacascade.domain.errors import CascadeError

logger = logging.getLogger(__name__)
router = APIRouter()


def _raise_http(e: CascadeError) -> None:
    logger.error(f"Data cascade failed: {e}")
    raise HTTPException(status_code=500, detail=str(e))


@router.get("/info")
async def get_info(data: TemplateData = Depends(get_template_data)) -> dict:
    """
    Directories and template engine the cascade is currently using.
    """
    return {
        "input_dir": data.input_dir,
        "data_dir": data.get_data_dir().as_posix(),
        "data_template_engine": data.data_template_engine,
    }


@router.get("")
async def get_global_data(data: TemplateData = Depends(get_template_data)) -> dict:
    """
    Cached global data (data files + config data + imported metadata).
    """
    try:
        return await data.get_data()
    except CascadeError as e:
        _raise_http(e)


@router.get("/local")
async def get_local_data(
    path: str = Query(..., description="Content file path, relative to the working directory."),
    data: TemplateData = Depends(get_template_data),
) -> dict:
    """
    Fully merged data for a single content file.
    """
    try:
        return await data.get_local_data(path)
    except CascadeError as e:
        _raise_http(e)


@router.get("/paths")
async def get_local_data_paths(
    path: str = Query(..., description="Content file path, relative to the working directory."),
    data: TemplateData = Depends(get_template_data),
) -> List[str]:
    """
    Local data files consulted for a content file, lowest precedence first.
    """
    return data.get_local_data_paths(path)


@router.post("/refresh")
async def refresh_data(data: TemplateData = Depends(get_template_data)) -> dict:
    """
    Drop the cached global data and rebuild it from disk.
    """
    try:
        return await data.cache_data()
    except CascadeError as e:
        _raise_http(e)
