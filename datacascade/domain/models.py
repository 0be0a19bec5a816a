"""
Pydantic models for the data cascade configuration.

The shape mirrors the build configuration consumed by the cascade:

- ``dir``: input root and data subdirectory names
- ``dataTemplateEngine``: engine used to pre-process global data files
- ``keys``: top-level key names used when exposing imported metadata
- ``configData``: programmatic data merged over file-discovered global data

Field names are snake_case in Python; the camelCase aliases are accepted
when loading from a YAML/JSON config file.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DirectoryConfig(BaseModel):
    """Directory layout of a site build."""

    model_config = ConfigDict(populate_by_name=True)

    input: str = Field(
        default=".",
        description="Input root that content paths are resolved against.",
    )
    data: str = Field(
        default="_data",
        description="Global data directory, relative to the input root. '' or '.' means the input root itself.",
    )


class KeysConfig(BaseModel):
    """Names of top-level keys injected into the merged data."""

    package: str = Field(
        default="pkg",
        description="Key under which the project metadata file is exposed.",
    )


class CascadeConfig(BaseModel):
    """
    Immutable process-wide configuration consumed by the data cascade.

    ``config_data`` may be a mapping or, when the config is built in code,
    a zero-argument callable returning a mapping.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    dir: DirectoryConfig = Field(default_factory=DirectoryConfig)
    data_template_engine: Optional[str] = Field(
        default="jinja2",
        alias="dataTemplateEngine",
        description="Template engine applied to global data files before parsing. Falsy disables it.",
    )
    keys: KeysConfig = Field(default_factory=KeysConfig)
    metadata_file: str = Field(
        default="package.json",
        alias="metadataFile",
        description="Project metadata file, relative to the working directory.",
    )
    config_data: Any = Field(
        default=None,
        alias="configData",
        description="Extra global data (mapping or callable returning one). Wins over data files.",
    )
