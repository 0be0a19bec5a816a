"""
Data discovery and assembly for the cascade.

This package is responsible for:
* Loading the cascade configuration (YAML file + env var override).
* Mapping data file locations to object paths and content files to their
  local data candidates.
* Building, caching and merging global, imported and local data.
"""
