import copy
from typing import Any, Dict, Iterable, List, Mapping, Sequence


def deep_merge(target: Dict[str, Any], *sources: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge each source mapping into ``target`` (in place) and return it.

    Nested mappings are combined key by key. Any other value, lists included,
    replaces whatever the target held. Copied values never alias the sources.
    Sources that are not mappings contribute nothing.
    """
    for source in sources:
        if not isinstance(source, Mapping) or not source:
            continue
        for key, value in source.items():
            existing = target.get(key)
            if isinstance(value, Mapping) and isinstance(existing, dict):
                deep_merge(existing, value)
            elif isinstance(value, Mapping):
                target[key] = deep_merge({}, value)
            else:
                target[key] = copy.deepcopy(value)
    return target


def set_at_path(target: Dict[str, Any], segments: Sequence[str], value: Any) -> Dict[str, Any]:
    """
    Place ``value`` at the nested location named by ``segments``.

    Intermediate mappings are created as needed (a non-mapping in the way is
    replaced). If both the value already at the path and the new value are
    mappings they are merged, otherwise the new value wins.
    """
    if not segments:
        raise ValueError("Object path must have at least one segment")

    node = target
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child

    leaf = segments[-1]
    if isinstance(value, Mapping) and isinstance(node.get(leaf), dict):
        deep_merge(node[leaf], value)
    elif isinstance(value, Mapping):
        node[leaf] = deep_merge({}, value)
    else:
        node[leaf] = copy.deepcopy(value)
    return target


def unique(items: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping the first occurrence of each item."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
