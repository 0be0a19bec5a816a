"""
Template engines used to pre-process global data files.

A data file may itself be a template: its raw text is compiled once and the
resulting render function is awaited with a context mapping (the imported
project metadata) to produce the JSON text that is then parsed.

Only the narrow ``compile -> render(context)`` contract is used by the cascade,
so any engine can be plugged in by subclassing ``TemplateEngine`` and either
registering it by name or injecting an instance into ``TemplateData``.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type

import jinja2

from datacascade.domain.errors import TemplateEngineError

logger = logging.getLogger(__name__)

RenderFunction = Callable[[Mapping[str, Any]], Awaitable[str]]


class TemplateEngine:
    """Base class for data template engines."""

    name: str = ""

    def compile(self, raw: str) -> RenderFunction:
        raise NotImplementedError


class Jinja2TemplateEngine(TemplateEngine):
    name = "jinja2"

    def __init__(self, environment: Optional[jinja2.Environment] = None):
        self.environment = environment or jinja2.Environment(
            enable_async=True,
            keep_trailing_newline=True,
        )

    def compile(self, raw: str) -> RenderFunction:
        template = self.environment.from_string(raw)

        async def render(context: Mapping[str, Any]) -> str:
            return await template.render_async(dict(context or {}))

        return render


_ENGINES: Dict[str, Type[TemplateEngine]] = {
    "jinja2": Jinja2TemplateEngine,
    # Nunjucks templates share Jinja2 syntax for everything a data file needs.
    "njk": Jinja2TemplateEngine,
}


def register_template_engine(name: str, engine_cls: Type[TemplateEngine]) -> None:
    _ENGINES[name] = engine_cls


def available_template_engines() -> list[str]:
    return sorted(_ENGINES)


def get_template_engine(name: str) -> TemplateEngine:
    """Instantiate the engine registered under ``name``."""
    engine_cls = _ENGINES.get(name)
    if engine_cls is None:
        raise TemplateEngineError(name)
    logger.debug(f"Using data template engine {name} ({engine_cls.__name__})")
    return engine_cls()
