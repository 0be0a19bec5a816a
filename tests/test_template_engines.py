from __future__ import annotations

import jinja2
import pytest

from datacascade.domain.errors import TemplateEngineError
from datacascade.services.template_engines import (
    Jinja2TemplateEngine,
    TemplateEngine,
    available_template_engines,
    get_template_engine,
    register_template_engine,
)


def test_registered_engines():
    assert "jinja2" in available_template_engines()
    assert isinstance(get_template_engine("njk"), Jinja2TemplateEngine)


def test_unknown_engine_raises():
    with pytest.raises(TemplateEngineError) as exc:
        get_template_engine("handlebars")
    assert exc.value.name == "handlebars"


def test_register_custom_engine(monkeypatch):
    from datacascade.services import template_engines

    class UpperEngine(TemplateEngine):
        name = "upper"

        def compile(self, raw):
            async def render(context):
                return raw.upper()

            return render

    monkeypatch.setattr(template_engines, "_ENGINES", dict(template_engines._ENGINES))
    register_template_engine("upper", UpperEngine)
    assert isinstance(get_template_engine("upper"), UpperEngine)


@pytest.mark.asyncio
async def test_jinja2_render_failure_propagates():
    render = Jinja2TemplateEngine().compile("{{ pkg.name.missing() }}")
    with pytest.raises(jinja2.UndefinedError):
        await render({"pkg": {}})


@pytest.mark.asyncio
async def test_jinja2_compiled_template_is_reusable():
    render = Jinja2TemplateEngine().compile('{"n": "{{ n }}"}')
    assert await render({"n": 1}) == '{"n": "1"}'
    assert await render({"n": 2}) == '{"n": "2"}'
