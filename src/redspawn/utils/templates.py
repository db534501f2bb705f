"""Template rendering utilities."""

import logging
from importlib import resources
from typing import Any

from jinja2 import Environment, FunctionLoader, StrictUndefined, TemplateError

from redspawn.errors import TemplateRenderError


logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "redspawn.redpanda.templates"


def read_packaged_file(name: str) -> str:
    """Read a file shipped in the templates package."""
    return resources.files(TEMPLATE_PACKAGE).joinpath(name).read_text(encoding="utf-8")


def _load_packaged_template(name: str):
    try:
        return read_packaged_file(name)
    except FileNotFoundError:
        return None


_environment = Environment(
    loader=FunctionLoader(_load_packaged_template),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def render_template(name: str, **context: Any) -> str:
    """Render a packaged Jinja2 template with the given context."""
    try:
        template = _environment.get_template(name)
        return template.render(**context)
    except TemplateError as e:
        logger.error(f"Template rendering error in {name}: {e}")
        raise TemplateRenderError(f"Failed to render {name}: {e}") from e

