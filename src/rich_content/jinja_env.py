# -*- coding: utf-8 -*-
"""
Jinja2 environment for the HTML preview page.
"""
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from .config import settings


class CleanTemplate(Template):
    """Template that automatically cleans excessive blank lines."""

    _EXCESS_NEWLINES = re.compile(r"\n{3,}")

    def render(self, *args, **kwargs) -> str:
        output = super().render(*args, **kwargs)
        return self._EXCESS_NEWLINES.sub("\n\n", output).strip()


def create_jinja_env(template_dir: Path | str | None = None) -> Environment:
    """
    Create a configured Jinja2 environment.

    Args:
        template_dir: Path to templates directory. Defaults to settings.TEMPLATES_DIR.

    Returns:
        Configured Jinja2 Environment instance.
    """
    if template_dir is None:
        template_dir = settings.TEMPLATES_DIR

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        autoescape=select_autoescape(["html", "j2"]),
    )
    env.template_class = CleanTemplate

    return env


_default_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get or create the default Jinja2 environment."""
    global _default_env
    if _default_env is None:
        _default_env = create_jinja_env()
    return _default_env


def render_page(template_name: str, **context) -> str:
    """
    Render a page template with the given context.

    Rendered content HTML is inserted after the template pass:
    1. Replace content variables with placeholders
    2. Render the template (autoescaped, blank lines collapsed)
    3. Substitute placeholders with the content HTML verbatim

    The content is already escaped by the renderer, and its blank lines
    are meaningful under ``white-space: pre-wrap``.

    Args:
        template_name: Name of the template file (e.g., "preview.html.j2")
        **context: Variables to pass to the template

    Returns:
        Rendered page
    """
    CONTENT_VARS = ["content_html"]

    content_map = {}
    safe_context = {}

    for key, value in context.items():
        if key in CONTENT_VARS and isinstance(value, str):
            placeholder = f"__SAFE_CONTENT_{key.upper()}__"
            content_map[placeholder] = value
            safe_context[key] = placeholder
        else:
            safe_context[key] = value

    env = get_jinja_env()
    template = env.get_template(template_name)
    result = template.render(**safe_context)

    for placeholder, content in content_map.items():
        result = result.replace(placeholder, content)

    return result
