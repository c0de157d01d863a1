"""
Markup sources for header, footer and body content.

A markup configuration value can be one of three things. classify() turns
the raw value into one of the variants below and resolve() turns a variant
into the HTML string that is written to the renderer. Values are classified
at render time, so a path that appears on disk after configuration is
still picked up.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union
import logging

from django.template import Context, Template, engines


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateHandle:
    """An already loaded template; anything with a callable render()."""

    template: Any


@dataclass(frozen=True)
class FilePath:
    """A template file on disk."""

    path: Path


@dataclass(frozen=True)
class LiteralText:
    """Markup used as given."""

    text: str


Markup = Union[TemplateHandle, FilePath, LiteralText]


def _is_existing_file(value: Union[str, Path]) -> bool:
    try:
        return Path(value).is_file()
    except (OSError, ValueError):
        # e.g. names too long for the filesystem, embedded NUL bytes
        return False


def classify(value: Any) -> Markup:
    """
    Classify a raw markup value.

    Precedence is fixed: template handle, then existing file, then literal
    string. A string that happens to name an existing file is therefore
    always loaded as a template.
    """
    if callable(getattr(value, "render", None)):
        return TemplateHandle(value)
    if isinstance(value, (str, Path)) and value and _is_existing_file(value):
        return FilePath(Path(value))
    if isinstance(value, str):
        return LiteralText(value)
    return LiteralText("")


def load_template(path: Union[str, Path]):
    """Load a template file through the Django template engine."""
    source = Path(path).read_text(encoding="utf-8")
    return engines["django"].from_string(source)


def resolve(markup: Markup, context: Optional[dict] = None) -> str:
    """
    Resolve a classified markup value to an HTML string.

    Args:
        markup: Value returned by classify()
        context: Template context used for handles and template files
    """
    context = context or {}
    if isinstance(markup, TemplateHandle):
        if isinstance(markup.template, Template):
            # Engine-level templates take a Context, backend templates a dict
            return markup.template.render(Context(context))
        return markup.template.render(context)
    if isinstance(markup, FilePath):
        logger.debug(f"Rendering markup template {markup.path}")
        return load_template(markup.path).render(context)
    return markup.text


def resolve_value(value: Any, context: Optional[dict] = None) -> str:
    """Shortcut for resolve(classify(value), context)."""
    return resolve(classify(value), context)
