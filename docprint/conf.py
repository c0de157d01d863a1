"""
Configuration defaults for docprint.

DEFAULT_RENDER_CONFIG is the global defaults table. It is read-only; every
facade builds its own configuration dict from it with build_config().
Projects can override individual defaults through the DOCPRINT_DEFAULTS
setting.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

from django.conf import settings

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


SETTINGS_NAME = "DOCPRINT_DEFAULTS"

# Reserved configuration key holding the renderer instance
RENDERER_KEY = "renderer"

# Markup sections and the configuration key each one reads from
MARKUP_SECTIONS = {
    "main": "markup_main",
    "header": "markup_header",
    "footer": "markup_footer",
}

ORIENTATIONS = ("P", "L")

DEFAULT_RENDER_CONFIG = MappingProxyType({
    "mode": "c",
    "page_orientation": "P",
    "page_format": "A4",
    "top_margin": 30.0,       # mm
    "right_margin": 15.0,
    "bottom_margin": 20.0,
    "left_margin": 15.0,
    "header_margin": 5.0,
    "footer_margin": 10.0,
    "font": "Helvetica",
    "font_size": 12.0,        # pt
    "author": "",
    "title": "",
    "header_first_page": True,
    "css_file": "",
    "css": "",
    "markup_main": "",
    "markup_header": "",
    "markup_footer": "",
    "sanitize": False,
    "base_url": "",
})


def normalize_orientation(value: Any) -> str:
    """
    Normalize an orientation value to 'P' or 'L'.

    Accepts the one-letter codes in any case as well as the words
    'portrait' and 'landscape'.

    Raises:
        ConfigurationError: If the value is not a known orientation
    """
    text = str(value or "").strip().upper()
    if text in ("PORTRAIT", "LANDSCAPE"):
        text = text[0]
    if text not in ORIENTATIONS:
        raise ConfigurationError(
            f"Invalid page orientation {value!r}, expected one of {ORIENTATIONS}"
        )
    return text


def get_settings_overrides() -> dict:
    """Return the declared options found in settings.DOCPRINT_DEFAULTS."""
    overrides = getattr(settings, SETTINGS_NAME, None) or {}
    result = {}
    for key, value in overrides.items():
        if key not in DEFAULT_RENDER_CONFIG:
            logger.warning(f"Ignoring unknown option {key!r} in settings.{SETTINGS_NAME}")
            continue
        result[key] = value
    return result


def build_config(values: Optional[Mapping[str, Any]] = None) -> dict:
    """
    Build a per-instance configuration dict.

    Merges, in increasing priority: DEFAULT_RENDER_CONFIG, the
    DOCPRINT_DEFAULTS setting and the given values. Only declared options
    are taken from values; the caller handles anything else.

    Returns:
        A new dict; the defaults table is left untouched
    """
    config = {**DEFAULT_RENDER_CONFIG, **get_settings_overrides()}
    for key, value in (values or {}).items():
        if key in DEFAULT_RENDER_CONFIG:
            config[key] = value
    config["page_orientation"] = normalize_orientation(config["page_orientation"])
    return config
