"""
HTML Sanitizer for Printing Framework

Cleans header, footer and body markup before it reaches the renderer when
the 'sanitize' option is enabled. Markup written by trusted templates does
not need it; user-supplied rich text does.
"""

import logging

import bleach
from bleach.css_sanitizer import CSSSanitizer


logger = logging.getLogger(__name__)


ALLOWED_TAGS = [
    'p', 'br', 'strong', 'b', 'em', 'i', 'u', 's', 'sub', 'sup', 'small',
    'a', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'blockquote', 'ol', 'ul', 'li', 'dl', 'dt', 'dd', 'pre', 'code',
    'span', 'div', 'section', 'header', 'footer',
    'table', 'thead', 'tbody', 'tfoot', 'tr', 'th', 'td', 'caption', 'colgroup', 'col',
    'img', 'hr', 'figure', 'figcaption',
]

ALLOWED_ATTRIBUTES = {
    '*': ['class', 'id', 'style'],
    'a': ['href', 'title', 'name'],
    'img': ['src', 'alt', 'title', 'width', 'height'],
    'td': ['colspan', 'rowspan', 'align', 'valign'],
    'th': ['colspan', 'rowspan', 'align', 'valign'],
    'col': ['span', 'width'],
    'table': ['border', 'cellpadding', 'cellspacing', 'width'],
}

# Includes the paged-media properties that matter for print layout
ALLOWED_CSS_PROPERTIES = [
    'color', 'background-color', 'font-family', 'font-size', 'font-weight', 'font-style',
    'text-align', 'text-decoration', 'vertical-align', 'line-height',
    'margin', 'margin-top', 'margin-bottom', 'margin-left', 'margin-right',
    'padding', 'padding-top', 'padding-bottom', 'padding-left', 'padding-right',
    'border', 'border-top', 'border-bottom', 'border-collapse',
    'width', 'height',
    'page-break-before', 'page-break-after', 'page-break-inside',
    'break-before', 'break-after', 'break-inside',
]


def sanitize_html(html: str, *, strict: bool = False) -> str:
    """
    Sanitize HTML content before rendering to PDF.

    Args:
        html: HTML string to sanitize
        strict: If True, inline styles are removed as well

    Returns:
        Sanitized HTML string
    """
    attrs = {tag: list(names) for tag, names in ALLOWED_ATTRIBUTES.items()}

    css_sanitizer = None
    if strict:
        attrs['*'] = [a for a in attrs['*'] if a != 'style']
    else:
        css_sanitizer = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)

    clean_html = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=attrs,
        css_sanitizer=css_sanitizer,
        strip=True,
    )
    if len(clean_html) != len(html):
        logger.debug(f"Sanitizer changed markup ({len(html)} -> {len(clean_html)} chars)")
    return clean_html
