"""
WeasyPrint Renderer Implementation

Stateful document builder on top of the WeasyPrint engine. Header, footer,
styles and body content are collected through the IPdfRenderer calls and
composed into a single paged-media HTML document when output is requested.
"""

from html import escape
from pathlib import Path
from typing import List, Optional, Union
import logging
import re

try:
    from weasyprint import HTML
    WEASYPRINT_AVAILABLE = True
except (ImportError, OSError):
    # OSError: Python package present but Pango/Cairo system libraries missing
    WEASYPRINT_AVAILABLE = False

from ..conf import normalize_orientation
from ..exceptions import ConfigurationError, RenderIOError
from .dto import PdfResult, RendererParams
from .interfaces import Destination, HTMLMode, IPdfRenderer


logger = logging.getLogger(__name__)


STYLE_BLOCK_RE = re.compile(r"<style[^>]*>(.*?)</style>", re.IGNORECASE | re.DOTALL)
BODY_RE = re.compile(r"<body[^>]*>(.*)</body>", re.IGNORECASE | re.DOTALL)
STYLESHEET_LINK_RE = re.compile(
    r"""<link\b[^>]*\brel\s*=\s*["']?stylesheet\b[^>]*>""", re.IGNORECASE
)
PAGE_SIZE_RE = re.compile(r"[A-Za-z0-9]+")
LANG_RE = re.compile(r"^([a-z]{2,3})(?:[-_]([a-z]{2}))?(?=$|[-+_])", re.IGNORECASE)

# Renderer modes that select a font/charset regime rather than a language
CHARSET_MODES = ("c", "s", "utf-8", "utf8")
CHARSET_PREFIXES = ("utf", "win", "iso")

PAGE_CSS = """
@page {{
    size: {size} portrait;
    margin: {top}mm {right}mm {bottom}mm {left}mm;
    @top-center {{
        content: element(docprint-header);
        vertical-align: top;
        padding-top: {header}mm;
        width: 100%;
    }}
    @bottom-center {{
        content: element(docprint-footer);
        vertical-align: bottom;
        padding-bottom: {footer}mm;
        width: 100%;
    }}
}}
@page docprint-portrait {{ size: {size} portrait; }}
@page docprint-landscape {{ size: {size} landscape; }}
.docprint-header {{ position: running(docprint-header); }}
.docprint-footer {{ position: running(docprint-footer); }}
section.docprint-page-P {{ page: docprint-portrait; }}
section.docprint-page-L {{ page: docprint-landscape; }}
section.docprint-page + section.docprint-page {{ break-before: page; }}
body {{ font-family: {font}; font-size: {font_size}pt; }}
"""

NO_FIRST_PAGE_HEADER_CSS = "@page :first { @top-center { content: none; } }\n"


def css_string(value: str) -> str:
    """Quote a value as a CSS string literal."""
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("<", "\\3c ")
        .replace("\n", " ")
        .replace("\r", " ")
    )
    return f'"{escaped}"'


class _Section:
    """A run of body content that shares one page orientation."""

    def __init__(self, orientation: str):
        self.orientation = orientation
        self.chunks: List[str] = []


class WeasyPrintRenderer(IPdfRenderer):
    """
    PDF renderer using WeasyPrint engine.

    The opening page takes its orientation from the format identifier
    ('A4' is portrait, 'A4-L' landscape). params.orientation only applies
    to pages started with add_page() without an explicit orientation, so
    callers that want a landscape document call add_page('L') first.

    Supports:
    - Running HTML header and footer, optionally hidden on page one
    - Per-page orientation changes via add_page()
    - Static assets via params.base_url
    """

    def __init__(self, params: Optional[RendererParams] = None):
        """
        Initialize the renderer.

        Args:
            params: Initialization parameters; defaults if omitted
        """
        self.params = params or RendererParams()

        page_size, _, suffix = self.params.format.partition("-")
        self.page_size = page_size or "A4"
        if not PAGE_SIZE_RE.fullmatch(self.page_size):
            raise ConfigurationError(f"Invalid page format {self.params.format!r}")
        self.current_orientation = "L" if suffix.upper() == "L" else "P"

        self.author = ""
        self.title = ""
        self.header_html = ""
        self.header_first_page = True
        self.footer_html = ""
        self._styles: List[str] = []
        self._stylesheet_links: List[str] = []
        self._sections: List[_Section] = [_Section(self.current_orientation)]

    def set_author(self, author: str) -> None:
        self.author = author or ""

    def set_title(self, title: str) -> None:
        self.title = title or ""

    def set_html_header(self, html: str, show_on_first_page: bool = True) -> None:
        self.header_html = html
        self.header_first_page = bool(show_on_first_page)

    def set_html_footer(self, html: str) -> None:
        self.footer_html = html

    def write_html(self, html: str, mode: HTMLMode = HTMLMode.DEFAULT) -> None:
        """
        Append markup.

        Blank input is ignored so it never counts as page content. In
        DEFAULT mode a full document contributes its <style> blocks,
        stylesheet <link> elements and body; other head content is dropped.
        """
        if not html or not html.strip():
            return
        mode = HTMLMode(mode)
        if mode is HTMLMode.STYLE:
            self._styles.append(html)
            return
        if mode is HTMLMode.DEFAULT:
            self._styles.extend(STYLE_BLOCK_RE.findall(html))
            html = STYLE_BLOCK_RE.sub("", html)
            self._stylesheet_links.extend(STYLESHEET_LINK_RE.findall(html))
            html = STYLESHEET_LINK_RE.sub("", html)
            body = BODY_RE.search(html)
            if body:
                html = body.group(1)
            if not html.strip():
                return
        self._sections[-1].chunks.append(html)

    def add_page(self, orientation: Optional[str] = None) -> None:
        """
        Start a new page.

        When nothing has been written to the current page yet, the current
        page is reused with the new orientation instead of leaving a blank
        page behind.
        """
        orientation = normalize_orientation(orientation or self.params.orientation)
        current = self._sections[-1]
        if current.chunks:
            self._sections.append(_Section(orientation))
        else:
            current.orientation = orientation
        self.current_orientation = orientation
        logger.debug(f"Started page {len(self._sections)} ({orientation})")

    def page_count(self) -> int:
        return len(self._render_document().pages)

    def get_html(self) -> str:
        """Return the composed document as it will be handed to WeasyPrint."""
        params = self.params
        css = PAGE_CSS.format(
            size=self.page_size,
            top=params.margin_top,
            right=params.margin_right,
            bottom=params.margin_bottom,
            left=params.margin_left,
            header=params.margin_header,
            footer=params.margin_footer,
            font=css_string(params.default_font),
            font_size=params.default_font_size,
        )
        if self.header_html and not self.header_first_page:
            css += NO_FIRST_PAGE_HEADER_CSS

        lang = self._language()
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{lang}">' if lang else "<html>",
            '<head><meta charset="utf-8">',
        ]
        if self.title:
            parts.append(f"<title>{escape(self.title)}</title>")
        if self.author:
            parts.append(f'<meta name="author" content="{escape(self.author)}">')
        parts.append(f"<style>{css}</style>")
        parts.extend(self._stylesheet_links)
        parts.extend(f"<style>{style}</style>" for style in self._styles)
        parts.append("</head><body>")
        if self.header_html:
            parts.append(f'<div class="docprint-header">{self.header_html}</div>')
        if self.footer_html:
            parts.append(f'<div class="docprint-footer">{self.footer_html}</div>')
        for section in self._sections:
            if not section.chunks:
                continue
            parts.append(
                f'<section class="docprint-page docprint-page-{section.orientation}">'
                + "".join(section.chunks)
                + "</section>"
            )
        parts.append("</body></html>")
        return "\n".join(parts)

    def output(self, name: str = "", dest: Union[Destination, str] = Destination.STRING):
        dest = Destination.coerce(dest)
        pdf_bytes = self._render_document().write_pdf()

        if dest is Destination.FILE:
            if not name:
                raise RenderIOError("No output path given for file destination")
            try:
                Path(name).write_bytes(pdf_bytes)
            except OSError as e:
                logger.error(f"Failed to write PDF to {name}: {e}", exc_info=True)
                raise RenderIOError(f"Failed to write PDF to {name}: {e}") from e
            logger.info(f"Wrote PDF to {name} ({len(pdf_bytes)} bytes)")
            return None

        disposition = "attachment" if dest is Destination.DOWNLOAD else "inline"
        return PdfResult(
            pdf_bytes=pdf_bytes,
            filename=name or "document.pdf",
            disposition=disposition,
        )

    def _render_document(self):
        """Lay out the composed HTML with WeasyPrint and return its Document."""
        if not WEASYPRINT_AVAILABLE:
            raise ImportError(
                "WeasyPrint is not installed. "
                "Install it with: pip install weasyprint"
            )
        try:
            document = HTML(string=self.get_html(), base_url=self.params.base_url or None).render()
            logger.debug(f"Laid out document: {len(document.pages)} pages")
            return document
        except Exception as e:
            logger.error(f"Failed to render PDF: {e}", exc_info=True)
            raise

    def _language(self) -> str:
        mode = (self.params.mode or "").strip()
        if mode.lower() in CHARSET_MODES or mode.lower().startswith(CHARSET_PREFIXES):
            return ""
        match = LANG_RE.match(mode)
        if not match:
            return ""
        language, region = match.groups()
        return f"{language.lower()}-{region.upper()}" if region else language.lower()
