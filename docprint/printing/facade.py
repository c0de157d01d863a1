"""
Document Render Facade

Holds the render configuration, builds one WeasyPrintRenderer from it on
first use, writes the configured markup into it and exposes the output
operations. Any other renderer operation is reachable through invoke() or
plain attribute access on the facade.

A facade is meant for a single render-and-output cycle. The renderer keeps
everything written to it, so a second save() on the same facade writes the
body again on top of the first one.
"""

from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import quote
import logging

from django.http import HttpResponse

from ..conf import DEFAULT_RENDER_CONFIG, MARKUP_SECTIONS, RENDERER_KEY, build_config, normalize_orientation
from ..exceptions import ConfigurationError, ConfigurationTypeError, UnknownOperationError
from .dto import PdfResult, RendererParams
from .interfaces import Destination, HTMLMode
from .markup import resolve_value
from .sanitizer import sanitize_html
from .weasyprint_renderer import WeasyPrintRenderer


logger = logging.getLogger(__name__)


# Never forwarded to the renderer: the lazy construction hook itself
NON_FORWARDED = frozenset({"get_renderer"})


class DocumentRenderFacade:
    """
    Configurable façade over a PDF renderer.

    Usage:
        facade = DocumentRenderFacade(page_orientation='L', author='ACME')
        facade['markup_main'] = 'reports/summary.html'
        facade.context = {'report': report}
        facade.save('/tmp/summary.pdf')
        pages = facade.page_count()   # forwarded to the renderer
    """

    renderer_class = WeasyPrintRenderer

    def __init__(self, context: Optional[dict] = None, **options):
        """
        Initialize the facade.

        Args:
            context: Template context for template-based markup
            **options: Initial configuration values; undeclared names are
                kept in the extra store
        """
        self._config = build_config(options)
        self._renderer: Optional[WeasyPrintRenderer] = None
        self.extra = {
            k: v for k, v in options.items()
            if k not in DEFAULT_RENDER_CONFIG and k != RENDERER_KEY
        }
        self.context = dict(context or {})
        if RENDERER_KEY in options:
            self.set(RENDERER_KEY, options[RENDERER_KEY])

    # Configuration store

    def __getitem__(self, key: str) -> Any:
        if key == RENDERER_KEY:
            return self.get_renderer()
        if key in self._config:
            return self._config[key]
        return self.extra[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return key == RENDERER_KEY or key in self._config or key in self.extra

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def set(self, key: str, value: Any) -> "DocumentRenderFacade":
        """
        Set one configuration value.

        Raises:
            ConfigurationTypeError: If key is 'renderer' and value is not a
                WeasyPrintRenderer
            ConfigurationError: If an orientation value is invalid
        """
        if key == RENDERER_KEY:
            if not isinstance(value, self.renderer_class):
                raise ConfigurationTypeError(
                    f"'{RENDERER_KEY}' must be a {self.renderer_class.__name__}, "
                    f"got {type(value).__name__}"
                )
            self._renderer = value
        elif key in self._config:
            if key == "page_orientation":
                value = normalize_orientation(value)
            self._config[key] = value
        else:
            self.extra[key] = value
        return self

    def configure(self, **values) -> "DocumentRenderFacade":
        for key, value in values.items():
            self.set(key, value)
        return self

    def as_dict(self) -> dict:
        """Return a copy of the declared configuration values."""
        return dict(self._config)

    def get_configuration_form(self, data: Optional[dict] = None):
        """Build the configuration form, pre-filled with the current values."""
        from ..forms import PdfConfigurationForm
        return PdfConfigurationForm(data=data, initial=self.as_dict())

    def configure_from_form(self, form) -> "DocumentRenderFacade":
        """
        Apply the cleaned data of a configuration form.

        Raises:
            ConfigurationError: If the form does not validate
        """
        if not form.is_valid():
            raise ConfigurationError(f"Invalid PDF configuration: {form.errors.as_text()}")
        return self.configure(**form.cleaned_data)

    # Renderer

    def get_renderer(self) -> WeasyPrintRenderer:
        """Return the renderer, building it on first call."""
        if self._renderer is None:
            self._renderer = self._create_renderer()
        return self._renderer

    def _create_renderer(self) -> WeasyPrintRenderer:
        params = RendererParams.from_config(self._config)
        renderer = self.renderer_class(params)
        # The constructor opens page one in the format's own orientation
        # and ignores params.orientation for it.
        renderer.add_page(params.orientation)
        logger.debug(f"Created {type(renderer).__name__} ({params.format}, {params.orientation})")
        return renderer

    # Markup

    def resolve_markup(self, section: str) -> str:
        """
        Resolve the markup configured for a section to HTML.

        Args:
            section: 'main', 'header' or 'footer'
        """
        try:
            key = MARKUP_SECTIONS[section]
        except KeyError:
            raise ConfigurationError(
                f"Unknown markup section {section!r}, expected one of {sorted(MARKUP_SECTIONS)}"
            )
        html = resolve_value(self._config[key], self.context)
        if html and self._config["sanitize"]:
            html = sanitize_html(html)
        return html

    def resolve_css(self) -> str:
        """Return the contents of css_file if it exists, the css option otherwise."""
        css_file = self._config["css_file"]
        if css_file and Path(css_file).is_file():
            return Path(css_file).read_text(encoding="utf-8")
        return self._config["css"] or ""

    def apply_markup(self) -> None:
        """Write metadata, header, footer, CSS and body into the renderer."""
        renderer = self.get_renderer()

        renderer.set_author(self._config["author"])
        if self._config["title"]:
            renderer.set_title(self._config["title"])

        header = self.resolve_markup("header")
        if header:
            renderer.set_html_header(header, show_on_first_page=self._config["header_first_page"])

        footer = self.resolve_markup("footer")
        if footer:
            renderer.set_html_footer(footer)

        body = self.resolve_markup("main")
        css = self.resolve_css()
        if css:
            renderer.write_html(css, HTMLMode.STYLE)
            renderer.write_html(body, HTMLMode.BODY)
        else:
            renderer.write_html(body)

        logger.debug(
            f"Applied markup: header={bool(header)}, footer={bool(footer)}, "
            f"css={bool(css)}, body={len(body)} chars"
        )

    # Output

    def save(self, path: Union[str, Path]) -> "DocumentRenderFacade":
        """
        Render and write the PDF to path.

        Raises:
            RenderIOError: If the file cannot be written
        """
        self.apply_markup()
        self.get_renderer().output(str(path), Destination.FILE)
        return self

    def render(self, filename: str = "document.pdf") -> PdfResult:
        """Render the PDF into memory."""
        self.apply_markup()
        return self.get_renderer().output(filename, Destination.STRING)

    def download(
        self,
        filename: str = "document.pdf",
        mode: Union[Destination, str] = Destination.INLINE,
    ) -> HttpResponse:
        """
        Render the PDF as an HTTP response.

        Args:
            filename: File name announced to the client
            mode: Destination.INLINE to display in the browser,
                Destination.DOWNLOAD to force a download
        """
        mode = Destination.coerce(mode)
        if mode not in (Destination.INLINE, Destination.DOWNLOAD):
            raise ConfigurationError(f"download() mode must be inline or download, got {mode.value!r}")

        self.apply_markup()
        result = self.get_renderer().output(filename, mode)

        response = HttpResponse(result.pdf_bytes, content_type=result.content_type)
        response['Content-Disposition'] = f'{result.disposition}; filename="{quote(result.filename)}"'
        response['Content-Length'] = len(result)
        logger.info(f"Sending PDF {result.filename} ({len(result)} bytes, {result.disposition})")
        return response

    # Pass-through

    def invoke(self, name: str, *args, **kwargs) -> Any:
        """
        Call a renderer operation by name.

        Arguments and return value pass through unchanged.

        Raises:
            UnknownOperationError: If the renderer has no such operation
        """
        return self._lookup_operation(name)(*args, **kwargs)

    def _lookup_operation(self, name: str):
        if name in NON_FORWARDED or name.startswith("_"):
            raise UnknownOperationError(f"'{name}' is not forwarded to the renderer")
        renderer = self.get_renderer()
        operation = getattr(renderer, name, None)
        if not callable(operation):
            raise UnknownOperationError(f"{type(renderer).__name__} has no operation '{name}'")
        return operation

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the facade does not define itself
        if self.__dict__.get("_renderer") is not None:
            return self._lookup_operation(name)

        # No renderer yet: check the name against the renderer class and
        # defer construction to the call, so lookups leave the config open
        if name in NON_FORWARDED or name.startswith("_"):
            raise UnknownOperationError(f"'{name}' is not forwarded to the renderer")
        if not callable(getattr(self.renderer_class, name, None)):
            raise UnknownOperationError(f"{self.renderer_class.__name__} has no operation '{name}'")

        def forward(*args, **kwargs):
            return self.invoke(name, *args, **kwargs)

        forward.__name__ = name
        return forward
