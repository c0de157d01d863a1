"""
Printing Framework

Configurable PDF generation on top of WeasyPrint. DocumentRenderFacade
collects layout settings and header, footer and body markup, builds the
renderer lazily and forwards everything else to it.
"""

from .dto import PdfResult, RendererParams
from .facade import DocumentRenderFacade
from .interfaces import Destination, HTMLMode, IPdfRenderer
from .weasyprint_renderer import WeasyPrintRenderer

__all__ = [
    'DocumentRenderFacade',
    'Destination',
    'HTMLMode',
    'IPdfRenderer',
    'PdfResult',
    'RendererParams',
    'WeasyPrintRenderer',
]
