"""
Interfaces for the Printing Framework

Defines the operations the facade needs from a rendering engine, plus the
write and output modes those operations accept.
"""

from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import Optional, Union


class HTMLMode(IntEnum):
    """How a write_html() call is interpreted."""

    DEFAULT = 0  # whole document or fragment, <style> blocks honoured
    STYLE = 1    # CSS only
    BODY = 2     # body fragment only


class Destination(str, Enum):
    """Where output() sends the finished document."""

    INLINE = "I"
    DOWNLOAD = "D"
    FILE = "F"
    STRING = "S"

    @classmethod
    def coerce(cls, value: Union["Destination", str]) -> "Destination":
        """Accept a Destination or its one-letter code (any case)."""
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


class IPdfRenderer(ABC):
    """
    Interface for PDF rendering engines.

    A renderer is stateful: header, footer, styles and body accumulate
    through the setter and write calls and are turned into a PDF by
    output().
    """

    @abstractmethod
    def set_author(self, author: str) -> None:
        """Set the author metadata."""
        pass

    @abstractmethod
    def set_title(self, title: str) -> None:
        """Set the title metadata."""
        pass

    @abstractmethod
    def set_html_header(self, html: str, show_on_first_page: bool = True) -> None:
        """
        Install the page header.

        Args:
            html: Header markup
            show_on_first_page: If False, page one carries no header
        """
        pass

    @abstractmethod
    def set_html_footer(self, html: str) -> None:
        """Install the page footer."""
        pass

    @abstractmethod
    def write_html(self, html: str, mode: HTMLMode = HTMLMode.DEFAULT) -> None:
        """
        Append markup to the document.

        Args:
            html: Markup or CSS, depending on mode
            mode: HTMLMode.STYLE for CSS, HTMLMode.BODY for body content,
                HTMLMode.DEFAULT for a document or fragment
        """
        pass

    @abstractmethod
    def add_page(self, orientation: Optional[str] = None) -> None:
        """Start a new page, optionally with an explicit orientation."""
        pass

    @abstractmethod
    def page_count(self) -> int:
        """Lay out the current content and return the number of pages."""
        pass

    @abstractmethod
    def output(self, name: str = "", dest: Union[Destination, str] = Destination.STRING):
        """
        Produce the PDF.

        Args:
            name: File path for Destination.FILE, file name otherwise
            dest: Output destination

        Returns:
            None for Destination.FILE, a PdfResult otherwise

        Raises:
            RenderIOError: If the file cannot be written
        """
        pass
