"""
Data Transfer Objects for the Printing Framework
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RendererParams:
    """
    Initialization parameters handed to a renderer.

    Margins are millimetres, font size is points. orientation is the
    default for pages added later; the opening page follows the format.
    """

    mode: str = "c"
    format: str = "A4"
    default_font_size: float = 12.0
    default_font: str = "Helvetica"
    margin_left: float = 15.0
    margin_right: float = 15.0
    margin_top: float = 30.0
    margin_bottom: float = 20.0
    margin_header: float = 5.0
    margin_footer: float = 10.0
    orientation: str = "P"
    base_url: str = ""

    @classmethod
    def from_config(cls, config: dict) -> "RendererParams":
        """Map a facade configuration dict onto renderer parameters."""
        return cls(
            mode=config["mode"],
            format=config["page_format"],
            default_font_size=float(config["font_size"]),
            default_font=config["font"],
            margin_left=float(config["left_margin"]),
            margin_right=float(config["right_margin"]),
            margin_top=float(config["top_margin"]),
            margin_bottom=float(config["bottom_margin"]),
            margin_header=float(config["header_margin"]),
            margin_footer=float(config["footer_margin"]),
            orientation=config["page_orientation"],
            base_url=config.get("base_url") or "",
        )


@dataclass
class PdfResult:
    """
    Result of PDF rendering operation.

    Contains the PDF bytes and metadata for HTTP responses.
    """

    pdf_bytes: bytes
    filename: str
    content_type: str = "application/pdf"
    disposition: str = "inline"

    def __len__(self) -> int:
        """Return the size of PDF in bytes"""
        return len(self.pdf_bytes)
