"""Rendered image payloads."""

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class PngImage:
    """Encoded PNG plus the views the web client consumes."""
    png_bytes: bytes
    mime_type: str = "image/png"

    @property
    def base64(self) -> str:
        return base64.b64encode(self.png_bytes).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


@dataclass
class ComposeInput:
    """Everything drawn into a layout. Empty texts and missing images are skipped."""
    background: bytes                         # encoded image, cover-fit to the canvas
    headline: str = ""
    sub_text: str = ""
    cta_text: str = ""
    badge_text: str = ""
    legal_text: str = ""
    hero_image: bytes | None = None
    logo_image: bytes | None = None
    auto_readability_panel: bool = True       # translucent panel behind busy / low-contrast copy
