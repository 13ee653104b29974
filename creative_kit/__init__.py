"""Ad creative toolkit: layouts, text autofit, guide overlays, copy and keyword nets."""

__version__ = "0.1.0"
