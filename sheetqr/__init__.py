"""SheetQR desktop command layer."""

__version__ = "0.1.0"
