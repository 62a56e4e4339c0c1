"""Feed output helpers."""

from .headers import ANCHOR_HEADER, anchor_header, anchor_texts, percent_encode

__all__ = [
    "ANCHOR_HEADER",
    "anchor_header",
    "anchor_texts",
    "percent_encode",
]
