"""Decode and encode MP4/ISOBMFF atoms."""

__version__ = "0.8.1"

__all__ = [
    "atom",
    "movie",
    "edit",
    "media",
    "sample_table",
    "aux_info",
    "sample_entry",
]