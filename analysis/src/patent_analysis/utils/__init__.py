"""Utility helpers."""

from .files import compute_sha256
from .text import wrap_label

__all__ = ["compute_sha256", "wrap_label"]
