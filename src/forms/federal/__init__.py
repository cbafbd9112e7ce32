"""Form 1040 and its schedules."""

from .f1040 import F1040

__all__ = ["F1040"]
