"""Terminal UI helpers."""

from .progress import DomainProgress

__all__ = ["DomainProgress"]
