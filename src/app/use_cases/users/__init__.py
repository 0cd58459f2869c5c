"""
User Context Use Cases
"""

from .load_context_use_case import LoadContextUseCase

__all__ = [
    "LoadContextUseCase",
]
