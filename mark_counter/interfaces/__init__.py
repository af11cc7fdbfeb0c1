"""
Interfaces module - UI adapters for the marking core.

Provides adapters to connect the core marking logic
with different UI frameworks (Tkinter, Web, etc).
"""

from .gui_adapter import GUIMarkingAdapter

__all__ = ['GUIMarkingAdapter']
