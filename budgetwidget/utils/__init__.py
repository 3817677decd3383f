"""Mini README: Utility helpers for the budget widget.

Currently exports the entry-point plugin loader used by the storage registry
to discover third-party backends.
"""

from .plugin_loader import load_entry_point_plugins

__all__ = ["load_entry_point_plugins"]
