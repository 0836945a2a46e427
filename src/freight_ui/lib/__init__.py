"""
Local library modules shared across the freight UI package.

Modules:
    logs: Logging utilities
    objects: Object hashing and serialization
"""

from freight_ui.lib import logs, objects

__all__ = ["logs", "objects"]
