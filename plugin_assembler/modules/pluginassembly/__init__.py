"""Plugin assembly module exports."""

from .service import PluginAssemblyService

__all__ = ["PluginAssemblyService"]
