from .pipeline import PluginAssemblyService, ResolvedInputs

__all__ = ["PluginAssemblyService", "ResolvedInputs"]
