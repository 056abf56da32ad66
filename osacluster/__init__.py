"""Managed OpenShift cluster model, derived values and validation helpers."""

__version__ = "0.1.0"

__all__ = ["api", "derive", "validate", "pluginconfig"]