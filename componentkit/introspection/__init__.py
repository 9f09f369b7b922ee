"""
ComponentKit introspection utilities - loading extraction output for custom tools
"""

from .registry import load_component_registry, registry_from_dict, RegistryManifest


__all__ = [
    'load_component_registry',
    'registry_from_dict',
    'RegistryManifest',
]
