"""
ComponentKit - components.d.ts generation for web component projects
"""

def _check_dependencies():
    """Check for required dependencies"""
    try:
        import pydantic
    except ImportError:
        raise ImportError(
            "ComponentKit requires pydantic to be installed.\n"
            "Install with: pip install pydantic"
        )

# Check dependencies on import
_check_dependencies()

# Import main API only after dependency check
from .core.config import get_version, load_build_config, BuildConfig, PathUtilities
from .core.schema import (
    ComponentDescriptor, MemberDescriptor, AttributeType, TypeReference,
    MemberKind, ReferenceLocation
)
from .core.integrator import integrate, generate_only
from .generators.typescript.pipeline import generate_components_file

__version__ = get_version()

__all__ = [
    # Main functions
    'integrate',
    'generate_only',
    'generate_components_file',
    'load_build_config',

    # Descriptors
    'ComponentDescriptor',
    'MemberDescriptor',
    'AttributeType',
    'TypeReference',

    # Enums
    'MemberKind',
    'ReferenceLocation',

    # Config
    'BuildConfig',
    'PathUtilities',

    # Version
    '__version__'
]
