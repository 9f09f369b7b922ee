"""
ComponentKit constants for declaration generation
"""

class HostTypes:
    """Host type system names referenced by generated declarations"""

    BASE_ELEMENT = "HTMLElement"
    BASE_ATTRIBUTES = "HTMLAttributes"

    # Both maps are registered for compatibility with older lib.dom typings
    TAG_NAME_MAPS = ("HTMLElementTagNameMap", "ElementTagNameMap")

    JSX_NAMESPACE = "JSX"
    INTRINSIC_ELEMENTS = "IntrinsicElements"
    ATTRIBUTES_NAMESPACE = "JSXElements"

    FALLBACK_TYPE = "any"


class GenerationPaths:
    """Standard paths for code generation"""

    CONFIG_FILE = "component.config.json"
    SRC_DIR = "src"
    COMPONENTS_DTS = "components.d.ts"
    REGISTRY_MANIFEST = ".componentkit/registry.json"


# Stripped from source paths to form module specifiers / file identities
TYPESCRIPT_EXTENSIONS = (".d.ts", ".tsx", ".ts")

COMPONENTS_FILE_HEADER = """/**
 * This is an autogenerated file created by the ComponentKit build process.
 * It contains typing information for all components that exist in this project
 * and imports for component collections configured in component.config.json
 */

"""
