"""
ComponentKit Declaration Generator

Builds the per-component declaration block of components.d.ts: the element
interface, its constructor, the tag-name map registrations and the JSX
attributes interface.
"""

from dataclasses import dataclass, field
from typing import List

from componentkit.core.config import BuildConfig
from componentkit.core.constants import HostTypes
from componentkit.core.schema import ResolvedComponent
from componentkit.core.utils import dash_to_pascal_case, module_specifier_from_root, rewrite_type_names


@dataclass
class AttributeDeclaration:
    """Optional property of the attributes interface."""
    name: str
    type_text: str


@dataclass
class ComponentDeclaration:
    """Structured form of one component's declaration block."""
    tag_name: str
    class_name: str
    class_alias: str                 # PascalCase tag name
    module_specifier: str            # Component file, relative to the source root
    element_interface: str           # HTMLMyButtonElement
    attributes_interface: str        # MyButtonAttributes
    attributes: List[AttributeDeclaration] = field(default_factory=list)
    tag_name_maps: List[str] = field(default_factory=lambda: list(HostTypes.TAG_NAME_MAPS))


def build_component_declaration(resolved: ResolvedComponent, config: BuildConfig) -> ComponentDeclaration:
    """
    Build the declaration model of a component from its resolved bindings.

    Args:
        resolved: Component plus symbol substitutions from the import resolver
        config: Build configuration (source root for the class import)

    Returns:
        ComponentDeclaration ready for rendering
    """
    component = resolved.component
    pascal_name = dash_to_pascal_case(component.tag_name)

    attributes = []
    for member_name, member in component.get_observable_members().items():
        if member.attribute_type is None:
            type_text = HostTypes.FALLBACK_TYPE
        else:
            type_text = rewrite_type_names(member.attribute_type.text, resolved.get_bindings(member_name))
        attributes.append(AttributeDeclaration(name=member_name, type_text=type_text))

    return ComponentDeclaration(
        tag_name=component.tag_name,
        class_name=component.class_name,
        class_alias=pascal_name,
        module_specifier=module_specifier_from_root(config.sys_path, config.src_dir, component.source_path),
        element_interface=f"HTML{pascal_name}Element",
        attributes_interface=f"{pascal_name}Attributes",
        attributes=attributes,
    )


def render_component_declaration(declaration: ComponentDeclaration) -> str:
    """Serialize a ComponentDeclaration to TypeScript declaration text."""
    element = declaration.element_interface
    tag = declaration.tag_name

    if declaration.class_name == declaration.class_alias:
        class_import = declaration.class_name
    else:
        class_import = f"{declaration.class_name} as {declaration.class_alias}"

    lines = [
        "import {",
        f"  {class_import}",
        f"}} from '{declaration.module_specifier}';",
        "",
        "declare global {",
        f"  interface {element} extends {declaration.class_alias}, {HostTypes.BASE_ELEMENT} {{",
        "  }",
        f"  var {element}: {{",
        f"    prototype: {element};",
        f"    new (): {element};",
        "  };",
    ]

    for tag_name_map in declaration.tag_name_maps:
        lines.extend([
            f"  interface {tag_name_map} {{",
            f"    \"{tag}\": {element};",
            "  }",
        ])

    lines.extend([
        f"  namespace {HostTypes.JSX_NAMESPACE} {{",
        f"    interface {HostTypes.INTRINSIC_ELEMENTS} {{",
        f"      \"{tag}\": {HostTypes.ATTRIBUTES_NAMESPACE}.{declaration.attributes_interface};",
        "    }",
        "  }",
        f"  namespace {HostTypes.ATTRIBUTES_NAMESPACE} {{",
        f"    export interface {declaration.attributes_interface} extends {HostTypes.BASE_ATTRIBUTES} {{",
    ])

    for attribute in declaration.attributes:
        lines.append(f"      {attribute.name}?: {attribute.type_text};")

    lines.extend([
        "    }",
        "  }",
        "}",
    ])

    return "\n".join(lines) + "\n"


def generate_component_declaration(resolved: ResolvedComponent, config: BuildConfig) -> str:
    """Build and render the declaration block of one component."""
    return render_component_declaration(build_component_declaration(resolved, config))
