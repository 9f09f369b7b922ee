"""
ComponentKit Generation Pipeline

Orchestrates reference resolution and declaration generation into the single
components.d.ts file: header, collection imports, shared type imports and
one declaration block per component.
"""

import logging
from typing import List, Tuple

from componentkit.core.config import BuildConfig
from componentkit.core.schema import ComponentRegistry
from componentkit.core.utils import dash_to_pascal_case, iter_registry
from componentkit.core.constants import COMPONENTS_FILE_HEADER
from componentkit.generators.typescript.declarations import generate_component_declaration
from componentkit.generators.typescript.imports import (
    ResolverContext, generate_import_statements, resolve_component_references
)


logger = logging.getLogger(__name__)


def generate_components_file(config: BuildConfig, registry: ComponentRegistry) -> Tuple[str, str]:
    """
    Generate the components.d.ts file for every component in the registry.

    Args:
        config: Build configuration (source root, collections, path utilities)
        registry: Source-file identity -> component descriptor (or None)

    Returns:
        Tuple of (output_path, output_text); nothing is written to disk

    Raises:
        ValueError: If a component references a type with an unknown location kind
    """
    context = ResolverContext(sys_path=config.sys_path)
    components = iter_registry(registry)

    # Class aliases share the top-level scope with imported types
    for component in components:
        context.reserve(dash_to_pascal_case(component.tag_name))

    # Resolution must follow registry order so renames stay reproducible
    declaration_blocks = []
    for component in components:
        resolved = resolve_component_references(component, context)
        declaration_blocks.append(generate_component_declaration(resolved, config))

    logger.debug(
        f"Resolved {len(declaration_blocks)} components, "
        f"{len(context.import_groups)} import groups"
    )

    content = (
        COMPONENTS_FILE_HEADER
        + _generate_collection_imports(config.collections)
        + generate_import_statements(context, config)
        + "".join(f"\n{block}\n" for block in declaration_blocks)
    )

    output_path = config.get_output_path()
    logger.debug(f"Generated declarations for {output_path}")
    return output_path, content


def _generate_collection_imports(collections: List[str]) -> str:
    """Side-effect imports pulling in the typings of component collections."""
    return "".join(f"import '{name}';\n\n" for name in collections)
