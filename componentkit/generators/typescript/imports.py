# generators/typescript/imports.py
"""
ComponentKit Import Resolver

Collects the types referenced by component attributes into one shared import
block for components.d.ts. Every symbol gets a collision-free name in the
shared scope and each component keeps pointing at the symbol from its own
source file.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from componentkit.core.config import BuildConfig, PathUtilities
from componentkit.core.schema import (
    ComponentDescriptor, ImportBinding, ReferenceLocation, ResolvedComponent, TypeReference
)
from componentkit.core.utils import (
    is_relative_specifier, module_specifier_from_root, strip_typescript_extension
)


logger = logging.getLogger(__name__)


@dataclass
class ResolverContext:
    """
    Run-scoped resolution state.

    Created once per generation run and threaded through every component in
    registry order; never shared between runs.
    """
    sys_path: PathUtilities
    name_counts: Dict[str, int] = field(default_factory=dict)
    import_groups: Dict[str, List[ImportBinding]] = field(default_factory=dict)
    used_names: Set[str] = field(default_factory=set)

    def reserve(self, name: str):
        """Mark a top-level name (e.g. a component class alias) as taken."""
        self.used_names.add(name)

    def claim_name(self, name: str) -> str:
        """
        Bind `name` in the shared scope, suffixing on repeat claims.

        Suffixes keep counting per symbol until the candidate is free, so
        Foo -> Foo2 never clashes with a real Foo2 bound earlier or later.
        """
        if name not in self.name_counts and name not in self.used_names:
            self.name_counts[name] = 1
            self.used_names.add(name)
            return name

        count = self.name_counts.get(name, 1)
        candidate = name
        while candidate in self.used_names:
            count += 1
            candidate = f"{name}{count}"

        self.name_counts[name] = count
        self.used_names.add(candidate)
        return candidate

    def bind(self, file_key: str, name: str) -> str:
        """
        Get the emitted name of `name` imported from `file_key`.

        Reuses an existing binding of the same file, otherwise claims a new
        name and appends it to the file's import group.
        """
        group = self.import_groups.get(file_key)
        if group is None:
            group = self.import_groups[file_key] = []
            logger.debug(f"New import group: {file_key}")

        for binding in group:
            if binding.local_name == name:
                return binding.bound_name

        bound_name = self.claim_name(name)
        group.append(ImportBinding(local_name=name, bound_name=bound_name))

        if bound_name != name:
            logger.debug(f"Renamed {name} from {file_key} to {bound_name}")
        return bound_name


def resolve_component_references(
    component: ComponentDescriptor,
    context: ResolverContext
) -> ResolvedComponent:
    """
    Resolve every type referenced by a component's observable attributes.

    Args:
        component: Component whose members are inspected
        context: Run-scoped resolver state (mutated)

    Returns:
        ResolvedComponent with member -> {symbol -> bound name} substitutions

    Raises:
        ValueError: If a reference has an unknown location kind
    """
    resolved = ResolvedComponent(component=component)

    for member_name, member in component.get_observable_members().items():
        if member.attribute_type is None:
            continue

        bindings = {}
        for reference in member.attribute_type.type_references:
            file_key = _resolve_reference_file(reference, component, member_name, context.sys_path)
            if file_key is None:
                continue
            bindings[reference.name] = context.bind(file_key, reference.name)

        if bindings:
            resolved.member_bindings[member_name] = bindings

    return resolved


def _resolve_reference_file(
    reference: TypeReference,
    component: ComponentDescriptor,
    member_name: str,
    sys_path: PathUtilities
) -> Optional[str]:
    """
    Calculate the canonical file identity a reference is imported from.

    Returns:
        Canonical file key, or None for ambient (global) references

    Raises:
        ValueError: If the location kind is not recognized
    """
    try:
        location_kind = ReferenceLocation(reference.location_kind)
    except ValueError:
        raise ValueError(
            f"Unknown reference location {reference.location_kind!r} for type "
            f"'{reference.name}' in member '{member_name}' of component "
            f"<{component.tag_name}> ({component.class_name})"
        )

    if location_kind == ReferenceLocation.GLOBAL:
        return None

    if location_kind == ReferenceLocation.LOCAL:
        file_location = component.source_path
    else:
        file_location = reference.source_location
        if not file_location:
            raise ValueError(
                f"Imported type '{reference.name}' in member '{member_name}' of component "
                f"<{component.tag_name}> has no source location"
            )

    # Bare package specifiers ("@scope/pkg") are kept as written
    if is_relative_specifier(file_location):
        file_location = sys_path.resolve(sys_path.dirname(component.source_path), file_location)
    elif not sys_path.is_absolute(file_location):
        return file_location

    return strip_typescript_extension(file_location)


def generate_import_statements(context: ResolverContext, config: BuildConfig) -> str:
    """
    Render one import statement per import group, in group creation order.

    Args:
        context: Resolver state after all components were processed
        config: Build configuration (source root for relative specifiers)

    Returns:
        Import block text (empty if nothing needs importing)
    """
    statements = []

    for file_key, bindings in context.import_groups.items():
        if config.sys_path.is_absolute(file_key):
            specifier = module_specifier_from_root(config.sys_path, config.src_dir, file_key)
        else:
            specifier = file_key

        lines = ["import {"]
        for binding in bindings:
            if binding.is_renamed:
                lines.append(f"  {binding.local_name} as {binding.bound_name},")
            else:
                lines.append(f"  {binding.bound_name},")
        lines.append(f"}} from '{specifier}';")

        statements.append("\n".join(lines))

    if not statements:
        return ""
    return "\n".join(statements) + "\n"
