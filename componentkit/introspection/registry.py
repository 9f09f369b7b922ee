"""
Component Registry Manifest Loading for ComponentKit

Parses the JSON manifest written by the component metadata extraction step
into ComponentDescriptor objects. Pydantic validates the manifest structure;
malformed entries raise pydantic.ValidationError unchanged.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from componentkit.core.config import PathUtilities
from componentkit.core.schema import (
    AttributeType, ComponentDescriptor, ComponentRegistry, MemberDescriptor, TypeReference
)


# === MANIFEST MODELS === #

class _ManifestModel(BaseModel):
    """Accept camelCase keys from extraction as well as snake_case."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TypeReferenceModel(_ManifestModel):
    # Raw text: unknown kinds are reported by the import resolver with context
    reference_location: str = Field(alias="referenceLocation")
    import_reference_location: Optional[str] = Field(default=None, alias="importReferenceLocation")


class AttributeTypeModel(_ManifestModel):
    text: str
    type_references: Dict[str, TypeReferenceModel] = Field(default_factory=dict, alias="typeReferences")


class MemberModel(_ManifestModel):
    member_type: str = Field(alias="memberType")
    attrib_type: Optional[AttributeTypeModel] = Field(default=None, alias="attribType")


class ComponentModel(_ManifestModel):
    tag_name: str = Field(alias="tagName")
    component_class: str = Field(alias="componentClass")
    members_meta: Dict[str, MemberModel] = Field(default_factory=dict, alias="membersMeta")

    @field_validator("tag_name")
    @classmethod
    def _check_tag_name(cls, value: str) -> str:
        # Custom element names must be lowercase and contain a dash
        if "-" not in value or value != value.lower():
            raise ValueError(f"'{value}' is not a valid custom element tag name")
        return value


class RegistryManifest(_ManifestModel):
    components: Dict[str, Optional[ComponentModel]] = Field(default_factory=dict)


# === CONVERSION === #

def registry_from_dict(data: Dict[str, Any], base_dir: Optional[str] = None) -> ComponentRegistry:
    """
    Convert a decoded manifest into a ComponentRegistry.

    Args:
        data: Decoded manifest JSON
        base_dir: Directory relative component paths are resolved against

    Returns:
        Registry keyed by absolute source path, None entries preserved

    Raises:
        pydantic.ValidationError: If the manifest structure is malformed
    """
    manifest = RegistryManifest.model_validate(data)
    sys_path = PathUtilities()

    registry: ComponentRegistry = {}
    for file_path, component in manifest.components.items():
        if base_dir is not None and not sys_path.is_absolute(file_path):
            file_path = sys_path.resolve(base_dir, file_path)

        registry[file_path] = _to_descriptor(file_path, component) if component is not None else None

    return registry


def load_component_registry(manifest_path: Union[str, Path]) -> ComponentRegistry:
    """
    Load a registry manifest file written by the extraction step.

    Relative component paths are resolved against the manifest's directory.

    Raises:
        FileNotFoundError: If the manifest does not exist
        ValueError: If the manifest is not valid JSON
        pydantic.ValidationError: If the manifest structure is malformed
    """
    manifest_path = Path(manifest_path)

    with open(manifest_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {manifest_path}: {e}")

    return registry_from_dict(data, base_dir=str(manifest_path.resolve().parent))


def _to_descriptor(file_path: str, component: ComponentModel) -> ComponentDescriptor:
    members = {}
    for member_name, member in component.members_meta.items():
        attribute_type = None
        if member.attrib_type is not None:
            attribute_type = AttributeType(
                text=member.attrib_type.text,
                type_references=[
                    TypeReference(
                        name=type_name,
                        location_kind=reference.reference_location,
                        source_location=reference.import_reference_location,
                    )
                    for type_name, reference in member.attrib_type.type_references.items()
                ],
            )
        members[member_name] = MemberDescriptor(member_kind=member.member_type, attribute_type=attribute_type)

    return ComponentDescriptor(
        tag_name=component.tag_name,
        class_name=component.component_class,
        source_path=file_path,
        members=members,
    )
