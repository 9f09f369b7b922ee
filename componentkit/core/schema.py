"""
ComponentKit Data Models

Descriptor structures handed over by the component metadata extraction step,
plus the binding types produced while resolving cross-file type references
for the generated components.d.ts file.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Dict, Optional


# === ENUMS === #

class MemberKind(str, Enum):
    """Kinds of component members reported by metadata extraction."""
    PROP = "prop"
    PROP_MUTABLE = "prop-mutable"
    PROP_CONTEXT = "prop-context"
    PROP_CONNECT = "prop-connect"
    STATE = "state"
    ELEMENT = "element"
    METHOD = "method"
    EVENT = "event"


class ReferenceLocation(str, Enum):
    """Where a type referenced from an attribute type is declared."""
    GLOBAL = "global"    # Ambient, already visible
    LOCAL = "local"      # Declared in the component's own file
    IMPORT = "import"    # Imported into the component's file


# Only observable attributes get a typed declaration
OBSERVABLE_MEMBER_KINDS = (MemberKind.PROP, MemberKind.PROP_MUTABLE)


# === DESCRIPTORS === #

@dataclass(frozen=True)
class TypeReference:
    """
    A symbol referenced from an attribute's type text.

    `location_kind` is kept as the raw text reported by extraction so that
    unknown kinds reach the resolver and fail there with full context.
    """
    name: str                                # "Color", "Config"
    location_kind: str                       # "global" | "local" | "import"
    source_location: Optional[str] = None    # "../utils/types" (import only)


@dataclass(frozen=True)
class AttributeType:
    """Literal type text of an attribute plus the symbols it mentions."""
    text: str
    type_references: List[TypeReference] = field(default_factory=list)


@dataclass(frozen=True)
class MemberDescriptor:
    """Single component member (prop, state, method, ...)."""
    member_kind: str
    attribute_type: Optional[AttributeType] = None

    @property
    def is_observable(self) -> bool:
        """Check if this member is reflected to a markup attribute."""
        return self.member_kind in OBSERVABLE_MEMBER_KINDS


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    Metadata of one UI component as computed by the extraction step.

    Members keep the order extraction reported them in; that order is the
    order of the generated attributes interface.
    """
    tag_name: str                                  # "my-button"
    class_name: str                                # "MyButton"
    source_path: str                               # "/project/src/button/button.tsx"
    members: Dict[str, MemberDescriptor] = field(default_factory=dict)

    def get_observable_members(self) -> Dict[str, MemberDescriptor]:
        """Members that need an entry in the attributes interface."""
        return {name: member for name, member in self.members.items() if member.is_observable}


# Source-file identity -> descriptor (None entries are skipped)
ComponentRegistry = Dict[str, Optional[ComponentDescriptor]]


# === RESOLUTION RESULTS === #

@dataclass
class ImportBinding:
    """
    Pairing of a referenced symbol with the name emitted in the shared import.

    `bound_name` only differs from `local_name` when another file already
    claimed the name earlier in the run.
    """
    local_name: str
    bound_name: str

    @property
    def is_renamed(self) -> bool:
        return self.local_name != self.bound_name


@dataclass
class ResolvedComponent:
    """Bindings resolved for one component, keyed by member name."""
    component: ComponentDescriptor
    member_bindings: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def get_bindings(self, member_name: str) -> Dict[str, str]:
        """Symbol name -> bound name for a single member (may be empty)."""
        return self.member_bindings.get(member_name, {})
