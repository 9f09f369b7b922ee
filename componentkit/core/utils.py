import re
from typing import List

from componentkit.core.config import PathUtilities
from componentkit.core.constants import TYPESCRIPT_EXTENSIONS
from componentkit.core.schema import ComponentRegistry, ComponentDescriptor


def iter_registry(registry: ComponentRegistry) -> List[ComponentDescriptor]:
    """
    Present descriptors ordered by source-file identity.

    Lexicographic ordering keeps the generated file diff-stable no matter how
    the registry was populated.

    Args:
        registry: Source-file identity -> descriptor (or None)

    Returns:
        Descriptors sorted by their registry key, None entries dropped
    """
    return [registry[key] for key in sorted(registry) if registry[key] is not None]


def dash_to_pascal_case(tag_name: str) -> str:
    """my-fancy-button -> MyFancyButton"""
    return "".join(part[:1].upper() + part[1:] for part in tag_name.lower().split("-") if part)


def strip_typescript_extension(path: str) -> str:
    """Remove a trailing .d.ts/.tsx/.ts, leaving other suffixes alone."""
    for extension in TYPESCRIPT_EXTENSIONS:
        if path.endswith(extension):
            return path[:-len(extension)]
    return path


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of the host platform."""
    return path.replace("\\", "/")


def is_relative_specifier(location: str) -> bool:
    return location.startswith(".")


def module_specifier_from_root(sys_path: PathUtilities, src_dir: str, file_path: str) -> str:
    """
    Calculate the import specifier of an absolute file as seen from src_dir.

    Args:
        sys_path: Host path utilities
        src_dir: Directory holding the generated components.d.ts
        file_path: Absolute path of the file being imported

    Returns:
        "./components/button/button" or "../shared/types" style specifier
    """
    relative_path = normalize_path(sys_path.relative(src_dir, file_path))
    relative_path = strip_typescript_extension(relative_path)

    if relative_path.startswith("../"):
        return relative_path
    return f"./{relative_path}"


_IDENTIFIER_CHARS = r"A-Za-z0-9_$"

_STRING_LITERAL = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`(?:[^`\\]|\\.)*`""")


def rewrite_type_names(type_text: str, renames: dict) -> str:
    """
    Replace whole identifiers in type text according to `renames`.

    Runs as a single substitution so a rename never feeds into another one
    (Foo -> Foo2 while Foo2 -> Foo3 stays correct). Property accesses such
    as `Ns.Foo` and anything inside string literals are left untouched.
    """
    renames = {name: bound for name, bound in renames.items() if name != bound}
    if not renames:
        return type_text

    alternatives = "|".join(re.escape(name) for name in sorted(renames, key=len, reverse=True))
    pattern = re.compile(rf"(?<![{_IDENTIFIER_CHARS}.])({alternatives})(?![{_IDENTIFIER_CHARS}])")

    def rewrite(segment: str) -> str:
        return pattern.sub(lambda match: renames[match.group(1)], segment)

    parts = []
    position = 0
    for literal in _STRING_LITERAL.finditer(type_text):
        parts.append(rewrite(type_text[position:literal.start()]))
        parts.append(literal.group(0))
        position = literal.end()
    parts.append(rewrite(type_text[position:]))

    return "".join(parts)
