# core/config.py
"""
ComponentKit Configuration Management

Handles loading and validation of component.config.json and bundles the
host path utilities used for import path calculation.
"""

import json
import os.path
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List

from componentkit.core.constants import GenerationPaths


__version__ = "0.3.1"

def get_version() -> str:
    return __version__


class PathUtilities:
    """
    Host path operations used by the generator.

    Wraps a path flavor module (`os.path` by default). Tests pass
    `posixpath` so generated paths do not depend on the platform.
    """

    def __init__(self, flavor=os.path):
        self.flavor = flavor

    def resolve(self, *parts: str) -> str:
        """Join parts into an absolute, normalized path."""
        return self.flavor.abspath(self.flavor.join(*parts))

    def relative(self, start: str, target: str) -> str:
        return self.flavor.relpath(target, start)

    def is_absolute(self, path: str) -> bool:
        return self.flavor.isabs(path)

    def join(self, *parts: str) -> str:
        return self.flavor.join(*parts)

    def dirname(self, path: str) -> str:
        return self.flavor.dirname(path)


@dataclass
class BuildConfig:
    """Complete ComponentKit build configuration."""
    src_dir: str
    collections: List[str] = field(default_factory=list)
    registry_manifest: str = GenerationPaths.REGISTRY_MANIFEST
    output_file: str = GenerationPaths.COMPONENTS_DTS
    sys_path: PathUtilities = field(default_factory=PathUtilities)

    def get_output_path(self) -> str:
        """Absolute location of the generated declaration file."""
        return self.sys_path.join(self.src_dir, self.output_file)


def load_build_config(project_root: Optional[str] = None) -> BuildConfig:
    """
    Load ComponentKit configuration from component.config.json or use defaults.

    Unlike extraction output, the config file is never created on disk;
    a missing file simply means defaults.

    Args:
        project_root: Project root directory (defaults to current directory)

    Returns:
        BuildConfig with paths resolved against the project root

    Raises:
        ValueError: If the file is not valid JSON or holds invalid values
    """
    if project_root is None:
        project_root = str(Path.cwd())

    config_path = Path(project_root) / GenerationPaths.CONFIG_FILE

    if config_path.exists():
        return _load_config_from_file(config_path, project_root)
    return _validate_and_convert_config({}, project_root)


def _load_config_from_file(config_path: Path, project_root: str) -> BuildConfig:
    """Load configuration from existing file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")

    try:
        return _validate_and_convert_config(config_data, project_root)
    except ValueError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}")


def _validate_and_convert_config(config_data: Dict[str, Any], project_root: str) -> BuildConfig:
    """Validate and convert raw config data to BuildConfig object."""
    if not isinstance(config_data, dict):
        raise ValueError("config root must be a JSON object")

    sys_path = PathUtilities()

    src_dir = config_data.get("srcDir", GenerationPaths.SRC_DIR)
    if not isinstance(src_dir, str) or not src_dir:
        raise ValueError(f"'srcDir' must be a non-empty string, got {src_dir!r}")

    collections = _parse_collections(config_data.get("collections", []))

    registry_manifest = config_data.get("registryManifest", GenerationPaths.REGISTRY_MANIFEST)
    if not isinstance(registry_manifest, str):
        raise ValueError(f"'registryManifest' must be a string, got {registry_manifest!r}")

    output_file = config_data.get("outputFile", GenerationPaths.COMPONENTS_DTS)
    if not isinstance(output_file, str) or not output_file.endswith(".d.ts"):
        raise ValueError(f"'outputFile' must be a .d.ts file name, got {output_file!r}")

    return BuildConfig(
        src_dir=sys_path.resolve(project_root, src_dir),
        collections=collections,
        registry_manifest=sys_path.resolve(project_root, registry_manifest),
        output_file=output_file,
        sys_path=sys_path,
    )


def _parse_collections(raw_collections: Any) -> List[str]:
    """Accept both ["@pkg/a"] and [{"name": "@pkg/a"}] forms."""
    if not isinstance(raw_collections, list):
        raise ValueError(f"'collections' must be a list, got {type(raw_collections).__name__}")

    names = []
    for entry in raw_collections:
        if isinstance(entry, dict):
            entry = entry.get("name")
        if not isinstance(entry, str) or not entry:
            raise ValueError(f"Invalid collection entry: {entry!r}")
        names.append(entry)
    return names
