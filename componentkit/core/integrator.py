"""
ComponentKit Build Integration

Config-driven entry points that turn the component registry produced by the
extraction step into components.d.ts, either returning the generated text or
writing it next to the project sources.
"""

import logging
from pathlib import Path
from dataclasses import replace
from typing import Optional, Tuple

from componentkit.core.schema import ComponentRegistry
from componentkit.core.config import BuildConfig, load_build_config
from componentkit.introspection.registry import load_component_registry


logger = logging.getLogger(__name__)


def integrate(
    registry: Optional[ComponentRegistry] = None,
    project_root: Optional[str] = None,
    verbose: bool = False,
    **options
) -> Tuple[str, str]:
    """
    Generate components.d.ts for a project and write it to the source root.

    Args:
        registry: Component registry (loaded from the configured manifest if omitted)
        project_root: Project root directory (defaults to current directory)
        verbose: Enable detailed logging output
        **options: Config overrides:
            - src_dir: source root the declaration file is placed in
            - collections: list of component collection names
            - registry_path: manifest to load the registry from

    Returns:
        Tuple[str, str]: (output_path, output_text) of the written file

    Raises:
        ValueError: If configuration is invalid or a type reference is malformed
        OSError: If the declaration file cannot be written

    Examples:
        # Registry from .componentkit/registry.json, config from component.config.json
        componentkit.integrate()

        # In-memory registry with an extra collection
        componentkit.integrate(registry, collections=["@ionic/core"], verbose=True)
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    output_path, content = generate_only(registry, project_root=project_root, **options)
    _write_generated_file(output_path, content)

    if verbose:
        logger.debug(f"Generated: {output_path}")
    else:
        print(f"ComponentKit: Generated {Path(output_path).name}")

    return output_path, content


def generate_only(
    registry: Optional[ComponentRegistry] = None,
    project_root: Optional[str] = None,
    config: Optional[BuildConfig] = None,
    **options
) -> Tuple[str, str]:
    """Generate components.d.ts without writing to disk."""
    from componentkit.generators.typescript.pipeline import generate_components_file

    if project_root is None:
        project_root = str(Path.cwd().resolve())
    else:
        project_root = str(Path(project_root).resolve())

    if config is None:
        config = load_build_config(project_root)
    else:
        # Overrides apply to this run only, never to the caller's config
        config = replace(config, collections=list(config.collections))
    _apply_config_overrides(config, project_root, options)

    logger.debug(f"Project root: {project_root}")
    logger.debug(f"Source root: {config.src_dir}")
    logger.debug(f"Collections: {config.collections}")

    if registry is None:
        logger.debug(f"Loading registry manifest: {config.registry_manifest}")
        registry = load_component_registry(config.registry_manifest)

    return generate_components_file(config, registry)


def _apply_config_overrides(config: BuildConfig, project_root: str, options: dict):
    """Override config values with explicit keyword options."""
    unknown = set(options) - {'src_dir', 'collections', 'registry_path'}
    if unknown:
        raise ValueError(f"Unknown options: {', '.join(sorted(unknown))}")

    if options.get('src_dir'):
        config.src_dir = config.sys_path.resolve(project_root, options['src_dir'])
    if options.get('collections') is not None:
        config.collections = list(options['collections'])
    if options.get('registry_path'):
        config.registry_manifest = config.sys_path.resolve(project_root, options['registry_path'])


def _write_generated_file(output_path: str, content: str):
    """Write the generated file, creating missing parent directories."""
    file_path_obj = Path(output_path)
    file_path_obj.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path_obj, 'w', encoding='utf-8', newline='\n') as f:
        f.write(content)
