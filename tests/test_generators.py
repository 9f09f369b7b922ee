"""
Code generation tests for reference resolution, declarations and components.d.ts assembly
"""

import pytest

from componentkit.core.constants import COMPONENTS_FILE_HEADER
from componentkit.core.schema import MemberDescriptor, MemberKind, TypeReference
from componentkit.generators.typescript.pipeline import generate_components_file
from componentkit.generators.typescript.declarations import (
    build_component_declaration, render_component_declaration
)
from componentkit.generators.typescript.imports import (
    ResolverContext, generate_import_statements, resolve_component_references
)
from components import ambient, component, imported, local, make_config, prop


def _bindings(context: ResolverContext):
    return {
        file_key: [(b.local_name, b.bound_name) for b in group]
        for file_key, group in context.import_groups.items()
    }


# === REFERENCE RESOLUTION === #

def test_global_references_produce_no_imports():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    button = component("my-button", "MyButton", "/project/src/button.tsx",
                       items=prop("Array<HTMLElement>", ambient("HTMLElement"), ambient("Array")))

    resolved = resolve_component_references(button, context)

    assert context.import_groups == {}
    assert resolved.get_bindings("items") == {}
    assert generate_import_statements(context, config) == ""


def test_colliding_names_from_different_files_are_renamed():
    """Foo from a second file becomes Foo2, each component keeps its own"""
    config = make_config()
    registry = {
        "/project/src/a/a.tsx": component("my-a", "A", "/project/src/a/a.tsx",
                                          value=prop("Foo", imported("Foo", "./types"))),
        "/project/src/b/b.tsx": component("my-b", "B", "/project/src/b/b.tsx",
                                          value=prop("Foo | null", imported("Foo", "./types"))),
        "/project/src/c/c.tsx": component("my-c", "C", "/project/src/c/c.tsx",
                                          value=prop("Foo[]", imported("Foo", "../shared/foo"))),
    }

    _, content = generate_components_file(config, registry)

    assert "import {\n  Foo,\n} from './a/types';\n" in content
    assert "import {\n  Foo as Foo2,\n} from './b/types';\n" in content
    assert "import {\n  Foo as Foo3,\n} from './shared/foo';\n" in content
    assert "export interface MyAAttributes extends HTMLAttributes {\n      value?: Foo;\n" in content
    assert "export interface MyBAttributes extends HTMLAttributes {\n      value?: Foo2 | null;\n" in content
    assert "export interface MyCAttributes extends HTMLAttributes {\n      value?: Foo3[];\n" in content


def test_suffixed_names_never_clash_with_real_symbols():
    """A real Foo2 imported after Foo -> Foo2 gets a free name of its own"""
    config = make_config()
    registry = {
        "/project/src/a.tsx": component("my-a", "A", "/project/src/a.tsx",
                                        value=prop("Foo", imported("Foo", "./x"))),
        "/project/src/b.tsx": component("my-b", "B", "/project/src/b.tsx",
                                        value=prop("Foo", imported("Foo", "./y"))),
        "/project/src/c.tsx": component("my-c", "C", "/project/src/c.tsx",
                                        value=prop("Foo2", imported("Foo2", "./z"))),
    }

    _, content = generate_components_file(config, registry)

    assert "import {\n  Foo as Foo2,\n} from './y';\n" in content
    assert "import {\n  Foo2 as Foo22,\n} from './z';\n" in content
    assert "export interface MyCAttributes extends HTMLAttributes {\n      value?: Foo22;\n" in content


def test_claimed_names_are_unique_in_any_order():
    context = ResolverContext(sys_path=make_config().sys_path)

    claimed = [context.claim_name(name) for name in ["Foo2", "Foo", "Foo", "Foo", "Foo2"]]

    assert claimed == ["Foo2", "Foo", "Foo3", "Foo4", "Foo22"]
    assert len(set(claimed)) == len(claimed)


def test_imported_types_avoid_component_class_aliases():
    """A type named like another component's class alias is renamed"""
    config = make_config()
    registry = {
        "/project/src/a.tsx": component("my-a", "A", "/project/src/a.tsx"),
        "/project/src/b.tsx": component("my-b", "B", "/project/src/b.tsx",
                                        kind=prop("MyA | null", imported("MyA", "./kinds"))),
    }

    _, content = generate_components_file(config, registry)

    assert "import {\n  MyA as MyA2,\n} from './kinds';\n" in content
    assert "  A as MyA\n" in content
    assert "      kind?: MyA2 | null;\n" in content


def test_same_file_references_are_deduplicated():
    """Two components importing Foo from the same file share one binding"""
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    first = component("my-x", "X", "/project/src/cmp/x.tsx",
                      size=prop("Foo", imported("Foo", "./types")),
                      other=prop("Partial<Foo>", imported("Foo", "./types.ts")))
    second = component("my-y", "Y", "/project/src/cmp/y.tsx",
                       size=prop("Foo", imported("Foo", "/project/src/cmp/types.d.ts")))

    resolve_component_references(first, context)
    resolved = resolve_component_references(second, context)

    assert _bindings(context) == {"/project/src/cmp/types": [("Foo", "Foo")]}
    assert resolved.get_bindings("size") == {"Foo": "Foo"}
    assert generate_import_statements(context, config) == "import {\n  Foo,\n} from './cmp/types';\n"


def test_local_references_import_from_own_file():
    """Local types come from the component file and match sibling imports of it"""
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    owner = component("my-owner", "Owner", "/project/src/cmp/owner.tsx",
                      mode=prop("Mode", local("Mode")))
    sibling = component("my-sibling", "Sibling", "/project/src/cmp/sibling.tsx",
                        mode=prop("Mode", imported("Mode", "./owner")))

    resolve_component_references(owner, context)
    resolved = resolve_component_references(sibling, context)

    assert _bindings(context) == {"/project/src/cmp/owner": [("Mode", "Mode")]}
    assert resolved.get_bindings("mode") == {"Mode": "Mode"}


def test_local_reference_renamed_after_collision():
    config = make_config()
    registry = {
        "/project/src/a.tsx": component("my-a", "A", "/project/src/a.tsx",
                                        mode=prop("Mode", imported("Mode", "./modes"))),
        "/project/src/b.tsx": component("my-b", "B", "/project/src/b.tsx",
                                        mode=prop("Mode", local("Mode")),
                                        fallback=prop("Mode | undefined", local("Mode"))),
    }

    _, content = generate_components_file(config, registry)

    assert "import {\n  Mode as Mode2,\n} from './b';\n" in content
    assert "      mode?: Mode2;\n      fallback?: Mode2 | undefined;\n" in content


def test_bare_package_specifiers_are_kept():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    nav = component("my-nav", "Nav", "/project/src/nav.tsx",
                    animation=prop("AnimationBuilder", imported("AnimationBuilder", "@ionic/core")))

    resolve_component_references(nav, context)

    assert generate_import_statements(context, config) == (
        "import {\n  AnimationBuilder,\n} from '@ionic/core';\n"
    )


def test_non_observable_members_are_ignored():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    cmp = component("my-cmp", "Cmp", "/project/src/cmp.tsx",
                    state=prop("Store", imported("Store", "./store"), kind=MemberKind.STATE),
                    mutable=prop("Item", imported("Item", "./item"), kind=MemberKind.PROP_MUTABLE))

    resolve_component_references(cmp, context)

    assert list(context.import_groups) == ["/project/src/item"]


def test_unknown_location_kind_fails_with_context():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    broken = component("my-broken", "Broken", "/project/src/broken.tsx",
                       color=prop("Color", TypeReference(name="Color", location_kind="elsewhere")))

    with pytest.raises(ValueError, match="member 'color' of component <my-broken>"):
        resolve_component_references(broken, context)


def test_imported_reference_without_source_location_fails():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    button = component("my-button", "MyButton", "/project/src/button.tsx",
                       color=prop("Color", TypeReference(name="Color", location_kind="import")))

    with pytest.raises(ValueError, match="member 'color' of component <my-button> has no source location"):
        resolve_component_references(button, context)


# === DECLARATIONS === #

def test_component_without_typed_attributes_has_empty_interface():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    plain = component("my-plain", "MyPlain", "/project/src/plain.tsx",
                      open=MemberDescriptor(member_kind="state"),
                      toggle=MemberDescriptor(member_kind="method"))

    declaration = build_component_declaration(resolve_component_references(plain, context), config)
    text = render_component_declaration(declaration)

    assert context.import_groups == {}
    assert declaration.attributes == []
    assert "export interface MyPlainAttributes extends HTMLAttributes {\n    }\n" in text


def test_observable_member_without_type_falls_back_to_any():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    loose = component("my-loose", "Loose", "/project/src/loose.tsx",
                      value=MemberDescriptor(member_kind="prop"))

    declaration = build_component_declaration(resolve_component_references(loose, context), config)

    assert [(a.name, a.type_text) for a in declaration.attributes] == [("value", "any")]


def test_declaration_model():
    config = make_config()
    context = ResolverContext(sys_path=config.sys_path)
    button = component("my-fancy-button", "FancyButtonComponent", "/project/src/button/button.tsx",
                       color=prop("Color", imported("Color", "../types")))

    declaration = build_component_declaration(resolve_component_references(button, context), config)

    assert declaration.class_alias == "MyFancyButton"
    assert declaration.element_interface == "HTMLMyFancyButtonElement"
    assert declaration.attributes_interface == "MyFancyButtonAttributes"
    assert declaration.module_specifier == "./button/button"
    assert declaration.tag_name_maps == ["HTMLElementTagNameMap", "ElementTagNameMap"]
    assert "  FancyButtonComponent as MyFancyButton\n" in render_component_declaration(declaration)


# === FULL FILE === #

def test_generate_components_file():
    config = make_config(collections=["@ionic/core"])
    registry = {
        "/project/src/button/button.tsx": component(
            "my-button", "MyButton", "/project/src/button/button.tsx",
            color=prop("Color", imported("Color", "../types")),
            disabled=prop("boolean"),
        ),
    }

    output_path, content = generate_components_file(config, registry)

    assert output_path == "/project/src/components.d.ts"
    assert content == COMPONENTS_FILE_HEADER + (
        "import '@ionic/core';\n"
        "\n"
        "import {\n"
        "  Color,\n"
        "} from './types';\n"
        "\n"
        "import {\n"
        "  MyButton\n"
        "} from './button/button';\n"
        "\n"
        "declare global {\n"
        "  interface HTMLMyButtonElement extends MyButton, HTMLElement {\n"
        "  }\n"
        "  var HTMLMyButtonElement: {\n"
        "    prototype: HTMLMyButtonElement;\n"
        "    new (): HTMLMyButtonElement;\n"
        "  };\n"
        "  interface HTMLElementTagNameMap {\n"
        "    \"my-button\": HTMLMyButtonElement;\n"
        "  }\n"
        "  interface ElementTagNameMap {\n"
        "    \"my-button\": HTMLMyButtonElement;\n"
        "  }\n"
        "  namespace JSX {\n"
        "    interface IntrinsicElements {\n"
        "      \"my-button\": JSXElements.MyButtonAttributes;\n"
        "    }\n"
        "  }\n"
        "  namespace JSXElements {\n"
        "    export interface MyButtonAttributes extends HTMLAttributes {\n"
        "      color?: Color;\n"
        "      disabled?: boolean;\n"
        "    }\n"
        "  }\n"
        "}\n"
        "\n"
    )


def test_components_follow_source_path_order():
    config = make_config()
    a = component("my-zed", "Zed", "/project/src/a.tsx")
    b = component("my-alpha", "Alpha", "/project/src/b.tsx")

    _, content = generate_components_file(config, {"/project/src/b.tsx": b, "/project/src/a.tsx": a})

    assert content.index('"my-zed"') < content.index('"my-alpha"')


def test_generation_is_deterministic():
    """Registry insertion order does not change a single byte of output"""
    config = make_config(collections=["@ionic/core", "@stencil/router"])
    entries = [
        ("/project/src/a/a.tsx", component("my-a", "A", "/project/src/a/a.tsx",
                                           value=prop("Foo", imported("Foo", "./types")))),
        ("/project/src/b/b.tsx", component("my-b", "B", "/project/src/b/b.tsx",
                                           value=prop("Foo", local("Foo")))),
        ("/project/src/c/c.tsx", None),
    ]

    first = generate_components_file(config, dict(entries))
    second = generate_components_file(config, dict(reversed(entries)))

    assert first == second
    assert first[1].index("import '@ionic/core';") < first[1].index("import '@stencil/router';")
