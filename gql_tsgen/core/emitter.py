"""TypeScript emitter for generated declarations.

Renders a GenerationResult into a TypeScript module with Jinja2.

Supports custom templates via the template_dir parameter:
    emitter = TypeScriptEmitter(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .errors import CodegenError
from .hooks import HookRunner
from .ir import (
    CompilationModel,
    Declaration,
    EnumDeclaration,
    GenerationResult,
    OperationKind,
    OperationUnit,
    PropertyDeclaration,
    TypeReference,
)

logger = logging.getLogger(__name__)

DEFAULT_REGISTER_MODULE = "../../lib/client/apollo-stuff"
MODULE_TEMPLATE = "module.ts.j2"
INDENT = "  "


def safe_comment(text: str | None) -> str:
    """Make text safe for a single-line // comment."""
    if not text:
        return ""
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


def template_literal(text: str) -> str:
    """Escape text for use inside a JavaScript template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def register_function(kind: str) -> str:
    if kind == OperationKind.MUTATION.value:
        return "registerMutation"
    return "registerQuery"


def _wrap_type(type_name: str, prop: PropertyDeclaration) -> str:
    if prop.is_array:
        type_name = f"Array< {type_name} >"
    if prop.is_nullable:
        type_name = f"{type_name} | null"
    return type_name


def _property_lines(properties: list[PropertyDeclaration], indent: str) -> Iterator[str]:
    for prop in properties:
        if prop.description:
            yield f"{indent}// {safe_comment(prop.description)}"

        if isinstance(prop.type, TypeReference):
            yield f"{indent}{prop.name}: {_wrap_type(prop.type.name, prop)},"
            continue

        nested = prop.type
        if not nested.properties:
            yield f"{indent}{prop.name}: {_wrap_type(' & '.join(nested.extends), prop)},"
            continue

        opening = "".join(f"{e} & " for e in nested.extends) + "{"
        if prop.is_array:
            opening = f"Array< {opening}"
        yield f"{indent}{prop.name}: {opening}"
        yield from _property_lines(nested.properties, indent + INDENT)
        closing = "}"
        if prop.is_array:
            closing += " >"
        if prop.is_nullable:
            closing += " | null"
        yield f"{indent}{closing},"


def render_declaration(declaration: Declaration) -> str:
    """Render one top-level declaration as TypeScript source."""
    lines = []
    if declaration.description:
        lines.append(f"// {safe_comment(declaration.description)}")

    if isinstance(declaration, EnumDeclaration):
        if not declaration.values:
            lines.append(f"export type {declaration.name} = never;")
            return "\n".join(lines)
        lines.append(f"export type {declaration.name} =")
        last = len(declaration.values) - 1
        for i, value in enumerate(declaration.values):
            separator = ";" if i == last else " |"
            comment = f" // {safe_comment(value.description)}" if value.description else ""
            lines.append(f'{INDENT}"{value.value}"{separator}{comment}')
        return "\n".join(lines)

    extends = f" extends {', '.join(declaration.extends)}" if declaration.extends else ""
    lines.append(f"export interface {declaration.name}{extends} {{")
    lines.extend(_property_lines(declaration.properties, INDENT))
    lines.append("}")
    return "\n".join(lines)


class TypeScriptEmitter:
    """Emits a TypeScript module from generated declarations.

    Available templates to override:
        - module.ts.j2: the whole generated module
    """

    def __init__(
        self,
        register_module: str = DEFAULT_REGISTER_MODULE,
        template_dir: str | None = None,
        hooks: HookRunner | None = None,
    ):
        """Initialize the emitter.

        Args:
            register_module: Module the registerQuery/registerMutation helpers are imported from
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional hook runner applied to the rendered output
        """
        self.register_module = register_module
        self.hooks = hooks or HookRunner()

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_tsgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["declaration"] = render_declaration
        self.env.filters["template_literal"] = template_literal
        self.env.filters["register_function"] = register_function

    def render(self, result: GenerationResult, model: CompilationModel) -> str:
        """Render the module text for a generation result."""
        fragment_sources = {f.name: f.source for f in model.fragments}
        template = self.env.get_template(MODULE_TEMPLATE)
        return template.render(
            register_module=self.register_module,
            types=result.types,
            operations=[
                {"unit": unit, "document": self._document_source(unit, fragment_sources)}
                for unit in result.operations
            ],
            fragments=result.fragments,
        )

    @staticmethod
    def _document_source(unit: OperationUnit, fragment_sources: Mapping[str, str]) -> str:
        """Operation source preceded by the sources of every fragment it references."""
        missing = [n for n in unit.facts.fragments_referenced if n not in fragment_sources]
        if missing:
            raise CodegenError(
                f"Operation {unit.facts.name!r} references missing fragments: {', '.join(missing)}"
            )
        fragments = "\n".join(fragment_sources[n] for n in unit.facts.fragments_referenced)
        return f"{fragments} {unit.facts.source}"

    def emit_to_file(self, result: GenerationResult, model: CompilationModel, output_path: str) -> str:
        """Render, run post-generate hooks, and write the module. Returns the text written."""
        content = self.render(result, model)
        content = self.hooks.run_post_hooks(os.path.basename(output_path), content)

        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info("Wrote %s", output_path)
        return content
