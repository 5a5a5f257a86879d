"""Schema and document loading using graphql-core.

Reads a schema (SDL files or an introspection result) and query documents,
validates the documents, and resolves them into a CompilationModel.
"""

import json
import logging
import os
from collections.abc import Iterable

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLSchema,
    InlineFragmentNode,
    OperationDefinitionNode,
    SchemaMetaFieldDef,
    SelectionSetNode,
    Source,
    TypeMetaFieldDef,
    TypeNameMetaFieldDef,
    build_client_schema,
    build_schema,
    get_named_type,
    is_composite_type,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_union_type,
    parse,
    print_ast,
    type_from_ast,
    validate,
)

from .errors import CodegenError, DocumentValidationError, SchemaLoadError
from .ir import (
    CompilationModel,
    EnumTypeDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    FragmentDescriptor,
    InlineFragment,
    InputObjectDescriptor,
    OperationDescriptor,
    TypeKind,
    TypeRef,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")
DOCUMENT_EXTENSIONS = (".graphql", ".gql")

_NAMED_KINDS = (
    (is_scalar_type, TypeKind.SCALAR),
    (is_enum_type, TypeKind.ENUM),
    (is_object_type, TypeKind.OBJECT),
    (is_interface_type, TypeKind.INTERFACE),
    (is_union_type, TypeKind.UNION),
    (is_input_object_type, TypeKind.INPUT_OBJECT),
)


def collect_files(path: str, extensions: tuple[str, ...]) -> list[str]:
    """Collect files with the given extensions from a file or directory path."""
    files = []
    if os.path.isfile(path):
        if path.endswith(extensions):
            files.append(path)
    else:
        for root, _, filenames in os.walk(path):
            for filename in filenames:
                if filename.endswith(extensions):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def load_schema(path: str) -> GraphQLSchema:
    """Load a schema from SDL files or an introspection JSON file."""
    if os.path.isfile(path) and path.endswith(".json"):
        return _load_introspection_schema(path)

    schema_files = collect_files(path, SCHEMA_EXTENSIONS)
    if not schema_files:
        raise SchemaLoadError(f"No schema files found at {path}")

    sources = []
    for file_path in schema_files:
        logger.debug("Reading schema file %s", file_path)
        try:
            with open(file_path, encoding="utf-8") as f:
                sources.append(f.read())
        except OSError as e:
            raise SchemaLoadError(f"Cannot read {file_path}: {e}") from e

    try:
        return build_schema("\n".join(sources))
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Invalid schema at {path}: {e}") from e


def _load_introspection_schema(path: str) -> GraphQLSchema:
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SchemaLoadError(f"Cannot read introspection result {path}: {e}") from e

    data = payload.get("data", payload) if isinstance(payload, dict) else payload
    try:
        return build_client_schema(data)
    except (GraphQLError, TypeError, KeyError) as e:
        raise SchemaLoadError(f"Invalid introspection result {path}: {e}") from e


def load_documents(paths: Iterable[str]) -> DocumentNode:
    """Parse every query document under the given paths into one document."""
    definitions = []
    for path in paths:
        for file_path in collect_files(path, DOCUMENT_EXTENSIONS):
            logger.debug("Parsing document %s", file_path)
            try:
                with open(file_path, encoding="utf-8") as f:
                    document = parse(Source(f.read(), file_path))
            except OSError as e:
                raise DocumentValidationError(f"Cannot read {file_path}: {e}", []) from e
            except GraphQLError as e:
                raise DocumentValidationError(f"Syntax error in {file_path}: {e.message}", [e]) from e
            definitions.extend(document.definitions)
    return DocumentNode(definitions=tuple(definitions))


def type_ref_from_graphql(gql_type) -> TypeRef:
    """Convert a graphql-core type into a TypeRef, preserving every wrapper."""
    if is_non_null_type(gql_type):
        return TypeRef.non_null(type_ref_from_graphql(gql_type.of_type))
    if is_list_type(gql_type):
        return TypeRef.list_of(type_ref_from_graphql(gql_type.of_type))
    for predicate, kind in _NAMED_KINDS:
        if predicate(gql_type):
            return TypeRef.named(kind, gql_type.name)
    raise TypeError(f"Unsupported GraphQL type {gql_type!r}")


class SchemaNameResolver:
    """Declared names for composite types, looked up in the schema.

    Objects and interfaces are declared under their schema name. Unions
    have no single declared shape and resolve to None.
    """

    def __init__(self, schema: GraphQLSchema):
        self.schema = schema

    def declared_name(self, type_ref: TypeRef) -> str | None:
        gql_type = self.schema.get_type(type_ref.named_type.name)
        if is_object_type(gql_type) or is_interface_type(gql_type):
            return gql_type.name
        return None


class DocumentCompiler:
    """Resolves validated query documents into a CompilationModel."""

    def __init__(self, schema: GraphQLSchema, validate_documents: bool = True):
        self.schema = schema
        self.validate_documents = validate_documents
        self._fragment_nodes: dict[str, FragmentDefinitionNode] = {}
        self._types_used: dict[str, EnumTypeDescriptor | InputObjectDescriptor | None] = {}

    def compile(self, document: DocumentNode) -> CompilationModel:
        """Compile a document into operations, fragments and the types they use."""
        if self.validate_documents:
            errors = validate(self.schema, document)
            if errors:
                summary = "; ".join(e.message for e in errors)
                raise DocumentValidationError(f"Document validation failed: {summary}", errors)

        self._types_used = {}
        self._fragment_nodes = {
            d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
        }

        operations = []
        fragments = []
        for definition in document.definitions:
            if isinstance(definition, OperationDefinitionNode):
                operations.append(self._compile_operation(definition))
            elif isinstance(definition, FragmentDefinitionNode):
                fragments.append(self._compile_fragment(definition))

        logger.info(
            "Compiled %d operations and %d fragments", len(operations), len(fragments)
        )
        return CompilationModel(
            types_used=[t for t in self._types_used.values() if t is not None],
            operations=operations,
            fragments=fragments,
            name_resolver=SchemaNameResolver(self.schema),
        )

    def _compile_operation(self, node: OperationDefinitionNode) -> OperationDescriptor:
        if node.name is None:
            raise CodegenError("Anonymous operations are not supported; name every operation")
        kind = node.operation.value
        root_type = self.schema.get_root_type(node.operation)
        if root_type is None:
            raise CodegenError(f"Schema does not define a {kind} root type")

        variables = []
        for var_node in node.variable_definitions or ():
            gql_type = type_from_ast(self.schema, var_node.type)
            self._use_type(gql_type)
            variables.append(
                FieldDescriptor(
                    name=var_node.variable.name.value,
                    response_name=var_node.variable.name.value,
                    type=type_ref_from_graphql(gql_type),
                )
            )

        fields, spreads, _ = self._compile_selections(root_type, [node.selection_set])
        return OperationDescriptor(
            name=node.name.value,
            kind=kind,
            variables=tuple(variables),
            fields=fields,
            fragment_spreads=spreads,
            fragments_referenced=tuple(self._referenced_fragments(node.selection_set)),
            source=print_ast(node),
        )

    def _compile_fragment(self, node: FragmentDefinitionNode) -> FragmentDescriptor:
        type_condition = node.type_condition.name.value
        parent_type = self.schema.get_type(type_condition)
        fields, spreads, inline_fragments = self._compile_selections(
            parent_type, [node.selection_set]
        )
        return FragmentDescriptor(
            name=node.name.value,
            type_condition=type_condition,
            fields=fields,
            inline_fragments=inline_fragments,
            fragment_spreads=spreads,
            source=print_ast(node),
        )

    def _compile_selections(self, parent_type, selection_sets: list[SelectionSetNode]):
        """Compile one or more selection sets on the same parent type.

        Fields sharing a response name are merged; inline fragments without
        a type condition, or conditioned on the parent type itself, are
        folded into the plain fields.
        """
        groups: dict[str, list[FieldNode]] = {}
        spreads: list[str] = []
        inline_fragments: list[InlineFragment] = []

        def gather(selection_set: SelectionSetNode):
            for selection in selection_set.selections:
                if isinstance(selection, FieldNode):
                    key = selection.alias.value if selection.alias else selection.name.value
                    groups.setdefault(key, []).append(selection)
                elif isinstance(selection, FragmentSpreadNode):
                    if selection.name.value not in spreads:
                        spreads.append(selection.name.value)
                elif isinstance(selection, InlineFragmentNode):
                    condition = selection.type_condition
                    if condition is None or condition.name.value == parent_type.name:
                        gather(selection.selection_set)
                    else:
                        inline_fragments.append(self._compile_inline_fragment(selection))

        for selection_set in selection_sets:
            gather(selection_set)

        fields = tuple(
            self._compile_field(parent_type, key, nodes) for key, nodes in groups.items()
        )
        return fields, tuple(spreads), tuple(inline_fragments)

    def _compile_inline_fragment(self, node: InlineFragmentNode) -> InlineFragment:
        """Compile a type-conditional branch into a flat list of optional fields.

        Spreads and inline fragments nested inside the branch are expanded
        in place, since everything under the branch is conditional anyway.
        """
        type_condition = node.type_condition.name.value
        condition_type = self.schema.get_type(type_condition)
        fields: list[FieldDescriptor] = []
        seen: set[str] = set()
        for parent_type, selection_set in self._expand_branch(condition_type, node.selection_set):
            compiled, _, _ = self._compile_selections(parent_type, [selection_set])
            for field in compiled:
                if field.response_name not in seen:
                    seen.add(field.response_name)
                    fields.append(field)
        return InlineFragment(type_condition=type_condition, fields=tuple(fields))

    def _expand_branch(self, parent_type, selection_set: SelectionSetNode):
        """Yield (type, field-only selection set) pairs for a branch and everything nested in it."""
        yield parent_type, SelectionSetNode(
            selections=tuple(s for s in selection_set.selections if isinstance(s, FieldNode))
        )
        for selection in selection_set.selections:
            if isinstance(selection, FragmentSpreadNode):
                fragment = self._fragment_nodes[selection.name.value]
                fragment_type = self.schema.get_type(fragment.type_condition.name.value)
                yield from self._expand_branch(fragment_type, fragment.selection_set)
            elif isinstance(selection, InlineFragmentNode):
                condition = selection.type_condition
                branch_type = self.schema.get_type(condition.name.value) if condition else parent_type
                yield from self._expand_branch(branch_type, selection.selection_set)

    def _compile_field(self, parent_type, response_name: str, nodes: list[FieldNode]) -> FieldDescriptor:
        # Fields are described by the key they occupy in the response.
        field_name = nodes[0].name.value
        field_def = self._field_def(parent_type, field_name)
        if field_def is None:
            raise CodegenError(f"Unknown field {parent_type.name}.{field_name}")

        self._use_type(field_def.type)
        named = get_named_type(field_def.type)
        fields, spreads, inline_fragments = (), (), ()
        if is_composite_type(named):
            selection_sets = [n.selection_set for n in nodes if n.selection_set]
            fields, spreads, inline_fragments = self._compile_selections(named, selection_sets)

        return FieldDescriptor(
            name=response_name,
            response_name=response_name,
            type=type_ref_from_graphql(field_def.type),
            fields=fields,
            fragment_spreads=spreads,
            inline_fragments=inline_fragments,
            description=field_def.description,
        )

    def _field_def(self, parent_type, field_name: str):
        if field_name == "__typename":
            return TypeNameMetaFieldDef
        if parent_type is self.schema.query_type:
            if field_name == "__schema":
                return SchemaMetaFieldDef
            if field_name == "__type":
                return TypeMetaFieldDef
        if is_object_type(parent_type) or is_interface_type(parent_type):
            return parent_type.fields.get(field_name)
        return None

    def _referenced_fragments(self, selection_set: SelectionSetNode, found: list[str] | None = None) -> list[str]:
        """Transitive closure of fragment spreads, in first-seen order."""
        if found is None:
            found = []
        for selection in selection_set.selections:
            if isinstance(selection, FragmentSpreadNode):
                name = selection.name.value
                if name not in found:
                    found.append(name)
                    self._referenced_fragments(self._fragment_nodes[name].selection_set, found)
            elif selection.selection_set is not None:
                self._referenced_fragments(selection.selection_set, found)
        return found

    def _use_type(self, gql_type):
        """Record enums and input objects reachable from a type, in first-use order."""
        named = get_named_type(gql_type)
        if named.name in self._types_used:
            return
        if is_enum_type(named):
            self._types_used[named.name] = EnumTypeDescriptor(
                name=named.name,
                values=tuple(
                    EnumValueDescriptor(value=name, description=value.description)
                    for name, value in named.values.items()
                ),
                description=named.description,
            )
        elif is_input_object_type(named):
            # Reserve the slot first so recursive inputs terminate.
            self._types_used[named.name] = None
            input_fields = []
            for name, input_field in named.fields.items():
                self._use_type(input_field.type)
                input_fields.append(
                    FieldDescriptor(
                        name=name,
                        response_name=name,
                        type=type_ref_from_graphql(input_field.type),
                        description=input_field.description,
                    )
                )
            self._types_used[named.name] = InputObjectDescriptor(
                name=named.name,
                fields=tuple(input_fields),
                description=named.description,
            )
