"""Declaration builder.

Turns a resolved CompilationModel into Enum and Interface declaration
nodes. The transform is a pure recursion over the selection tree; the only
state is the GenerationResult being filled for the current pass.
"""

import logging
from collections.abc import Sequence

from .context import GenerationContext
from .errors import CodegenError, MalformedSelection, UnresolvedNamedType
from .fields import map_field
from .ir import (
    CompilationModel,
    EnumDeclaration,
    EnumTypeDescriptor,
    EnumValue,
    FieldDescriptor,
    FragmentDescriptor,
    GenerationFailure,
    GenerationResult,
    InputObjectDescriptor,
    InterfaceDeclaration,
    OperationDescriptor,
    OperationFacts,
    OperationUnit,
    Property,
    PropertyDeclaration,
    TypeReference,
)
from .merge import merge_fields
from .naming import (
    fragment_declaration_name,
    input_type_declaration_name,
    operation_declaration_name,
    variables_declaration_name,
)

logger = logging.getLogger(__name__)


class DeclarationBuilder:
    """Builds declaration nodes for enums, input objects, operations and fragments."""

    def __init__(self, context: GenerationContext | None = None):
        self.context = context or GenerationContext()

    def build(self, model: CompilationModel) -> GenerationResult:
        """Build every declaration for the model, in input order.

        A unit (type, operation or fragment) that raises a CodegenError is
        recorded in ``result.failures`` and contributes no declarations;
        the remaining units still build. UnresolvedNamedType and
        MalformedSelection mean the compiled model is inconsistent and
        propagate instead.
        """
        builder = DeclarationBuilder(self.context.with_resolver(model.name_resolver))
        result = GenerationResult()

        for type_desc in model.types_used:
            try:
                result.types.append(builder.build_type_declaration(type_desc))
            except (UnresolvedNamedType, MalformedSelection):
                raise
            except CodegenError as e:
                builder._record_failure(result, f"type {type_desc.name}", e)

        for operation in model.operations:
            try:
                result.operations.append(builder.build_operation_unit(operation))
            except (UnresolvedNamedType, MalformedSelection):
                raise
            except CodegenError as e:
                builder._record_failure(result, f"operation {operation.name}", e)

        for fragment in model.fragments:
            try:
                result.fragments.append(builder.build_fragment_declaration(fragment))
            except (UnresolvedNamedType, MalformedSelection):
                raise
            except CodegenError as e:
                builder._record_failure(result, f"fragment {fragment.name}", e)

        logger.debug(
            "Built %d declarations (%d failures)",
            len(result.declarations),
            len(result.failures),
        )
        return result

    @staticmethod
    def _record_failure(result: GenerationResult, unit: str, error: CodegenError):
        logger.warning("Skipping %s: %s", unit, error.message)
        result.failures.append(GenerationFailure(unit=unit, error=error))

    def build_type_declaration(
        self, type_desc: EnumTypeDescriptor | InputObjectDescriptor
    ) -> EnumDeclaration | InterfaceDeclaration:
        if isinstance(type_desc, EnumTypeDescriptor):
            return self.build_enum_declaration(type_desc)
        return self.build_input_object_declaration(type_desc)

    def build_enum_declaration(self, enum_type: EnumTypeDescriptor) -> EnumDeclaration:
        return EnumDeclaration(
            name=enum_type.name,
            values=[EnumValue(v.value, v.description) for v in enum_type.values],
            description=enum_type.description,
        )

    def build_input_object_declaration(
        self, input_type: InputObjectDescriptor
    ) -> InterfaceDeclaration:
        return InterfaceDeclaration(
            name=input_type_declaration_name(input_type.name),
            properties=self._property_declarations(input_type.fields, force_nullable=False),
            description=input_type.description,
        )

    def build_variables_declaration(
        self, operation: OperationDescriptor
    ) -> InterfaceDeclaration | None:
        """Return the Variables interface, or None when there are no variables."""
        if not operation.variables:
            return None
        return InterfaceDeclaration(
            name=variables_declaration_name(operation.name, operation.kind),
            properties=self._property_declarations(operation.variables, force_nullable=False),
        )

    def build_operation_declaration(self, operation: OperationDescriptor) -> InterfaceDeclaration:
        # Root fields are treated as possibly absent under fragment composition.
        return InterfaceDeclaration(
            name=operation_declaration_name(operation.name, operation.kind),
            extends=[fragment_declaration_name(s) for s in operation.fragment_spreads],
            properties=self._property_declarations(operation.fields, force_nullable=True),
        )

    def build_operation_unit(self, operation: OperationDescriptor) -> OperationUnit:
        """Build the variables and result interfaces for one operation."""
        declaration_name = operation_declaration_name(operation.name, operation.kind)
        variables = self.build_variables_declaration(operation)
        result_declaration = self.build_operation_declaration(operation)

        declarations = [result_declaration] if variables is None else [variables, result_declaration]
        facts = OperationFacts(
            name=operation.name,
            kind=operation.kind,
            declaration_name=declaration_name,
            has_variables=variables is not None,
            variables_declaration_name=variables.name if variables else None,
            source=operation.source,
            fragments_referenced=operation.fragments_referenced,
        )
        return OperationUnit(facts=facts, declarations=declarations)

    def build_fragment_declaration(self, fragment: FragmentDescriptor) -> InterfaceDeclaration:
        properties = merge_fields(self.context, fragment.fields, fragment.inline_fragments)
        return InterfaceDeclaration(
            name=fragment_declaration_name(fragment.name),
            extends=[fragment_declaration_name(s) for s in fragment.fragment_spreads],
            properties=[self.build_property_declaration(p) for p in properties],
        )

    def build_property_declaration(self, prop: Property) -> PropertyDeclaration:
        """Build a leaf reference or an inline nested interface for a property."""
        return PropertyDeclaration(
            name=prop.property_name,
            type=self._property_type(prop),
            is_array=prop.is_array,
            is_nullable=prop.is_nullable,
            description=prop.description,
        )

    def _property_type(self, prop: Property) -> TypeReference | InterfaceDeclaration:
        if not prop.is_composite:
            return TypeReference(prop.type_name)

        if not (prop.has_selection or prop.fragment_spreads):
            raise MalformedSelection(prop.property_name, prop.type_name)

        name = prop.bare_type_name or prop.type_name
        if not name:
            raise UnresolvedNamedType(prop.type_name, prop.property_name)

        sub_properties = merge_fields(self.context, prop.fields, prop.inline_fragments)
        return InterfaceDeclaration(
            name=name,
            extends=[fragment_declaration_name(s) for s in prop.fragment_spreads],
            properties=[self.build_property_declaration(p) for p in sub_properties],
        )

    def _property_declarations(
        self, fields: Sequence[FieldDescriptor], force_nullable: bool
    ) -> list[PropertyDeclaration]:
        return [
            self.build_property_declaration(map_field(self.context, f, force_nullable))
            for f in fields
        ]
