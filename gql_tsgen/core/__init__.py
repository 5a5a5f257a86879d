"""Core modules for GraphQL declaration generation."""

from .auth import Auth, BasicAuth, BearerAuth, CombinedAuth, HeaderAuth, NoAuth
from .context import GenerationContext
from .declarations import DeclarationBuilder
from .emitter import TypeScriptEmitter, render_declaration
from .errors import (
    CodegenError,
    ConfigError,
    DocumentValidationError,
    MalformedSelection,
    SchemaFetchError,
    SchemaLoadError,
    UnresolvedNamedType,
    UnsupportedOperationKind,
)
from .fields import map_field
from .hooks import (
    AddHeaderHook,
    FilterOperationsHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .introspection import fetch_introspection, fetch_schema
from .ir import (
    CompilationModel,
    EnumDeclaration,
    EnumTypeDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    FragmentDescriptor,
    GenerationResult,
    InlineFragment,
    InputObjectDescriptor,
    InterfaceDeclaration,
    NamedTypeResolver,
    OperationDescriptor,
    OperationFacts,
    OperationKind,
    Property,
    PropertyDeclaration,
    TypeKind,
    TypeRef,
    TypeReference,
)
from .loader import DocumentCompiler, SchemaNameResolver, load_documents, load_schema
from .merge import merge_fields, unique_properties
from .scalars import ScalarRegistry

__all__ = [
    # Auth
    "Auth",
    "BasicAuth",
    "BearerAuth",
    "CombinedAuth",
    "HeaderAuth",
    "NoAuth",
    # Errors
    "CodegenError",
    "ConfigError",
    "DocumentValidationError",
    "MalformedSelection",
    "SchemaFetchError",
    "SchemaLoadError",
    "UnresolvedNamedType",
    "UnsupportedOperationKind",
    # Hooks
    "AddHeaderHook",
    "FilterOperationsHook",
    "HookRunner",
    "PostGenerateHook",
    "PreGenerateHook",
    # IR types
    "CompilationModel",
    "EnumDeclaration",
    "EnumTypeDescriptor",
    "EnumValueDescriptor",
    "FieldDescriptor",
    "FragmentDescriptor",
    "GenerationResult",
    "InlineFragment",
    "InputObjectDescriptor",
    "InterfaceDeclaration",
    "NamedTypeResolver",
    "OperationDescriptor",
    "OperationFacts",
    "OperationKind",
    "Property",
    "PropertyDeclaration",
    "TypeKind",
    "TypeRef",
    "TypeReference",
    # Building
    "DeclarationBuilder",
    "GenerationContext",
    "ScalarRegistry",
    "map_field",
    "merge_fields",
    "unique_properties",
    # Loading
    "DocumentCompiler",
    "SchemaNameResolver",
    "load_documents",
    "load_schema",
    "fetch_introspection",
    "fetch_schema",
    # Emission
    "TypeScriptEmitter",
    "render_declaration",
]
