"""Generation hooks for customizing code generation.

Pre-generation hooks can modify the compiled model before declarations
are built; post-generation hooks transform the emitted module text.

Example usage:
    from gql_tsgen.core.hooks import PreGenerateHook, PostGenerateHook

    # Pre-generation hook to drop debug operations
    class DropDebugOperations(PreGenerateHook):
        def pre_generate(self, model):
            model.operations = [op for op in model.operations if not op.name.startswith("Debug")]
            return model

    # Post-generation hook to add a license banner
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            return "// Copyright 2024 My Company\\n\\n" + content
"""

from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable

from .ir import CompilationModel, FieldDescriptor


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for hooks that receive the compiled model before building."""

    def pre_generate(self, model: CompilationModel) -> CompilationModel:
        """Return the (possibly modified) model to build declarations from."""
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for hooks that transform emitted module text.

    Example:
        class StripLintMarkers(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                return content.replace("/* tslint:disable */\\n", "")
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Return the (possibly transformed) text to write for ``filename``."""
        ...


class AddHeaderHook:
    """Built-in hook to prepend a header to generated files.

    Example:
        hook = AddHeaderHook("// Generated by gql-tsgen")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        header = self.header if self.header.endswith("\n") else self.header + "\n"
        return header + "\n" + content


class FilterOperationsHook:
    """Built-in hook to keep or drop operations and fragments by name prefix.

    Fragments still spread by a kept operation or fragment are always kept,
    whatever their name.

    Example:
        # Drop every operation and fragment starting with "Internal"
        hook = FilterOperationsHook(exclude_prefix="Internal")
    """

    def __init__(self, exclude_prefix: str | None = None, include_prefix: str | None = None):
        self.exclude_prefix = exclude_prefix
        self.include_prefix = include_prefix

    def _should_include(self, name: str) -> bool:
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        return True

    def pre_generate(self, model: CompilationModel) -> CompilationModel:
        model.operations = [op for op in model.operations if self._should_include(op.name)]

        by_name = {f.name: f for f in model.fragments}
        pending = [f.name for f in model.fragments if self._should_include(f.name)]
        for op in model.operations:
            pending.extend(op.fragments_referenced)

        keep: set[str] = set()
        while pending:
            name = pending.pop()
            if name in keep or name not in by_name:
                continue
            keep.add(name)
            fragment = by_name[name]
            pending.extend(fragment.fragment_spreads)
            pending.extend(_nested_spreads(fragment.fields))
            for inline in fragment.inline_fragments:
                pending.extend(_nested_spreads(inline.fields))

        model.fragments = [f for f in model.fragments if f.name in keep]
        return model


def _nested_spreads(fields: Iterable[FieldDescriptor]) -> Iterator[str]:
    for field in fields:
        yield from field.fragment_spreads
        yield from _nested_spreads(field.fields)
        for inline in field.inline_fragments:
            yield from _nested_spreads(inline.fields)


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, model: CompilationModel) -> CompilationModel:
        for hook in self.pre_hooks:
            model = hook.pre_generate(model)
        return model

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
