"""Project configuration for gql-tsgen.

Example ``gql-tsgen.json``:

    {
        "scalars": {"DateTime": "string", "JSON": "Record<string, unknown>"},
        "passthrough_custom_scalars": false,
        "register_module": "../../lib/client/apollo-stuff",
        "header": "// Generated by gql-tsgen",
        "exclude_operation_prefix": "Internal"
    }
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .core.context import GenerationContext
from .core.emitter import DEFAULT_REGISTER_MODULE
from .core.errors import ConfigError
from .core.hooks import AddHeaderHook, FilterOperationsHook, HookRunner
from .core.scalars import ScalarRegistry


class CodegenConfig(BaseModel):
    """Settings for one generation run."""

    scalars: dict[str, str] = Field(default_factory=dict)
    passthrough_custom_scalars: bool = False
    register_module: str = DEFAULT_REGISTER_MODULE
    header: str | None = None
    exclude_operation_prefix: str | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> "CodegenConfig":
        """Load and validate a JSON configuration file."""
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config {path} is not valid JSON: {e}") from e

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e

    def generation_context(self) -> GenerationContext:
        return GenerationContext(
            scalars=ScalarRegistry(self.scalars, passthrough=self.passthrough_custom_scalars)
        )

    def hook_runner(self) -> HookRunner:
        runner = HookRunner()
        if self.exclude_operation_prefix:
            runner.add_pre_hook(FilterOperationsHook(exclude_prefix=self.exclude_operation_prefix))
        if self.header:
            runner.add_post_hook(AddHeaderHook(self.header))
        return runner
