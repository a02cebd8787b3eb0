"""
Configuration for the case iteration generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the output file
    IN_PLACE = "in_place"  # Splice into the input file itself


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = False

    # Which formatter to use: "ruff" or "black"
    backend: str = "ruff"

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    magic_trailing_comma: bool = True


DEFAULT_ENUM_BASES = ["Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"]


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Suffix appended to the enum name to name the sequence carrier class
    iterator_suffix: str = "Iterator"

    # Name of the generated successor query method
    successor_method: str = "next"

    # Name of the generated "enumerate all cases" static method
    entry_point: str = "all_cases"

    # Name of the carrier's single field
    current_field: str = "current"

    # Base class names (last dotted segment) that mark an enumerated type
    enum_base_classes: list[str] = field(default_factory=lambda: list(DEFAULT_ENUM_BASES))

    # Quote annotations that name classes not yet bound at definition time
    quote_forward_references: bool = True

    # Emit "T | None" instead of "typing.Optional[T]"
    use_union_syntax: bool = False

    # Add docstrings to generated methods
    add_docstrings: bool = True

    # Add generation comment at top of file
    add_generation_comment: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    def iterator_name(self, enum_name: str) -> str:
        """Name of the carrier class generated for ``enum_name``."""
        return f"{enum_name}{self.iterator_suffix}"

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "iterator_suffix": self.iterator_suffix,
            "successor_method": self.successor_method,
            "entry_point": self.entry_point,
            "current_field": self.current_field,
            "enum_base_classes": self.enum_base_classes,
            "quote_forward_references": self.quote_forward_references,
            "use_union_syntax": self.use_union_syntax,
            "add_docstrings": self.add_docstrings,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "backend": self.formatter.backend,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
