"""
Case iteration generator.

Chains the pipeline phases for each enumeration:

1. Analyzer: validate the class statement and extract its members
2. Relation: map each member to its successor
3. AST backend: build the generated declarations
4. Merger: splice them into the module (``derive``)
5. Formatter: optional post-processing with ruff or black
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Collection
from pathlib import Path

import jinja2

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .ast_backends.artifact import GenerationResult
from .ast_backends.python_ast_backend import PythonAstBackend
from .config import GeneratorConfig
from .declaration.analyzer import DeclarationAnalyzer, find_declaration, find_enum_declarations, local_enum_names
from .diagnostics import Diagnostic, DiagnosticKind, GenerationError, UnsupportedDeclarationError
from .formatters import get_formatter
from .merger import PythonAstMerger
from .relation.successor import build_successor_relation

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class CaseIterableGenerator:
    """Derives case iteration code for enumerations.

    Holds only configuration: every call is independent of the previous ones.
    """

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self.analyzer = DeclarationAnalyzer(self.config)
        self.backend = PythonAstBackend(self.config)
        self.merger = PythonAstMerger()
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
        )

    def generate(self, declaration: ast.ClassDef, local_enums: Collection[str] = ()) -> GenerationResult:
        """
        Generate case iteration declarations for one class statement.

        Args:
            declaration: The enumeration's class statement
            local_enums: Enumerations of the same module usable as bases

        Returns:
            GenerationResult holding the artifact, or the diagnostic that
            rejected the declaration
        """
        try:
            variants = self.analyzer.analyze(declaration, local_enums)
        except UnsupportedDeclarationError as e:
            logger.debug("Rejected %s: %s", declaration.name, e.diagnostic.message)
            return GenerationResult(diagnostic=e.diagnostic)

        relation = build_successor_relation(variants)
        artifact = self.backend.generate(relation)
        return GenerationResult(artifact=artifact)

    def generate_source(self, source: str, names: list[str] | None = None) -> list[GenerationResult]:
        """
        Generate for classes of a module given as source text.

        Args:
            source: Python source code
            names: Classes to derive; every top-level enumeration when omitted

        Returns:
            One GenerationResult per requested class, in request order
        """
        try:
            module = ast.parse(source)
        except SyntaxError as e:
            return [GenerationResult(diagnostic=Diagnostic(DiagnosticKind.INVALID_SOURCE, "<source>", f"Failed to parse Python code: {e.msg}", e.lineno))]

        local_enums = local_enum_names(module, self.config)
        if names is None:
            declarations = find_enum_declarations(module, self.config)
            logger.debug("Found %d enumerations", len(declarations))
            return [self.generate(declaration, local_enums) for declaration in declarations]

        results = []
        for name in names:
            try:
                declaration = find_declaration(module, name)
            except UnsupportedDeclarationError as e:
                results.append(GenerationResult(diagnostic=e.diagnostic))
                continue
            results.append(self.generate(declaration, local_enums))
        return results

    def derive(self, source: str, names: list[str] | None = None) -> str:
        """
        Return ``source`` with case iteration code spliced in.

        Raises:
            GenerationError: If any requested declaration is rejected
            CodeMergeError: If splicing fails
        """
        results = self.generate_source(source, names)
        for result in results:
            if not result.ok:
                raise GenerationError(result.diagnostic)
        if not results:
            raise GenerationError(Diagnostic(DiagnosticKind.DECLARATION_NOT_FOUND, "<source>", "No enumeration found"))

        artifacts = [result.artifact for result in results]
        code = self.merger.splice_source(source, artifacts)
        code = self._add_generation_comment(code, [artifact.enum_name for artifact in artifacts])

        if self.config.formatter.enabled:
            code = get_formatter(self.config.formatter).format(code, self.config.formatter)
        return code

    def _add_generation_comment(self, code: str, enum_names: list[str]) -> str:
        if not self.config.add_generation_comment:
            return code if code.endswith("\n") else code + "\n"

        try:
            from ..case_iterable import case_iterable as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "case_iterable"

        header = self.jinja_env.get_template("header.py.jinja2").render(
            enum_names=enum_names,
            version=__version__,
            command_line=command_line,
        )
        return f"{header.rstrip()}\n{code}\n"
