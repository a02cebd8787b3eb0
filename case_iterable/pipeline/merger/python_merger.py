"""
Python AST merger.

Uses Python's built-in ast module to splice generated case iteration code
into the module that declares the enumeration. Splicing is idempotent:
running it again replaces what a previous run generated.
"""

from __future__ import annotations

import ast
import logging

from ..ast_backends.artifact import GeneratedArtifact
from .base import CodeMergeError

logger = logging.getLogger(__name__)


class PythonAstMerger:
    """Splices GeneratedArtifacts into Python modules."""

    def parse(self, code: str) -> ast.Module:
        """Parse Python source code into an AST.

        Args:
            code: Python source code string

        Returns:
            ast.Module representing the parsed code

        Raises:
            CodeMergeError: If the code cannot be parsed
        """
        try:
            return ast.parse(code)
        except SyntaxError as e:
            raise CodeMergeError(f"Failed to parse Python code: {e}") from e

    def splice_source(self, code: str, artifacts: list[GeneratedArtifact]) -> str:
        """Splice artifacts into source code and return the new source."""
        tree = self.parse(code)
        for artifact in artifacts:
            self.splice(tree, artifact)
        ast.fix_missing_locations(tree)
        merged = ast.unparse(tree)
        self.validate(merged)
        return merged

    def splice(self, tree: ast.Module, artifact: GeneratedArtifact) -> ast.Module:
        """Splice one artifact into a parsed module, in place.

        The successor query and the entry point go into the enumeration's
        body; the carrier class goes right after the enumeration.

        Raises:
            CodeMergeError: If the module has no top-level class for the artifact
        """
        enum_index = self._find_class_index(tree.body, artifact.enum_name)
        if enum_index is None:
            raise CodeMergeError(f"Class {artifact.enum_name} not found in module")

        self._merge_class(tree.body[enum_index], artifact.enum_members())

        iterator_index = self._find_class_index(tree.body, artifact.iterator_name)
        if iterator_index is not None:
            logger.debug("Replacing existing %s", artifact.iterator_name)
            del tree.body[iterator_index]
            if iterator_index < enum_index:
                enum_index -= 1
        tree.body.insert(enum_index + 1, artifact.iterator_class)

        self._merge_imports(tree, artifact.imports)
        return tree

    def _find_class_index(self, body: list[ast.stmt], name: str) -> int | None:
        for i, node in enumerate(body):
            if isinstance(node, ast.ClassDef) and node.name == name:
                return i
        return None

    def _merge_class(self, existing: ast.ClassDef, methods: list[ast.FunctionDef]) -> ast.ClassDef:
        """Merge methods into a class: replace same-named ones in place, append the rest."""
        gen_methods = {method.name: method for method in methods}

        new_body = []
        for item in existing.body:
            if isinstance(item, ast.FunctionDef) and item.name in gen_methods:
                new_body.append(self._merge_method(item, gen_methods.pop(item.name)))
            elif isinstance(item, ast.Pass):
                # placeholder body of an otherwise empty class
                continue
            else:
                new_body.append(item)

        new_body.extend(gen_methods.values())
        existing.body = new_body
        return existing

    def _merge_method(self, existing: ast.FunctionDef, generated: ast.FunctionDef) -> ast.FunctionDef:
        """Merge a method: keep existing docstring, use generated body."""
        existing_docstring = ast.get_docstring(existing)
        result = generated

        if existing_docstring and ast.get_docstring(result) is None:
            result.body.insert(0, ast.Expr(value=ast.Constant(value=existing_docstring)))

        return result

    def _merge_imports(self, tree: ast.Module, imports: list[ast.stmt]) -> None:
        """Add imports the module does not have yet, after its last import."""
        seen = {ast.unparse(node) for node in tree.body if isinstance(node, (ast.Import, ast.ImportFrom))}
        insert_idx = self._find_import_insert_index(tree.body)
        for imp in imports:
            if ast.unparse(imp) not in seen:
                tree.body.insert(insert_idx, imp)
                insert_idx += 1

    def _find_import_insert_index(self, body: list[ast.stmt]) -> int:
        """Index after the leading import block (which may follow a module docstring)."""
        start = 0
        if body and isinstance(body[0], ast.Expr) and isinstance(body[0].value, ast.Constant) and isinstance(body[0].value.value, str):
            start = 1
        last_idx = start
        for i in range(start, len(body)):
            if not isinstance(body[i], (ast.Import, ast.ImportFrom)):
                break
            last_idx = i + 1
        return last_idx

    def validate(self, code: str) -> None:
        """Validate that merged Python code is syntactically correct.

        Raises:
            CodeMergeError: If validation fails
        """
        try:
            ast.parse(code)
        except SyntaxError as e:
            raise CodeMergeError(f"Merged code is not valid Python: {e}") from e
