"""
Python AST backend.

Phase 3 of the pipeline: turn a successor relation into the declarations
that make an enumeration iterable case by case:

- ``<Enum>.next()``: successor query, one ``case`` arm per member
- ``<Enum>Iterator``: carrier class holding the current member or ``None``
- ``<Enum>Iterator.__init__`` / ``__next__``: constructor and advance step
- ``<Enum>.all_cases()``: carrier seeded at the first member
"""

from __future__ import annotations

import ast
import logging

from ..config import GeneratorConfig
from ..relation.successor import SuccessorRelation
from . import builders as b
from .artifact import GeneratedArtifact

logger = logging.getLogger(__name__)


class PythonAstBackend:
    """Builds the case iteration declarations for one enumeration."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def generate(self, relation: SuccessorRelation) -> GeneratedArtifact:
        """Generate the artifact for a successor relation."""
        enum_name = relation.enum_name
        iterator_name = self.config.iterator_name(enum_name)

        successor_query = self._generate_successor_query(relation)
        constructor = self._generate_constructor(enum_name)
        advance = self._generate_advance(enum_name)
        iterator_class = self._generate_iterator_class(enum_name, iterator_name, constructor, advance)
        entry_point = self._generate_entry_point(relation, iterator_name)

        imports: list[ast.stmt] = []
        if not self.config.use_union_syntax:
            imports.append(b.import_module("typing"))

        logger.debug("Generated %s.%s, %s and %s.%s", enum_name, successor_query.name, iterator_name, enum_name, entry_point.name)
        return GeneratedArtifact(
            enum_name=enum_name,
            iterator_name=iterator_name,
            successor_query=successor_query,
            iterator_class=iterator_class,
            constructor=constructor,
            advance=advance,
            entry_point=entry_point,
            imports=imports,
        )

    def _optional_enum(self, enum_name: str) -> ast.expr:
        return b.optional_of(b.type_from_name(enum_name), union_syntax=self.config.use_union_syntax)

    def _annotation(self, type_node: ast.expr) -> ast.expr:
        """Annotation for a type that is not bound yet where it is evaluated."""
        if self.config.quote_forward_references:
            return b.forward_ref(type_node)
        return type_node

    def _with_docstring(self, text: str, body: list[ast.stmt]) -> list[ast.stmt]:
        if self.config.add_docstrings:
            return [b.docstring(text), *body]
        return body

    def _generate_successor_query(self, relation: SuccessorRelation) -> ast.FunctionDef:
        # match self:
        #     case Enum.A: return Enum.B    (not last)
        #     case Enum.X: return None      (last)
        enum_name = relation.enum_name
        cases = []
        for entry in relation:
            if entry.is_terminal:
                result = b.expression_from_text("None")
            else:
                result = b.path_expression(b.qualified_path(enum_name, entry.next_variant.name))
            cases.append(b.match_case(b.qualified_path(enum_name, entry.variant.name), [b.return_stmt(result)]))

        body = self._with_docstring(
            "Return the member declared after this one, or None for the last member.",
            [b.match_stmt(b.identifier("self"), cases)],
        )
        return b.function_def(
            self.config.successor_method,
            b.arguments(b.arg("self")),
            body,
            returns=self._annotation(self._optional_enum(enum_name)),
        )

    def _generate_constructor(self, enum_name: str) -> ast.FunctionDef:
        start = b.identifier("start")
        body = [
            b.assign(
                b.attribute(b.identifier("self"), self.config.current_field, ctx=ast.Store()),
                start,
            )
        ]
        return b.function_def(
            "__init__",
            b.arguments(b.arg("self"), b.arg("start", b.type_from_name(enum_name))),
            body,
            returns=b.expression_from_text("None"),
        )

    def _generate_advance(self, enum_name: str) -> ast.FunctionDef:
        # current = self.current
        # if current is None: raise StopIteration
        # self.current = current.next()
        # return current
        field_path = b.qualified_path("self", self.config.current_field)
        current = b.identifier("current", ctx=ast.Store())
        body = [
            b.assign(current, b.path_expression(field_path)),
            b.if_stmt(b.is_none(b.reference_to(current)), [b.raise_stmt(b.identifier("StopIteration"))]),
            b.assign(
                b.path_expression(field_path, ctx=ast.Store()),
                b.call(b.attribute(b.reference_to(current), self.config.successor_method)),
            ),
            b.return_stmt(b.reference_to(current)),
        ]
        return b.function_def(
            "__next__",
            b.arguments(b.arg("self")),
            body,
            returns=b.type_from_name(enum_name),
        )

    def _generate_iterator_class(
        self,
        enum_name: str,
        iterator_name: str,
        constructor: ast.FunctionDef,
        advance: ast.FunctionDef,
    ) -> ast.ClassDef:
        field = b.ann_assign(
            b.identifier(self.config.current_field, ctx=ast.Store()),
            self._optional_enum(enum_name),
        )
        iter_method = b.function_def(
            "__iter__",
            b.arguments(b.arg("self")),
            [b.return_stmt(b.identifier("self"))],
            returns=self._annotation(b.type_from_name(iterator_name)),
        )
        body = self._with_docstring(
            f"Iterator over the members of {enum_name} in declaration order.",
            [field, constructor, iter_method, advance],
        )
        return b.class_def(iterator_name, body)

    def _generate_entry_point(self, relation: SuccessorRelation, iterator_name: str) -> ast.FunctionDef:
        first = b.path_expression(b.qualified_path(relation.enum_name, relation.first.name))
        body = self._with_docstring(
            "Iterate over every member in declaration order.",
            [b.return_stmt(b.call(b.identifier(iterator_name), first))],
        )
        return b.function_def(
            self.config.entry_point,
            b.arguments(),
            body,
            returns=self._annotation(b.type_from_name(iterator_name)),
            decorators=[b.identifier("staticmethod")],
        )
