"""
Declaration analyzer.

Phase 1 of the pipeline: validate that a class statement is an
enumeration whose members carry no payload, and extract the members in
declaration order.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Collection

from ..config import GeneratorConfig
from ..diagnostics import Diagnostic, DiagnosticKind, UnsupportedDeclarationError
from .nodes import Variant, VariantList

logger = logging.getLogger(__name__)

# Literal types an enum member value may have while still being a bare tag
SCALAR_TYPES = (int, float, complex, str, bytes, bool, type(None))


class DeclarationAnalyzer:
    """Validates enumeration declarations and builds their VariantList."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def analyze(self, declaration: ast.ClassDef, local_enums: Collection[str] = ()) -> VariantList:
        """
        Analyze one class statement.

        Args:
            declaration: The class statement to derive case iteration for
            local_enums: Names of enumerations defined earlier in the same
                module, accepted as bases in addition to the configured ones

        Returns:
            VariantList with the members in declaration order

        Raises:
            UnsupportedDeclarationError: If the class is not an enumeration,
                a member carries a payload or aliases an earlier member, or
                there are no members
        """
        name = declaration.name
        if not self.is_enum_declaration(declaration, local_enums):
            raise UnsupportedDeclarationError(
                Diagnostic(
                    kind=DiagnosticKind.WRONG_SHAPE,
                    name=name,
                    message=f"{name} is not an enumeration: case iteration can only be derived for {self._bases_text()} subclasses",
                    lineno=getattr(declaration, "lineno", None),
                )
            )

        variants = []
        # literal value -> first member holding it
        values: dict[object, str] = {}
        # assignment statement -> first target, for ``A = B = ...``
        owners: dict[int, str] = {}
        for member_name, value, node in self._iter_members(declaration):
            if not self._is_unit_value(value):
                raise UnsupportedDeclarationError(
                    Diagnostic(
                        kind=DiagnosticKind.PAYLOAD_VARIANT,
                        name=member_name,
                        message=f"Non-unit variant: {name}.{member_name} carries associated data",
                        lineno=getattr(node, "lineno", None),
                    )
                )
            alias_of = owners.get(id(node))
            if alias_of is None and not self._is_auto(value):
                # equal values make the later name an alias (True == 1 == 1.0 included)
                literal = ast.literal_eval(value)
                alias_of = values.setdefault(literal, member_name)
                if alias_of == member_name:
                    alias_of = None
            if alias_of is not None:
                raise UnsupportedDeclarationError(
                    Diagnostic(
                        kind=DiagnosticKind.ALIAS_VARIANT,
                        name=member_name,
                        message=f"Alias variant: {name}.{member_name} has the same value as {name}.{alias_of}",
                        lineno=getattr(node, "lineno", None),
                    )
                )
            owners.setdefault(id(node), member_name)
            variants.append(Variant(name=member_name, lineno=getattr(node, "lineno", None)))

        if not variants:
            raise UnsupportedDeclarationError(
                Diagnostic(
                    kind=DiagnosticKind.EMPTY_ENUMERATION,
                    name=name,
                    message=f"{name} declares no members",
                    lineno=getattr(declaration, "lineno", None),
                )
            )

        logger.debug("Analyzed %s: %d members", name, len(variants))
        return VariantList(enum_name=name, variants=tuple(variants))

    def is_enum_declaration(self, declaration: ast.ClassDef, local_enums: Collection[str] = ()) -> bool:
        """Check whether any base of the class is a configured enum base or a local enumeration."""
        enum_bases = set(self.config.enum_base_classes)
        for base in declaration.bases:
            if isinstance(base, ast.Name) and base.id in local_enums:
                return True
            if self._base_name(base) in enum_bases:
                return True
        return False

    def has_members(self, declaration: ast.ClassDef) -> bool:
        return next(self._iter_members(declaration), None) is not None

    def _bases_text(self) -> str:
        return "/".join(self.config.enum_base_classes)

    def _base_name(self, base: ast.expr) -> str | None:
        """Last dotted segment of a base class expression (``enum.Enum`` -> ``Enum``)."""
        match base:
            case ast.Name(id=name):
                return name
            case ast.Attribute(attr=name):
                return name
            case _:
                return None

    def _iter_members(self, declaration: ast.ClassDef):
        """Yield ``(name, value, node)`` for each statement that defines a member."""
        ignored = self._ignored_names(declaration)
        for node in declaration.body:
            if isinstance(node, ast.Assign):
                targets = node.targets
                value = node.value
            elif isinstance(node, ast.AnnAssign) and node.value is not None:
                targets = [node.target]
                value = node.value
            else:
                continue

            if self._is_descriptor_value(value):
                continue

            for target in targets:
                if not isinstance(target, ast.Name):
                    continue
                if target.id in ignored or not self._is_member_name(declaration.name, target.id):
                    continue
                yield target.id, value, node

    def _is_member_name(self, class_name: str, name: str) -> bool:
        """Names the enum machinery never turns into members."""
        # dunder
        if len(name) > 4 and name.startswith("__") and name.endswith("__"):
            return False
        # sunder
        if len(name) > 2 and name.startswith("_") and name.endswith("_") and name[1] != "_" and name[-2] != "_":
            return False
        # private (name mangled)
        if name.startswith(f"_{class_name.lstrip('_')}__"):
            return False
        return True

    def _ignored_names(self, declaration: ast.ClassDef) -> set[str]:
        """Names listed in an ``_ignore_`` assignment."""
        for node in declaration.body:
            if isinstance(node, ast.Assign) and any(isinstance(t, ast.Name) and t.id == "_ignore_" for t in node.targets):
                try:
                    value = ast.literal_eval(node.value)
                except ValueError:
                    return set()
                if isinstance(value, str):
                    return set(value.replace(",", " ").split())
                if isinstance(value, (list, tuple, set)):
                    return {v for v in value if isinstance(v, str)}
        return set()

    def _is_descriptor_value(self, value: ast.expr) -> bool:
        """Functions and ``nonmember(...)`` wrappers are class attributes, not members."""
        if isinstance(value, ast.Lambda):
            return True
        if isinstance(value, ast.Call):
            return self._call_name(value) in ("nonmember", "property", "staticmethod", "classmethod")
        return False

    def _is_unit_value(self, value: ast.expr) -> bool:
        """A member is a bare tag when its value is ``auto()`` or a scalar literal."""
        if isinstance(value, ast.Call):
            return self._is_auto(value)
        try:
            literal = ast.literal_eval(value)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            return False
        return isinstance(literal, SCALAR_TYPES)

    def _is_auto(self, value: ast.expr) -> bool:
        return isinstance(value, ast.Call) and self._call_name(value) == "auto" and not value.args and not value.keywords

    def _call_name(self, call: ast.Call) -> str | None:
        return self._base_name(call.func)


def find_declaration(module: ast.Module, name: str) -> ast.ClassDef:
    """
    Find a top-level class statement by name.

    Raises:
        UnsupportedDeclarationError: If the module has no such class
    """
    for node in module.body:
        if isinstance(node, ast.ClassDef) and node.name == name:
            return node
    raise UnsupportedDeclarationError(
        Diagnostic(
            kind=DiagnosticKind.DECLARATION_NOT_FOUND,
            name=name,
            message=f"No top-level class named {name}",
        )
    )


def local_enum_names(module: ast.Module, config: GeneratorConfig | None = None) -> set[str]:
    """Top-level classes deriving from an enum base directly or through an earlier top-level enumeration."""
    analyzer = DeclarationAnalyzer(config)
    names: set[str] = set()
    for node in module.body:
        if isinstance(node, ast.ClassDef) and analyzer.is_enum_declaration(node, names):
            names.add(node.name)
    return names


def find_enum_declarations(module: ast.Module, config: GeneratorConfig | None = None) -> list[ast.ClassDef]:
    """
    All top-level enumeration classes of a module, in source order.

    Enumerations without members can only serve as bases for other
    enumerations and are skipped.
    """
    analyzer = DeclarationAnalyzer(config)
    names: set[str] = set()
    declarations = []
    for node in module.body:
        if not isinstance(node, ast.ClassDef) or not analyzer.is_enum_declaration(node, names):
            continue
        names.add(node.name)
        if analyzer.has_members(node):
            declarations.append(node)
        else:
            logger.debug("Skipping %s: no members", node.name)
    return declarations
