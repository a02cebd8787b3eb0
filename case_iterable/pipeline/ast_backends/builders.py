"""
Builders for Python AST nodes.

Small constructors for the node kinds the synthesizer emits, so that call
sites read as the code they produce instead of as ``ast`` boilerplate.
"""

from __future__ import annotations

import ast
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Path:
    """A dotted name, optionally with one trailing generic argument.

    ``Path(("typing", "Optional"), generic=Name("Color"))`` stands for
    ``typing.Optional[Color]``.
    """

    segments: tuple[str, ...]
    generic: ast.expr | None = None

    def push(self, name: str) -> Path:
        return Path(self.segments + (name,))

    def push_generic(self, name: str, type_node: ast.expr) -> Path:
        return Path(self.segments + (name,), generic=type_node)

    def __str__(self) -> str:
        return ast.unparse(path_expression(self))


def identifier(name: str, ctx: ast.expr_context | None = None) -> ast.Name:
    """A bare name (``Color``, ``self``)."""
    if not name:
        raise ValueError("identifier name must not be empty")
    return ast.Name(id=name, ctx=ctx or ast.Load())


def qualified_path(*segments: str, generic: ast.expr | None = None) -> Path:
    """A dotted path such as ``Color.RED`` or ``typing.Optional[Color]``."""
    if not segments:
        raise ValueError("qualified_path needs at least one segment")
    return Path(tuple(segments), generic=generic)


def path_expression(path: Path, ctx: ast.expr_context | None = None) -> ast.expr:
    """Expression node for a path: an attribute chain, subscripted when generic."""
    first, *rest = path.segments
    node: ast.expr = identifier(first, ctx=None if rest else ctx)
    for i, segment in enumerate(rest):
        is_last = i == len(rest) - 1
        node = ast.Attribute(value=node, attr=segment, ctx=(ctx or ast.Load()) if is_last else ast.Load())
    if path.generic is not None:
        node = ast.Subscript(value=node, slice=path.generic, ctx=ast.Load())
    return node


def type_from_name(name: str) -> ast.expr:
    return path_expression(qualified_path(name))


def optional_of(type_node: ast.expr, union_syntax: bool = False) -> ast.expr:
    """``typing.Optional[T]``, or ``T | None`` with ``union_syntax``."""
    if union_syntax:
        return ast.BinOp(left=type_node, op=ast.BitOr(), right=ast.Constant(value=None))
    return path_expression(qualified_path("typing", "Optional", generic=type_node))


def forward_ref(type_node: ast.expr) -> ast.Constant:
    """String annotation for a type whose names are not bound yet."""
    return ast.Constant(value=ast.unparse(type_node))


def expression_from_text(text: str) -> ast.expr:
    """Parse an expression string into an AST expression."""
    return ast.parse(text, mode="eval").body


def reference_to(expression: ast.expr) -> ast.expr:
    """Read reference to an expression that may have been built as a store target."""
    match expression:
        case ast.Name(id=name):
            return ast.Name(id=name, ctx=ast.Load())
        case ast.Attribute(value=value, attr=attr):
            return ast.Attribute(value=value, attr=attr, ctx=ast.Load())
        case ast.Subscript(value=value, slice=index):
            return ast.Subscript(value=value, slice=index, ctx=ast.Load())
        case _:
            return expression


def attribute(value: ast.expr, attr: str, ctx: ast.expr_context | None = None) -> ast.Attribute:
    return ast.Attribute(value=value, attr=attr, ctx=ctx or ast.Load())


def call(func: ast.expr, *args: ast.expr) -> ast.Call:
    return ast.Call(func=func, args=list(args), keywords=[])


def arg(name: str, annotation: ast.expr | None = None) -> ast.arg:
    return ast.arg(arg=name, annotation=annotation)


def arguments(*args: ast.arg) -> ast.arguments:
    return ast.arguments(
        posonlyargs=[],
        args=list(args),
        vararg=None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[],
    )


def docstring(text: str) -> ast.Expr:
    return ast.Expr(value=ast.Constant(value=text))


def function_def(
    name: str,
    args: ast.arguments,
    body: Sequence[ast.stmt],
    returns: ast.expr | None = None,
    decorators: Iterable[ast.expr] = (),
) -> ast.FunctionDef:
    """A ``def`` statement."""
    return ast.FunctionDef(
        name=name,
        args=args,
        body=list(body) or [ast.Pass()],
        decorator_list=list(decorators),
        returns=returns,
        type_params=[],
    )


def class_def(name: str, body: Sequence[ast.stmt], bases: Iterable[ast.expr] = ()) -> ast.ClassDef:
    """A ``class`` statement."""
    return ast.ClassDef(
        name=name,
        bases=list(bases),
        keywords=[],
        body=list(body) or [ast.Pass()],
        decorator_list=[],
        type_params=[],
    )


def return_stmt(value: ast.expr | None = None) -> ast.Return:
    return ast.Return(value=value)


def assign(target: ast.expr, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[target], value=value)


def ann_assign(target: ast.Name, annotation: ast.expr, value: ast.expr | None = None) -> ast.AnnAssign:
    """Annotated class field (``current: Optional[Color]``)."""
    return ast.AnnAssign(target=target, annotation=annotation, value=value, simple=1)


def is_none(value: ast.expr) -> ast.Compare:
    return ast.Compare(left=value, ops=[ast.Is()], comparators=[ast.Constant(value=None)])


def if_stmt(test: ast.expr, body: Sequence[ast.stmt], orelse: Sequence[ast.stmt] = ()) -> ast.If:
    return ast.If(test=test, body=list(body), orelse=list(orelse))


def raise_stmt(exc: ast.expr) -> ast.Raise:
    return ast.Raise(exc=exc, cause=None)


def match_case(pattern: Path, body: Sequence[ast.stmt]) -> ast.match_case:
    """``case Color.RED: ...`` arm matching a dotted value."""
    return ast.match_case(pattern=ast.MatchValue(value=path_expression(pattern)), guard=None, body=list(body))


def match_stmt(subject: ast.expr, cases: Sequence[ast.match_case]) -> ast.Match:
    return ast.Match(subject=subject, cases=list(cases))


def import_module(name: str) -> ast.Import:
    return ast.Import(names=[ast.alias(name=name, asname=None)])
