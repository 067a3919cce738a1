# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Constants compiler functionality.

Resolves tokens at build time and renders the result as Python source, so
generated modules carry plain literals instead of calling ioughta at
import time.
"""

from __future__ import annotations

import ast
from types import EllipsisType

from ioughta.binding import _check_identifier
from ioughta.exceptions import CompileError, DuplicateDefinitionError
from ioughta.resolver import ResolvedPair, resolve
from ioughta.tokens import GeneratorLike, TokenArg

_HEADER = "Constants generated by ioughta."


def _astify(obj: object) -> ast.expr:
    """Convert a resolved value to a literal AST node.

    Nested lists, tuples and dicts are supported; anything that has no
    literal form raises `CompileError`.
    """
    if (
        isinstance(obj, (str, bytes, bool, int, float, complex))
        or obj is None
        or isinstance(obj, EllipsisType)
    ):
        return ast.Constant(obj)
    if isinstance(obj, dict):
        keys: list[ast.expr | None] = [_astify(k) for k in obj.keys()]
        values = [_astify(v) for v in obj.values()]
        return ast.Dict(keys=keys, values=values)
    if isinstance(obj, list):
        return ast.List(elts=[_astify(v) for v in obj], ctx=ast.Load())
    if isinstance(obj, tuple):
        return ast.Tuple(elts=[_astify(v) for v in obj], ctx=ast.Load())
    raise CompileError(
        f"value {obj!r} of type {type(obj).__name__} has no literal form"
    )


def _assign(name: str, value: ast.expr) -> ast.Assign:
    return ast.Assign(
        targets=[ast.Name(id=name, ctx=ast.Store())],
        value=value,
    )


def _compile_assignments(pairs: list[ResolvedPair]) -> list[ast.stmt]:
    seen: set[str] = set()
    body: list[ast.stmt] = []
    for pair in pairs:
        _check_identifier(pair.name)
        if pair.name in seen:
            raise DuplicateDefinitionError(pair.name, "compiled output")
        seen.add(pair.name)
        body.append(_assign(pair.name, _astify(pair.value)))
    return body


def _compile_mapping(name: str, pairs: list[ResolvedPair]) -> ast.Assign:
    _check_identifier(name)
    keys: list[ast.expr | None] = []
    values: list[ast.expr] = []
    seen: set[str] = set()
    for pair in pairs:
        if pair.name in seen:
            raise DuplicateDefinitionError(pair.name, f"mapping {name}")
        seen.add(pair.name)
        keys.append(ast.Constant(pair.name))
        values.append(_astify(pair.value))
    return _assign(name, ast.Dict(keys=keys, values=values))


def _compile_class(name: str, pairs: list[ResolvedPair]) -> ast.ClassDef:
    _check_identifier(name)
    class_body = _compile_assignments(pairs) or [ast.Pass()]
    return ast.ClassDef(
        name=name,
        bases=[],
        keywords=[],
        body=class_body,
        decorator_list=[],
        type_params=[],
    )


def compile_constants(
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
    mapping: str | None = None,
    class_name: str | None = None,
) -> str:
    """Compile tokens into a string containing Python code.

    By default every pair becomes a module-level assignment. Generators
    run now, at compile time; only their results reach the output.

    Args:
        *tokens: Names and generators, see `ioughta.resolver.resolve`.
        generator: Base generator for names before any in-list generator.
        strict: Reject malformed token lists.
        mapping: If given, emit one dict literal assigned to this name.
        class_name: If given, emit a class holding the constants as
            class attributes.

    Returns:
        A string containing the generated Python source.

    Raises:
        CompileError: If a value has no literal form, or both ``mapping``
            and ``class_name`` are given.
    """
    if mapping is not None and class_name is not None:
        raise CompileError("mapping and class_name are mutually exclusive")

    pairs = resolve(*tokens, generator=generator, strict=strict)

    body: list[ast.stmt] = [ast.Expr(value=ast.Constant(_HEADER))]
    if mapping is not None:
        body.append(_compile_mapping(mapping, pairs))
    elif class_name is not None:
        body.append(_compile_class(class_name, pairs))
    else:
        body.extend(_compile_assignments(pairs))

    # Create module AST
    module_ast = ast.Module(body=body, type_ignores=[])
    ast.fix_missing_locations(module_ast)

    # Unparse to string
    return ast.unparse(module_ast)
