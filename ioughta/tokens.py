# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Token types.

A token list mixes two kinds of entries:

- Name: an identifier to bind (`SKIP` consumes a slot without binding)
- Generator: computes the value of a slot. The variant decides which
             arguments it receives:

  - IndexGenerator: ``fn(index)``
  - IndexNameGenerator: ``fn(index, name)``
  - ConstantGenerator: ``fn()``

Plain strings are coerced to `Name` and bare callables to
`IndexGenerator`; a two-argument or zero-argument callable must be
wrapped explicitly.
"""

from __future__ import annotations

import inspect
from typing import Callable, Iterable, TypeAlias, cast

from ioughta.constants import SKIP
from ioughta.exceptions import InvalidGeneratorError, InvalidTokenError


class Name(str):
    """A name tag in a token list."""

    __slots__ = ()

    @property
    def is_skip(self) -> bool:
        return self == SKIP


class _BaseGenerator:
    """Common behavior for generator tokens."""

    __slots__ = ("fn",)

    # Arguments used to check the callable's signature up front
    _sample_args: tuple[object, ...] = ()

    fn: Callable[..., object]

    def __init__(self, fn: Callable[..., object]) -> None:
        if not callable(fn):
            raise InvalidGeneratorError(
                f"{type(self).__name__} expects a callable, got {fn!r}"
            )
        self._check_signature(fn)
        self.fn = fn

    def _check_signature(self, fn: Callable[..., object]) -> None:
        """Fail fast if ``fn`` cannot accept the variant's arguments."""
        try:
            sig = inspect.signature(fn)
        except (ValueError, TypeError):
            # Some builtins have no inspectable signature
            return
        try:
            sig.bind(*self._sample_args)
        except TypeError as e:
            raise InvalidGeneratorError(
                f"{type(self).__name__} calls its function with "
                f"{len(self._sample_args)} argument(s), which {fn!r} "
                f"does not accept: {e}"
            ) from e

    def produce(self, index: int, name: str) -> object:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fn!r})"


class IndexGenerator(_BaseGenerator):
    """Generator called with the counter index."""

    __slots__ = ()
    _sample_args = (0,)

    def __init__(self, fn: Callable[[int], object]) -> None:
        super().__init__(fn)

    def produce(self, index: int, name: str) -> object:
        return self.fn(index)


class IndexNameGenerator(_BaseGenerator):
    """Generator called with the counter index and the name."""

    __slots__ = ()
    _sample_args = (0, SKIP)

    def __init__(self, fn: Callable[[int, str], object]) -> None:
        super().__init__(fn)

    def produce(self, index: int, name: str) -> object:
        return self.fn(index, name)


class ConstantGenerator(_BaseGenerator):
    """Generator called with no arguments, ignoring index and name."""

    __slots__ = ()

    def __init__(self, fn: Callable[[], object]) -> None:
        super().__init__(fn)

    def produce(self, index: int, name: str) -> object:
        return self.fn()


GeneratorToken: TypeAlias = (
    IndexGenerator | IndexNameGenerator | ConstantGenerator
)
Token: TypeAlias = Name | GeneratorToken

# What callers may pass: coercible entries, optionally grouped one level
GeneratorLike: TypeAlias = GeneratorToken | Callable[[int], object]
TokenLike: TypeAlias = str | GeneratorLike
TokenArg: TypeAlias = TokenLike | list[TokenLike] | tuple[TokenLike, ...]


def _identity(index: int) -> int:
    return index


IDENTITY = IndexGenerator(_identity)
"""Default generator: every name maps to its own index."""


def as_generator(obj: object) -> GeneratorToken:
    """Coerce ``obj`` to a generator token.

    Raises:
        InvalidGeneratorError: If ``obj`` is not callable.
    """
    if isinstance(obj, _BaseGenerator):
        return cast(GeneratorToken, obj)
    if not callable(obj):
        raise InvalidGeneratorError(f"generator {obj!r} is not callable")
    return IndexGenerator(obj)


def as_token(obj: object) -> Token:
    """Coerce ``obj`` to a `Name` or a generator token.

    Raises:
        InvalidTokenError: If ``obj`` is neither a string nor callable.
    """
    if isinstance(obj, Name):
        return obj
    if isinstance(obj, str):
        return Name(obj)
    if isinstance(obj, _BaseGenerator) or callable(obj):
        return as_generator(obj)
    raise InvalidTokenError(
        f"token {obj!r} is neither a name nor a generator"
    )


def flatten(args: Iterable[object]) -> list[Token]:
    """Flatten lists and tuples one level and coerce every entry.

    ``flatten(["A", ["B", "C"]])`` gives ``[Name("A"), Name("B"),
    Name("C")]``. Deeper nesting is rejected by `as_token`.
    """
    tokens: list[Token] = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            tokens.extend(as_token(item) for item in arg)
        else:
            tokens.append(as_token(arg))
    return tokens
