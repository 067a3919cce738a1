# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Token resolution.

Turns a token list into ordered ``(name, index, value)`` pairs:

    >>> [tuple(p) for p in resolve("A", "_", "B", lambda i: i * 10, "C")]
    [('A', 0, 0), ('B', 2, 20), ('C', 3, 30)]

A generator written right after a name applies to that name and every
later one, until another generator takes over. A generator at the head of
the list applies from the first name on.
"""

from __future__ import annotations

import logging
from typing import Iterator, NamedTuple

from ioughta.constants import FIRST_INDEX
from ioughta.exceptions import (
    ConflictingGeneratorsError,
    MalformedTokensError,
)
from ioughta.tokens import (
    IDENTITY,
    GeneratorLike,
    GeneratorToken,
    Name,
    Token,
    TokenArg,
    as_generator,
    flatten,
)

__all__ = [
    "ResolvedPair",
    "iter_resolved",
    "resolve",
]

logger = logging.getLogger(__name__)


class ResolvedPair(NamedTuple):
    """A name with its counter index and computed value."""

    name: str
    index: int
    value: object


def _split_leading(
    tokens: list[Token], generator: GeneratorLike | None
) -> tuple[GeneratorToken, list[Token], bool]:
    """Pick the base generator and strip a leading in-list generator.

    Returns:
        Tuple of (base_generator, remaining_tokens, had_leading)
    """
    leading: GeneratorToken | None = None
    if tokens and not isinstance(tokens[0], Name):
        leading = tokens[0]
        tokens = tokens[1:]

    if generator is not None:
        if leading is not None:
            raise ConflictingGeneratorsError(
                "an external generator and a leading in-list generator "
                f"were both supplied ({generator!r} and {leading!r})"
            )
        return as_generator(generator), tokens, False
    if leading is not None:
        return leading, tokens, True
    return IDENTITY, tokens, False


def _assign_generators(
    tokens: list[Token],
    base: GeneratorToken,
    had_leading: bool,
    strict: bool,
) -> list[tuple[Name, GeneratorToken]]:
    """Pair every name with the generator in effect for it."""
    names: list[Name] = []
    generators: list[GeneratorToken] = []
    current = base
    previous_was_generator = had_leading
    for token in tokens:
        if isinstance(token, Name):
            names.append(token)
            generators.append(current)
            previous_was_generator = False
            continue
        if strict and previous_was_generator:
            raise MalformedTokensError(
                f"generator {token!r} follows another generator "
                "without a name in between"
            )
        current = token
        if generators:
            # Attaches to the name written just before it
            generators[-1] = token
        previous_was_generator = True

    if strict and not names and (had_leading or tokens):
        raise MalformedTokensError("generators were given but no names")
    return list(zip(names, generators))


def iter_resolved(
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
) -> Iterator[ResolvedPair]:
    """Lazily resolve tokens into pairs.

    The token list is validated up front; values are computed as the
    iterator advances. Skipped names still run their generator and
    advance the counter but are not yielded.

    Args:
        *tokens: Names and generators, lists/tuples flattened one level.
        generator: Base generator for names before any in-list generator.
            Cannot be combined with a leading in-list generator.
        strict: Reject consecutive generators and generator-only lists
            instead of letting the last generator win.

    Raises:
        ConflictingGeneratorsError: If ``generator`` is given and the list
            also starts with a generator.
        MalformedTokensError: In strict mode, on malformed token lists.
        InvalidTokenError: If a token is neither a name nor callable.
    """
    flat = flatten(tokens)
    base, rest, had_leading = _split_leading(flat, generator)
    return _produce(_assign_generators(rest, base, had_leading, strict))


def _produce(
    assigned: list[tuple[Name, GeneratorToken]],
) -> Iterator[ResolvedPair]:
    for index, (name, gen) in enumerate(assigned, start=FIRST_INDEX):
        value = gen.produce(index, name)
        if name.is_skip:
            continue
        logger.debug("resolved %s = %r (index %d)", name, value, index)
        yield ResolvedPair(str(name), index, value)


def resolve(
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
) -> list[ResolvedPair]:
    """Resolve tokens into a list of pairs.

    See `iter_resolved` for the arguments.
    """
    return list(iter_resolved(*tokens, generator=generator, strict=strict))
