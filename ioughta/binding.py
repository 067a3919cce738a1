# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Binding resolved pairs as constants or collecting them in a mapping.

Constants can be bound on a dict (such as ``globals()``), a module, a
class, or directly on the calling module or class body:

    >>> class Sizes(Constants):
    ...     define_constants("_", "KB", "MB", generator=lambda i: 1 << 10*i)
    >>> Sizes.MB
    1048576
"""

from __future__ import annotations

import inspect
import keyword
import logging
from types import ModuleType
from typing import Iterator, TypeAlias, cast

from ioughta.constants import CONSTANTS_ATTR
from ioughta.exceptions import (
    DuplicateDefinitionError,
    InvalidTokenError,
    ScopeError,
)
from ioughta.resolver import ResolvedPair, iter_resolved, resolve
from ioughta.tokens import GeneratorLike, TokenArg

__all__ = [
    "Constants",
    "ConstantsMeta",
    "Namespace",
    "bind_constants",
    "build_mapping",
    "collect_mapping",
    "define_constants",
    "iota_const",
    "iota_hash",
    "make_constants",
]

logger = logging.getLogger(__name__)

Namespace: TypeAlias = dict[str, object] | ModuleType | type


class _ConstantsNamespace(dict[str, object]):
    """Class body namespace that remembers which names are constants."""

    def __init__(self) -> None:
        super().__init__()
        self.constant_names: list[str] = []

    def __setitem__(self, key: str, value: object) -> None:
        if key in self.constant_names:
            raise DuplicateDefinitionError(key, "class body")
        super().__setitem__(key, value)

    def __delitem__(self, key: str) -> None:
        if key in self.constant_names:
            raise AttributeError(f"cannot delete constant '{key}'")
        super().__delitem__(key)

    def define(self, name: str, value: object) -> None:
        dict.__setitem__(self, name, value)
        self.constant_names.append(name)


class ConstantsMeta(type):
    """Metaclass making bound constants read-only.

    Constants are recorded in ``__constants__`` in definition order,
    inherited ones first. Assigning to a constant raises
    `DuplicateDefinitionError`; deleting one raises `AttributeError`.
    Both also apply inside the class body, and a subclass body may not
    shadow an inherited constant.
    """

    __constants__: tuple[str, ...]

    @classmethod
    def __prepare__(
        mcs, name: str, bases: tuple[type, ...], **kwargs: object
    ) -> _ConstantsNamespace:
        return _ConstantsNamespace()

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, object],
        **kwargs: object,
    ) -> ConstantsMeta:
        inherited: list[str] = []
        for base in bases:
            for const in cast(
                tuple[str, ...], getattr(base, CONSTANTS_ATTR, ())
            ):
                if const not in inherited:
                    inherited.append(const)

        own: list[str] = []
        if isinstance(namespace, _ConstantsNamespace):
            own = namespace.constant_names
        if CONSTANTS_ATTR in namespace:
            raise AttributeError(f"cannot reassign {CONSTANTS_ATTR}")
        # Plain attributes may not shadow inherited constants either
        for key in namespace:
            if key in inherited:
                raise DuplicateDefinitionError(key, f"class {name}")

        attrs = dict(namespace)
        attrs[CONSTANTS_ATTR] = tuple(inherited + own)
        return super().__new__(mcs, name, bases, attrs, **kwargs)

    def __setattr__(cls, name: str, value: object) -> None:
        if name in cls.__constants__:
            raise DuplicateDefinitionError(name, f"class {cls.__name__}")
        if name == CONSTANTS_ATTR:
            raise AttributeError(f"cannot reassign {CONSTANTS_ATTR}")
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        if name in cls.__constants__ or name == CONSTANTS_ATTR:
            raise AttributeError(
                f"cannot delete constant '{name}' of class {cls.__name__}"
            )
        super().__delattr__(name)

    def _define(cls, name: str, value: object) -> None:
        type.__setattr__(cls, name, value)
        type.__setattr__(cls, CONSTANTS_ATTR, cls.__constants__ + (name,))

    def __iter__(cls) -> Iterator[str]:
        return iter(cls.__constants__)

    def __len__(cls) -> int:
        return len(cls.__constants__)

    def __contains__(cls, name: object) -> bool:
        return name in cls.__constants__

    def items(cls) -> list[tuple[str, object]]:
        """Return ``(name, value)`` pairs in definition order."""
        return [(name, getattr(cls, name)) for name in cls.__constants__]

    def as_dict(cls) -> dict[str, object]:
        """Return the constants as a new name -> value dict."""
        return dict(cls.items())


class Constants(metaclass=ConstantsMeta):
    """Base class for read-only groups of constants.

    Call `define_constants` in the class body, or build one with
    `make_constants`.
    """


def _check_identifier(name: str) -> None:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidTokenError(
            f"'{name}' is not a valid Python identifier"
        )


def _describe(namespace: object) -> str:
    if isinstance(namespace, ModuleType):
        return f"module {namespace.__name__}"
    if isinstance(namespace, type):
        return f"class {namespace.__name__}"
    if isinstance(namespace, dict):
        return "namespace"
    return repr(namespace)


def _existing_names(namespace: object) -> dict[str, object]:
    if isinstance(namespace, dict):
        return cast(dict[str, object], namespace)
    try:
        return cast(dict[str, object], vars(namespace))
    except TypeError as e:
        raise ScopeError(
            f"cannot bind constants on {namespace!r}: it has no namespace"
        ) from e


def _set(namespace: object, name: str, value: object) -> None:
    if isinstance(namespace, _ConstantsNamespace):
        namespace.define(name, value)
    elif isinstance(namespace, dict):
        namespace[name] = value
    elif isinstance(namespace, ConstantsMeta):
        namespace._define(name, value)
    else:
        setattr(namespace, name, value)


def bind_constants(
    namespace: Namespace,
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
) -> list[ResolvedPair]:
    """Resolve tokens and bind every pair as a constant on ``namespace``.

    All names are checked before anything is written, so a failing call
    leaves the namespace untouched (unless a generator itself fails).

    Args:
        namespace: A dict, module, class or any object with a ``__dict__``.
        *tokens: Names and generators, see `ioughta.resolver.resolve`.
        generator: Base generator for names before any in-list generator.
        strict: Reject malformed token lists.

    Returns:
        The resolved pairs that were bound.

    Raises:
        DuplicateDefinitionError: If a name is already defined on the
            namespace or repeated in the token list.
        InvalidTokenError: If a name is not a valid identifier, or is
            ``__constants__`` on a `Constants` class or body.
    """
    pairs = resolve(*tokens, generator=generator, strict=strict)
    taken = set(_existing_names(namespace))
    target = _describe(namespace)
    if isinstance(namespace, ConstantsMeta):
        # Inherited constants are read-only too
        taken.update(namespace.__constants__)
    records = isinstance(namespace, (ConstantsMeta, _ConstantsNamespace))

    seen: set[str] = set()
    for pair in pairs:
        _check_identifier(pair.name)
        if records and pair.name == CONSTANTS_ATTR:
            raise InvalidTokenError(
                f"'{CONSTANTS_ATTR}' is reserved in {target}"
            )
        if pair.name in taken or pair.name in seen:
            raise DuplicateDefinitionError(pair.name, target)
        seen.add(pair.name)

    for pair in pairs:
        _set(namespace, pair.name, pair.value)
        logger.debug("bound %s = %r on %s", pair.name, pair.value, target)
    return pairs


def define_constants(
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
) -> list[ResolvedPair]:
    """Bind constants on the calling module or class body.

    Example:
        >>> define_constants("A", "B", "C")  # doctest: +SKIP
        >>> (A, B, C)  # doctest: +SKIP
        (0, 1, 2)

    Raises:
        ScopeError: If called from a function body, whose locals cannot
            be extended.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is None:
            raise ScopeError("cannot locate the calling namespace")
        if caller.f_code.co_flags & inspect.CO_OPTIMIZED:
            raise ScopeError(
                "define_constants must be called from a module or class "
                f"body, not from function '{caller.f_code.co_name}'"
            )
        namespace = cast(dict[str, object], caller.f_locals)
    finally:
        del frame, caller
    return bind_constants(
        namespace, *tokens, generator=generator, strict=strict
    )


def collect_mapping(
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
) -> dict[str, object]:
    """Resolve tokens into a name -> value dict, in resolution order.

    Raises:
        DuplicateDefinitionError: If a name occurs twice.
    """
    mapping: dict[str, object] = {}
    for pair in iter_resolved(*tokens, generator=generator, strict=strict):
        if pair.name in mapping:
            raise DuplicateDefinitionError(pair.name, "mapping")
        mapping[pair.name] = pair.value
    return mapping


def make_constants(
    typename: str,
    *tokens: TokenArg,
    generator: GeneratorLike | None = None,
    strict: bool = False,
    module: str | None = None,
) -> type[Constants]:
    """Build a new `Constants` subclass named ``typename``.

    Example:
        >>> Color = make_constants("Color", "RED", "GREEN", "BLUE")
        >>> Color.GREEN, list(Color)
        (1, ['RED', 'GREEN', 'BLUE'])
    """
    _check_identifier(typename)
    bases: tuple[type, ...] = (Constants,)
    namespace = ConstantsMeta.__prepare__(typename, bases)
    bind_constants(namespace, *tokens, generator=generator, strict=strict)

    if module is None:
        frame = inspect.currentframe()
        try:
            if frame is not None and frame.f_back is not None:
                module = cast(str, frame.f_back.f_globals.get("__name__"))
        finally:
            del frame
    if module is not None:
        namespace["__module__"] = module
    return cast(type[Constants], ConstantsMeta(typename, bases, namespace))


# Short aliases
build_mapping = collect_mapping
iota_const = define_constants
iota_hash = collect_mapping
