# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Exception classes for ioughta.

Every error raised by the library derives from `IoughtaError`, and also
from the builtin exception a caller would naturally expect (`TypeError`
for bad arguments, `AttributeError` for namespace clashes and so on), so
both styles of handling work.
"""

from __future__ import annotations


class IoughtaError(Exception):
    """Base class for all ioughta errors."""


class DuplicateDefinitionError(IoughtaError, AttributeError):
    """Raised when a name is bound twice on the same namespace.

    This covers names already present on the target namespace as well as
    names repeated within a single token list.
    """

    def __init__(self, name: str, target: str) -> None:
        self.name = name
        self.target = target
        super().__init__(f"constant '{name}' is already defined in {target}")


class InvalidGeneratorError(IoughtaError, TypeError):
    """Raised when a generator is not callable or cannot accept the
    arguments its variant passes to it.
    """


class ConflictingGeneratorsError(InvalidGeneratorError):
    """Raised when both an external ``generator=`` and a leading in-list
    generator are supplied.
    """


class InvalidTokenError(IoughtaError, TypeError):
    """Raised when a token is neither a name nor a generator."""


class MalformedTokensError(IoughtaError, ValueError):
    """Raised in strict mode when generators are not separated by names."""


class ScopeError(IoughtaError, RuntimeError):
    """Raised when constants are defined from a scope that cannot hold
    them, such as a function body.
    """


class CompileError(IoughtaError, ValueError):
    """Raised when a resolved value cannot be rendered as Python source."""


class FormatError(IoughtaError, ValueError):
    """Raised when serializing a mapping in a specific format fails.

    This wraps the underlying serialization exception to provide context
    about the format being used and a user-friendly error message.
    """

    def __init__(self, fmt: str, message: str) -> None:
        self.format = fmt
        super().__init__(f"{fmt.upper()} format error: {message}")
