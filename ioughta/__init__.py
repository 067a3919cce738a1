# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""A package to enumerate constants."""

from .binding import (
    Constants,
    ConstantsMeta,
    bind_constants,
    build_mapping,
    collect_mapping,
    define_constants,
    iota_const,
    iota_hash,
    make_constants,
)
from .compiler import compile_constants
from .constants import SKIP
from .exceptions import (
    CompileError,
    ConflictingGeneratorsError,
    DuplicateDefinitionError,
    FormatError,
    InvalidGeneratorError,
    InvalidTokenError,
    IoughtaError,
    MalformedTokensError,
    ScopeError,
)
from .resolver import ResolvedPair, iter_resolved, resolve
from .tokens import (
    ConstantGenerator,
    IndexGenerator,
    IndexNameGenerator,
    Name,
)

__all__ = [
    "SKIP",
    "Name",
    "IndexGenerator",
    "IndexNameGenerator",
    "ConstantGenerator",
    "ResolvedPair",
    "resolve",
    "iter_resolved",
    "define_constants",
    "iota_const",
    "bind_constants",
    "build_mapping",
    "collect_mapping",
    "iota_hash",
    "make_constants",
    "Constants",
    "ConstantsMeta",
    "compile_constants",
    "IoughtaError",
    "DuplicateDefinitionError",
    "InvalidGeneratorError",
    "ConflictingGeneratorsError",
    "InvalidTokenError",
    "MalformedTokensError",
    "ScopeError",
    "CompileError",
    "FormatError",
]
