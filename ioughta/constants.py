# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Shared constants for the ioughta package.

This module centralizes magic strings and values used throughout the codebase
to improve maintainability and reduce duplication.
"""

# Token constants
SKIP = "_"
"""Reserved name that consumes a counter slot without binding anything."""

FIRST_INDEX = 0
"""Counter value given to the first name of every invocation."""

# Record type constants
CONSTANTS_ATTR = "__constants__"
"""Class attribute holding the ordered names bound on a `Constants` class."""

# CLI constants
GENERATOR_REF_DELIMITER = ":"
"""Delimiter between module and attribute in `--generator module:attr`."""

DEFAULT_INI_SECTION = "constants"
"""Section name used when serializing a mapping to INI."""
