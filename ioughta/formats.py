# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Serializing resolved mappings to configuration formats.

Supported formats are JSON (stdlib), INI (stdlib) and TOML (via the
optional ``tomli_w`` dependency, installed with ``ioughta[toml]``).
"""

from __future__ import annotations

import configparser
import json
from io import StringIO
from types import ModuleType
from typing import Callable, Mapping

from ioughta.constants import DEFAULT_INI_SECTION
from ioughta.exceptions import FormatError

_tomli_w: ModuleType | None
try:
    import tomli_w as _tomli_w
except ImportError:  # pragma: no cover - depends on installed extras
    _tomli_w = None

__all__ = [
    "FORMATS",
    "mapping_to_ini",
    "mapping_to_json",
    "mapping_to_toml",
]


def mapping_to_json(mapping: Mapping[str, object]) -> str:
    """Serialize a mapping as an indented JSON object."""
    try:
        return json.dumps(dict(mapping), indent=2) + "\n"
    except (TypeError, ValueError) as e:
        raise FormatError("json", str(e)) from e


def mapping_to_toml(mapping: Mapping[str, object]) -> str:
    """Serialize a mapping as a TOML document of top-level keys."""
    if _tomli_w is None:
        raise FormatError(
            "toml", "TOML output requires tomli_w; install ioughta[toml]"
        )
    try:
        return str(_tomli_w.dumps(dict(mapping)))
    except (TypeError, ValueError) as e:
        raise FormatError("toml", str(e)) from e


def mapping_to_ini(
    mapping: Mapping[str, object], section: str = DEFAULT_INI_SECTION
) -> str:
    """Serialize a mapping as a single INI section.

    Only scalar values are accepted; names keep their case.
    """
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    values: dict[str, str] = {}
    for key, value in mapping.items():
        if not isinstance(value, (str, int, float)):
            raise FormatError(
                "ini",
                f"value of '{key}' has type {type(value).__name__}; "
                "only str, int, float and bool are supported",
            )
        values[key] = str(value)
    parser[section] = values

    out = StringIO()
    parser.write(out)
    return out.getvalue()


FORMATS: dict[str, Callable[[Mapping[str, object]], str]] = {
    "json": mapping_to_json,
    "toml": mapping_to_toml,
    "ini": mapping_to_ini,
}
"""Serializers by format name."""
