# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Command-line interface for ioughta."""

import argparse
import importlib
import logging
import sys
from importlib.metadata import version

from ioughta.binding import collect_mapping
from ioughta.compiler import compile_constants
from ioughta.constants import DEFAULT_INI_SECTION, GENERATOR_REF_DELIMITER
from ioughta.exceptions import FormatError, IoughtaError
from ioughta.formats import FORMATS, mapping_to_ini
from ioughta.tokens import (
    ConstantGenerator,
    GeneratorToken,
    IndexGenerator,
    IndexNameGenerator,
)

_KINDS: dict[str, type[GeneratorToken]] = {
    "index": IndexGenerator,
    "index-name": IndexNameGenerator,
    "constant": ConstantGenerator,
}


def _load_generator(ref: str, kind: str) -> GeneratorToken:
    """Import ``module:attr`` (attr may be dotted) and wrap it."""
    module_name, sep, attr_path = ref.partition(GENERATOR_REF_DELIMITER)
    if not sep or not module_name or not attr_path:
        raise ValueError(
            f"invalid generator reference '{ref}': expected 'module:attr'"
        )
    obj: object = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    return _KINDS[kind](obj)  # type: ignore[arg-type]


def _add_token_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "names",
        nargs="+",
        metavar="NAME",
        help="Names to enumerate, '_' skips a slot",
    )
    parser.add_argument(
        "--generator",
        metavar="MODULE:ATTR",
        help="Callable computing each value (default: the index itself)",
    )
    parser.add_argument(
        "--kind",
        choices=sorted(_KINDS),
        default="index",
        help="Arguments passed to the generator (default: index)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject malformed token lists",
    )


def _resolve_generator(args: argparse.Namespace) -> GeneratorToken | None:
    if args.generator is None:
        return None
    return _load_generator(args.generator, args.kind)


def _cmd_compile(args: argparse.Namespace) -> int:
    try:
        generator = _resolve_generator(args)
    except (ImportError, AttributeError, ValueError, IoughtaError) as e:
        print(f"Error loading generator: {e}", file=sys.stderr)
        return 1

    try:
        code = compile_constants(
            args.names,
            generator=generator,
            strict=args.strict,
            mapping=args.mapping,
            class_name=args.class_name,
        )
    except IoughtaError as e:
        print(f"Error compiling constants: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error running generator: {e}", file=sys.stderr)
        return 1

    print(code)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        generator = _resolve_generator(args)
    except (ImportError, AttributeError, ValueError, IoughtaError) as e:
        print(f"Error loading generator: {e}", file=sys.stderr)
        return 1

    try:
        mapping = collect_mapping(
            args.names, generator=generator, strict=args.strict
        )
    except IoughtaError as e:
        print(f"Error resolving constants: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error running generator: {e}", file=sys.stderr)
        return 1

    fmt: str = args.format
    try:
        if fmt == "ini":
            output = mapping_to_ini(mapping, section=args.section)
        else:
            output = FORMATS[fmt](mapping)
    except FormatError as e:
        print(f"Error generating {fmt.upper()} output: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="ioughta",
        description="Generate sequential constants",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"ioughta {version('ioughta')}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every resolved and bound constant to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    compile_parser = subparsers.add_parser(
        "compile", help="Print Python source defining the constants"
    )
    _add_token_arguments(compile_parser)
    target = compile_parser.add_mutually_exclusive_group()
    target.add_argument(
        "--mapping",
        metavar="VAR",
        help="Emit a single dict literal assigned to VAR",
    )
    target.add_argument(
        "--class-name",
        metavar="CLASS",
        help="Emit a class holding the constants",
    )

    generate_parser = subparsers.add_parser(
        "generate", help="Print the name -> value mapping"
    )
    _add_token_arguments(generate_parser)
    generate_parser.add_argument(
        "--format",
        choices=sorted(FORMATS),
        default="json",
        help="Output format (default: json)",
    )
    generate_parser.add_argument(
        "--section",
        default=DEFAULT_INI_SECTION,
        help=f"INI section name (default: {DEFAULT_INI_SECTION})",
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            stream=sys.stderr,
        )

    if args.command == "compile":
        return _cmd_compile(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
