# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the gapicgen command-line interface."""

import argparse
import sys
from pathlib import Path

from gapicgen.config.diagnostics import DiagCollector
from gapicgen.config.loader import ConfigLoadError, dump_config, load_config, save_config
from gapicgen.config.resolved import FieldSelectorError
from gapicgen.config.resolver import resolve
from gapicgen.config.schema import ConfigProto
from gapicgen.generator import GenerationError, generate
from gapicgen.model.api import ApiModel
from gapicgen.model.loader import ModelLoadError, load_api_model
from gapicgen.policy.configgen import generate_config
from gapicgen.policy.engine import MethodPolicyEngine
from gapicgen.render.templates import TemplateEngine

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the gapicgen CLI."""
    parser = argparse.ArgumentParser(
        prog="gapicgen",
        description="gapicgen: client library generator for API descriptions",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check a generation configuration against an API description",
        description="Resolve the configuration against the API and report every problem found.",
    )
    _add_input_arguments(check_parser)

    # configgen subcommand
    configgen_parser = subparsers.add_parser(
        "configgen",
        help="Generate a starter configuration for an API description",
        description=(
            "Apply the method heuristics to every interface of the API and write the "
            "resulting configuration document as YAML."
        ),
    )
    configgen_parser.add_argument("model", help="API description file (proto description or discovery document)")
    configgen_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File to write the configuration to (default: standard output)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate client library files",
        description="Resolve the configuration, build the client views and render them to files.",
    )
    _add_input_arguments(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        default="gapic-out",
        help="Directory to write the generated files to (default: gapic-out)",
    )
    generate_parser.add_argument(
        "--templates",
        default=None,
        help="Directory with '<language>.j2' templates (default: built-in outline template)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("model", help="API description file (proto description or discovery document)")
    parser.add_argument("config", help="Generation configuration file (YAML)")
    parser.add_argument(
        "--language",
        default=None,
        help="Target language (default: the configuration's 'language')",
    )
    parser.add_argument(
        "--heuristics",
        action="store_true",
        help="Fill settings the configuration leaves unset from the method heuristics",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "configgen":
        return _cmd_configgen(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    model, config_proto = inputs
    if args.language:
        config_proto = config_proto.model_copy(update={"language": args.language})

    engine = MethodPolicyEngine() if args.heuristics else None
    try:
        result = resolve(model, config_proto, engine=engine)
    except FieldSelectorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    for error in result.errors:
        print(f"Error: {error}", file=sys.stderr)
    if result.has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_configgen(args: argparse.Namespace) -> int:
    """Handle the configgen subcommand."""
    try:
        model = load_api_model(Path(args.model))
    except ModelLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    diag = DiagCollector()
    config_proto = generate_config(model, diagnostics=diag)
    for warning in diag.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    for error in diag.errors:
        print(f"Error: {error}", file=sys.stderr)
    if diag.has_errors:
        return 1

    if args.output is None:
        print(dump_config(config_proto), end="")
        return 0
    output = Path(args.output)
    try:
        save_config(config_proto, output)
    except ConfigLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Wrote configuration for {len(config_proto.interfaces)} interface(s) to '{output}'.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    model, config_proto = inputs

    template_engine = None
    if args.templates is not None:
        template_dir = Path(args.templates)
        if not template_dir.is_dir():
            print(f"Error: template directory '{template_dir}' does not exist.", file=sys.stderr)
            return 1
        template_engine = TemplateEngine(template_dir)

    engine = MethodPolicyEngine() if args.heuristics else None
    try:
        result = generate(model, config_proto, args.language, engine=engine, template_engine=template_engine)
    except GenerationError as exc:
        for message in exc.messages:
            print(f"Error: {message}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    output_dir = Path(args.output)
    written = result.write(output_dir)
    print(f"Generated {len(written)} file(s) in '{output_dir}'.")
    return 0


def _load_inputs(args: argparse.Namespace) -> tuple[ApiModel, ConfigProto] | None:
    """Load the API model and configuration, printing the error and returning None on failure."""
    try:
        model = load_api_model(Path(args.model))
        config_proto = load_config(Path(args.config))
    except (ModelLoadError, ConfigLoadError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    return model, config_proto
