#!/usr/bin/env python3
"""
etsconvert CLI - Thin entrypoint for conversion commands.

Commands:
- job:    Convert an Elastic Transcoder job to MediaConvert job settings,
          or job template settings when --name is given
- preset: Convert an Elastic Transcoder preset to MediaConvert output presets

Sources are read from JSON files (--job-file/--pipeline-file/--preset-file)
or fetched from the Elastic Transcoder API (--job-id/--preset-id, --region).

Output:
=======
- stdout: converted document as JSON (PascalCase unless --camel)
- stderr: conversion messages as JSON, in emission order, then a summary

Exit Codes:
===========
- 0: Success (INFO/WARN messages allowed)
- 1: Validation error (bad options, or conversion produced ERROR messages)
- 4: System error (file not found, invalid JSON, API failure, write failure)
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .. import __version__
from ..jobs import ConversionError, ConversionResult, ConversionSettings
from ..reporting import ReportingError, format_messages_json, write_messages
from ..source import SourceError
from .commands import convert_job_command, convert_preset_command
from .errors import CLIError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_SYSTEM = 4


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def emit_result(result: ConversionResult, args: argparse.Namespace) -> int:
    """
    Print the document and messages, and return the exit code.

    Raises:
        ReportingError: --messages-file could not be written
    """
    if args.messages_file:
        path = write_messages(result.messages, Path(args.messages_file), args.messages_format)
        logger.debug(f"Messages written to {path}")
    else:
        print(format_messages_json(result.messages), file=sys.stderr)

    print(f"Conversion finished: {result.summary()}", file=sys.stderr)
    print(json.dumps(result.rendered(), indent=2))

    return EXIT_VALIDATION if result.has_errors else EXIT_OK


def _run(args: argparse.Namespace, convert) -> NoReturn:
    configure_logging(args.verbose)

    try:
        result = convert()
        sys.exit(emit_result(result, args))
    except (CLIError, ConversionError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except (SourceError, ReportingError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_SYSTEM)


def cmd_job(args: argparse.Namespace) -> NoReturn:
    """Convert a job."""
    settings = ConversionSettings(
        insert_defaults=args.insert_defaults,
        camel_case_output=args.camel,
        template_name=args.name,
        template_description=args.description,
        template_category=args.category,
        role_arn=args.role_arn,
    )

    _run(args, lambda: convert_job_command(
        settings,
        job_id=args.job_id,
        region=args.region,
        job_file=args.job_file,
        pipeline_file=args.pipeline_file,
        preset_files=args.preset_file,
    ))


def cmd_preset(args: argparse.Namespace) -> NoReturn:
    """Convert a preset."""
    settings = ConversionSettings(
        insert_defaults=args.insert_defaults,
        camel_case_output=args.camel,
        playlist_format=args.playlist_format,
    )

    _run(args, lambda: convert_preset_command(
        settings,
        preset_id=args.preset_id,
        region=args.region,
        preset_file=args.preset_file,
    ))


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--region', '-r',
        help='AWS region of the Elastic Transcoder resources, e.g. us-east-1'
    )
    parser.add_argument(
        '--camel', '-m',
        action='store_true',
        help='Use camelCase for JSON property names (default: PascalCase)'
    )
    parser.add_argument(
        '--insert-defaults',
        action='store_true',
        help='Insert default values for required settings the source leaves to "auto" '
             '(default: leave them out and report an error)'
    )
    parser.add_argument(
        '--messages-file',
        help='Write conversion messages to this file instead of stderr'
    )
    parser.add_argument(
        '--messages-format',
        choices=['json', 'text'],
        default='json',
        help='Format of --messages-file (default: json)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Output debug logging to stderr'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='etsconvert',
        description='Convert Amazon Elastic Transcoder settings to AWS Elemental MediaConvert settings',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    # Job command
    parser_job = subparsers.add_parser(
        'job',
        help='Convert a job to MediaConvert job settings, or job template settings with --name'
    )
    parser_job.add_argument(
        '--job-id', '-i',
        help='Id of the Elastic Transcoder job to fetch and convert'
    )
    parser_job.add_argument(
        '--job-file',
        help='Elastic Transcoder job JSON file (ReadJob response or bare job)'
    )
    parser_job.add_argument(
        '--pipeline-file',
        help='Elastic Transcoder pipeline JSON file, required with --job-file'
    )
    parser_job.add_argument(
        '--preset-file',
        action='append',
        default=[],
        help='Elastic Transcoder preset JSON file, repeat for every preset the job uses'
    )
    parser_job.add_argument(
        '--role-arn', '-a',
        help='IAM role ARN for the MediaConvert job'
    )
    parser_job.add_argument(
        '--name', '-n',
        help='Job template name. When given, the output is job template settings'
    )
    parser_job.add_argument(
        '--description', '-d',
        help='Job template description'
    )
    parser_job.add_argument(
        '--category', '-c',
        help='Job template category'
    )
    _add_common_arguments(parser_job)
    parser_job.set_defaults(func=cmd_job)

    # Preset command
    parser_preset = subparsers.add_parser(
        'preset',
        help='Convert a preset to MediaConvert output presets'
    )
    parser_preset.add_argument(
        '--preset-id', '-i',
        help='Id of the Elastic Transcoder preset to fetch and convert'
    )
    parser_preset.add_argument(
        '--preset-file',
        help='Elastic Transcoder preset JSON file (ReadPreset response or bare preset)'
    )
    parser_preset.add_argument(
        '--playlist-format', '-f',
        help='Elastic Transcoder playlist format: HLSv3, HLSv4, Smooth, or MPEG-DASH. '
             'If unspecified, the preset container is used'
    )
    _add_common_arguments(parser_preset)
    parser_preset.set_defaults(func=cmd_preset)

    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Main CLI entrypoint.

    Parses arguments and dispatches to subcommands.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == '__main__':
    main()
