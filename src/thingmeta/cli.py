"""
Command-line interface and entry points for thingmeta.

This module provides the public API for loading and checking channel and
thing type definition documents from scripts or the shell.
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional

from thingmeta.core.logger import configure_root_logger, get_logger
from thingmeta.loader import LoadResult, load_definitions, read_definitions_file
from thingmeta.models.definitions_document import DefinitionsDocument

logger = get_logger(__name__)


def _summarize(result: LoadResult) -> Dict[str, Any]:
    return {
        "status": "success",
        "channel_types": [channel_type.uid for channel_type in result.channel_types],
        "thing_types": [
            {
                "uid": thing_type.uid,
                "label": thing_type.label,
                "channels": [
                    {
                        "id": definition.id,
                        "type": definition.type.uid,
                        "properties": dict(definition.properties),
                    }
                    for definition in thing_type.channel_definitions
                ],
            }
            for thing_type in result.thing_types
        ],
    }


def main(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Load a definitions document and return a summary of what it defines.

    Can be called with either:
    - A definitions file path (JSON/YAML)
    - A definitions dictionary (programmatic)

    Args:
        config_path: Path to JSON/YAML definitions file
        config_dict: Direct definitions dictionary

    Returns:
        Summary with status, channel type uids and thing types with their channels

    Raises:
        FileNotFoundError: If the definitions file doesn't exist
        ValueError: If neither config_path nor config_dict provided
        DefinitionLoadError: If the definitions are invalid

    Example:
        >>> from thingmeta.cli import main
        >>> result = main(config_dict={"channel_types": [...], "thing_types": [...]})
        >>> print(result["status"])
    """
    try:
        if config_dict:
            document = config_dict
            logger.info("Using provided definitions dictionary")
        elif config_path:
            document = read_definitions_file(config_path)
            logger.info(f"Loaded definitions from {config_path}")
        else:
            raise ValueError("Either config_path or config_dict must be provided")

        result = load_definitions(document)
        return _summarize(result)

    except Exception as e:
        logger.error(f"Loading definitions failed: {str(e)}")
        raise


def validate_definitions(config_path: str) -> bool:
    """
    Validate a definitions file against the document schema without registering anything.

    Channel type references are not resolved; use ``main`` for a full load.

    Raises:
        Exception: If the document is invalid
    """
    try:
        document = read_definitions_file(config_path)
        logger.info(f"Validating definitions: {config_path}")
        DefinitionsDocument.model_validate(document)
        logger.info("Definitions are valid")
        return True

    except Exception as e:
        logger.error(f"Definitions validation failed: {str(e)}")
        raise


def cli(argv: Optional[list] = None) -> None:
    """
    Command-line interface for thingmeta.

    Supports subcommands:
    - validate: Check a definitions file against the document schema
    - show: Load a definitions file and print its thing types as JSON

    Usage:
        thingmeta validate /path/to/definitions.yaml
        thingmeta show /path/to/definitions.yaml --verbose
    """
    parser = argparse.ArgumentParser(
        prog="thingmeta",
        description="Channel and thing type definitions",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute"
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a definitions file"
    )
    validate_parser.add_argument(
        "config",
        help="Path to definitions file (JSON or YAML)"
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Load a definitions file and print the result"
    )
    show_parser.add_argument(
        "config",
        help="Path to definitions file (JSON or YAML)"
    )
    show_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    if args.command == "show":
        if args.verbose:
            configure_root_logger("DEBUG")
        try:
            result = main(config_path=args.config)
            print(json.dumps(result, indent=2))
            sys.exit(0)
        except Exception as e:
            logger.error(f"Show failed: {e}")
            sys.exit(1)

    elif args.command == "validate":
        try:
            validate_definitions(args.config)
            sys.exit(0)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()
