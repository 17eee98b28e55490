#!/usr/bin/env python3
"""
Workers KV command-line client.

Usage:
    kvcli put my-key "some value" --namespace-id 0f2ac74b498b48028cb68387c421e279
    kvcli put my-key ./payload.bin --path --binding CACHE --expiration-ttl 3600
    kvcli put my-key hello --binding CACHE --metadata '{"owner": "ops"}'
"""

import argparse
import logging
import sys
from typing import List
from typing import Optional

import dotenv

from kvcli import terminal
from kvcli.commands.put import put
from kvcli.config import get_config
from kvcli.errors import KVError
from kvcli.errors import RemoteRejectionError
from kvcli.kv import resolve_namespace_id
from kvcli.logging_config import setup_loki_logging
from kvcli.metadata import parse_metadata
from kvcli.models import KVMetaData
from kvcli.settings import load_target
from kvcli.settings import load_user


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kvcli", description="Workers KV command-line client")
    parser.add_argument("--env-file", help="Load environment variables from this file before reading configuration")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    put_parser = subparsers.add_parser("put", help="Put a key/value pair into a namespace")
    put_parser.add_argument("key", help="Key to write")
    put_parser.add_argument("value", help="Value to write, or a file path when --path is given")
    namespace_group = put_parser.add_mutually_exclusive_group(required=True)
    namespace_group.add_argument("--namespace-id", help="Id of the namespace to write to")
    namespace_group.add_argument("--binding", help="Binding name of the namespace to write to")
    put_parser.add_argument("--path", action="store_true", help="Read the value from the file at VALUE")
    put_parser.add_argument("--expiration", help="Absolute expiration, in seconds since the UNIX epoch")
    put_parser.add_argument("--expiration-ttl", help="Time to live, in seconds from now")
    put_parser.add_argument("--metadata", help="Arbitrary JSON to attach to the key")

    return parser


def run_put(args: argparse.Namespace) -> int:
    config = get_config()
    target = load_target(config)
    metadata = parse_metadata(args.metadata)

    data = KVMetaData(
        namespace_id=resolve_namespace_id(target, binding=args.binding, namespace_id=args.namespace_id),
        key=args.key,
        value=args.value,
        is_file=args.path,
        expiration=args.expiration,
        expiration_ttl=args.expiration_ttl,
        metadata=metadata,
    )

    put(target, load_user(config), data, raise_on_rejection=True)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.env_file:
        dotenv.load_dotenv(args.env_file, override=True)

    try:
        setup_loki_logging(get_config(), "kvcli", stream=sys.stderr)

        if args.command == "put":
            return run_put(args)
    except RemoteRejectionError as e:
        print(e.report)
        return 1
    except KVError as e:
        logger.debug(f"{e.kind.value} error", exc_info=True)
        terminal.user_error(str(e))
        return 1
    except ValueError as e:
        # Malformed configuration values
        terminal.user_error(str(e))
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
