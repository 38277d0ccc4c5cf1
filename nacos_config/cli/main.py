"""CLI entrypoint for nacos-config."""
import os
import sys
import json
import argparse
import logging
from typing import Any

import yaml

from .validators import validate_nacos_name
from ..config.domains.errors import NacosError
from ..config.domains.kms_client import is_encrypted
from ..config.domains.settings import KMS_KEY_ID, NACOS_DATA_ID, NACOS_GROUP, NACOS_PASSWORD, REQUIRED_VARS

VERSION = "0.1.0"

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def cmd_version(args):
    """Show version information."""
    print(f"nacos-config {VERSION}")


def cmd_check_env(args):
    """Report which Nacos environment variables are set, without their values."""
    missing = [name for name in REQUIRED_VARS if name not in os.environ]

    for name in REQUIRED_VARS:
        status = "set" if name in os.environ else "MISSING"
        print(f"{name}: {status}")

    password = os.environ.get(NACOS_PASSWORD)
    if password is not None and is_encrypted(password):
        status = "set" if KMS_KEY_ID in os.environ else "MISSING"
        print(f"{KMS_KEY_ID}: {status} (password is KMS-encrypted)")
        if KMS_KEY_ID not in os.environ:
            missing.append(KMS_KEY_ID)
    else:
        print(f"{KMS_KEY_ID}: not needed (password is plaintext)")

    if missing:
        print(f"\nError: Missing environment variables: {', '.join(missing)}", file=sys.stderr)
        sys.exit(1)


def cmd_fetch(args):
    """Fetch the configured document from Nacos and print it."""
    from nacos_config.config.workflows.config_operations import from_nacos

    environ = dict(os.environ)
    if args.data_id is not None:
        validate_nacos_name("data id", args.data_id)
        environ[NACOS_DATA_ID] = args.data_id
    if args.group is not None:
        validate_nacos_name("group", args.group)
        environ[NACOS_GROUP] = args.group

    logger.info(f"Fetching config {environ.get(NACOS_DATA_ID)} from group {environ.get(NACOS_GROUP)}")
    try:
        config = from_nacos(Any, environ=environ)
    except NacosError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == "yaml":
        print(yaml.safe_dump(config, sort_keys=False, allow_unicode=True), end="")
    else:
        print(json.dumps(config, indent=2, ensure_ascii=False))


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (missing env vars, KMS, network, validation, parsing)
        2 - Usage errors (invalid arguments, invalid data id or group format)
    """
    parser = argparse.ArgumentParser(
        prog="nacos-config",
        description="nacos-config CLI - fetch validated configuration documents from Nacos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (missing env vars, KMS, network, validation, parsing)
  2 - Usage error (invalid arguments, invalid data id or group format)

Environment variables:
  NACOS_ADDR       - Nacos server address (http:// or https:// prefix is stripped)
  NACOS_GROUP      - Config group
  NACOS_NAMESPACE  - Config namespace
  NACOS_USERNAME   - Nacos username
  NACOS_PASSWORD   - Nacos password, plaintext or ENC(<base64 KMS ciphertext>)
  NACOS_DATA_ID    - Config data id
  KMS_KEY_ID       - AWS KMS key id (only needed for ENC(...) passwords)
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    _version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of nacos-config"
    )

    # check-env command
    _check_env_parser = subparsers.add_parser(
        "check-env",
        help="Check required environment variables",
        description="""
Report which NACOS_* variables are set. Values are never printed.

Exit codes:
  0 - All required variables are set
  1 - At least one required variable is missing
        """
    )

    # fetch command
    fetch_parser = subparsers.add_parser(
        "fetch",
        help="Fetch and print the config document",
        description="""
Fetch a config document from Nacos and print it.

Behavior:
  1. Reads settings from NACOS_* environment variables
  2. Decrypts NACOS_PASSWORD through AWS KMS if it is ENC(...)
  3. Fetches the document and checks namespace, data id, group and md5
  4. Parses the content (JSON, or YAML for yaml documents) and prints it

Exit codes:
  0 - Config fetched and printed
  1 - Any retrieval, validation or parsing error
  2 - Invalid data id or group format
        """
    )
    fetch_parser.add_argument(
        "--data-id",
        help="Data id to fetch (overrides NACOS_DATA_ID)"
    )
    fetch_parser.add_argument(
        "--group",
        help="Group to fetch from (overrides NACOS_GROUP)"
    )
    fetch_parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format (default: json)"
    )
    # SUPPRESS keeps a top-level -v from being reset by the subcommand default
    fetch_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log progress to stderr"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("nacos_config").setLevel(logging.INFO)

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    # Route to command handlers
    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "check-env":
            cmd_check_env(args)
        elif args.command == "fetch":
            cmd_fetch(args)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
