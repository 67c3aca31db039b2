r"""Command-line interface for the scaffolder actions.

This module exposes the scaffolder helpers on the command line. It handles
argument parsing, integrations configuration loading, logging setup and
dispatching to the individual commands.

Commands:
    parse-url: Decompose a repository location into its parts
    client-options: Resolve HTTP client options for a GitHub repository
    serialize: Serialize the contents of a directory
    write-workflow: Run the workflow:write action against a workspace

Output Formats:
    - plain: Simple text output suitable for logs and terminals
    - rich: Colorized output with tables
    - json: Structured JSON output for programmatic consumption

CLI Usage:
    ```bash
    # Parse a repository location
    $ scaffolder-actions parse-url "github.com?repo=service&owner=acme"

    # Use a custom integrations configuration
    $ scaffolder-actions --integrations-config integrations.yaml \
        parse-url "gitlab.example.com?project=42"

    # Resolve client options with an explicit token
    $ scaffolder-actions client-options "github.com?repo=service&owner=acme" --token "$GITHUB_TOKEN"

    # Serialize a workspace honouring .gitignore files, as JSON
    $ scaffolder-actions --output-format json serialize ./workspace --gitignore

    # Write the deployment workflow into a workspace (verbose, level INFO)
    $ scaffolder-actions -vv write-workflow ./workspace
    ```

Environment:
    SCAFFOLDER_ACTIONS_LOG_LEVEL: Log level used when neither -q nor -v is given
    SCAFFOLDER_ACTIONS_INTEGRATIONS: Integrations configuration file

Raises:
    SystemExit: With status 1 when a command fails with a ScaffolderActionsError
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from scaffolder_actions import __version__
from scaffolder_actions.actions.base import ActionContext
from scaffolder_actions.actions.workflow import create_workflow_action
from scaffolder_actions.core.client_options import get_client_options
from scaffolder_actions.core.exceptions import ScaffolderActionsError
from scaffolder_actions.core.integrations import ScmIntegrationRegistry
from scaffolder_actions.core.repo_url import parse_repo_url
from scaffolder_actions.utils.serializer import serialize_directory_contents

from .printer import JSONPrinter, PlainPrinter, Result, RichPrinter

PRINTERS = {
    "plain": PlainPrinter,
    "rich": RichPrinter,
    "json": JSONPrinter,
}


def create_integrations(config_file: str | None = None) -> ScmIntegrationRegistry:
    """Creates the integrations registry from a config file or the environment."""
    if config_file:
        return ScmIntegrationRegistry.from_file(config_file)
    return ScmIntegrationRegistry.from_env()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Helpers for scaffolder template actions",
    )
    parser.add_argument(
        "--integrations-config",
        help="YAML file with the source-control integrations (default: $SCAFFOLDER_ACTIONS_INTEGRATIONS)",
    )

    # Output configuration
    output_group = parser.add_argument_group("output", "Output configuration")
    output_group.add_argument(
        "--output-format",
        choices=list(PRINTERS),
        default="rich",
        help="Output format for results (default: rich)",
    )
    output_group.add_argument(
        "--output-file",
        default=None,
        help="Write the result to this file instead of standard output",
    )

    # Verbosity control
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all non-essential output",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase verbosity (can be used multiple times)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{__version__}",
        help="Show the version of scaffolder-actions",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_url = subparsers.add_parser("parse-url", help="Decompose a repository location")
    parse_url.add_argument("repo_url", help="Location such as 'github.com?repo=reponame&owner=owner'")

    client_options = subparsers.add_parser("client-options", help="Resolve HTTP client options for a repository")
    client_options.add_argument("repo_url", help="Location such as 'github.com?repo=reponame&owner=owner'")
    client_options.add_argument("--token", help="Token to use instead of asking the credentials provider")

    serialize = subparsers.add_parser("serialize", help="Serialize the contents of a directory")
    serialize.add_argument("directory", help="Directory to serialize")
    serialize.add_argument("--gitignore", action="store_true", help="Apply .gitignore files found in the tree")
    serialize.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        help="Glob pattern selecting entries, prefix with '!' to exclude (repeatable)",
    )

    write_workflow = subparsers.add_parser("write-workflow", help="Write the deployment workflow into a workspace")
    write_workflow.add_argument("workspace", help="Workspace directory")
    write_workflow.add_argument("--repo-url", help="Repository location passed to the action")

    return parser.parse_args(argv)


async def execute(args: argparse.Namespace) -> Result:
    """Execute the selected command and return its result."""
    if args.command == "serialize":
        files = await serialize_directory_contents(
            args.directory,
            gitignore=args.gitignore,
            glob_patterns=args.patterns,
        )
        return sorted(files, key=lambda file: file.path)

    if args.command == "write-workflow":
        action = create_workflow_action()
        ctx = ActionContext(
            workspace_path=Path(args.workspace),
            input={"repoUrl": args.repo_url} if args.repo_url else {},
        )
        return await action.run(ctx)

    integrations = create_integrations(args.integrations_config)
    if args.command == "parse-url":
        return parse_repo_url(args.repo_url, integrations.provider_type)
    if args.command == "client-options":
        return await get_client_options(args.repo_url, integrations, token=args.token)

    error_message = f"Invalid command: {args.command}"
    raise ValueError(error_message)


async def run(args: argparse.Namespace) -> None:
    """Run the selected command and print its result."""
    result = await execute(args)
    printer_cls = PRINTERS.get(args.output_format)
    if printer_cls is None:
        error_message = f"Invalid output format: {args.output_format}. Must be one of: plain, rich, json"
        raise ValueError(error_message)
    printer_cls(result).print(output_file=args.output_file)


def configure_logging(args: argparse.Namespace) -> None:
    """Configure logging from the verbosity flags or SCAFFOLDER_ACTIONS_LOG_LEVEL."""
    if getattr(args, "quiet", False):
        log_level = logging.CRITICAL
    elif getattr(args, "verbose", 0) > 0:
        log_level = {
            1: logging.WARNING,
            2: logging.INFO,
            3: logging.DEBUG,
        }.get(min(args.verbose, 3), logging.DEBUG)
    else:
        env_level = os.environ.get("SCAFFOLDER_ACTIONS_LOG_LEVEL", "CRITICAL").upper()
        log_level = getattr(logging, env_level, logging.CRITICAL)

    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    # Suppress third-party loggers
    logging.getLogger("azure").setLevel(logging.ERROR)
    logging.getLogger("urllib3").setLevel(logging.ERROR)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = parse_args(argv)
    configure_logging(args)

    try:
        asyncio.run(run(args))
    except ScaffolderActionsError as e:
        logging.debug("cli: %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
