"""Command line interface for scaffolder actions.

Modules:
    commands: CLI argument parsing and execution
    printer: Output formatting and display

Example:
    ```python
    from scaffolder_actions.cli import parse_args, run
    import asyncio

    args = parse_args(["parse-url", "github.com?repo=service&owner=acme"])
    asyncio.run(run(args))
    ```
"""

from scaffolder_actions.cli.commands import (
    configure_logging,
    create_integrations,
    execute,
    main,
    parse_args,
    run,
)
from scaffolder_actions.cli.printer import (
    JSONPrinter,
    PlainPrinter,
    ResultPrinter,
    RichPrinter,
)

__all__ = [  # noqa: RUF022
    # Command-line processing
    "create_integrations",
    "configure_logging",
    "parse_args",
    "execute",
    "run",
    "main",
    # Output formatters
    "JSONPrinter",
    "PlainPrinter",
    "ResultPrinter",
    "RichPrinter",
]
