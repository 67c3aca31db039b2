"""Output formatting for scaffolder action results.

This module renders the results of the CLI commands in different output
formats. It supports plain text for logs and terminals, rich console tables,
and JSON for programmatic consumption.

Key Components:
    ResultPrinter: Abstract base class defining the output contract and stream handling
    PlainPrinter: Simple text output
    RichPrinter: Colorized console output with tables
    JSONPrinter: Structured JSON output

Supported Results:
    RepoSpec: Decomposed repository location
    ClientOptions: Resolved HTTP client options (token redacted)
    list[SerializedFile]: Serialized directory contents
    Path: File written by an action

Example:
    ```python
    from scaffolder_actions.cli.printer import JSONPrinter, RichPrinter

    RichPrinter(files).print()
    JSONPrinter(spec).print(output_file="repo.json")
    ```

Raises:
    TypeError: When an unsupported result type is provided
    OSError: When file output operations fail
"""

import json
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.table import Table

from scaffolder_actions.core.models import ClientOptions, RepoSpec, SerializedFile

Result = RepoSpec | ClientOptions | list[SerializedFile] | Path


def describe_file(file: SerializedFile) -> dict[str, Any]:
    """Summarize a serialized file without its content."""
    description = {
        "path": file.path,
        "size": len(file.content),
        "executable": file.executable,
        "symlink": file.symlink,
    }
    if file.symlink:
        description["target"] = file.content.decode("utf-8", errors="replace")
    return description


def result_to_dict(result: Result) -> dict[str, Any]:
    """Convert a command result into a JSON-serializable dictionary."""
    if isinstance(result, RepoSpec):
        return result.to_dict()
    if isinstance(result, ClientOptions):
        return result.redacted()
    if isinstance(result, Path):
        return {"written": str(result)}
    if isinstance(result, list):
        return {"files": [describe_file(file) for file in result]}
    msg = f"Unsupported result type: {type(result).__name__}"
    raise TypeError(msg)


class ResultPrinter(ABC):
    """Base printer with required type hints."""

    result: Result
    _output: TextIO | None = None

    def __init__(self, result: Result) -> None:
        """Initialize printer with a command result."""
        self.result = result

    def print(self, output_file: str | None = None) -> None:
        """
        Print the result to the given output file.

        Args:
            output_file: Path to output file, or None for stdout
        """
        if output_file:
            with self._get_output_stream(output_file) as output:
                self._output = output
                self._print_content()
        else:
            # stdout must stay open
            self._output = sys.stdout
            self._print_content()

    @abstractmethod
    def _print_content(self) -> None:
        """Print the result to the configured output stream."""

    def _get_output_stream(self, output_file: str) -> TextIO:
        """Open the output file for writing."""
        return Path(output_file).open("w", encoding="utf-8")

    @abstractmethod
    def _write(self, content: Any) -> None:
        """Write content to configured output stream."""


class PlainPrinter(ResultPrinter):
    """Result printer with plain text output."""

    def _write(self, content: str = "") -> None:
        """Write content to configured output."""
        print(content, file=self._output)

    def _print_content(self) -> None:
        if isinstance(self.result, list):
            self._print_files(self.result)
            return
        for key, value in result_to_dict(self.result).items():
            self._write(f"{key}: {value}")

    def _print_files(self, files: list[SerializedFile]) -> None:
        for file in files:
            info = describe_file(file)
            flags = "".join(
                [
                    "x" if file.executable else "-",
                    "l" if file.symlink else "-",
                ],
            )
            line = f"{flags} {info['size']:>10} {file.path}"
            if file.symlink:
                line += f" -> {info['target']}"
            self._write(line)
        self._write(f"\nTotal: {len(files)} files")


class RichPrinter(ResultPrinter):
    """Result printer with rich text formatting."""

    def _write(self, content: str | Table) -> None:
        """Write content to configured output."""
        self._console.print(content)

    def _print_content(self) -> None:
        self._console = Console(file=self._output)
        if isinstance(self.result, list):
            self._print_files(self.result)
        elif isinstance(self.result, Path):
            self._write(f"[green]Wrote[/green] {self.result}")
        else:
            self._print_mapping(result_to_dict(self.result))

    def _print_mapping(self, data: dict[str, Any]) -> None:
        title = "Repository" if isinstance(self.result, RepoSpec) else "Client Options"
        table = Table(title=title)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        for key, value in data.items():
            table.add_row(key, str(value))
        self._write(table)

    def _print_files(self, files: list[SerializedFile]) -> None:
        table = Table(title="Serialized Files")
        table.add_column("Path", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Executable", justify="center")
        table.add_column("Symlink", justify="center")
        for file in files:
            info = describe_file(file)
            path = f"{file.path} -> {info['target']}" if file.symlink else file.path
            table.add_row(
                path,
                str(info["size"]),
                "[green]✓[/green]" if file.executable else "",
                "[yellow]✓[/yellow]" if file.symlink else "",
            )
        self._write(table)
        self._write(f"Total: {len(files)} files")


class JSONPrinter(ResultPrinter):
    """Result printer with JSON output."""

    def _write(self, content: dict) -> None:
        """Write JSON content to configured output."""
        json.dump(content, self._output, indent=2)
        self._output.write("\n")

    def _print_content(self) -> None:
        self._write(result_to_dict(self.result))
