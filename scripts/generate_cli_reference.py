#!/usr/bin/env python3
"""Generate CLI reference documentation from the typer app."""

import inspect
from pathlib import Path
from typing import Any

import typer

from ftracker.cli import app


def flag_names(param_name: str, option: Any) -> list[str]:
    """Flags an option is reachable under, falling back to the parameter name."""
    decls = getattr(option, "param_decls", None)
    if decls:
        return list(decls)
    return [f"--{param_name.replace('_', '-')}"]


def format_option(param_name: str, option: Any) -> str:
    """Format an option as a Markdown list item."""
    line = "- " + ", ".join(f"`{flag}`" for flag in flag_names(param_name, option))

    if getattr(option, "help", None):
        line += f": {option.help}"

    default = getattr(option, "default", None)
    if default not in (None, False, ...):
        line += f" (default: {default})"

    return line


def describe_callback(callback: Any) -> tuple[list[str], list[str]]:
    """Split a command callback's parameters into arguments and option lines.

    typer.Context parameters are injected by typer and skipped.
    """
    arguments = []
    options = []

    for name, param in inspect.signature(callback).parameters.items():
        if param.annotation is typer.Context:
            continue
        if param.default is inspect.Parameter.empty:
            arguments.append(name.upper())
        elif hasattr(param.default, "help"):
            options.append(format_option(name, param.default))

    return arguments, options


def generate_command_doc(command_name: str, command_obj: Any) -> str:
    """Generate documentation for a single command."""
    callback = command_obj.callback
    doc = (callback.__doc__ or "No description available.").strip()
    arguments, options = describe_callback(callback)

    usage = " ".join(["ftracker", command_name, *arguments])
    lines = [f"### {command_name}", "", doc, "", "**Usage:**", "", "```bash", usage, "```", ""]

    if arguments:
        lines += ["**Arguments:**", ""]
        lines += [f"- `{arg}` (required)" for arg in arguments]
        lines.append("")

    if options:
        lines += ["**Options:**", ""]
        lines += options
        lines.append("")

    return "\n".join(lines)


def generate_cli_reference() -> str:
    """Generate complete CLI reference documentation."""
    lines = [
        "# CLI Commands Reference",
        "",
        "Complete reference for all ftracker commands and options.",
        "",
        "## Usage",
        "",
        "```bash",
        "ftracker [GLOBAL OPTIONS] COMMAND [OPTIONS]",
        "```",
        "",
        "## Global Options",
        "",
    ]

    if app.registered_callback is not None:
        _, global_options = describe_callback(app.registered_callback.callback)
        lines += global_options
    lines += ["- `--help`: Show help message and exit", "", "## Commands", ""]

    def command_name(command_obj: Any) -> str:
        return command_obj.name or (command_obj.callback.__name__ if command_obj.callback else "unknown")

    for command_obj in sorted(app.registered_commands, key=command_name):
        lines.append(generate_command_doc(command_name(command_obj), command_obj))

    return "\n".join(lines)


def main() -> None:
    """Generate and write CLI reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "reference" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(generate_cli_reference())
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
