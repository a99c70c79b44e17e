"""
Command-line interface for cscodegen.

Subcommands:
  wrap      wrap text the way documentation comments are wrapped
  generate  generate C# files from a JSON model description
  settings  show or export the generation settings
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import CSharpGenerator, generate_code
from .codegen.core.config import CodeGenSettings, ConfigError, get_config_manager, load_settings
from .codegen.core.docformat import create_doc_formatter
from .codegen.core.generator import GeneratorError
from .codegen.core.model import CSharpFile, ModelError
from .logging_config import get_logger, setup_logging
from .utils import ModelLoadError, load_model, parse_file_models

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="cscodegen",
        description="Generate documented C# source files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cscodegen wrap "Some long documentation text" --indent 2 --prefix "///   "
  cscodegen generate model.json -o src/
  cscodegen generate https://example.com/model.json --width 100
  cscodegen settings export my-settings.json
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    # wrap
    wrap_parser = subparsers.add_parser("wrap", help="Wrap text to the line width")
    wrap_parser.add_argument("text", help="Text to wrap")
    wrap_parser.add_argument(
        "--indent", type=int, default=0, help="Number of indentations (default: 0)"
    )
    wrap_parser.add_argument(
        "--prefix", default="", help="Text placed at the start of every line"
    )
    _add_layout_args(wrap_parser)
    wrap_parser.set_defaults(func=_handle_wrap)

    # generate
    gen_parser = subparsers.add_parser(
        "generate", help="Generate C# files from a JSON model description"
    )
    gen_parser.add_argument("model", help="Model description (JSON file or URL)")
    gen_parser.add_argument(
        "--output", "-o", metavar="DIR", help="Root folder for generated files (default: stdout)"
    )
    gen_parser.add_argument(
        "--no-sub-header",
        action="store_true",
        help="Don't write the outline sub-header below the file header",
    )
    _add_layout_args(gen_parser)
    gen_parser.set_defaults(func=_handle_generate)

    # settings
    settings_parser = subparsers.add_parser("settings", help="Show or export settings")
    settings_sub = settings_parser.add_subparsers(dest="settings_command")

    show_parser = settings_sub.add_parser("show", help="Show the effective settings")
    show_parser.add_argument("--config", help="Settings file path (JSON)")
    show_parser.set_defaults(func=_handle_settings_show)

    export_parser = settings_sub.add_parser("export", help="Export settings to JSON")
    export_parser.add_argument("path", help="Destination file")
    export_parser.add_argument("--config", help="Settings file path (JSON)")
    export_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing file"
    )
    export_parser.set_defaults(func=_handle_settings_export)

    return parser


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    """Add the options that override the layout settings."""
    parser.add_argument("--config", help="Settings file path (JSON)")
    parser.add_argument(
        "--width", type=int, metavar="N", help="Number of characters per line"
    )
    parser.add_argument("--tab-size", type=int, metavar="N", help="Columns per indentation")
    parser.add_argument(
        "--use-spaces", action="store_true", help="Indent with spaces instead of tabs"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging and generation metadata"
    )


def _build_settings(args: argparse.Namespace) -> CodeGenSettings:
    """Build settings from the config file and CLI overrides."""
    overrides: Dict[str, Any] = {}

    if getattr(args, "width", None) is not None:
        overrides["num_characters_per_line"] = args.width
    if getattr(args, "tab_size", None) is not None:
        overrides["tab_size"] = args.tab_size
    if getattr(args, "use_spaces", False):
        overrides["use_tabs"] = False
    if getattr(args, "no_sub_header", False):
        overrides["include_sub_header"] = False

    try:
        return load_settings(custom_config=overrides, config_file=getattr(args, "config", None))
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}")


def _handle_wrap(args: argparse.Namespace) -> int:
    settings = _build_settings(args)
    if args.indent < 0:
        raise CLIError(f"--indent cannot be negative: {args.indent}")

    formatter = create_doc_formatter(settings)
    lines = formatter.emit_wrapped_block(
        args.text, args.indent, args.prefix, first_line_prefix=args.prefix
    )
    for line in lines:
        # Print expanded so the columns line up in the terminal
        console.print(
            line.expandtabs(settings.tab_size), markup=False, highlight=False, soft_wrap=True
        )
    return 0


def _load_files(source: str) -> List[CSharpFile]:
    try:
        _, data = load_model(source)
        return parse_file_models(data)
    except (ModelLoadError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load model: {e}")


def _handle_generate(args: argparse.Namespace) -> int:
    """Generate code and handle output with rich formatting."""
    settings = _build_settings(args)
    files = _load_files(args.model)
    generator = CSharpGenerator(settings)

    if args.output:
        return _write_output(generator, files, Path(args.output))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("[green]Generating C# code...", total=None)
        results = [(f, generate_code(generator, f)) for f in files]
        progress.remove_task(task)

    exit_code = 0
    for source_file, result in results:
        if not result.success:
            console.print(
                f"[red]✗ Code generation failed for {source_file.file_name}:[/red] "
                f"{result.error_message}"
            )
            exit_code = 1
            continue

        top_border = "═" * 30
        console.print(f"[green]{top_border} 📄 {source_file.file_name} {top_border}[/green]\n")
        console.print(Syntax(result.code, "csharp", theme="monokai"))
        console.print()

        if getattr(args, "verbose", False) and result.metadata:
            _print_metadata(result.metadata)
        _print_warnings(result.warnings)

    return exit_code


def _write_output(generator: CSharpGenerator, files: List[CSharpFile], root: Path) -> int:
    exit_code = 0
    for source_file in files:
        _print_warnings(generator.validate_file(source_file))
        try:
            path = generator.write_file(source_file, root)
        except (ModelError, GeneratorError) as e:
            console.print(f"[red]✗ {source_file.file_name}:[/red] {e}")
            exit_code = 1
            continue
        console.print(f"[green]✓[/green] Generated [cyan]{path}[/cyan]")
    return exit_code


def _print_metadata(metadata: Dict[str, Any]) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print(metadata_table)


def _print_warnings(warnings: List[str]) -> None:
    if warnings:
        console.print("[yellow]⚠️  Warnings:[/yellow]")
        for warning in warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()


def _handle_settings_show(args: argparse.Namespace) -> int:
    settings = _build_settings(args)

    table = Table(title="⚙️  Settings", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="green")

    for key, value in settings.to_dict().items():
        if isinstance(value, list):
            value = "\n".join(value)
        table.add_row(key, repr(value) if key == "line_ending" else str(value))

    console.print(table)
    return 0


def _handle_settings_export(args: argparse.Namespace) -> int:
    settings = _build_settings(args)
    try:
        path = get_config_manager().save_settings(settings, args.path, overwrite=args.force)
    except ConfigError as e:
        raise CLIError(str(e))

    console.print(f"[green]✓[/green] Settings saved to [cyan]{path}[/cyan]")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    verbose = getattr(args, "verbose", False)
    setup_logging(verbose=verbose)

    if not hasattr(args, "func"):
        if args.command == "settings":
            console.print(
                Panel(
                    "[bold]Show:[/bold] cscodegen settings show [dim]--config FILE[/dim]\n"
                    "[bold]Export:[/bold] cscodegen settings export [cyan]PATH[/cyan]",
                    title="💡 Settings",
                    border_style="blue",
                )
            )
            return 1
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=verbose)
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
