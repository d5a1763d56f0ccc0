"""
film-parser: command-line tool for parsing film records from a file.

Usage:
  film-parser <command> [options]

Commands:
  parse <file>   Parse the file, write result files and report diagnostics.
  help           Show usage information.
  credits        Show credits.
  test           Run the test suite with pytest.
"""

import argparse
import subprocess
import sys
from typing import List, Optional

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import LOG_LEVELS, PipelineConfig
from .errors import BatchAbortedError, FilmParserError, RecordFileNotFoundError, RecordFileReadError
from .logging_setup import configure_logging
from .pipeline import BatchPipeline
from .writers import write_results

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_REJECTED = 1  # diagnostics present or strict abort
EXIT_USAGE = 2  # bad input file, bad settings, write failure


def run_parse(args: argparse.Namespace) -> int:
	try:
		config = PipelineConfig.from_env(
			mode=args.mode,
			workers=args.workers,
			result_path=args.output,
			structure_path=args.structure_output,
			log_level=args.log_level,
		)
	except ValidationError as exc:
		err_console.print(f"[bold red]Error[/bold red]: invalid settings\n{escape(str(exc))}")
		return EXIT_USAGE

	configure_logging(config.log_level)
	pipeline = BatchPipeline(config)

	try:
		records = pipeline.loader.read_records(args.file)
	except (RecordFileNotFoundError, RecordFileReadError) as exc:
		err_console.print(f"[bold red]Error reading file[/bold red] '{escape(str(args.file))}': {escape(str(exc))}")
		return EXIT_USAGE

	try:
		result = pipeline.run(records)
	except BatchAbortedError as exc:
		d = exc.diagnostic
		err_console.print(f"[bold red]Aborted[/bold red] (strict mode) at record {d.index + 1}: [yellow]{d.kind}[/yellow] {escape(d.reason)}")
		err_console.print(f"  [dim]{escape(d.record)}[/dim]", highlight=False)
		return EXIT_REJECTED

	if not args.no_write:
		try:
			result_path, structure_path = write_results(result.films, config)
		except FilmParserError as exc:
			err_console.print(f"[bold red]Error[/bold red]: {escape(str(exc))}")
			return EXIT_USAGE
		console.print(f"[dim]Results written to {escape(str(result_path))} and {escape(str(structure_path))}[/dim]")

	console.print(f"[green]Accepted[/green] [bold]{len(result.films)}[/bold] of {len(records)} records.")
	if result.diagnostics:
		table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
		table.add_column("#", style="cyan", no_wrap=True)
		table.add_column("Kind", style="yellow", no_wrap=True)
		table.add_column("Reason")
		table.add_column("Record", style="dim")
		for d in result.diagnostics:
			table.add_row(str(d.index + 1), d.kind, escape(d.reason), escape(d.record))
		console.print(f"[red]Rejected[/red] [bold]{len(result.diagnostics)}[/bold] records:")
		console.print(table)
		return EXIT_REJECTED
	return EXIT_OK


def run_help(args: argparse.Namespace) -> int:
	console.print("\n[bold italic green]Film Parser - a command-line tool for parsing film information from a file.[/bold italic green]")
	console.print("[bold green]Commands:[/bold green]")
	console.print("\t[italic]parse <filename>[/italic]  - Parse the specified file and report its content.")
	console.print("\t[italic]help[/italic]              - Show this help information.")
	console.print("\t[italic]credits[/italic]           - Show credits information.")
	console.print("\t[italic]test[/italic]              - Run tests.")
	console.print("[bold green]\nParse options:[/bold green]")
	console.print("\t--mode strict|lenient  --workers N  --output PATH  --structure-output PATH  --no-write")
	console.print("[bold green]\nExample usage:[/bold green]")
	console.print("\t[italic]film-parser parse data/film_info.txt[/italic]")
	console.print("\t[italic]film-parser parse data/film_info.txt --mode strict[/italic]")
	console.print("\t[italic]film-parser credits[/italic]")
	return EXIT_OK


def run_credits(args: argparse.Namespace) -> int:
	console.print(f"[italic]Film Parser v{__version__}[/italic]")
	console.print("Developed by [bold]Rudas Vladyslava[/bold]")
	console.print("[italic yellow]Thanks for using the Film Parser CLI![/italic yellow]")
	return EXIT_OK


def run_tests(args: argparse.Namespace) -> int:
	cmd = [sys.executable, "-m", "pytest", *args.pytest_args]
	try:
		output = subprocess.run(cmd, capture_output=True, text=True)
	except OSError as exc:
		err_console.print(f"[bold red]Failed to execute command[/bold red]: {escape(str(exc))}")
		return EXIT_USAGE

	if output.returncode != 0:
		err_console.print("[bold red]Tests failed:[/bold red]")
		err_console.print(output.stdout + output.stderr, markup=False, highlight=False)
	else:
		console.print("[bold green]Tests passed successfully:[/bold green]")
		console.print(output.stdout, markup=False, highlight=False)
	return output.returncode


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="film-parser",
		description="Parse film records into structured films.",
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument("--version", action="version", version=f"film-parser {__version__}")
	parser.add_argument(
		"--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Log level for every command (default: INFO)."
	)

	subparsers = parser.add_subparsers(title="commands", metavar="<command>", dest="command")
	subparsers.required = True

	p = subparsers.add_parser("parse", help="Parse a record file.")
	p.add_argument("file", help="Path to a file with one film record per line.")
	p.add_argument("--mode", choices=["strict", "lenient"], default=None, help="Failure policy (default: lenient).")
	p.add_argument("--workers", type=int, default=None, help="Worker threads for parsing (default: 1).")
	p.add_argument("--output", default=None, help="Formatted result file.")
	p.add_argument("--structure-output", default=None, help="Unformatted (repr) result file.")
	p.add_argument("--no-write", action="store_true", help="Only report, do not write result files.")
	p.set_defaults(func=run_parse)

	p = subparsers.add_parser("help", help="Show usage information.")
	p.set_defaults(func=run_help)

	p = subparsers.add_parser("credits", help="Show credits information.")
	p.set_defaults(func=run_credits)

	p = subparsers.add_parser("test", help="Run the test suite.")
	p.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra arguments passed to pytest.")
	p.set_defaults(func=run_tests)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	if args.log_level:
		configure_logging(args.log_level)
	return args.func(args)


if __name__ == "__main__":
	raise SystemExit(main())
