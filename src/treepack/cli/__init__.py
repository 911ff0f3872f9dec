"""
CLI for treepack.

Provides command-line interface for scanning a directory tree and bundling
an explicit file list into a single text artifact.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.syntax import Syntax

from treepack.cli.ui import render_bundle_summary, render_scan_banner, render_scan_summary
from treepack.core.config import LoggingConfig, TreepackConfig, load_config
from treepack.core.errors import (
    FileListError,
    InvalidRootError,
    RulesFileError,
    TreepackError,
)
from treepack.core.file_list import (
    FileListOptions,
    aggregate_file_list,
    read_file_list,
    write_bundle,
)
from treepack.core.path_utils import resolve_file_path, validate_scan_root
from treepack.core.rules import DEFAULT_EXCLUDED_FILES, build_rule_set, load_rules
from treepack.core.tree_walker import walk_sync

# Status goes to stderr; only the output file carries the artifact
console = Console(stderr=True)

app = typer.Typer(
    name="treepack",
    help="Directory tree text aggregator - pack project sources into one prompt file",
    add_completion=False,
)


def _configure_logging(cfg: LoggingConfig, verbose: bool) -> None:
    """Configure logging once; verbose forces DEBUG for treepack loggers."""
    logging.basicConfig(format=cfg.format)
    level = "DEBUG" if verbose else cfg.level.upper()
    logging.getLogger("treepack").setLevel(level)


def _load_cli_config(config_path: Optional[Path], verbose: bool) -> TreepackConfig:
    """Load .env, the config file and env overrides, then set up logging."""
    load_dotenv(find_dotenv(usecwd=True))
    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, TreepackError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    _configure_logging(cfg.logging, verbose)
    return cfg


def _apply_flags(cfg: TreepackConfig, section: str, **flags: Any) -> TreepackConfig:
    """Override config values with the CLI flags that were actually given."""
    given = {key: value for key, value in flags.items() if value is not None}
    if not given:
        return cfg
    return cfg.with_section(section, **given)


@app.command()
def scan(
    directory: Path = typer.Argument(Path("."), help="Directory to scan"),
    rules: Optional[Path] = typer.Option(
        None, "--rules", "--blacklist", "-b", help="Exclusion rules file (default: <DIRECTORY>/blacklist.txt)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: <DIRECTORY>/project_files.txt)"
    ),
    include_env: Optional[bool] = typer.Option(
        None, "--env/--no-env", "-e", help="Include the content of .env files"
    ),
    strip: Optional[bool] = typer.Option(
        None, "--strip-comments/--keep-comments", help="Remove comments from supported languages (default: keep)"
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Additional exclusion rule. Can be specified multiple times."
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Recursively scan a directory and write paths and file contents to one file."""
    cfg = _apply_flags(
        _load_cli_config(config_path, verbose),
        "scan",
        include_sensitive_config=include_env,
        strip_comments=strip,
    )
    s = cfg.scan

    validation = validate_scan_root(directory)
    if not validation.valid:
        console.print(f"[bold red]Error:[/bold red] {validation.error_message}")
        raise typer.Exit(1)

    root = directory.resolve()
    rules_path = rules if rules is not None else root / s.rules_file_name
    output_path = (output if output is not None else root / s.output_file_name).resolve()

    try:
        file_rules = load_rules(rules_path, required=rules is not None)
    except RulesFileError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    rule_set = build_rule_set(
        file_rules,
        s.extra_rules,
        exclude or [],
    )

    render_scan_banner(console, root, rules_path, output_path, s.include_sensitive_config)

    try:
        with output_path.open("w", encoding="utf-8") as sink:
            stats = walk_sync(
                root,
                rule_set,
                sink,
                include_sensitive_config=s.include_sensitive_config,
                progress_interval=s.progress_interval,
                strip_comments=s.strip_comments,
                skip_paths=[output_path],
            )
    except InvalidRootError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] Cannot write output {output_path}: {e}")
        raise typer.Exit(1)

    render_scan_summary(console, stats, output_path, s.include_sensitive_config)


@app.command()
def bundle(
    files_list: Optional[str] = typer.Option(
        None, "--files-list", "-l", help="File with the list of files to bundle (default: files-list.txt)"
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output-file", "-o", help="Output file (default: prompt.txt)"
    ),
    root_folder: Optional[str] = typer.Option(
        None, "--root-folder", "-r", help="Project root folder used to find files and shorten displayed paths"
    ),
    strip: Optional[bool] = typer.Option(
        None, "--strip-comments/--keep-comments", help="Remove comments from supported languages"
    ),
    skip_directories: Optional[bool] = typer.Option(
        None, "--skip-directories/--process-directories", help="Skip entries that are directories"
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Exclusion rule. Can be specified multiple times."
    ),
    exclude_from: Optional[str] = typer.Option(
        None, "--exclude-from", help="File with exclusion rules"
    ),
    exclude_default: Optional[bool] = typer.Option(
        None, "--exclude-default/--no-exclude-default", help="Add the built-in exclusion list"
    ),
    base_dir: Optional[Path] = typer.Option(
        None, "--base-dir", help="Directory relative paths are resolved against (default: current directory)"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Concatenate an explicit list of files into one prompt file."""
    cfg = _apply_flags(
        _load_cli_config(config_path, verbose),
        "bundle",
        files_list=files_list,
        output_file=output_file,
        root_folder=root_folder,
        strip_comments=strip,
        skip_directories=skip_directories,
        exclude_from=exclude_from,
        exclude_default=exclude_default,
    )
    b = cfg.bundle

    base = (base_dir or Path.cwd()).resolve()
    list_path = resolve_file_path(b.files_list, base, b.root_folder)

    try:
        entries = read_file_list(list_path)
    except FileListError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        console.print(f"Searched in: {e.searched_path}")
        if b.root_folder:
            console.print(
                f"Try the full path to the file list or check the --root-folder value ({b.root_folder})"
            )
        raise typer.Exit(1)

    from_file: list[str] = []
    if b.exclude_from:
        from_file = load_rules(resolve_file_path(b.exclude_from, base, b.root_folder))

    rule_set = build_rule_set(
        exclude or [],
        b.exclude,
        DEFAULT_EXCLUDED_FILES if b.exclude_default else [],
        from_file,
    )

    options = FileListOptions(
        rules=rule_set,
        strip_comments=b.strip_comments,
        skip_directories=b.skip_directories,
        root_folder=b.root_folder,
        base_dir=base,
    )

    console.print(f"[bold blue]Bundling[/bold blue] {len(entries)} entries from {list_path}")

    result = aggregate_file_list(entries, options)
    output_path = base / b.output_file
    try:
        write_bundle(result, output_path)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] Cannot write output {output_path}: {e}")
        raise typer.Exit(1)

    render_bundle_summary(console, result, output_path, b.root_folder)


@app.command("config")
def show_config(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """Print the effective configuration as YAML."""
    cfg = _load_cli_config(config_path, verbose=False)
    # The YAML dump is the command's output, so it goes to stdout
    Console().print(Syntax(cfg.to_yaml(), "yaml"))


if __name__ == "__main__":
    app()
