"""
Command-line interface for imgsort.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .config import Config, ConfigurationError, SortOptions
from .constants import MAX_DEPTH, MEDIA_PATTERNS, PROGRAM, configure_logging, get_console
from .core import ImageSorter
from .discovery import NoMediaFoundError
from .file_operations import COLLISION_POLICIES, RENAME


def create_parser(config: Config) -> argparse.ArgumentParser:
    """Create argument parser with dynamic defaults from config."""
    last_source = config.get_last_source()
    last_dest = config.get_last_dest()
    collision = config.get_collision_policy()

    source_help = "Source directory containing media to sort"
    dest_help = "Destination directory for the dated folders"
    collision_help = "What to do when a file name is already taken in its folder"

    if last_source:
        source_help += f" (default: {last_source})"
    if last_dest:
        dest_help += f" (default: {last_dest})"
    collision_help += f" (default: {collision or RENAME})"

    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description="Sort photos and videos into folders by the date they were taken",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Media is matched by {', '.join(MEDIA_PATTERNS)} (any case), up to {MAX_DEPTH} levels deep.
Files without a capture date are collected under 0/Unknown, 0 or Unknown.

Examples:
  {PROGRAM} ~/Downloads/Photos ~/Pictures/Sorted -y -m
  {PROGRAM} ~/Downloads/Photos ~/Pictures/ByMonth --months --dry-run
        """
    )

    parser.add_argument(
        "source", nargs="?",
        help=source_help
    )
    parser.add_argument(
        "dest", nargs="?",
        help=dest_help
    )
    parser.add_argument(
        "--years", "-y", action="store_true",
        help="Group media by year"
    )
    parser.add_argument(
        "--months", "-m", action="store_true",
        help="Group media by month"
    )
    parser.add_argument(
        "--dry-run", "-n", action="store_true",
        help="Show where files would go without copying anything"
    )
    parser.add_argument(
        "--list", "-l", dest="list_plan", action="store_true",
        help="Print the grouped files before copying"
    )
    parser.add_argument(
        "--on-collision", choices=COLLISION_POLICIES, metavar="POLICY",
        help=f"{collision_help}: {', '.join(COLLISION_POLICIES)}"
    )
    parser.add_argument(
        "--yes", action="store_true",
        help="Auto-confirm processing for saved source/dest paths"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version", "-V", action="store_true",
        help=f"Display the version number of {PROGRAM} and exit"
    )

    return parser


def show_processing_plan(options: SortOptions, console: Console) -> None:
    """Display the processing plan before execution."""
    mode = "DRY RUN" if options.dry_run else "COPY"

    console.print("\n[bold]Processing Plan:[/bold]")
    console.print(f"  Source:          [blue]{options.source}[/blue]")
    console.print(f"  Destination:     [blue]{options.dest}[/blue]")
    console.print(f"  Processing Mode: [cyan]{mode}[/cyan]")
    console.print(f"  Grouping:        [cyan]{options.key_shape.value}[/cyan]")
    console.print(f"  On Collision:    [cyan]{options.on_collision}[/cyan]")
    console.print()


def confirm_processing(console: Console) -> bool:
    """Ask for confirmation when using saved configuration."""
    console.print("[yellow]Confirm processing plan with saved configuration.[/yellow]")

    try:
        response = console.input(r"Continue? \[y/N]: ").strip().lower()
        return response in ['y', 'yes']
    except (EOFError, KeyboardInterrupt):
        console.print("\n[red]Operation cancelled[/red]")
        return False


def main(config_path: Optional[Path] = None, argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        config_path: Optional path to config file (for testing)
        argv: Optional argument list, defaults to sys.argv[1:]
    """
    config = Config(config_path=config_path)
    parser = create_parser(config)
    args = parser.parse_args(argv)
    console = get_console()

    if args.version:
        from . import __version__, __copyright__
        if args.verbose:
            print(f"{PROGRAM} version {__version__} {__copyright__}")
            print(f"Config:  {config.config_path}")
            return 0
        print(__version__)
        return 0

    using_saved_config = args.source is None and args.dest is None

    source_path = args.source or config.get_last_source()
    dest_path = args.dest or config.get_last_dest()
    if not source_path or not dest_path:
        parser.error("Source and destination directories are required")

    options = SortOptions(
        source=Path(source_path).expanduser().resolve(),
        dest=Path(dest_path).expanduser().resolve(),
        by_year=args.years,
        by_month=args.months,
        dry_run=args.dry_run,
        list_plan=args.list_plan,
        on_collision=args.on_collision or config.get_collision_policy() or RENAME,
    )

    try:
        options.validate()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    config.update_paths(str(options.source), str(options.dest))
    if args.on_collision:
        config.update_collision_policy(args.on_collision)

    configure_logging(verbose=args.verbose)
    show_processing_plan(options, console)

    # Show confirmation when using saved config without --yes flag
    if using_saved_config and not args.yes:
        if not confirm_processing(console):
            return 0

    try:
        sorter = ImageSorter(options, console=console)
        sorter.run()
    except NoMediaFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[red]Operation cancelled by user[/red]")
        return 1
    except Exception as e:
        console.print(f"\n[red]Fatal error: {e}[/red]")
        return 1

    if options.dry_run:
        message = "[green]✓ Dry run completed, nothing was copied[/green]"
    else:
        message = "[green]✓ Processing completed successfully![/green]"

    unreadable_count = sorter.stats_manager.get_unreadable()
    if unreadable_count > 0:
        message += f" [yellow]({unreadable_count} unreadable files skipped)[/yellow]"
    console.print(f"\n{message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
