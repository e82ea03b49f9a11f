#!/usr/bin/env python3
"""
hash-omikuji: SHA-256 based deterministic fortune slip for the new year.

The same year and seed always draw the same slip. By tradition the slip is
only drawn on January 1st; use --force to draw it on any other day.

Usage:
    hash-omikuji
    hash-omikuji --seed alice --year 2026 --force
    hash-omikuji --json --show-seed
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Optional
import argparse
import logging
import os
import socket
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hash_omikuji import __version__
from hash_omikuji.art import ART_STYLES
from hash_omikuji.luck import ALL_LUCK_TYPES, Rank
from hash_omikuji.result import SHORT_LIMIT, OmikujiResult

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

NOT_NEW_YEAR_MESSAGE = "This command can only be executed on January 1st.\nUse --force to override."
FORCE_WARNING = "WARNING: Running outside January 1st with --force flag.\n"

RANK_STYLES = {
    Rank.EXCELLENT: "bold green",
    Rank.GOOD: "green",
    Rank.NORMAL: "yellow",
    Rank.BAD: "red",
    Rank.TERRIBLE: "bold red",
}


class GateError(ValueError):
    """Raised when the slip is drawn outside January 1st without --force."""


# === Seed and Date Helpers ===
def default_seed() -> str:
    """``username@hostname`` for the current user."""
    username = os.environ.get("USER") or "anonymous"
    return f"{username}@{socket.gethostname()}"


def is_january_first(date_override: Optional[str] = None, today: Optional[datetime] = None) -> bool:
    """
    True on New Year's Day.

    ``date_override`` (``YYYY-MM-DD``) is compared textually, so anything
    that does not split into year, month and day counts as not January 1st.
    """
    if date_override is not None:
        _, _, rest = date_override.partition("-")
        month, sep, day = rest.partition("-")
        return bool(sep) and month == "01" and day == "01"

    now = today or datetime.now()
    return now.month == 1 and now.day == 1


def check_gate(force: bool, date_override: Optional[str] = None, today: Optional[datetime] = None) -> bool:
    """Return True when a --force warning should be shown; raise GateError when refused."""
    if is_january_first(date_override, today):
        return False
    if force:
        return True
    raise GateError(NOT_NEW_YEAR_MESSAGE)


# === Display ===
def print_rich(result: OmikujiResult, short: bool, show_seed: bool):
    """Displays the slip using rich formatting."""
    console.rule(f"[bold red]🎍 SHA-Omikuji {result.year} 🎍[/bold red]")

    lucky = Table(show_header=False, box=None)
    lucky.add_column("Field", style="cyan", no_wrap=True)
    lucky.add_column("Value", style="bold white")
    lucky.add_row("Lucky Number", str(result.lucky_number))
    lucky.add_row("Lucky Hex", result.lucky_hex)
    lucky.add_row("Lucky Color", f"[{result.lucky_color}]■[/{result.lucky_color}] {result.lucky_color}")
    lucky.add_row("Lucky Bits", result.lucky_bits)
    lucky.add_row("Lucky Day", result.lucky_day)
    lucky.add_row("Lucky Time", result.lucky_time)
    console.print(lucky)
    console.print()

    by_type = {score.luck_type: score for score in result.luck_scores}
    flag_types = ALL_LUCK_TYPES[:SHORT_LIMIT] if short else ALL_LUCK_TYPES
    flags = [
        f"[green]✔[/green] {t.label}" if by_type[t].active else f"[dim]✖ {t.label}[/dim]"
        for t in flag_types
    ]
    console.print("[cyan]Active Luck Flags[/cyan]")
    console.print("  ".join(flags))
    console.print()

    scores = Table(title="Luck Scores", show_header=True, header_style="bold cyan")
    scores.add_column("Luck", style="white")
    scores.add_column("Score", justify="right")
    scores.add_column("Rank")
    active = result.active_scores()
    if short:
        active = active[:SHORT_LIMIT]
    for score in active:
        style = RANK_STYLES[score.rank]
        scores.add_row(
            score.luck_type.display_name,
            str(score.score),
            f"[{style}]{score.rank.value}[/{style}]",
        )
    console.print(scores)

    console.print(f"[cyan]Entropy Check[/cyan]     : [green]OK[/green] ({result.entropy_check})")
    console.print()
    console.print("[magenta][ Omikuji Art ][/magenta]")
    console.print(result.omikuji_art, markup=False, highlight=False)

    if show_seed:
        console.print()
        console.print(f"[dim]Seed:[/dim]        {escape(result.seed)}", highlight=False)
        console.print(f"[dim]Fingerprint:[/dim] {result.fingerprint}", highlight=False)


def print_plain(result: OmikujiResult, short: bool, show_seed: bool):
    sys.stdout.write(result.format_text(short, show_seed))


# === Argument Parsing ===
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hash-omikuji",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--year',
        type=int,
        default=datetime.now().year,
        help='Target year (defaults to current year)'
    )
    parser.add_argument(
        '-s', '--seed',
        help='Custom seed string (defaults to username@hostname)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output as JSON'
    )
    parser.add_argument(
        '--short',
        action='store_true',
        help=f'Show only the top {SHORT_LIMIT} active luck scores'
    )
    parser.add_argument(
        '--show-seed',
        action='store_true',
        help='Show seed and fingerprint in output'
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Force execution even if not January 1st (a warning is shown)'
    )
    parser.add_argument(
        '--date',
        help='Override current date for testing (format: YYYY-MM-DD)'
    )
    parser.add_argument(
        '--art',
        choices=sorted(ART_STYLES),
        default='bars',
        help='Omikuji art style (default: bars)'
    )
    parser.add_argument(
        '--plain',
        action='store_true',
        help='Plain text output even on a terminal'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.year < 0:
        raise ValueError("Year must be a non-negative integer.")

    show_warning = check_gate(args.force, args.date)
    if show_warning and not args.json:
        err_console.print(FORCE_WARNING, style="yellow", markup=False, highlight=False)

    seed = args.seed if args.seed is not None else default_seed()
    logger.debug("Drawing slip for year %s (art style %s)", args.year, args.art)
    result = OmikujiResult.generate(args.year, seed, args.art)

    if args.json:
        print(result.format_json())
    elif args.plain or not console.is_terminal:
        print_plain(result, args.short, args.show_seed)
    else:
        print_rich(result, args.short, args.show_seed)
    return 0


def main():
    """Main entry point."""
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\n\nOmikuji canceled.")
        sys.exit(0)
    except GateError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
