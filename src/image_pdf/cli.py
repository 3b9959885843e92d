"""Command-line interface for image-pdf."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from . import generate_pdf
from .settings import FitMode, Orientation, PageSettings, PageSize
from .validation import validate_images


def _format_size(num_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    value = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(value) < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-pdf",
        description="Combine images into a single PDF, one image per page.",
    )
    parser.add_argument(
        "images",
        nargs="+",
        type=Path,
        help="Image files (png, jpg, jpeg, webp, bmp, gif, tiff), in page order",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Output PDF path",
    )
    parser.add_argument(
        "--page-size",
        choices=[size.value for size in PageSize],
        default=PageSize.A4.value,
        help="Page size (default: A4). Custom requires --width and --height",
    )
    parser.add_argument(
        "--width",
        type=float,
        default=None,
        help="Custom page width in millimeters",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=None,
        help="Custom page height in millimeters",
    )
    parser.add_argument(
        "--orientation",
        choices=[o.value for o in Orientation],
        default=Orientation.PORTRAIT.value,
        help="Page orientation (default: Portrait)",
    )
    parser.add_argument(
        "--fit",
        choices=[mode.value for mode in FitMode],
        default=FitMode.FIT.value,
        help=(
            "Fit: whole image visible; Fill: cover the page, cropping the"
            " overflow; Original: no scaling (default: Fit)"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show per-page debug logging",
    )
    return parser


def _configure_logging(console: Console, *, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _run(args: argparse.Namespace, console: Console) -> int:
    start_time = time.monotonic()

    settings = PageSettings(
        page_size=PageSize(args.page_size),
        custom_width_mm=args.width,
        custom_height_mm=args.height,
        orientation=Orientation(args.orientation),
        fit_mode=FitMode(args.fit),
    )

    image_paths = [str(p) for p in args.images]
    validation = validate_images(image_paths)
    if validation.invalid:
        for item in validation.invalid:
            console.print(f"  [red]- {item.path}:[/red] {item.error}")
        console.print(
            f"[bold red]Error:[/bold red] {len(validation.invalid)}"
            f"/{len(image_paths)} images are invalid"
        )
        return 1

    with console.status(f"[bold blue]Assembling {len(image_paths)} pages..."):
        result = generate_pdf(image_paths, args.output, settings)

    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        return 1

    elapsed = time.monotonic() - start_time
    summary_lines = [
        f"[bold]Pages:[/bold] {result.page_count}",
        f"[bold]Page size:[/bold] {settings.page_size.value}"
        f" {settings.orientation.value}, {settings.fit_mode.value}",
        f"[bold]PDF size:[/bold] {_format_size(result.size_bytes)}",
        f"[bold]Output:[/bold] {result.output_path}",
    ]
    console.print(Panel(
        "\n".join(summary_lines),
        title=f"[bold green]Done in {elapsed:.1f}s[/bold green]",
        border_style="green",
    ))
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``image-pdf`` CLI command."""
    console = Console(stderr=True)
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(console, verbose=args.verbose)

    try:
        exit_code = _run(args, console)
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")
        sys.exit(130)

    sys.exit(exit_code)
