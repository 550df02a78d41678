"""shotgrade: Photo quality assessment."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    from shotgrade.ingest import IMAGE_EXTENSIONS
    from shotgrade.ui import configure_logging

    parser = argparse.ArgumentParser(
        prog="shotgrade",
        description="Photo quality assessment.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a single image")
    analyze_parser.add_argument("image", type=Path, help="JPEG or PNG file")
    analyze_parser.add_argument("--json", type=Path, default=None, help="Write JSON report")
    analyze_parser.add_argument("--text", type=Path, default=None, help="Write text report")
    analyze_parser.add_argument(
        "--parallel", action="store_true", help="Run analysis passes on threads"
    )
    analyze_parser.add_argument(
        "--max-dim", type=int, default=None, help="Downscale longest side to N pixels"
    )
    analyze_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show detailed measurements"
    )

    # batch command
    batch_parser = subparsers.add_parser(
        "batch", help="Analyze every image in a directory and rank them"
    )
    batch_parser.add_argument("directory", type=Path, help="Directory to scan")
    batch_parser.add_argument(
        "--ext",
        default=",".join(sorted(IMAGE_EXTENSIONS)),
        help=f"File extensions, comma-separated (default: {','.join(sorted(IMAGE_EXTENSIONS))})",
    )
    batch_parser.add_argument(
        "--workers", type=int, default=None, help="Worker processes (default: CPUs - 1)"
    )
    batch_parser.add_argument(
        "--max-dim", type=int, default=None, help="Downscale longest side to N pixels"
    )
    batch_parser.add_argument("--out", type=Path, default=None, help="Write ranking file")
    batch_parser.add_argument(
        "--top", type=int, default=10, help="Show top N images (default: 10)"
    )
    batch_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.max_dim is not None and args.max_dim < 1:
        print("Error: --max-dim must be >= 1", file=sys.stderr)
        return 1

    configure_logging(args.verbose)

    if args.command == "analyze":
        return cmd_analyze(
            args.image, args.json, args.text, args.parallel, args.max_dim, args.verbose
        )
    if args.command == "batch":
        return cmd_batch(
            args.directory, args.ext, args.workers, args.max_dim, args.out, args.top
        )

    parser.print_help()
    return 1


def cmd_analyze(
    image: Path,
    json_out: Path | None,
    text_out: Path | None,
    parallel: bool,
    max_dim: int | None,
    verbose: bool,
) -> int:
    """Analyze one image and display the report."""
    from shotgrade.export import export_json, export_text
    from shotgrade.ingest import load_image
    from shotgrade.scoring import ShotgradeError, analyze
    from shotgrade.ui import render_report

    if not image.is_file():
        print(f"Error: {image} is not a file", file=sys.stderr)
        return 1

    try:
        buffer = load_image(image, max_dim=max_dim)
        report = analyze(buffer, parallel=parallel)
    except (ShotgradeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    render_report(report, verbose=verbose)

    if json_out:
        export_json(report, json_out, source=image.resolve())
        print(f"Wrote JSON report to {json_out}")
    if text_out:
        export_text(report, text_out, source=image.resolve())
        print(f"Wrote text report to {text_out}")
    return 0


def cmd_batch(
    directory: Path,
    ext: str,
    workers: int | None,
    max_dim: int | None,
    out: Path | None,
    top: int,
) -> int:
    """Analyze a directory of images in parallel and rank them."""
    from shotgrade.export import export_ranking
    from shotgrade.ingest import find_image_files, parse_extensions
    from shotgrade.parallel import analyze_files_parallel, get_default_workers
    from shotgrade.scoring import AnalysisReport
    from shotgrade.ui import create_progress

    if not directory.is_dir():
        print(f"Error: {directory} is not a directory", file=sys.stderr)
        return 1

    files = find_image_files(directory, parse_extensions(ext))
    if not files:
        print("No images found", file=sys.stderr)
        return 1

    results: list[tuple[str, AnalysisReport]] = []
    failed = 0

    with create_progress() as progress:
        task = progress.add_task("[cyan]Analyzing images...", total=len(files))
        for result in analyze_files_parallel(
            files, workers=workers or get_default_workers(), max_dim=max_dim
        ):
            if result.success and result.report is not None:
                results.append((result.path, result.report))
            else:
                failed += 1
            progress.advance(task)

    results.sort(key=lambda x: x[1].overall_score, reverse=True)

    print(f"{'Rank':<5} {'Score':<7} {'Type':<10} {'Exp':<5} {'Clar':<5} {'Col':<5} {'Comp':<5} {'File'}")
    print("-" * 80)
    for i, (path, report) in enumerate(results[:top], 1):
        m = report.measurements
        print(
            f"{i:<5} {report.overall_score:>5.2f}  {report.photo_type.name.value:<10} "
            f"{m.exposure.exposure_score:>4.1f}  {m.clarity.clarity_score:>4.1f}  "
            f"{m.color.color_score:>4.1f}  {m.composition.composition_score:>4.1f}  "
            f"{Path(path).name}"
        )

    print()
    print(f"Top {min(top, len(results))} of {len(results)} analyzed images")
    if failed:
        logger.warning("%d file(s) could not be analyzed", failed)

    if out:
        export_ranking(results, out, source_dir=directory)
        print(f"Wrote ranking to {out}")

    return 0 if results else 1


if __name__ == "__main__":
    sys.exit(main())
