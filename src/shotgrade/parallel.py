"""Parallel processing utilities for shotgrade.

Threads run the four analysis passes over one shared read-only buffer.
Processes handle batches of files, one load+analyze per worker call.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from shotgrade.scoring.clarity import compute_clarity
from shotgrade.scoring.color import compute_color
from shotgrade.scoring.composition import compute_composition
from shotgrade.scoring.exposure import compute_exposure
from shotgrade.scoring.types import AnalysisReport, Measurements, PixelBuffer
from shotgrade.scoring.utils import GRID_STEP, SAMPLE_STRIDE

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Result of analyzing a single file."""

    path: str
    success: bool
    report: AnalysisReport | None = None
    error: str | None = None


def run_analyzers(
    buffer: PixelBuffer,
    workers: int | None = None,
    stride: int = SAMPLE_STRIDE,
    step: int = GRID_STEP,
) -> Measurements:
    """Run the four passes concurrently and wait for all of them.

    The buffer is immutable, so the passes share it without locking.
    Any exception from a pass propagates to the caller.
    """
    workers = max(1, min(workers or 4, 4))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        exposure = executor.submit(compute_exposure, buffer, stride)
        clarity = executor.submit(compute_clarity, buffer, step)
        color = executor.submit(compute_color, buffer, stride)
        composition = executor.submit(compute_composition, buffer, step)

        return Measurements(
            exposure=exposure.result(),
            clarity=clarity.result(),
            color=color.result(),
            composition=composition.result(),
        )


def _process_single_file(path_str: str, max_dim: int | None) -> FileResult:
    """Load and analyze one image file (runs in worker process).

    Args:
        path_str: Absolute path to the image.
        max_dim: Downscale so neither side exceeds this, if given.

    Returns:
        FileResult with the report, or the error message on failure.
    """
    from shotgrade.ingest import load_image
    from shotgrade.scoring import analyze

    try:
        buffer = load_image(Path(path_str), max_dim=max_dim)
        return FileResult(path=path_str, success=True, report=analyze(buffer))
    except Exception as e:
        return FileResult(path=path_str, success=False, error=str(e))


def analyze_files_parallel(
    files: list[Path],
    workers: int | None = None,
    max_dim: int | None = None,
) -> Iterator[FileResult]:
    """Analyze multiple files in parallel.

    Args:
        files: Image paths to analyze.
        workers: Number of worker processes (default: CPU count).
        max_dim: Optional downscale bound passed to the loader.

    Yields:
        FileResult for each file, in completion order.
    """
    if not files:
        return

    if workers is None:
        workers = os.cpu_count() or 4

    # Limit workers to reasonable bounds
    workers = max(1, min(workers, 16, len(files)))

    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_process_single_file, str(path.resolve()), max_dim): path
            for path in files
        }

        for future in as_completed(futures):
            result = future.result()
            if not result.success:
                logger.warning("Failed to analyze %s: %s", result.path, result.error)
            yield result


def get_default_workers() -> int:
    """Get default number of workers based on CPU count."""
    cpu_count = os.cpu_count() or 4
    # Use N-1 CPUs to leave headroom, minimum 1
    return max(1, cpu_count - 1)
