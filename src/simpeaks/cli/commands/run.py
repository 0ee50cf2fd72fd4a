"""Run command implementation."""

from __future__ import annotations

import queue
import threading
from pathlib import Path
from typing import Annotated

import numpy as np
import typer

from simpeaks.core.shared.events import EventType
from simpeaks.core.shared.exceptions import SimPeaksError
from simpeaks.io.config import load_config
from simpeaks.ui import (
    close_logging,
    error,
    log_dict,
    print_frame_statistics,
    print_summary,
    setup_logging,
    show_header,
    success,
    warning,
)

# Extra seconds allowed per frame beyond the acquire period
FRAME_TIMEOUT_MARGIN = 5.0


def run_command(
    config_path: Annotated[
        Path,
        typer.Argument(
            help="Configuration file (TOML)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    frames: Annotated[
        int,
        typer.Option("--frames", "-n", min=1, help="Number of frames to acquire"),
    ] = 5,
    period: Annotated[
        float | None,
        typer.Option("--period", "-p", min=0.0, help="Override the acquire period (seconds)"),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for the noise generator"),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write a log file (.json for JSON lines)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log to the console as well"),
    ] = False,
) -> None:
    """Acquire a fixed number of frames and print their statistics.

    Examples
    --------
      Acquire five frames:
        $ simpeaks run simpeaks.toml

      Twenty frames, as fast as possible, reproducible noise:
        $ simpeaks run simpeaks.toml -n 20 --period 0 --seed 1
    """
    from simpeaks.core.frames import QueueSink
    from simpeaks.services import SimPeaksDriver

    setup_logging(log_file, verbose)
    try:
        try:
            config = load_config(config_path)
        except SimPeaksError as e:
            error(str(e))
            raise typer.Exit(1) from e

        overrides: dict[str, object] = {"image_mode": "multiple", "num_images": frames, "array_callbacks": True}
        if period is not None:
            overrides["acquire_period"] = period
        acquisition = config.acquisition.model_copy(update=overrides)
        config = config.model_copy(update={"acquisition": acquisition})

        show_header(f"Acquiring {frames} frame(s) from {config.detector.name}")
        log_dict(
            {
                "config": config_path,
                "geometry": f"{config.detector.max_size_x} x {config.detector.max_size_y}",
                "data_type": config.detector.data_type,
                "peaks": len(config.peaks),
                "period": acquisition.acquire_period,
            }
        )

        rng = np.random.default_rng(seed) if seed is not None else None
        timeout = acquisition.acquire_period + FRAME_TIMEOUT_MARGIN
        collected = []
        with SimPeaksDriver(config, rng=rng) as driver:
            sink = QueueSink(driver.pool, maxsize=0)
            driver.set_sink(sink)
            finished = threading.Event()
            driver.events.subscribe(EventType.ACQUISITION_STOPPED, lambda _event: finished.set())
            failures = []
            driver.events.subscribe(EventType.ERROR, failures.append)
            driver.start()
            try:
                for _ in range(frames):
                    collected.append(sink.get(timeout=timeout))
            except queue.Empty:
                driver.stop()
                error(f"Timed out after {len(collected)} of {frames} frame(s)")
                raise typer.Exit(1) from None
            finished.wait(timeout)

            print_frame_statistics(collected, title=f"{config.detector.name} frames")
            print_summary(driver.status(), title="Status")
            for frame in collected:
                sink.done(frame)

        if failures:
            warning(f"{len(failures)} failed frame attempt(s) were retried, see the log for details")
        success(f"Acquired {len(collected)} frame(s)")
    finally:
        close_logging()
