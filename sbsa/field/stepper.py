# sbsa/field/stepper.py
"""
Time-stepped field run: sample the address range at t0 + n*dt and hand
each frame to a background writer thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Integral
from pathlib import Path
from queue import Queue
from threading import Thread
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from sbsa.common.errors import DomainError
from sbsa.common.hashutil import hash_json
from sbsa.core.address import capacity
from sbsa.field.config import FieldConfig, config_to_dict, validate_field_config
from sbsa.field.sampler import MAX_CELLS, sample_range
from sbsa.io.saver import HeaderOptions, save_frame

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepperConfig:
    dt: float = 0.05            # simulation time per step
    steps: int = 1              # number of steps after the initial frame
    stride_frames: int = 1      # save every N-th step
    start: int = 0              # first address sampled
    stop: Optional[int] = None  # one past last address (None = capacity)


class Stepper:
    """Samples a FieldConfig's address range over discrete time steps."""

    def __init__(self, cfg: FieldConfig, step_cfg: StepperConfig):
        validate_field_config(cfg)
        errs: List[str] = []
        if step_cfg.steps < 0:
            errs.append(f"steps must be >= 0 (got {step_cfg.steps})")
        if step_cfg.stride_frames <= 0:
            errs.append(f"stride_frames must be > 0 (got {step_cfg.stride_frames})")
        if not np.isfinite(step_cfg.dt):
            errs.append(f"dt must be finite (got {step_cfg.dt})")
        cap = capacity(cfg.bounds)
        start = step_cfg.start
        stop = cap if step_cfg.stop is None else step_cfg.stop
        if not all(isinstance(v, Integral) and not isinstance(v, bool) for v in (start, stop)):
            errs.append(f"address range must be integers (got start={start!r}, stop={stop!r})")
        elif not 0 <= start <= stop <= cap:
            errs.append(f"address range [{start}, {stop}) not within [0, {cap}]")
        elif stop - start > MAX_CELLS:
            errs.append(
                f"address range [{start}, {stop}) exceeds {MAX_CELLS} cells per frame"
            )
        if errs:
            raise DomainError("; ".join(errs))
        self.cfg = cfg
        self.step_cfg = step_cfg
        self.config_hash = hash_json(config_to_dict(cfg))

    def iter_frames(self, t0: float = 0.0) -> Iterator[Tuple[int, float, np.ndarray, np.ndarray]]:
        """Yield (step, time, addresses, values) for step = 0..steps, in memory."""
        sc = self.step_cfg
        for step in range(sc.steps + 1):
            t = t0 + step * sc.dt
            addresses, values = sample_range(
                self.cfg.bounds, t, self.cfg.wave_params, sc.start, sc.stop
            )
            yield step, t, addresses, values

    def run(self, *,
            store: Optional[Path],
            label: str,
            t0: float = 0.0,
            save_first_frame: bool = True,
            header_stats: bool = False,
            on_frame_saved: Optional[Callable[[int, int], None]] = None
            ) -> int:
        """
        Sample and write frames. Returns the number of frames written.
        A failure in the writer thread is re-raised here after the run stops.
        """
        sc = self.step_cfg
        written = 0
        writer_error: List[BaseException] = []

        # Asynchronous writer: queue frames for background saving
        write_queue: "Queue[Optional[tuple]]" = Queue(maxsize=2)

        def _writer():
            nonlocal written
            while True:
                item = write_queue.get()
                if item is None:
                    write_queue.task_done()
                    break
                if writer_error:
                    # drain without writing once a save has failed
                    write_queue.task_done()
                    continue
                frame_idx, step, t, addresses, values = item
                try:
                    save_frame(
                        store,
                        label,
                        frame_idx,
                        addresses=addresses,
                        values=values,
                        step=step,
                        time=t,
                        bounds=self.cfg.bounds,
                        config_hash=self.config_hash,
                        header_opts=HeaderOptions(write_stats=header_stats),
                    )
                    written += 1
                    if on_frame_saved is not None:
                        on_frame_saved(frame_idx, step)
                except Exception as e:
                    log.error("writer: frame %d of %s failed: %s", frame_idx, label, e)
                    writer_error.append(e)
                write_queue.task_done()

        writer_thread = Thread(target=_writer, daemon=True)
        writer_thread.start()

        frame = 0
        try:
            for step, t, addresses, values in self.iter_frames(t0):
                if writer_error:
                    break
                if step == 0 and not save_first_frame:
                    continue
                if step % sc.stride_frames != 0:
                    continue
                log.debug("run %s: step %d t=%.6g -> frame %d (%d cells)",
                          label, step, t, frame, values.size)
                write_queue.put((frame, step, t, addresses, values))
                frame += 1
        finally:
            # Finish writer thread
            write_queue.put(None)
            writer_thread.join()

        if writer_error:
            raise writer_error[0]
        log.info("run %s: wrote %d frame(s), config %s", label, written, self.config_hash[:12])
        return written
