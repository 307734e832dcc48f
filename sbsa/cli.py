#!/usr/bin/env python3
"""
sbsa — command-line access to the addressing core and the field sampler.

    sbsa encode 1 2 3 4 --bounds 4 5 6 7        -> 549
    sbsa decode 549 --bounds 4 5 6 7            -> 1 2 3 4
    sbsa quantize 0.26 1.9 --step 0.5 --bounds 8 8
    sbsa sample 549 --time 0.25 --config field.json
    sbsa sample --range 0 16 --time 0.25 --bounds 4 4
    sbsa run --config field.json --label demo --steps 10 --dt 0.1

Exit status: 0 on success, 2 on a domain error (message on stderr).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sbsa import __version__
from sbsa.common.errors import DomainError
from sbsa.common.paths import default_store
from sbsa.core.address import DEFAULT_BOUNDS, decode, encode
from sbsa.core.hypercube import Hypercube
from sbsa.field.config import FieldConfig, load_config
from sbsa.field.sampler import sample, sample_range
from sbsa.field.stepper import Stepper, StepperConfig

log = logging.getLogger("sbsa")

EXIT_DOMAIN = 2
EXIT_IO = 1


def _field_config(args) -> FieldConfig:
    """Config file if given; --bounds overrides its bounds (and dimensions)."""
    cfg = load_config(Path(args.config)) if getattr(args, "config", None) else FieldConfig()
    if getattr(args, "bounds", None):
        bounds = tuple(args.bounds)
        steps = cfg.quantization_step
        if len(steps) != len(bounds):
            steps = (steps[0],) * len(bounds)
        cfg = FieldConfig(dimensions=len(bounds), bounds=bounds,
                          quantization_step=steps, wave_params=cfg.wave_params)
    return cfg


def _cmd_encode(args) -> int:
    print(encode(args.coords, args.bounds or DEFAULT_BOUNDS))
    return 0


def _cmd_decode(args) -> int:
    print(" ".join(str(c) for c in decode(args.address, args.bounds or DEFAULT_BOUNDS)))
    return 0


def _cmd_quantize(args) -> int:
    cfg = _field_config(args)
    steps = tuple(args.step) if args.step else cfg.quantization_step
    if len(steps) == 1:
        steps = steps * len(cfg.bounds)
    cube = Hypercube(bounds=cfg.bounds, steps=steps)
    address, coords = cube.locate(args.values)
    print(f"coords: {' '.join(str(c) for c in coords)}")
    print(f"address: {address}")
    return 0


def _cmd_sample(args) -> int:
    cfg = _field_config(args)
    if args.range is not None:
        start, stop = args.range
        addresses, values = sample_range(cfg.bounds, args.time, cfg.wave_params, start, stop)
        for a, v in zip(addresses, values):
            print(f"{int(a)} {float(v):.17g}")
        return 0
    if args.address is None:
        raise DomainError("sample needs an ADDRESS or --range START STOP")
    print(f"{args.address} {sample(args.address, cfg.bounds, args.time, cfg.wave_params):.17g}")
    return 0


def _cmd_run(args) -> int:
    cfg = _field_config(args)
    start, stop = args.range if args.range is not None else (0, None)
    step_cfg = StepperConfig(dt=args.dt, steps=args.steps, stride_frames=args.stride,
                             start=start, stop=stop)
    store = Path(args.store) if args.store else default_store()
    written = Stepper(cfg, step_cfg).run(
        store=store,
        label=args.label,
        t0=args.t0,
        header_stats=args.stats,
    )
    print(f"Wrote {written} frame(s) under {store / args.label}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sbsa", description="Size-Based Spatial Addressing tools")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    def bounds_opt(p):
        p.add_argument("--bounds", type=int, nargs="+", help="per-axis sizes (default 10000 x4)")

    p = sub.add_parser("encode", help="coordinates -> address")
    p.add_argument("coords", type=int, nargs="+")
    bounds_opt(p)
    p.set_defaults(func=_cmd_encode)

    p = sub.add_parser("decode", help="address -> coordinates")
    p.add_argument("address", type=int)
    bounds_opt(p)
    p.set_defaults(func=_cmd_decode)

    p = sub.add_parser("quantize", help="raw coordinates -> quantized coordinates + address")
    p.add_argument("values", type=float, nargs="+")
    p.add_argument("--step", type=float, nargs="+", help="one step, or one per axis")
    p.add_argument("--config", help="field config JSON")
    bounds_opt(p)
    p.set_defaults(func=_cmd_quantize)

    p = sub.add_parser("sample", help="field value(s) at a time")
    p.add_argument("address", type=int, nargs="?")
    p.add_argument("--range", type=int, nargs=2, metavar=("START", "STOP"))
    p.add_argument("--time", type=float, required=True)
    p.add_argument("--config", help="field config JSON")
    bounds_opt(p)
    p.set_defaults(func=_cmd_sample)

    p = sub.add_parser("run", help="time-stepped run, frames written to the store")
    p.add_argument("--config", help="field config JSON")
    p.add_argument("--label", required=True, help="run label, e.g. demo/001")
    p.add_argument("--steps", type=int, default=1)
    p.add_argument("--dt", type=float, default=0.05)
    p.add_argument("--t0", type=float, default=0.0)
    p.add_argument("--stride", type=int, default=1, help="save every N-th step")
    p.add_argument("--range", type=int, nargs=2, metavar=("START", "STOP"))
    p.add_argument("--store", help="store root (default $SBSA_STORE or /data/sbsa)")
    p.add_argument("--stats", action="store_true", help="write quick stats into frame_info.json")
    bounds_opt(p)
    p.set_defaults(func=_cmd_run)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.debug("command %s", args.command)
    try:
        return args.func(args)
    except DomainError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_DOMAIN
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_IO


if __name__ == "__main__":
    sys.exit(main())
