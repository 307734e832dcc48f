from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple
import json
import numpy as np

from sbsa.common.paths import ensure_dirs, frame_dir, default_store
from sbsa.common.hashutil import sha256_file

@dataclass
class HeaderOptions:
    write_stats: bool = False  # toggle tiny mean/min/max as quick health check

def _stats(a: np.ndarray) -> Dict[str, float]:
    if a.size == 0:
        return {"mean": 0.0, "min": 0.0, "max": 0.0, "nonfinite": 0}
    return {
        "mean": float(np.nanmean(a)),
        "min":  float(np.nanmin(a)),
        "max":  float(np.nanmax(a)),
        "nonfinite": int(np.sum(~np.isfinite(a)))
    }

def save_frame(store: Optional[Path],
               label: str,
               frame: int,
               *,
               addresses: np.ndarray,
               values: np.ndarray,
               step: int,
               time: float,
               bounds: Tuple[int, ...],
               config_hash: Optional[str] = None,
               header_opts: HeaderOptions = HeaderOptions()) -> Dict[str, str]:
    """
    Writes addresses.npy (int64), values.npy (float64) and a small frame_info.json.
    Returns dict of {name: path_str} for the written files.
    """
    if addresses.shape != values.shape:
        raise ValueError(f"addresses {addresses.shape} and values {values.shape} differ in shape")
    _, fdir = ensure_dirs(store, label, frame)
    files = {
        "addresses": str(fdir / "addresses.npy"),
        "values":    str(fdir / "values.npy"),
    }
    np.save(files["addresses"], addresses.astype(np.int64, copy=False))
    np.save(files["values"], values.astype(np.float64, copy=False))

    # Build header (provenance + optional quick stats)
    info = {
        "label": label,
        "frame": frame,
        "step": step,
        "time": time,
        "bounds": list(bounds),
        "cells": int(values.size),
        "address_min": int(addresses.min()) if addresses.size else None,
        "address_max": int(addresses.max()) if addresses.size else None,
        "config_hash": config_hash,
        "files": {
            "addresses": {"path": files["addresses"], "dtype": "int64"},
            "values":    {"path": files["values"], "dtype": "float64"},
        }
    }
    for meta in info["files"].values():
        p = Path(meta["path"])
        meta["bytes"] = p.stat().st_size
        meta["sha256"] = sha256_file(p)

    if header_opts.write_stats:
        info["quick_stats"] = {"values": _stats(values)}

    header_path = fdir / "frame_info.json"
    with header_path.open("w") as f:
        json.dump(info, f, indent=2)
    files["frame_info"] = str(header_path)

    return files

def load_frame(store: Optional[Path], label: str, frame: int) -> Tuple[np.ndarray, np.ndarray, Dict]:
    """Read one frame back: (addresses, values, frame_info)."""
    store = Path(store) if store is not None else default_store()
    fdir = frame_dir(store, label, frame)
    with (fdir / "frame_info.json").open("r") as f:
        info = json.load(f)
    addresses = np.load(fdir / "addresses.npy")
    values = np.load(fdir / "values.npy")
    return addresses, values, info
