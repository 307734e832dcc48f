import os
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_STORE = Path("/data/sbsa")


def default_store() -> Path:
    """Store root; `SBSA_STORE` in the environment wins over the built-in default."""
    env = os.getenv("SBSA_STORE")
    if env:
        return Path(env)
    return DEFAULT_STORE


def run_root(store: Path, label: str) -> Path:
    """
    Canonical run root. `label` may already contain subdirectories
    (e.g. "demo/20260101_0815").
    """
    return store / label


def frame_dir(store: Path, label: str, frame: int) -> Path:
    return run_root(store, label) / f"Frame_{frame:04d}"


def ensure_dirs(store: Optional[Path], label: str, frame: int) -> Tuple[Path, Path]:
    store = Path(store) if store is not None else default_store()
    rroot = run_root(store, label)
    fdir = frame_dir(store, label, frame)
    rroot.mkdir(parents=True, exist_ok=True)
    fdir.mkdir(parents=True, exist_ok=True)
    return rroot, fdir
