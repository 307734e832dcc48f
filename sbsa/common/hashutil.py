import hashlib
import json
from pathlib import Path

import numpy as np


def sha256_file(path: Path, chunk_size: int = 2**20) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def _json_default(o):
    """Fallback serializer for hash_json: numpy scalars/arrays, Path, tuples-of-odd-things."""
    if isinstance(o, np.integer):
        return int(o)
    if isinstance(o, np.floating):
        return float(o)
    if isinstance(o, np.ndarray):
        return o.tolist()
    if isinstance(o, Path):
        return str(o)
    # final fallback: string form
    return str(o)


def hash_json(obj, *, sort_keys: bool = True, separators=(",", ":"), encoding: str = "utf-8") -> str:
    """
    Stable SHA-256 over a canonical JSON representation of `obj`.
    - sort_keys=True for deterministic key order
    - separators without spaces to avoid whitespace variance
    - ensure_ascii=False so unicode stays stable; encoded to `encoding`
    """
    s = json.dumps(
        obj,
        sort_keys=sort_keys,
        separators=separators,
        ensure_ascii=False,
        default=_json_default,
    )
    return hashlib.sha256(s.encode(encoding)).hexdigest()
