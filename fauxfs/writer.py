"""Single-file writer used for every FileUnit of a generated tree."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Optional, Tuple


# EICAR anti-malware test string, kept split so scanners do not flag this module.
SIGNATURE = (
    b"X5O!P%@AP[4\\PZX54(P^)7CC)7}$"
    b"EICAR-STANDARD-ANTIVIRUS-TEST-FILE!$H+H*"
)
SIGNATURE_LENGTH = len(SIGNATURE)


def unit_paths(base_path: Path, index: int) -> Tuple[Path, Path]:
    subdir_path = Path(base_path) / f"dir_{index}"
    return subdir_path, subdir_path / f"file_{index}.bin"


def build_payload(max_size: int, use_signature: bool, rng: random.Random) -> bytes:
    if use_signature:
        # Never truncate the signature, even when max_size is smaller.
        padding = max(0, max_size - SIGNATURE_LENGTH)
        return SIGNATURE + rng.randbytes(padding)
    size = rng.randint(1, max_size)
    return rng.randbytes(size)


def write_random_file(
    path: Path,
    max_size: int,
    use_signature: bool = False,
    rng: Optional[random.Random] = None,
) -> int:
    """Create (or truncate) ``path`` with random content and return its length.

    Without a signature the length is uniform in ``[1, max_size]``. With one,
    the file is the signature followed by enough random padding to reach
    ``max_size``. Errors from the filesystem propagate unchanged.
    """
    if max_size < 1:
        raise ValueError(f"max_size must be >= 1, got {max_size}")
    data = build_payload(max_size, use_signature, rng or random.Random())
    with open(path, "wb") as fh:
        fh.write(data)
    return len(data)
