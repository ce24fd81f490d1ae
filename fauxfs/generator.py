"""Tree generation loop: one directory plus one random file per unit."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from tqdm import tqdm

from .logger import LOGGER_NAME
from .sizes import format_number, human_readable_size
from .writer import unit_paths, write_random_file


COMPLETION_MESSAGE = "File generation completed"
INODES_PER_UNIT = 2  # one for the directory, one for the file


@dataclass(frozen=True)
class GenerationRequest:
    base_path: Path
    count: int
    max_size: int
    use_signature: bool = False

    def validate(self) -> None:
        if self.count < 1:
            raise ValueError(f"count must be >= 1, got {self.count}")
        if self.max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {self.max_size}")


@dataclass(frozen=True)
class GenerationResult:
    files_created: int
    total_bytes_written: int
    inode_estimate: int
    elapsed_seconds: float

    @property
    def average_size(self) -> float:
        if self.files_created == 0:
            return 0.0
        return self.total_bytes_written / self.files_created

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["average_size"] = self.average_size
        return data


class ProgressSink:
    """Observer notified once per finished unit and once at completion."""

    def advance(self, n: int = 1) -> None:
        raise NotImplementedError

    def finish(self, message: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullProgress(ProgressSink):
    def __init__(self) -> None:
        self.ticks = 0
        self.message: Optional[str] = None

    def advance(self, n: int = 1) -> None:
        self.ticks += n

    def finish(self, message: str) -> None:
        self.message = message


class TqdmProgress(ProgressSink):
    def __init__(self, total: int, desc: str = "Generating files and directories", **kwargs: Any) -> None:
        kwargs.setdefault("unit", "file")
        kwargs.setdefault("colour", "green")
        self.pbar = tqdm(total=total, desc=desc, **kwargs)

    def advance(self, n: int = 1) -> None:
        self.pbar.update(n)

    def finish(self, message: str) -> None:
        self.pbar.set_description(message)
        self.pbar.close()

    def close(self) -> None:
        self.pbar.close()


def generate_tree(
    request: GenerationRequest,
    *,
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressSink] = None,
    logger: Optional[logging.Logger] = None,
) -> GenerationResult:
    """Create ``request.count`` FileUnits under ``request.base_path``.

    The first ``OSError`` aborts the run; units already written stay on disk.
    """
    request.validate()
    rng = rng or random.Random()
    progress = progress or NullProgress()
    logger = logger or logging.getLogger(LOGGER_NAME)

    logger.info(
        "Generating %s units under %s (max size %s, signature=%s)",
        format_number(request.count),
        request.base_path,
        human_readable_size(request.max_size),
        request.use_signature,
    )
    total_size = 0
    start = time.monotonic()
    try:
        for i in range(request.count):
            subdir_path, file_path = unit_paths(request.base_path, i)
            subdir_path.mkdir(parents=True, exist_ok=True)
            total_size += write_random_file(
                file_path,
                request.max_size,
                use_signature=request.use_signature,
                rng=rng,
            )
            progress.advance()
    except OSError:
        progress.close()
        logger.info("Generation aborted after %d of %d units", i, request.count)
        raise
    elapsed = time.monotonic() - start

    progress.finish(COMPLETION_MESSAGE)
    result = GenerationResult(
        files_created=request.count,
        total_bytes_written=total_size,
        inode_estimate=request.count * INODES_PER_UNIT,
        elapsed_seconds=elapsed,
    )
    logger.info("Generation completed in %.2f seconds: %s", elapsed, result.to_dict())
    return result
