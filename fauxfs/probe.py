import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional


class ProbeError(RuntimeError):
    """Raised when the inode usage query fails or returns unexpected output."""


class InodeUsageProvider:
    """Abstract source of the used-inode count for a filesystem."""

    def used_inodes(self, path: Path) -> int:
        raise NotImplementedError


class DfInodeUsageProvider(InodeUsageProvider):
    """Reads the ``IUsed`` column of ``df -i`` (POSIX hosts)."""

    def __init__(self, df_executable: Optional[str] = None) -> None:
        self.df_exec = df_executable or "df"

    def _build_command(self, path: Path) -> List[str]:
        # -P keeps each filesystem on one line even with long device names.
        return [self.df_exec, "-iP", str(path)]

    def used_inodes(self, path: Path) -> int:
        full_cmd = self._build_command(path)
        try:
            completed = subprocess.run(full_cmd, capture_output=True, text=False)
        except FileNotFoundError as exc:
            raise ProbeError(f"Executable not found: {full_cmd[0]}") from exc
        except OSError as exc:
            raise ProbeError(f"Failed to run {' '.join(shlex.quote(x) for x in full_cmd)}: {exc}") from exc

        if completed.returncode != 0:
            raise ProbeError(
                f"Command failed with code {completed.returncode}: {' '.join(shlex.quote(x) for x in full_cmd)}\n"
                f"STDERR:\n{_decode_bytes(completed.stderr)}"
            )
        return parse_df_output(_decode_bytes(completed.stdout))


def _decode_bytes(b: Optional[bytes]) -> str:
    # Mount points are arbitrary bytes; only the numeric columns matter.
    if b is None:
        return ""
    return b.decode("utf-8", errors="replace")


class StaticInodeUsageProvider(InodeUsageProvider):
    def __init__(self, value: int) -> None:
        self.value = value

    def used_inodes(self, path: Path) -> int:
        return self.value


class UnsupportedInodeUsageProvider(InodeUsageProvider):
    """Platforms without inode accounting report 0."""

    def used_inodes(self, path: Path) -> int:
        return 0


def parse_df_output(output: str) -> int:
    lines = output.split("\n")
    if len(lines) < 2:
        raise ProbeError(f"Unexpected df output (expected a header and a data line): {output!r}")
    fields = lines[1].split()
    if len(fields) < 3:
        raise ProbeError(f"Unexpected df data line (expected at least 3 fields): {lines[1]!r}")
    try:
        return int(fields[2])
    except ValueError as exc:
        raise ProbeError(f"Used inode field is not an integer: {fields[2]!r}") from exc


def create_provider(kind: str = "auto") -> InodeUsageProvider:
    kind = kind.lower()
    if kind == "auto":
        kind = "df" if os.name == "posix" else "none"
    if kind == "df":
        return DfInodeUsageProvider()
    if kind == "none":
        return UnsupportedInodeUsageProvider()
    raise ValueError(f"Unsupported inode provider: {kind}")


def query_inode_usage(path: Path, provider: Optional[InodeUsageProvider] = None) -> int:
    provider = provider or create_provider()
    return provider.used_inodes(Path(path))
