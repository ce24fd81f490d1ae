"""Random file writer tests: sizes, signature placement and failure modes."""

from __future__ import annotations

import random
import tempfile
import unittest
from pathlib import Path

from fauxfs.writer import SIGNATURE, SIGNATURE_LENGTH, unit_paths, write_random_file


class WriteRandomFileTests(unittest.TestCase):
    def test_signature_constant_is_the_eicar_test_string(self) -> None:
        self.assertEqual(SIGNATURE_LENGTH, 68)
        self.assertTrue(SIGNATURE.startswith(b"X5O!P%@AP[4\\PZX54(P^)7CC)7}$EICAR"))
        self.assertTrue(SIGNATURE.endswith(b"-STANDARD-ANTIVIRUS-TEST-FILE!$H+H*"))

    def test_plain_files_stay_within_bounds(self) -> None:
        rng = random.Random(1234)
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out.bin"
            for _ in range(200):
                written = write_random_file(target, 10, rng=rng)
                self.assertGreaterEqual(written, 1)
                self.assertLessEqual(written, 10)
                self.assertEqual(target.stat().st_size, written)

    def test_max_size_one_always_writes_one_byte(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "one.bin"
            self.assertEqual(write_random_file(target, 1, rng=random.Random(0)), 1)
            self.assertEqual(target.stat().st_size, 1)

    def test_same_seed_produces_same_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "a.bin"
            second = Path(tmp) / "b.bin"
            write_random_file(first, 4096, rng=random.Random(99))
            write_random_file(second, 4096, rng=random.Random(99))
            self.assertEqual(first.read_bytes(), second.read_bytes())

    def test_signature_mode_pads_to_max_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "sig.bin"
            written = write_random_file(target, 500, use_signature=True, rng=random.Random(3))
            data = target.read_bytes()
            self.assertEqual(written, 500)
            self.assertEqual(len(data), 500)
            self.assertEqual(data[:SIGNATURE_LENGTH], SIGNATURE)

    def test_signature_mode_exact_length_has_no_padding(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "sig.bin"
            write_random_file(target, SIGNATURE_LENGTH, use_signature=True)
            self.assertEqual(target.read_bytes(), SIGNATURE)

    def test_signature_is_never_truncated_below_its_length(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "small.bin"
            written = write_random_file(target, 10, use_signature=True)
            self.assertEqual(written, SIGNATURE_LENGTH)
            self.assertEqual(target.read_bytes(), SIGNATURE)

    def test_existing_file_is_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "reuse.bin"
            target.write_bytes(b"x" * 1000)
            written = write_random_file(target, 5, rng=random.Random(5))
            self.assertEqual(target.stat().st_size, written)

    def test_missing_directory_raises_oserror(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                write_random_file(Path(tmp) / "missing" / "file.bin", 10)

    def test_non_positive_max_size_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ValueError):
                write_random_file(Path(tmp) / "zero.bin", 0)


class UnitPathsTests(unittest.TestCase):
    def test_names_follow_the_ordinal(self) -> None:
        subdir, file_path = unit_paths(Path("/data/run"), 12)
        self.assertEqual(subdir, Path("/data/run/dir_12"))
        self.assertEqual(file_path, Path("/data/run/dir_12/file_12.bin"))


if __name__ == "__main__":
    unittest.main()
