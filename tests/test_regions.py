"""Tests for per-chromosome bitsets and run-length track output."""

import io
import random

import numpy as np
import pytest

from varset.genome.info import GenomeInfo
from varset.io.output import RleTrackWriter
from varset.io.rle import write_rle
from varset.regions.bitset import GenomeBitSet
from varset.variants.store import SortedVariantStore


class TestGenomeBitSet:
    def test_vectors_sized_by_genome(self, genome):
        bitset = GenomeBitSet(genome)
        assert bitset.count("chr2") == 0
        assert len(bitset.get_range("chrX", 0, 10_000)) == 500

    def test_set_and_get(self, genome):
        bitset = GenomeBitSet(genome)
        bitset.set("chr1", 10, 20)
        assert bitset.get("chr1", 10)
        assert bitset.get(1, 19)
        assert not bitset.get("chr1", 20)
        assert not bitset.get("chr1", 9)
        assert bitset.count("chr1") == 10

        bitset.set("chr1", 15, 17, value=False)
        assert bitset.count("chr1") == 8

    def test_ranges_are_clipped(self, genome):
        bitset = GenomeBitSet(genome)
        bitset.set("chrX", -5, 3)
        bitset.set("chrX", 498, 900)
        assert bitset.count("chrX") == 5
        assert not bitset.get("chrX", 500)
        assert not bitset.get("chrX", -1)

    def test_unknown_chromosome_is_ignored(self, genome):
        bitset = GenomeBitSet(genome)
        bitset.set("chrUn", 0, 10)
        bitset.set(-1, 0, 10)
        assert not bitset.get("chrUn", 1)
        assert bitset.get_range("chrUn", 0, 10) is None
        assert bitset.count(7) == 0

    def test_clear(self, genome):
        bitset = GenomeBitSet(genome)
        bitset.set("chr2", 0, 2000)
        bitset.clear("chr2")
        assert bitset.count("chr2") == 0

    def test_get_range_is_a_copy(self, genome):
        bitset = GenomeBitSet(genome)
        view = bitset.get_range("chr1", 0, 5)
        view[:] = True
        assert bitset.count("chr1") == 0

    def test_packed_storage(self):
        bitset = GenomeBitSet(GenomeInfo(["c", "d"], [8_000_000, 13]))
        assert bitset.nbytes() == 1_000_000 + 2

    def test_matches_brute_force_list(self):
        rng = random.Random(3)
        length = 203
        bitset = GenomeBitSet(GenomeInfo(["c"], [length]))
        expected = [False] * length
        for _ in range(300):
            start = rng.randint(-10, length + 10)
            end = start + rng.randint(-3, 40)
            value = rng.random() < 0.6
            bitset.set("c", start, end, value=value)
            for i in range(max(start, 0), min(end, length)):
                expected[i] = value

            assert bitset.count("c") == sum(expected)
            query_start = rng.randint(-5, length)
            query_end = query_start + rng.randint(0, 70)
            lo, hi = max(query_start, 0), min(max(query_end, 0), length)
            assert bitset.get_range("c", query_start, query_end).tolist() == expected[lo:hi]
        assert [bitset.get("c", i) for i in range(length)] == expected
        assert bitset.get_range("c", 0, length).dtype == bool

    def test_from_store_marks_variant_positions(self, genome, sample_lines):
        store = SortedVariantStore.from_lines(sample_lines, genome)
        bitset = GenomeBitSet.from_store(store)
        assert bitset.get("chr1", 99)
        assert bitset.get("chr1", 199)
        assert not bitset.get("chr1", 100)
        assert bitset.count("chr1") == 2
        assert bitset.count("chr2") == 2


class TestWriteRle:
    def test_runs(self):
        stream = io.StringIO()
        assert write_rle(stream, [1, 1, 2, 2, 2, 1]) == 3
        assert stream.getvalue() == "2\t1\n3\t2\n1\t1\n"

    def test_booleans_with_header(self):
        stream = io.StringIO()
        write_rle(stream, np.array([False, False, True]), header=True, value_label="chr1")
        assert stream.getvalue() == "length\tchr1\n2\t0\n1\t1\n"

    def test_single_value(self):
        stream = io.StringIO()
        assert write_rle(stream, [7]) == 1
        assert stream.getvalue() == "1\t7\n"

    def test_empty_writes_nothing(self):
        stream = io.StringIO()
        assert write_rle(stream, [], header=True) == 0
        assert stream.getvalue() == ""

    def test_float_format(self):
        stream = io.StringIO()
        write_rle(stream, [0.5, 0.5, 0.25], float_format=lambda v: f"{v:.1f}")
        assert stream.getvalue() == "2\t0.5\n1\t0.2\n"

    @pytest.mark.parametrize("size", [1, 2, 50])
    def test_run_lengths_cover_input(self, size):
        rng = np.random.default_rng(size)
        data = rng.integers(0, 2, size=size)
        stream = io.StringIO()
        write_rle(stream, data)
        lengths = [int(line.split("\t")[0]) for line in stream.getvalue().splitlines()]
        assert sum(lengths) == size


def test_track_writer_to_file(temp_dir):
    out = temp_dir / "track.txt"
    with RleTrackWriter(out) as writer:
        writer.write_track(np.array([True, True, False]), value_label="chr2")
    assert out.read_text() == "length\tchr2\n2\t1\n1\t0\n"
