"""Pytest configuration and fixtures."""

import sys
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from varset.genome.info import GenomeInfo  # noqa: E402

# Deliberately not in natural or lexical order; this order must drive sorting.
CHROMOSOMES = [("chr2", 2000), ("chr1", 1000), ("chrX", 500)]

SAMPLE_VCF_LINES = [
    "##fileformat=VCFv4.2",
    '##FILTER=<ID=q10,Description="Quality below 10">',
    '##FILTER=<ID=q10,Description="Quality below 10">',
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE",
    "chr1\t200\trs2\tG\tA\t50\tPASS\tDP=12\tGT\t0/1",
    "chr2\t150\t.\tC\tT\t30\tPASS\tDP=8\tGT\t1/1",
    "chr1\t100\trs1\tA\tT\t40\tPASS\tDP=10\tGT\t0/1",
    "chrX\t10\t.\tAT\tTG\t20\tPASS\tDP=5\tGT\t0/1",
    "chr1\t300\t.\tACG\tA\t60\tq10\tDP=3\tGT\t0/1",
    "chr2\t50\t.\tT\tC,G\t25\t.\tDP=7\tGT\t1/2",
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def genome() -> GenomeInfo:
    """Small three-chromosome genome in a custom order."""
    names, lengths = zip(*CHROMOSOMES)
    return GenomeInfo(list(names), list(lengths))


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_VCF_LINES)


@pytest.fixture
def sample_vcf(temp_dir: Path) -> Path:
    """Write the sample table to a plain text file."""
    path = temp_dir / "variants.vcf"
    path.write_text("\n".join(SAMPLE_VCF_LINES) + "\n")
    return path


@pytest.fixture
def sample_fai(temp_dir: Path) -> Path:
    """samtools-style index for the test genome."""
    path = temp_dir / "genome.fa.fai"
    rows = [f"{name}\t{length}\t0\t60\t61" for name, length in CHROMOSOMES]
    path.write_text("\n".join(rows) + "\n")
    return path
