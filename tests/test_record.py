"""Tests for parsing and rendering variant records."""

import unittest

from varset.exceptions import MalformedLineError
from varset.genome.info import GenomeInfo
from varset.genome.locus import UNRESOLVED, Locus
from varset.variants.record import VariantRecord, is_multi_base


class TestVariantRecord(unittest.TestCase):
    def setUp(self):
        self.genome = GenomeInfo(["chr2", "chr1", "chrX"], [2000, 1000, 500])

    def test_parse_ten_columns(self):
        line = "chr1\t100\trs1\tA\tT\t40\tPASS\tDP=10\tGT:DP\t0/1:10"
        record = VariantRecord.from_line(line, self.genome)
        self.assertEqual(record.chr_index, 1)
        self.assertEqual(record.position, 100)
        self.assertEqual(record.id, "rs1")
        self.assertEqual(record.ref, "A")
        self.assertEqual(record.alt, "T")
        self.assertEqual(record.quality, "40")
        self.assertEqual(record.filter, "PASS")
        self.assertEqual(record.info, "DP=10")
        self.assertEqual(record.format, "GT:DP")
        self.assertEqual(record.genotype, "0/1:10")
        self.assertEqual(record.locus, Locus(1, 100))

    def test_round_trip_preserves_columns(self):
        lines = [
            "chr1\t100\trs1\tA\tT\t40\tPASS\tDP=10\tGT:DP\t0/1:10",
            "chrX\t7\t.\tAT\tTG,TC\t.\t.\t.",
        ]
        for line in lines:
            record = VariantRecord.from_line(line + "\n", self.genome)
            self.assertEqual(record.to_line(self.genome), line + "\n")

    def test_eight_columns_when_sample_fields_incomplete(self):
        line = "chr1\t100\trs1\tA\tT\t40\tPASS\tDP=10\tGT\t"
        record = VariantRecord.from_line(line, self.genome)
        self.assertEqual(record.to_line(self.genome).count("\t"), 7)

    def test_unresolved_chromosome_keeps_its_name(self):
        line = "chrUn_1\t5\t.\tC\tG\t.\t.\t."
        record = VariantRecord.from_line(line, self.genome)
        self.assertEqual(record.chr_index, UNRESOLVED)
        self.assertEqual(record.to_line(self.genome), line + "\n")

    def test_wrong_column_count_is_malformed(self):
        for line in ("chr1\t100", "chr1\t100\t.\tA\tT\t.\t.\t.\tGT", "a\tb\tc\td\te\tf\tg\th\ti\tj\tk"):
            with self.assertRaises(MalformedLineError):
                VariantRecord.from_line(line, self.genome)

    def test_non_integer_position_is_malformed(self):
        with self.assertRaises(MalformedLineError) as ctx:
            VariantRecord.from_line("chr1\tabc\t.\tA\tT\t.\t.\t.", self.genome)
        self.assertIn("abc", ctx.exception.reason)

    def test_multi_base_classification(self):
        self.assertFalse(is_multi_base("A", "T"))
        self.assertFalse(is_multi_base("A", "T,G"))
        self.assertTrue(is_multi_base("AT", "A"))
        self.assertTrue(is_multi_base("A", "T,GG"))
        record = VariantRecord(chr_index=0, position=1, ref="A", alt="AT")
        self.assertTrue(record.is_multi_base)

    def test_add_filter(self):
        record = VariantRecord(chr_index=0, position=1, ref="A", alt="T")
        record.add_filter("separated")
        self.assertEqual(record.filter, "separated")
        record.filter = "PASS"
        record.add_filter("separated")
        self.assertEqual(record.filter, "PASS;separated")
        record.add_filter("separated")
        self.assertEqual(record.filter, "PASS;separated")

    def test_copy_is_independent(self):
        record = VariantRecord(chr_index=0, position=1, ref="A", alt="T")
        clone = record.copy()
        clone.alt = "G"
        self.assertEqual(record.alt, "T")


if __name__ == "__main__":
    unittest.main()
