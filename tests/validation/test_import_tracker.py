"""Tests for catalog_import/validation/import_tracker.py"""

from collections import Counter

from catalog_import.extraction import ExtractionResult, SkipReason
from catalog_import.validation import ImportTracker


def extraction(skipped=None, warnings=None):
    return ExtractionResult(skipped=Counter(skipped or {}), warnings=Counter(warnings or {}))


class TestRecordWindow:
    def test_accumulates_counts(self):
        tracker = ImportTracker()
        tracker.record_window(50, extraction({SkipReason.MISSING_SKU: 2}), 48)
        tracker.record_window(10, extraction({SkipReason.MISSING_SKU: 1, SkipReason.HEADER_ECHO: 1}), 8)
        assert tracker.windows == 2
        assert tracker.rows_read == 60
        assert tracker.imported == 56
        assert tracker.skipped == Counter({"missing_sku": 3, "header_echo": 1})
        assert tracker.skipped_total == 4

    def test_warnings(self):
        tracker = ImportTracker()
        tracker.record_window(5, extraction(warnings={"unparseable_numeric": 2}), 5)
        assert tracker.warnings["unparseable_numeric"] == 2


class TestSummaryMessage:
    def test_nothing_skipped(self):
        tracker = ImportTracker()
        tracker.record_window(3, extraction(), 3)
        assert tracker.summary_message() == "Imported 3 rows; skipped 0 rows."

    def test_reasons_sorted_by_count(self):
        tracker = ImportTracker()
        tracker.record_window(10, extraction({
            SkipReason.DUPLICATE_SKU: 1,
            SkipReason.NON_POSITIVE_PRICE: 3,
            SkipReason.MISSING_TITLE: 1,
        }), 5)
        assert tracker.summary_message() == (
            "Imported 5 rows; skipped 5 rows "
            "(non_positive_price: 3, duplicate_sku: 1, missing_title: 1)."
        )

    def test_total_including_resumed_runs(self):
        tracker = ImportTracker()
        tracker.record_window(2, extraction(), 2)
        assert tracker.summary_message(total_imported=50) == "Imported 50 rows; skipped 0 rows."

    def test_source_missing(self):
        tracker = ImportTracker()
        tracker.record_source_missing("data/vendor.csv")
        assert tracker.summary_message() == "Source not found: data/vendor.csv. Nothing was imported."

    def test_write_failure(self):
        tracker = ImportTracker()
        tracker.record_window(50, extraction(), 50)
        tracker.record_write_failure(52, 52)
        assert tracker.summary_message() == (
            "Write failed at row 52; rerun with --resume to continue from row 52."
        )


class TestPrintFinalReport:
    def test_prints_counts_and_summary(self, capsys):
        tracker = ImportTracker()
        tracker.record_window(5, extraction({SkipReason.MISSING_TITLE: 1},
                                            {"unparseable_numeric": 1}), 4)
        tracker.print_final_report()
        out = capsys.readouterr().out
        assert "Import Summary" in out
        assert "Rows imported:     4" in out
        assert "missing_title" in out
        assert "unparseable_numeric" in out
        assert "Imported 4 rows; skipped 1 rows (missing_title: 1)." in out
