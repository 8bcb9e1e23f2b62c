"""Tests for catalog_import/extraction/rules.py"""

import pytest

from catalog_import.extraction.rules import RuleEngine, is_excluded, match_all, match_first
from catalog_import.models import KeywordRule, RuleKind

JEWELRY = "Apparel & Accessories > Jewelry"
CRAFTS = "Arts & Entertainment > Hobbies & Creative Arts > Arts & Crafts"


@pytest.fixture
def engine(crystal_config):
    return RuleEngine(crystal_config)


class TestMatchFirst:
    def test_returns_default_when_nothing_matches(self):
        rules = [KeywordRule(RuleKind.TYPE, ("pendant",), "Pendant")]
        assert match_first("Plain Stone", rules, "Product") == "Product"

    def test_declaration_order_wins(self):
        rules = [
            KeywordRule(RuleKind.TYPE, ("crystal",), "Crystal"),
            KeywordRule(RuleKind.TYPE, ("wand",), "Crystal Wand"),
        ]
        assert match_first("Crystal Wand", rules, "Product") == "Crystal"

    def test_highest_priority_wins(self):
        rules = [
            KeywordRule(RuleKind.CATEGORY, ("crystal",), CRAFTS, priority=8),
            KeywordRule(RuleKind.CATEGORY, ("pendant",), JEWELRY, priority=10),
        ]
        assert match_first("Crystal Pendant", rules, "", by_priority=True) == JEWELRY

    def test_priority_tie_keeps_declaration_order(self):
        rules = [
            KeywordRule(RuleKind.CATEGORY, ("pendant",), "First", priority=5),
            KeywordRule(RuleKind.CATEGORY, ("crystal",), "Second", priority=5),
        ]
        assert match_first("Crystal Pendant", rules, "", by_priority=True) == "First"

    def test_match_is_case_insensitive_substring(self):
        rules = [KeywordRule(RuleKind.TYPE, ("quartz",), "Quartz")]
        assert match_first("ROSEQUARTZ TUMBLE", rules, "Product") == "Quartz"

    def test_any_keyword_matches(self):
        rules = [KeywordRule(RuleKind.CATEGORY, ("bracelet", "earrings"), JEWELRY)]
        assert match_first("Moonstone Earrings", rules, "") == JEWELRY


class TestMatchAll:
    def test_union_in_first_seen_order(self):
        rules = [
            KeywordRule(RuleKind.TAG, ("amethyst",), ("Amethyst", "Purple Crystal")),
            KeywordRule(RuleKind.TAG, ("natural",), ("Natural", "Authentic")),
        ]
        tags = match_all("Natural Amethyst Point", rules, seed=("Spiritual", "Natural"))
        assert tags == ["Spiritual", "Natural", "Amethyst", "Purple Crystal", "Authentic"]

    def test_seed_only(self):
        assert match_all("Plain Stone", [], seed=("Spiritual",)) == ["Spiritual"]

    def test_no_duplicates(self):
        rules = [
            KeywordRule(RuleKind.TAG, ("tiger eye",), ("Tiger Eye", "Protection")),
            KeywordRule(RuleKind.TAG, ("tourmaline",), ("Tourmaline", "Protection")),
        ]
        tags = match_all("Tiger Eye & Tourmaline Bracelet", rules)
        assert tags == ["Tiger Eye", "Protection", "Tourmaline"]


class TestIsExcluded:
    def test_excluded(self):
        assert is_excluded("SAMPLE Amethyst Pendant", ("sample",))

    def test_not_excluded(self):
        assert not is_excluded("Amethyst Pendant", ("sample",))

    def test_no_keywords(self):
        assert not is_excluded("Sample", ())


class TestRuleEngine:
    def test_amethyst_pendant(self, engine):
        assert engine.category("Amethyst Pendant") == JEWELRY
        assert engine.product_type("Amethyst Pendant") == "Pendant"
        assert engine.tags("Amethyst Pendant") == [
            "Spiritual", "Natural", "Handmade", "Amethyst", "Purple Crystal",
        ]

    def test_bracelet_outranks_crystal(self, engine):
        assert engine.category("Amethyst Crystal Bracelet") == JEWELRY

    def test_crystal_only(self, engine):
        assert engine.category("Clear Quartz Point") == CRAFTS

    def test_defaults_when_nothing_matches(self, engine):
        assert engine.category("Plain Stone") == CRAFTS
        assert engine.product_type("Plain Stone") == "Product"
        assert engine.tags("Plain Stone") == ["Spiritual", "Natural", "Handmade"]

    def test_empty_title_uses_defaults(self, engine):
        assert engine.product_type("") == "Product"

    def test_published(self, engine):
        assert engine.published("Amethyst Pendant") is True
        assert engine.published("Amethyst Pendant (sample)") is False
