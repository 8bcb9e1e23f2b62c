"""
Rule Engine

Classifies products from their titles using keyword rules.
Three matching strategies are used:

1. Priority match (category rules) - highest priority wins, ties keep
   declaration order
2. First match (type rules) - first rule in declared order wins
3. Union (tag rules) - every matching rule contributes its tags

Keywords match as case-insensitive substrings; a rule matches when any
of its keywords is found in the title.
"""

from typing import Any, Iterable, List, Sequence

from ..models import ImportConfig, KeywordRule


def rule_matches(title_lower: str, rule: KeywordRule) -> bool:
    """Check whether any keyword of a rule appears in a lowercased title."""
    return any(keyword in title_lower for keyword in rule.keywords)


def match_first(
    title: str,
    rules: Sequence[KeywordRule],
    default: Any,
    by_priority: bool = False
) -> Any:
    """
    Return the result of the first matching rule.

    Args:
        title: Product title
        rules: Rules in declaration order
        default: Value returned when nothing matches
        by_priority: Scan in descending priority order first. The sort is
            stable, so equal priorities keep declaration order.

    Returns:
        Matching rule's result or ``default``
    """
    title_lower = (title or '').lower()

    if by_priority:
        rules = sorted(rules, key=lambda rule: -rule.priority)

    for rule in rules:
        if rule_matches(title_lower, rule):
            return rule.result

    return default


def match_all(title: str, rules: Sequence[KeywordRule], seed: Iterable[str] = ()) -> List[str]:
    """
    Collect the results of every matching rule.

    Args:
        title: Product title
        rules: Tag rules in declaration order
        seed: Values every title starts with (base tags)

    Returns:
        Deduplicated values in first-seen order, seed first
    """
    title_lower = (title or '').lower()

    # dict keeps insertion order and drops repeats
    collected = dict.fromkeys(seed)
    for rule in rules:
        if rule_matches(title_lower, rule):
            collected.update(dict.fromkeys(rule.result))

    return list(collected)


def is_excluded(title: str, exclude_keywords: Iterable[str]) -> bool:
    """Check whether a title contains any publish-exclusion keyword."""
    title_lower = (title or '').lower()
    return any(keyword.lower() in title_lower for keyword in exclude_keywords)


class RuleEngine:
    """
    Applies the configured classification rules to product titles.

    Usage:
        engine = RuleEngine(config)
        engine.category("Amethyst Pendant")
        # Returns: "Apparel & Accessories > Jewelry"
        engine.tags("Amethyst Pendant")
        # Returns: ["Spiritual", "Natural", "Handmade", "Amethyst", "Purple Crystal"]
    """

    def __init__(self, config: ImportConfig):
        """
        Initialize the rule engine.

        Args:
            config: Import configuration holding the rules and defaults
        """
        self.defaults = config.defaults
        # Priority order is fixed per run, so sort once
        self.category_rules = sorted(config.category_rules, key=lambda rule: -rule.priority)
        self.type_rules = config.type_rules
        self.tag_rules = config.tag_rules
        self.exclude_keywords = config.publish_exclude_keywords

    def category(self, title: str) -> str:
        """Category path of the highest-priority matching rule, or the default category."""
        return match_first(title, self.category_rules, self.defaults.category)

    def product_type(self, title: str) -> str:
        """Type label of the first matching rule, or the default type."""
        return match_first(title, self.type_rules, self.defaults.type)

    def tags(self, title: str) -> List[str]:
        """Base tags plus the tags of every matching rule."""
        return match_all(title, self.tag_rules, seed=self.defaults.tags)

    def published(self, title: str) -> bool:
        """False when the title hits an exclusion keyword, else the default publish state."""
        if is_excluded(title, self.exclude_keywords):
            return False
        return self.defaults.published
