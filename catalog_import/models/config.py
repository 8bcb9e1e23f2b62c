"""
Import configuration models.

Immutable per-run configuration. Every pipeline component receives an
``ImportConfig`` explicitly; none of them reads global state.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterator, Optional, Tuple

from .cursor import DEFAULT_BATCH_SIZE

UNSET_COLUMN = -1

CONTENT_MODES = ('empty', 'static', 'source')
DUPLICATE_ACTIONS = ('skip', 'replace')
WEIGHT_UNITS = ('g', 'kg', 'lb', 'oz')


@dataclass(frozen=True)
class ColumnMapping:
    """Zero-based source column per logical field (-1 = not in the source)."""

    title: int = UNSET_COLUMN
    sku: int = UNSET_COLUMN
    description: int = UNSET_COLUMN
    cost: int = UNSET_COLUMN
    price: int = UNSET_COLUMN
    quantity: int = UNSET_COLUMN
    weight: int = UNSET_COLUMN
    barcode: int = UNSET_COLUMN
    compare_price: int = UNSET_COLUMN

    def __post_init__(self):
        for name, index in self.items():
            if isinstance(index, bool) or not isinstance(index, int):
                raise ValueError(f"column '{name}' must be an integer index (got {index!r})")
            if index < UNSET_COLUMN:
                raise ValueError(f"column '{name}' must be >= -1 (got {index})")

    def items(self) -> Iterator[Tuple[str, int]]:
        """Yield (field, index) pairs in declaration order."""
        for f in fields(self):
            yield f.name, getattr(self, f.name)


class RuleKind(Enum):
    CATEGORY = "category"
    TYPE = "type"
    TAG = "tag"


@dataclass(frozen=True)
class KeywordRule:
    """
    Keyword-to-result rule matched against product titles.

    The rule matches when any keyword is a case-insensitive substring of
    the title. ``result`` is a category path, a type label, or a tuple of
    tags depending on ``kind``. ``priority`` only affects category rules.
    """

    kind: RuleKind
    keywords: Tuple[str, ...]
    result: Any
    priority: int = 0

    def __post_init__(self):
        if not self.keywords:
            raise ValueError("rule needs at least one keyword")
        object.__setattr__(self, 'keywords', tuple(str(k).lower() for k in self.keywords))
        # YAML reads unquoted tags such as 925 as numbers
        if self.kind is RuleKind.TAG:
            object.__setattr__(self, 'result', tuple(str(t) for t in self.result))
        else:
            object.__setattr__(self, 'result', str(self.result))


@dataclass(frozen=True)
class ContentStrategy:
    """How the Body (HTML) column is filled."""

    mode: str = 'empty'           # "empty", "static" or "source"
    static_content: str = ''
    html_wrap: bool = False


@dataclass(frozen=True)
class DuplicateHandling:
    """Duplicate SKU policy against the existing target."""

    enabled: bool = True
    action: str = 'skip'          # "skip" or "replace"

    def __post_init__(self):
        if self.action not in DUPLICATE_ACTIONS:
            raise ValueError(f"duplicate action must be one of {DUPLICATE_ACTIONS} (got {self.action!r})")

    @property
    def skips_existing(self) -> bool:
        return self.enabled and self.action == 'skip'


@dataclass(frozen=True)
class CatalogDefaults:
    """Fallback values and static per-run catalog settings."""

    category: str = ''
    type: str = ''
    tags: Tuple[str, ...] = ()
    published: bool = True
    requires_shipping: bool = True
    taxable: bool = True
    inventory_policy: str = 'deny'
    fulfillment_service: str = 'manual'
    weight_unit: str = 'g'

    def __post_init__(self):
        object.__setattr__(self, 'tags', tuple(str(t) for t in self.tags))
        for flag in ('published', 'requires_shipping', 'taxable'):
            if not isinstance(getattr(self, flag), bool):
                raise ValueError(f"{flag} must be true or false (got {getattr(self, flag)!r})")
        if self.weight_unit not in WEIGHT_UNITS:
            raise ValueError(f"weight unit must be one of {WEIGHT_UNITS} (got {self.weight_unit!r})")


@dataclass(frozen=True)
class ImportConfig:
    """
    Complete configuration for one vendor import run.

    Field Groups:
    - Vendor: vendor name and source/target locations
    - Mapping: source column layout
    - Content: description strategy
    - Rules: category, type, tag and publish-exclusion rules
    - Duplicates: duplicate SKU handling
    - Defaults: fallback values for catalog fields
    - Batching: window size, resume flag, checkpoint location
    """

    vendor: str
    source: str = ''
    target: str = ''
    source_sheet: Optional[str] = None
    column_mapping: ColumnMapping = field(default_factory=ColumnMapping)
    content_strategy: ContentStrategy = field(default_factory=ContentStrategy)
    category_rules: Tuple[KeywordRule, ...] = ()
    type_rules: Tuple[KeywordRule, ...] = ()
    tag_rules: Tuple[KeywordRule, ...] = ()
    publish_exclude_keywords: Tuple[str, ...] = ()
    duplicate_handling: DuplicateHandling = field(default_factory=DuplicateHandling)
    defaults: CatalogDefaults = field(default_factory=CatalogDefaults)
    batch_size: int = DEFAULT_BATCH_SIZE
    resume: bool = False
    default_quantity_when_missing: int = 0
    checkpoint_file: str = ''

    def __post_init__(self):
        if not self.vendor or not str(self.vendor).strip():
            raise ValueError("vendor name is required")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be > 0 (got {self.batch_size})")
        if self.default_quantity_when_missing < 0:
            raise ValueError("default_quantity_when_missing must be >= 0")
        for rules, kind in (
            (self.category_rules, RuleKind.CATEGORY),
            (self.type_rules, RuleKind.TYPE),
            (self.tag_rules, RuleKind.TAG),
        ):
            object.__setattr__(self, f"{kind.value}_rules", tuple(rules))
            for rule in rules:
                if rule.kind is not kind:
                    raise ValueError(f"{rule.kind.value} rule found among {kind.value} rules")
        object.__setattr__(
            self, 'publish_exclude_keywords', tuple(self.publish_exclude_keywords)
        )
