"""
Configuration Loader

Loads vendor profiles (YAML) and turns them into an immutable
ImportConfig. Profiles live in config/vendors/.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from ..exceptions import ConfigError
from ..extraction.utils import column_letter
from ..models import (
    DEFAULT_BATCH_SIZE,
    UNSET_COLUMN,
    CatalogDefaults,
    ColumnMapping,
    ContentStrategy,
    DuplicateHandling,
    ImportConfig,
    KeywordRule,
    RuleKind,
)
from ..models.config import CONTENT_MODES

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = 'CATALOG_IMPORT_CONFIG_DIR'
VENDORS_SUBDIR = 'vendors'

# Column names used by vendor sheets for the canonical fields
COLUMN_ALIASES = {
    'retail': 'price',
    'wholesale': 'cost',
    'comparePrice': 'compare_price',
}

_TRUE_WORDS = ('true', 'yes', 'on')
_FALSE_WORDS = ('false', 'no', 'off')

# Result key per rule kind in profile files
_RULE_RESULT_KEYS = {
    RuleKind.CATEGORY: 'category',
    RuleKind.TYPE: 'type',
    RuleKind.TAG: 'tags',
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Explicit override (e.g. from .env)
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)

    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Path relative to the config directory
            (e.g., 'vendors/crystal_jewelry.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return _read_yaml(config_path)


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ConfigError(f"Profile {path} must contain a mapping")
    return data


def list_vendor_profiles() -> List[str]:
    """
    List available vendor profile names.

    Returns:
        Sorted profile names (file stems under config/vendors/)
    """
    vendors_dir = _get_config_dir() / VENDORS_SUBDIR
    if not vendors_dir.exists():
        return []
    return sorted(p.stem for p in vendors_dir.glob('*.yaml'))


def load_vendor_profile(name_or_path: str) -> ImportConfig:
    """
    Load a vendor profile.

    Args:
        name_or_path: Profile name (e.g., 'crystal_jewelry') or a path
            to a YAML file

    Returns:
        Validated ImportConfig

    Raises:
        FileNotFoundError: If the profile doesn't exist
        ConfigError: If the profile is invalid
    """
    path = Path(name_or_path)
    if path.suffix in ('.yaml', '.yml') and path.exists():
        data = _read_yaml(path)
    else:
        data = load_config(f"{VENDORS_SUBDIR}/{name_or_path}.yaml")

    config = build_import_config(data)
    logger.debug("Loaded vendor profile %s (%s)", name_or_path, config.vendor)
    return config


def build_import_config(data: Dict[str, Any]) -> ImportConfig:
    """
    Build an ImportConfig from a parsed profile.

    Args:
        data: Profile mapping (see config/vendors/universal_template.yaml)

    Returns:
        Validated ImportConfig

    Raises:
        ConfigError: If a key is missing or holds an invalid value
    """
    if not data.get('vendor'):
        raise ConfigError("Profile is missing 'vendor'", key='vendor')

    publishing = data.get('publishing_rules') or {}

    try:
        return ImportConfig(
            vendor=str(data['vendor']),
            source=str(data.get('source', '')),
            target=str(data.get('target', '')),
            source_sheet=data.get('source_sheet'),
            column_mapping=parse_column_mapping(data.get('column_mapping') or {}),
            content_strategy=_parse_content_strategy(data.get('content_strategy') or {}),
            category_rules=parse_rules(RuleKind.CATEGORY, data.get('category_rules') or []),
            type_rules=parse_rules(RuleKind.TYPE, data.get('type_rules') or []),
            tag_rules=parse_rules(RuleKind.TAG, data.get('tag_rules') or []),
            publish_exclude_keywords=tuple(str(k) for k in publishing.get('exclude_keywords') or ()),
            duplicate_handling=_parse_duplicate_handling(data.get('duplicate_handling') or {}),
            defaults=_parse_defaults(data.get('defaults') or {}),
            batch_size=int(data.get('batch_size', DEFAULT_BATCH_SIZE)),
            resume=_parse_bool(data.get('resume', False), 'resume'),
            default_quantity_when_missing=int(data.get('default_quantity_when_missing', 0)),
            checkpoint_file=str(data.get('checkpoint_file', '')),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid profile: {e}") from e


def parse_column_mapping(mapping: Dict[str, Any]) -> ColumnMapping:
    """
    Build a ColumnMapping from a profile section.

    Accepts vendor aliases (retail -> price, wholesale -> cost,
    comparePrice -> compare_price).

    Example:
        {'title': 0, 'retail': 6, 'wholesale': 5, 'sku': 10}
        -> ColumnMapping(title=0, price=6, cost=5, sku=10, ...)
    """
    known = {name for name, _ in ColumnMapping().items()}
    columns: Dict[str, int] = {}

    for key, index in mapping.items():
        name = COLUMN_ALIASES.get(key, key)
        if name not in known:
            raise ConfigError(f"Unknown column '{key}' in column_mapping", key=f"column_mapping.{key}")
        if name in columns:
            raise ConfigError(f"Column '{name}' is mapped twice", key=f"column_mapping.{key}")
        columns[name] = UNSET_COLUMN if index is None else index

    try:
        return ColumnMapping(**columns)
    except ValueError as e:
        raise ConfigError(str(e), key='column_mapping') from e


def parse_rules(kind: RuleKind, entries: List[Dict[str, Any]]) -> Tuple[KeywordRule, ...]:
    """
    Build keyword rules of one kind from a profile list.

    Args:
        kind: Rule kind (decides which key holds the result)
        entries: List of {'keywords': [...], '<result key>': ..., 'priority': n}

    Returns:
        Rules in declaration order
    """
    result_key = _RULE_RESULT_KEYS[kind]
    section = f"{kind.value}_rules"
    rules = []

    for position, entry in enumerate(entries):
        keywords = entry.get('keywords')
        if isinstance(keywords, str):
            keywords = [keywords]
        if not keywords:
            raise ConfigError(f"Rule {position} has no keywords", key=f"{section}[{position}]")
        if result_key not in entry:
            raise ConfigError(f"Rule {position} is missing '{result_key}'", key=f"{section}[{position}]")

        result = entry[result_key]
        if kind is RuleKind.TAG and isinstance(result, str):
            result = [result]

        rules.append(KeywordRule(
            kind=kind,
            keywords=tuple(str(k) for k in keywords),
            result=result,
            priority=int(entry.get('priority', 0)),
        ))

    return tuple(rules)


def _parse_content_strategy(section: Dict[str, Any]) -> ContentStrategy:
    mode = section.get('mode', section.get('description', 'empty'))
    if mode not in CONTENT_MODES:
        logger.warning("Unknown description mode %r, descriptions will be empty", mode)
    return ContentStrategy(
        mode=str(mode),
        static_content=str(section.get('static_content') or ''),
        html_wrap=_parse_bool(section.get('html_wrap', False), 'content_strategy.html_wrap'),
    )


def _parse_defaults(section: Dict[str, Any]) -> CatalogDefaults:
    values = _pick(section, (
        'category', 'type', 'tags', 'published', 'requires_shipping', 'taxable',
        'inventory_policy', 'fulfillment_service', 'weight_unit',
    ))
    if isinstance(values.get('tags'), str):
        values['tags'] = [values['tags']]
    for flag in ('published', 'requires_shipping', 'taxable'):
        if flag in values:
            values[flag] = _parse_bool(values[flag], f'defaults.{flag}')
    return CatalogDefaults(**values)


def _pick(section: Dict[str, Any], keys: Tuple[str, ...]) -> Dict[str, Any]:
    """Keep known keys, rejecting unknown ones."""
    unknown = set(section) - set(keys)
    if unknown:
        raise ConfigError(f"Unknown keys: {', '.join(sorted(unknown))}", key=sorted(unknown)[0])
    return dict(section)


def _parse_duplicate_handling(section: Dict[str, Any]) -> DuplicateHandling:
    values = _pick(section, ('enabled', 'action'))
    if 'enabled' in values:
        values['enabled'] = _parse_bool(values['enabled'], 'duplicate_handling.enabled')
    return DuplicateHandling(**values)


def _parse_bool(value: Any, key: str) -> bool:
    """
    Read a true/false profile value.

    Accepts YAML booleans and their quoted forms ("false", "no", ...).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE_WORDS:
        return True
    if isinstance(value, str) and value.strip().lower() in _FALSE_WORDS:
        return False
    raise ConfigError(f"'{key}' must be true or false (got {value!r})", key=key)



def describe_config(config: ImportConfig) -> str:
    """
    Render the configuration report.

    Shows vendor, source/target, batching and where each mapped field
    lives in the source sheet.
    """
    lines = [
        "Current Configuration:",
        f"  Vendor:        {config.vendor}",
        f"  Source:        {config.source or 'Not Set'}"
        + (f" [{config.source_sheet}]" if config.source_sheet else ""),
        f"  Target:        {config.target or 'Not Set'}",
        f"  Batch size:    {config.batch_size}",
        f"  Description:   {config.content_strategy.mode}"
        + (" (wrapped in <p>)" if config.content_strategy.html_wrap else ""),
        f"  Duplicates:    "
        + (config.duplicate_handling.action if config.duplicate_handling.enabled else "disabled"),
        f"  Rules:         {len(config.category_rules)} category, "
        f"{len(config.type_rules)} type, {len(config.tag_rules)} tag",
        "",
        "Column Mappings:",
    ]
    for name, index in config.column_mapping.items():
        lines.append(f"  {name:<14} Column {column_letter(index)}")

    return "\n".join(lines)
