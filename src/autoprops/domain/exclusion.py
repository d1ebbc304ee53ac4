"""Exclusion matching — decide whether a document is skipped entirely.

Folder rules are checked first, then tag and property rules. Any single
match excludes the document. Malformed rules (empty patterns, invalid
regular expressions, ``:value`` with no key) are ignored rather than
raised, so one bad rule never blocks the others.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from autoprops.domain.models import ExclusionRule, FolderRule, TargetDocumentView
from autoprops.domain.normalize import is_sequence_value, stringify
from autoprops.domain.tags import strip_hash
from autoprops.domain.types import ExclusionKind

_REPEATED_SLASHES = re.compile(r"/+")


def normalize_folder_path(path: str) -> str:
    """Canonical vault-relative folder path.

    Backslashes become ``/``, repeated and surrounding slashes are removed,
    and the vault root is ``""``.

    Examples:
        >>> normalize_folder_path("/Templates//Daily/")
        'Templates/Daily'
        >>> normalize_folder_path("/")
        ''
    """
    text = unicodedata.normalize("NFC", path.replace("\u00a0", " ").replace("\\", "/"))
    text = _REPEATED_SLASHES.sub("/", text).strip("/")
    return "" if text == "." else text


def compile_folder_pattern(pattern: str) -> re.Pattern[str] | None:
    """Compile a folder regex, or return None if it is invalid."""
    try:
        return re.compile(pattern)
    except re.error:
        return None


def folder_matches(folder: str, rule: FolderRule) -> bool:
    """Whether *folder* is excluded by *rule*."""
    if not rule.pattern:
        return False
    if not rule.use_regex:
        return normalize_folder_path(folder) == normalize_folder_path(rule.pattern)
    compiled = compile_folder_pattern(rule.pattern)
    return compiled is not None and compiled.search(folder) is not None


def combined_tags(inline_tags: Iterable[str], frontmatter_tags: Any) -> set[str]:
    """Inline tags plus frontmatter ``tags``, stringified and ``#``-stripped.

    *frontmatter_tags* is whatever the ``tags`` key holds: a list, a single
    string, or None.
    """
    tags = {strip_hash(t) for t in inline_tags}
    if frontmatter_tags is None:
        return tags
    members = frontmatter_tags if is_sequence_value(frontmatter_tags) else [frontmatter_tags]
    tags.update(strip_hash(stringify(t)) for t in members)
    return tags


def split_property_pattern(pattern: str) -> tuple[str, str | None]:
    """Split ``key:value`` at the first colon; ``key`` alone gives ``(key, None)``.

    Both halves are trimmed.

    Examples:
        >>> split_property_pattern("status:done")
        ('status', 'done')
        >>> split_property_pattern("url: https://x")
        ('url', 'https://x')
        >>> split_property_pattern("archived")
        ('archived', None)
    """
    key, sep, value = pattern.partition(":")
    if not sep:
        return pattern.strip(), None
    return key.strip(), value.strip()


def property_matches(frontmatter: Mapping[str, Any], pattern: str) -> bool:
    """Whether *frontmatter* satisfies a ``key`` or ``key:value`` pattern."""
    key, expected = split_property_pattern(pattern)
    if not key:
        return False
    if expected is None:
        # Existence check: an explicit null still counts as present.
        return key in frontmatter
    if key not in frontmatter:
        return False
    actual = frontmatter[key]
    if is_sequence_value(actual):
        return any(stringify(item) == expected for item in actual)
    return stringify(actual) == expected


def content_rule_matches(document: TargetDocumentView, rule: ExclusionRule) -> bool:
    """Whether a single tag or property rule matches *document*."""
    pattern = rule.pattern.strip()
    if not pattern:
        return False

    match rule.kind:
        case ExclusionKind.TAG:
            frontmatter_tags = (document.frontmatter or {}).get("tags")
            return strip_hash(pattern) in combined_tags(document.inline_tags, frontmatter_tags)
        case ExclusionKind.PROPERTY:
            if document.frontmatter is None:
                return False
            return property_matches(document.frontmatter, pattern)


def is_excluded(
    document: TargetDocumentView,
    folder_rules: Sequence[FolderRule] = (),
    content_rules: Sequence[ExclusionRule] = (),
) -> bool:
    """Whether *document* must be skipped.

    Examples:
        >>> doc = TargetDocumentView(inline_tags=("#draft",), folder="notes")
        >>> is_excluded(doc, [], [ExclusionRule(kind="tag", pattern="#draft")])
        True
        >>> is_excluded(doc, [FolderRule(pattern="archive")], [])
        False
    """
    if any(folder_matches(document.folder, rule) for rule in folder_rules):
        return True
    return any(content_rule_matches(document, rule) for rule in content_rules)
