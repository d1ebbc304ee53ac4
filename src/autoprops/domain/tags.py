"""Tag domain logic — sanitizing, ``#`` handling, and inline tag extraction.

Pure functions, no infrastructure dependencies. The sanitizer is used by
the normalizer for ``tags`` properties; the ``#`` helpers and inline
extraction feed the exclusion matcher.
"""

from __future__ import annotations

import re

# Characters that are illegal inside a tag token: Unicode punctuation from
# the General and Supplemental Punctuation blocks, ASCII punctuation, the
# space and ``#``. Letters, digits, ``_``, ``-`` and ``/`` are legal.
KNOWN_BAD_CHARACTERS: frozenset[str] = frozenset(
    (
        "‒", "–", "—", "―", "⁏", "‽", "‘", "‚", "‛", "‹", "›", "“", "”", "„", "‟",
        "⁅", "⁆", "⁋", "⁎", "⁑", "⁄", "⁊", "‰", "‱", "⁒", "†", "‡", "•", "‣", "⁃",
        "⁌", "⁍", "′", "‵", "‸", "※", "⁐", "⁁", "⁂", "‖", "‑", "″", "‴", "⁗", "‶",
        "‷", "`", "^", "‾", "‗", "⁓", ";", ":", "!", "‼", "⁉", "?", "⁈", "⁇", ".",
        "․", "‥", "…", "'", '"', "(", ")", "[", "]", "{", "}", "@", "*", "&", "%",
        "⁔", "+", "<", "=", ">", "|", "~", "$", "⁕", "⁖", "⁘", "⁙", "⁚", "⁛", "⁜",
        "⁝", "⁞", "⸀", "⸁", "⸂", "⸃", "⸄", "⸅", "⸆", "⸇", "⸈", "⸉", "⸊", "⸋", "⸌",
        "⸍", "⸎", "⸏", "⸐", "⸑", "⸒", "⸓", "⸔", "⸕", "⸖", "⸗", "⸜", "⸝", " ", "#"
    )
)

_BAD_CHARACTER_PATTERN = re.compile(
    "[" + "".join(re.escape(c) for c in sorted(KNOWN_BAD_CHARACTERS)) + "]"
)

# Fenced code blocks and inline code spans never contain real tags.
_FENCED_CODE_PATTERN = re.compile(r"^(```|~~~).*?^\1", re.MULTILINE | re.DOTALL)
_INLINE_CODE_PATTERN = re.compile(r"`[^`\n]*`")

# #tag preceded by start of text, whitespace or an opening bracket.
_INLINE_TAG_PATTERN = re.compile(r"(?:^|(?<=[\s(\[]))#([\w/\-]+)", re.MULTILINE)


def sanitize_tag(raw: str) -> str:
    """Remove every character of :data:`KNOWN_BAD_CHARACTERS` from *raw*.

    Examples:
        >>> sanitize_tag("#Review!")
        'Review'
        >>> sanitize_tag("project/alpha-2")
        'project/alpha-2'
    """
    return _BAD_CHARACTER_PATTERN.sub("", raw)


def strip_hash(tag: str) -> str:
    """Drop a single leading ``#`` from *tag*."""
    return tag[1:] if tag.startswith("#") else tag


def extract_inline_tags(body: str) -> list[str]:
    """Extract ``#tags`` from markdown body text, in order of appearance.

    Tags inside code are ignored, as are purely numeric tokens such as
    ``#123``. Returned tags keep their leading ``#``, the way the note
    application reports them.
    """
    text = _FENCED_CODE_PATTERN.sub("", body)
    text = _INLINE_CODE_PATTERN.sub("", text)
    results: list[str] = []
    for match in _INLINE_TAG_PATTERN.finditer(text):
        token = match.group(1).rstrip("/")
        if not token or token.replace("/", "").isdigit():
            continue
        results.append(f"#{token}")
    return results
