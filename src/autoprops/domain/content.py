"""Markdown content parsing — YAML frontmatter split and render.

Pure parsing utilities live here so that the dependency direction stays
clean: infrastructure -> domain, never the reverse. The round-trip YAML
parser keeps key order, comments and quote styles of existing
frontmatter, so injecting a property only touches that property.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

_FRONTMATTER_DELIMITER = "---"


class FrontmatterError(ValueError):
    """Raised when a frontmatter block exists but is not a YAML mapping."""


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    A new instance per call avoids corrupted internal emitter state from
    propagating across operations (ruamel.yaml's YAML object is stateful
    and a failed dump can leave the singleton in a broken state).
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


def parse_frontmatter(content: str) -> tuple[CommentedMap | None, str]:
    """Parse YAML frontmatter and body from markdown content.

    Expects the file to start with ``---`` on the first line. The second
    ``---`` closes the YAML block. Everything after is the body.

    Returns:
        A ``(frontmatter, body)`` tuple. ``frontmatter`` is None when the
        content has no frontmatter block.

    Raises:
        FrontmatterError: The block is not valid YAML or not a mapping.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return None, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        loaded: Any = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        msg = f"Invalid YAML in frontmatter: {exc}"
        raise FrontmatterError(msg) from exc

    if loaded is None:
        return CommentedMap(), body
    if not isinstance(loaded, dict):
        msg = f"Frontmatter must be a mapping, got {type(loaded).__name__}"
        raise FrontmatterError(msg)
    return loaded, body


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a frontmatter mapping and body text into markdown.

    Keys keep their existing order; new keys were appended by the caller.
    """
    yaml_text = ""
    if frontmatter:
        buf = StringIO()
        _new_yaml().dump(frontmatter, buf)
        yaml_text = buf.getvalue()

    parts = [_FRONTMATTER_DELIMITER, "\n", yaml_text, _FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.append(body)
    return "".join(parts)
