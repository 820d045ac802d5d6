"""Token engine: resolves conditional blocks and placeholders in template text.

Two passes run over a buffer, conditional blocks first:

1. ``{if tag=="literal"}BODY{endif}`` keeps ``BODY`` (markers stripped) when
   the tag's value equals the literal and drops the whole block otherwise.
   A marker that sits alone on its line takes the whole line with it, the
   same way Jinja's ``trim_blocks``/``lstrip_blocks`` behave, so
   line-oriented blocks leave no blank lines behind.  Blocks do not nest.
2. ``##tag##`` is replaced by the tag's value, verbatim, everywhere.

Nothing can be escaped: templates are trusted input from the skeleton.
Resolution is a pure function of the text and the tag mapping.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from ..errors import UnresolvedReferenceError

logger = logging.getLogger(__name__)

_TAG = r"[A-Za-z_][A-Za-z0-9_]*"

BLOCK_RE = re.compile(
    r'(?P<open>\{if\s+(?P<tag>' + _TAG + r')\s*==\s*"(?P<literal>[^"]*)"\s*\})'
    r"(?P<body>.*?)"
    r"(?P<close>\{endif\})",
    re.DOTALL,
)
PLACEHOLDER_RE = re.compile(r"##(?P<tag>" + _TAG + r")##")


def _line_span(text: str, start: int, end: int) -> tuple[int, int] | None:
    """Return the span of the whole line if ``text[start:end]`` stands alone on it."""
    line_start = text.rfind("\n", 0, start) + 1
    if text[line_start:start].strip(" \t"):
        return None
    if end == len(text):
        return line_start, end
    if text[end] == "\n":
        return line_start, end + 1
    return None


def resolve_conditionals(
    text: str, tags: Mapping[str, str], source: str | Path | None = None
) -> str:
    """Run the conditional-block pass over *text*.

    Raises:
        UnresolvedReferenceError: A block tests a tag that is not defined.
    """
    parts: list[str] = []
    pos = 0
    for match in BLOCK_RE.finditer(text):
        tag = match.group("tag")
        if tag not in tags:
            raise UnresolvedReferenceError(tag, source)

        open_start, open_end = _line_span(text, *match.span("open")) or match.span("open")
        close_start, close_end = _line_span(text, *match.span("close")) or match.span("close")
        # Both markers on one line: only strip the markers themselves.
        if close_start < open_end:
            open_start, open_end = match.span("open")
            close_start, close_end = match.span("close")

        parts.append(text[pos:open_start])
        if tags[tag] == match.group("literal"):
            parts.append(text[open_end:close_start])
        pos = close_end

    parts.append(text[pos:])
    return "".join(parts)


def replace_placeholders(
    text: str,
    tags: Mapping[str, str],
    source: str | Path | None = None,
    strict: bool = True,
) -> str:
    """Run the flat placeholder pass over *text*.

    With ``strict=False`` unknown placeholders are left untouched instead of
    raising ``UnresolvedReferenceError``.
    """

    def _substitute(match: re.Match[str]) -> str:
        tag = match.group("tag")
        if tag in tags:
            return tags[tag]
        if strict:
            raise UnresolvedReferenceError(tag, source)
        logger.debug("Leaving unknown placeholder %s in %s", match.group(0), source)
        return match.group(0)

    return PLACEHOLDER_RE.sub(_substitute, text)


def resolve(
    text: str,
    tags: Mapping[str, str],
    source: str | Path | None = None,
    strict: bool = True,
) -> str:
    """Resolve conditional blocks, then placeholders.

    Args:
        text: Raw template content.
        tags: Tag name -> value mapping (a snapshot, never mutated).
        source: File the text came from; only used in error messages.
        strict: Fail on unknown placeholders (conditionals always fail).

    Returns:
        The resolved text.
    """
    return replace_placeholders(
        resolve_conditionals(text, tags, source), tags, source, strict=strict
    )


def find_references(text: str) -> set[str]:
    """Every tag name used by a conditional block or placeholder in *text*."""
    refs = {m.group("tag") for m in BLOCK_RE.finditer(text)}
    refs.update(m.group("tag") for m in PLACEHOLDER_RE.finditer(text))
    return refs
