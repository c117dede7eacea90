# src/extraction/markdown_pipeline.py — v1
"""Markdown -> HTML for ADR bodies: normalize, convert, post-process.

Conversion is delegated to markdown-it-py with GFM-style rules (tables,
strikethrough, autolinks) plus footnotes, definition lists, task lists and
heading anchors. Raw HTML passes through untouched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from adrgen.extraction.html_transforms import HtmlTransform, default_transforms

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^#{1,6}[ \t]+\S")
_FENCE_RE = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")


class MarkdownConversionError(Exception):
    """Raised when markdown cannot be decoded or converted."""


def normalize_markdown(text: str) -> str:
    """Unify line endings and make sure headings sit between blank lines.

    Idempotent: a blank line is only inserted where none exists, so running
    it again changes nothing. Lines inside fenced code are left alone.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")
    out: list[str] = []
    fence: str | None = None

    for i, line in enumerate(lines):
        fence_match = _FENCE_RE.match(line)
        if fence is not None:
            out.append(line)
            if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
            out.append(line)
            continue

        if _HEADING_RE.match(line):
            if out and out[-1].strip():
                out.append("")
            out.append(line)
            if i + 1 < len(lines) and lines[i + 1].strip():
                out.append("")
            continue

        out.append(line)

    return "\n".join(out)


def create_markdown_engine() -> MarkdownIt:
    """markdown-it configured for ADR content."""
    md = (
        MarkdownIt("gfm-like", {"breaks": True, "xhtmlOut": True, "html": True})
        .use(footnote_plugin)
        .use(deflist_plugin)
        .use(tasklists_plugin)
        .use(anchors_plugin, min_level=1, max_level=6)
    )
    # Bare "0001-foo.md" must not become http://0001-foo.md (.md is a TLD).
    if md.linkify is not None:
        md.linkify.set({"fuzzy_link": False})
    return md


class MarkdownPipeline:
    """Normalize -> convert -> ordered HTML passes.

    Holds no per-document state; one instance may serve many documents and
    threads.
    """

    def __init__(
        self,
        base_url: str = "",
        transforms: Sequence[HtmlTransform] | None = None,
        engine: MarkdownIt | None = None,
    ) -> None:
        self._engine = engine or create_markdown_engine()
        self._transforms = list(transforms) if transforms is not None else default_transforms(base_url)

    @property
    def transforms(self) -> list[HtmlTransform]:
        return list(self._transforms)

    def render(self, content: str | bytes) -> str:
        """Convert markdown to post-processed HTML.

        Raises:
            MarkdownConversionError: If bytes are not valid UTF-8 or the
                engine fails.
        """
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MarkdownConversionError(f"Content is not valid UTF-8: {e}") from e

        normalized = normalize_markdown(content)
        try:
            html = self._engine.render(normalized)
        except Exception as e:
            raise MarkdownConversionError(f"Failed to convert markdown: {e}") from e

        return self.postprocess(html)

    def postprocess(self, html: str) -> str:
        for transform in self._transforms:
            html = transform.apply(html)
            logger.debug("Applied HTML pass %s", transform.name)
        return html
