# src/extraction/html_transforms.py — v1
"""Named HTML post-processing passes applied after markdown conversion.

Each pass is a small object with a ``name`` and an ``apply(html)`` method.
Passes run in list order; the default order rewrites cross-ADR links first
and wraps diagram blocks second.
"""

from __future__ import annotations

import html as htmlpkg
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

DIAGRAM_LANGUAGES: tuple[str, ...] = ("mermaid",)


class HtmlTransform(ABC):
    """One post-processing pass over rendered HTML."""

    name: str = "transform"

    @abstractmethod
    def apply(self, html: str) -> str:
        """Return the transformed HTML."""


def adr_page_url(number: str, base_url: str = "") -> str:
    """URL of a generated ADR page, root-relative when no base URL is set."""
    base = base_url.rstrip("/")
    return f"{base}/adr-{number}.html"


class AdrLinkRewriter(HtmlTransform):
    """Point links to ``NNNN-kebab-title.md`` at the generated ``adr-NNNN.html``.

    Only the href changes; other attributes and the link body are kept.
    A ``#fragment`` after the file name is carried over.
    """

    name = "adr-links"

    _LINK_RE = re.compile(
        r'<a href="(?P<number>[0-9]{4})-[a-z0-9-]+\.md(?P<fragment>#[^"]*)?"'
    )

    def __init__(self, base_url: str = "") -> None:
        self._base_url = base_url

    def apply(self, html: str) -> str:
        def _rewrite(match: re.Match[str]) -> str:
            url = adr_page_url(match.group("number"), self._base_url)
            return f'<a href="{url}{match.group("fragment") or ""}"'

        return self._LINK_RE.sub(_rewrite, html)


_DIAGRAM_CONTAINER = """
<div class="mermaid-container" id="mermaid-{n}">
  <div class="mermaid-toolbar">
    <button class="mermaid-fullscreen" onclick="openMermaidFullscreen('mermaid-{n}')" title="View fullscreen">⛶</button>
    <button class="mermaid-copy" onclick="copyMermaidCode('mermaid-{n}')" title="Copy diagram code">📋</button>
  </div>
  <div class="mermaid-diagram" data-diagram="{source}" onclick="openMermaidFullscreen('mermaid-{n}')" title="Click to view fullscreen">
    <div class="{language}">{code}</div>
  </div>
</div>"""


class DiagramBlockWrapper(HtmlTransform):
    """Replace diagram code blocks with an interactive container.

    Diagrams are numbered 1, 2, ... per call to ``apply`` (i.e. per
    document); the number wires the toolbar buttons to their container.
    ``data-diagram`` carries the original source, attribute-escaped.
    """

    name = "diagram-blocks"

    def __init__(self, languages: Sequence[str] = DIAGRAM_LANGUAGES) -> None:
        alternation = "|".join(re.escape(lang) for lang in languages)
        self._block_re = re.compile(
            rf'<pre><code class="language-(?P<language>{alternation})">(?P<code>.*?)</code></pre>\n?',
            re.DOTALL,
        )

    def apply(self, html: str) -> str:
        counter = 0

        def _wrap(match: re.Match[str]) -> str:
            nonlocal counter
            counter += 1
            code = match.group("code")
            source = htmlpkg.unescape(code)
            return _DIAGRAM_CONTAINER.format(
                n=counter,
                language=match.group("language"),
                source=htmlpkg.escape(source, quote=True),
                code=code,
            )

        return self._block_re.sub(_wrap, html)


def default_transforms(base_url: str = "") -> list[HtmlTransform]:
    """Standard pass order: link rewrite, then diagram wrapping."""
    return [AdrLinkRewriter(base_url=base_url), DiagramBlockWrapper()]
