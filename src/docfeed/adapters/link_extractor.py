import logging
import re
from pathlib import PurePath
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..core.ports import AnchorSink, LinkExtractor
from ..errors import InvalidArgument

log = logging.getLogger(__name__)

FENCE_RE = re.compile(r"^```.*?^```[^\n]*$", re.MULTILINE | re.DOTALL)
INLINE_CODE_RE = re.compile(r"`[^`\n]*`")
MD_LINK_RE = re.compile(
    r"(?<!!)\[(?P<text>[^\]]*)\]\((?P<target>[^)\s]+)(?:\s+\"[^\"]*\")?\)"
    r"|<(?P<auto>https?://[^>\s]+)>"
)

MARKDOWN_TYPES = {".md", ".markdown", "text/markdown"}
HTML_TYPES = {".html", ".htm", "text/html", "application/xhtml+xml"}


def _blank(m: re.Match) -> str:
    # keep offsets stable so match order is document order
    return re.sub(r"[^\n]", " ", m.group(0))


def _clean_text(text: str | None) -> str | None:
    if text is None:
        return None
    text = " ".join(text.split())
    return text or None


class _BaseExtractor:
    def __init__(self, base_url: str | None = None, skip_fragments: bool = True):
        self.base_url = base_url
        self.skip_fragments = skip_fragments

    def _resolve(self, target: str) -> str | None:
        target = target.strip()
        if not target:
            return None
        if self.skip_fragments and target.startswith("#"):
            return None
        if self.base_url:
            return urljoin(self.base_url, target)
        return target

    def _emit(self, sink: AnchorSink, target: str, text: str | None) -> bool:
        uri = self._resolve(target)
        if uri is None:
            return False
        sink.add_anchor(uri, _clean_text(text))
        return True


class MarkdownLinkExtractor(_BaseExtractor, LinkExtractor):
    """Inline links ``[text](target)`` and autolinks ``<https://...>``; images and code are skipped."""

    def extract(self, content: str, sink: AnchorSink) -> int:
        masked = FENCE_RE.sub(_blank, content)
        masked = INLINE_CODE_RE.sub(_blank, masked)
        count = 0
        for m in MD_LINK_RE.finditer(masked):
            if m.group("auto"):
                added = self._emit(sink, m.group("auto"), None)
            else:
                added = self._emit(sink, m.group("target"), m.group("text"))
            count += added
        log.debug("Extracted %d markdown anchors", count)
        return count


class HtmlLinkExtractor(_BaseExtractor, LinkExtractor):
    """``<a href>`` elements in document order."""

    def extract(self, content: str, sink: AnchorSink) -> int:
        soup = BeautifulSoup(content, "html.parser")
        count = 0
        for a in soup.find_all("a", href=True):
            count += self._emit(sink, a["href"], a.get_text())
        log.debug("Extracted %d html anchors", count)
        return count


def extractor_for(
    kind: str | PurePath,
    base_url: str | None = None,
    skip_fragments: bool = True,
) -> LinkExtractor:
    """
    Pick an extractor by file suffix (``.md``, ``.html``) or content type.

    Raises:
        InvalidArgument: if no extractor handles ``kind``.
    """
    key = kind.suffix.lower() if isinstance(kind, PurePath) else kind.split(";")[0].strip().lower()
    if key in MARKDOWN_TYPES:
        return MarkdownLinkExtractor(base_url, skip_fragments)
    if key in HTML_TYPES:
        return HtmlLinkExtractor(base_url, skip_fragments)
    raise InvalidArgument(f"No link extractor for {kind}")
