"""Header values that carry anchor metadata in a content feed."""

from urllib.parse import quote

from ..core.anchors import AnchorView

ANCHOR_HEADER = "X-Gsa-External-Anchor"


def percent_encode(value: str) -> str:
    """
    Percent-encode ``value`` as UTF-8 per RFC 3986.

    Only ``A-Z a-z 0-9 - _ . ~`` are left as-is; hex digits are uppercase.

    Examples:
        >>> percent_encode("a b/ë")
        'a%20b%2F%C3%AB'
    """
    return quote(value.encode("utf-8"), safe="")


def anchor_header(anchors: AnchorView) -> str:
    """
    Format the external-anchor header value for recorded anchors.

    Each anchor becomes ``text=uri`` (both encoded), or just the encoded uri
    when it has no text. Anchors are joined with commas in insertion order.
    An empty map gives an empty string.
    """
    parts = []
    for entry in anchors.entries():
        if entry.text is None:
            parts.append(percent_encode(entry.uri))
        else:
            parts.append(f"{percent_encode(entry.text)}={percent_encode(entry.uri)}")
    return ",".join(parts)


def anchor_texts(anchors: AnchorView) -> list[str]:
    """Distinct anchor texts in first-occurrence order, without None."""
    return [text for text in anchors.key_set() if text is not None]
