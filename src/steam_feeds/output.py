"""
Output rendering for resolved feeds.

Renders result records either as a plain list of feed URLs or as
an OPML 2.0 subscription bundle that feed readers can import.
"""

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from email.utils import format_datetime

from steam_feeds.feeds.contracts import Failed, NotAttempted, ResultRecord, Verified


def select_records(
    records: Iterable[ResultRecord],
    *,
    include_failed: bool = False,
) -> list[ResultRecord]:
    """Drop records whose verification failed, unless asked to keep them."""
    if include_failed:
        return list(records)
    return [r for r in records if not isinstance(r.outcome, Failed)]


def _status_label(record: ResultRecord) -> str | None:
    match record.outcome:
        case Verified():
            return "verified"
        case Failed(reason=reason):
            return f"failed: {reason}"
        case NotAttempted():
            return None


def render_plain(records: Sequence[ResultRecord], *, annotate: bool = False) -> str:
    """
    Render one feed URL per line.

    With annotate, each line gets a tab and the verification status
    (records that were never verified stay bare).
    """
    lines = []
    for record in records:
        label = _status_label(record) if annotate else None
        lines.append(f"{record.url}\t{label}" if label else record.url)
    return "\n".join(lines)


def render_opml(
    records: Sequence[ResultRecord],
    *,
    title: str = "Steam Feeds",
    created_at: datetime | None = None,
) -> str:
    """
    Render records as an OPML 2.0 document.

    Each record becomes one rss outline whose xmlUrl is the feed URL.
    Records without a title fall back to their URL as outline text.
    """
    root = ET.Element("opml", version="2.0")

    head = ET.SubElement(root, "head")
    ET.SubElement(head, "title").text = title
    ET.SubElement(head, "dateCreated").text = format_datetime(
        created_at or datetime.now(timezone.utc)
    )

    body = ET.SubElement(root, "body")
    for record in records:
        text = record.title or record.url
        ET.SubElement(
            body,
            "outline",
            text=text,
            title=text,
            type="rss",
            xmlUrl=record.url,
        )

    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True).decode("utf-8")
