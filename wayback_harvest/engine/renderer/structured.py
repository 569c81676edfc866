"""JSON and XML document output."""

from __future__ import annotations

import json
import re
import xml.etree.ElementTree as ET
from typing import Any

from ..aggregator import RunResult
from ..parser import ArchiveRecord
from .base import BaseRenderer

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
XML_REPLACEMENT = "\ufffd"
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_text(value: str | None) -> str | None:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""

    if value is None:
        return None
    return _XML_ILLEGAL.sub(XML_REPLACEMENT, value)


def record_payload(record: ArchiveRecord) -> dict[str, Any]:
    return {
        "url": record.url,
        "length": record.length,
        "timestamp": record.timestamp,
        "date": record.rfc3339_date,
    }


class JsonRenderer(BaseRenderer):
    """``{"results": [...], "count": n}`` on a single line."""

    def serialise(self, result: RunResult) -> str:
        payload = {
            "results": [record_payload(record) for record in result.records],
            "count": len(result.records),
        }
        return json.dumps(payload, ensure_ascii=False) + "\n"


class XmlRenderer(BaseRenderer):
    """``<wayback><results><result>…</result></results><count/></wayback>``."""

    root_tag = "wayback"

    def build_tree(self, result: RunResult) -> ET.Element:
        root = ET.Element(self.root_tag)
        results = ET.SubElement(root, "results")
        for record in result.records:
            node = ET.SubElement(results, "result")
            for name, value in record_payload(record).items():
                ET.SubElement(node, name).text = xml_text(value)
        ET.SubElement(root, "count").text = str(len(result.records))
        return root

    def serialise(self, result: RunResult) -> str:
        root = self.build_tree(result)
        ET.indent(root, space="  ")
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


__all__ = ["JsonRenderer", "XML_DECLARATION", "XmlRenderer", "record_payload", "xml_text"]
