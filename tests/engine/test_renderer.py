from __future__ import annotations

import csv
import io
import json
import xml.etree.ElementTree as ET

import pytest

from wayback_harvest.config import OutputMode
from wayback_harvest.engine import ArchiveRecord, RunResult
from wayback_harvest.engine.renderer import (
    CsvRenderer,
    JsonRenderer,
    RenderError,
    TextRenderer,
    XmlRenderer,
    build_renderer,
)
from wayback_harvest.engine.renderer.structured import XML_REPLACEMENT, xml_text


@pytest.fixture
def result() -> RunResult:
    records = (
        ArchiveRecord.from_fields("http://example.com", "1043", "20230101120000"),
        ArchiveRecord.from_fields('http://example.com/a,b?q="x"', "-", "bogus"),
    )
    return RunResult(domain="example.com", records=records)


def _render(renderer, result: RunResult) -> str:
    sink = io.BytesIO()
    written = renderer.render(result, sink)
    assert written == len(sink.getvalue())
    return sink.getvalue().decode("utf-8")


def test_text_renderer_raw(make_config, result) -> None:
    output = _render(TextRenderer(make_config()), result)
    assert output == 'http://example.com\nhttp://example.com/a,b?q="x"\n'


def test_text_renderer_browsable(make_config, result) -> None:
    browsable = RunResult(domain="example.com", records=result.records[:1], mode=OutputMode.BROWSABLE)
    output = _render(TextRenderer(make_config(mode=OutputMode.BROWSABLE)), browsable)
    assert output == "https://web.archive.org/web/20230101120000/http://example.com\n"


def test_text_renderer_subdomains(make_config) -> None:
    hosts = RunResult(domain="example.com", hosts=("a.example.com", "b.example.com"), mode=OutputMode.SUBDOMAIN)
    assert _render(TextRenderer(make_config()), hosts) == "a.example.com\nb.example.com\n"


def test_csv_renderer_round_trip(make_config, result) -> None:
    output = _render(CsvRenderer(make_config()), result)
    rows = list(csv.reader(io.StringIO(output)))
    assert rows[0] == ["URL", "LENGTH", "TIMESTAMP", "DATE"]
    assert rows[1] == ["http://example.com", "1043", "20230101120000", "2023-01-01T12:00:00Z"]
    assert rows[2][:3] == ['http://example.com/a,b?q="x"', "-", "bogus"]
    assert rows[2][3] == ""


def test_csv_renderer_legacy_layout(make_config, result) -> None:
    output = _render(CsvRenderer(make_config(csv_layout="legacy")), result)
    rows = list(csv.reader(io.StringIO(output)))
    assert rows[0] == ["URL", "LENGTH", "TIMESTAMP"]
    assert all(len(row) == 3 for row in rows)


def test_json_renderer(make_config, result) -> None:
    payload = json.loads(_render(JsonRenderer(make_config()), result))
    assert payload["count"] == 2
    assert payload["results"][0] == {
        "url": "http://example.com",
        "length": "1043",
        "timestamp": "20230101120000",
        "date": "2023-01-01T12:00:00Z",
    }
    assert payload["results"][1]["date"] is None


def test_json_renderer_empty(make_config) -> None:
    payload = json.loads(_render(JsonRenderer(make_config()), RunResult(domain="example.com")))
    assert payload == {"results": [], "count": 0}


def test_xml_renderer(make_config, result) -> None:
    output = _render(XmlRenderer(make_config()), result)
    assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<wayback>\n  <results>\n')
    root = ET.fromstring(output.split("\n", 1)[1])
    entries = root.findall("./results/result")
    assert len(entries) == 2
    assert entries[0].findtext("url") == "http://example.com"
    assert entries[0].findtext("date") == "2023-01-01T12:00:00Z"
    assert [child.tag for child in entries[0]] == ["url", "length", "timestamp", "date"]
    assert root.findtext("count") == "2"


def test_render_errors_surface(make_config, result) -> None:
    sink = io.BytesIO()
    sink.close()
    with pytest.raises(RenderError) as excinfo:
        TextRenderer(make_config()).render(result, sink)
    assert excinfo.value.domain == "example.com"


def test_build_renderer_selection(make_config) -> None:
    assert isinstance(build_renderer(make_config()), TextRenderer)
    assert isinstance(build_renderer(make_config(output_format="json")), JsonRenderer)
    assert isinstance(build_renderer(make_config(output_format="xml")), XmlRenderer)
    assert isinstance(build_renderer(make_config(mode="tabular")), CsvRenderer)
    assert isinstance(build_renderer(make_config(mode="subdomain", output_format="json")), TextRenderer)


def test_xml_renderer_replaces_illegal_characters(make_config) -> None:
    record = ArchiveRecord.from_fields("http://example.com/a\x01b\x1f", "1\x00", "20230101120000")
    output = _render(XmlRenderer(make_config()), RunResult(domain="example.com", records=(record,)))
    root = ET.fromstring(output.split("\n", 1)[1])
    entry = root.find("./results/result")
    assert entry.findtext("url") == f"http://example.com/a{XML_REPLACEMENT}b{XML_REPLACEMENT}"
    assert entry.findtext("length") == f"1{XML_REPLACEMENT}"


def test_xml_text_keeps_legal_whitespace() -> None:
    assert xml_text("a\tb\nc") == "a\tb\nc"
    assert xml_text(None) is None
