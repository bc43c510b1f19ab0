"""Tests for resgen.manifest.events."""

from __future__ import annotations

import io

import pytest

from resgen.errors import ManifestError
from resgen.manifest.events import EventKind, iter_events


def _kinds_and_payloads(data: bytes) -> list[tuple[EventKind, str | None]]:
    return [
        (event.kind, event.name if event.text is None else event.text)
        for event in iter_events(io.BytesIO(data))
    ]


def test_iter_events_reports_structure_and_drops_whitespace() -> None:
    data = b"""<?xml version="1.0" encoding="UTF-8"?>
<gresources>
  <gresource prefix="/org/example">
    <file>ui/main.ui</file>
  </gresource>
</gresources>
"""

    assert _kinds_and_payloads(data) == [
        (EventKind.START_DOCUMENT, None),
        (EventKind.START_ELEMENT, "gresources"),
        (EventKind.START_ELEMENT, "gresource"),
        (EventKind.START_ELEMENT, "file"),
        (EventKind.CHARACTERS, "ui/main.ui"),
        (EventKind.END_ELEMENT, "file"),
        (EventKind.END_ELEMENT, "gresource"),
        (EventKind.END_ELEMENT, "gresources"),
        (EventKind.END_DOCUMENT, None),
    ]


def test_iter_events_coalesces_cdata_and_skips_comments() -> None:
    data = b"<file>\n  <![CDATA[ui/]]><!-- split -->main.ui  \n</file>"

    texts = [event.text for event in iter_events(io.BytesIO(data)) if event.kind is EventKind.CHARACTERS]

    assert texts == ["ui/main.ui"]


def test_iter_events_uses_local_names() -> None:
    data = b'<g:gresources xmlns:g="urn:example"></g:gresources>'

    names = [event.name for event in iter_events(io.BytesIO(data)) if event.name]

    assert names == ["gresources", "gresources"]


def test_iter_events_attaches_line_numbers() -> None:
    data = b"<gresources>\n\n  <gresource>\n  </gresource>\n</gresources>"

    lines = {
        event.name: event.position.line
        for event in iter_events(io.BytesIO(data))
        if event.kind is EventKind.START_ELEMENT
    }

    assert lines == {"gresources": 1, "gresource": 3}


def test_iter_events_reads_lazily() -> None:
    body = b"".join(b"<file>f%d.ui</file>" % index for index in range(500))
    stream = io.BytesIO(b"<gresources><gresource>" + body + b"</gresource></gresources>")

    events = iter_events(stream, chunk_size=64)
    first = next(events)

    assert first.kind is EventKind.START_DOCUMENT
    assert stream.tell() < len(stream.getvalue())


def test_iter_events_raises_manifest_error_for_malformed_markup() -> None:
    data = b"<gresources>\n<gresource>\n</gresources>"

    with pytest.raises(ManifestError) as excinfo:
        list(iter_events(io.BytesIO(data)))

    assert "malformed XML" in str(excinfo.value)
    assert excinfo.value.position is not None
    assert excinfo.value.position.line == 3


def test_iter_events_yields_events_seen_before_the_failure() -> None:
    seen = []

    with pytest.raises(ManifestError):
        for event in iter_events(io.BytesIO(b"<gresources><bogus>")):
            seen.append(event.kind)

    assert seen[:3] == [EventKind.START_DOCUMENT, EventKind.START_ELEMENT, EventKind.START_ELEMENT]


def test_iter_events_rejects_empty_input() -> None:
    with pytest.raises(ManifestError):
        list(iter_events(io.BytesIO(b"")))
