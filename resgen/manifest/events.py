"""Streaming markup events for resource manifests.

The manifest parser only needs a small, normalised view of the document:
document boundaries, element boundaries and text. This module drives the
standard library's incremental expat reader and turns its callbacks into a
lazy sequence of :class:`Event` objects.

Normalisation applied to text:

* adjacent character runs (CDATA included) are coalesced into one event,
* the coalesced text is trimmed,
* whitespace-only runs are dropped entirely.

Comments and processing instructions never produce events.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List, Optional
from xml.sax import SAXParseException, make_parser
from xml.sax.handler import ContentHandler, feature_external_ges, feature_namespaces
from xml.sax.xmlreader import Locator

from ..errors import ManifestError
from ..models import Position

DEFAULT_CHUNK_SIZE = 16 * 1024


class EventKind(enum.Enum):
    """Structural event categories emitted by :func:`iter_events`."""

    START_DOCUMENT = "start_document"
    END_DOCUMENT = "end_document"
    START_ELEMENT = "start_element"
    END_ELEMENT = "end_element"
    CHARACTERS = "characters"


@dataclass(frozen=True)
class Event:
    """A single markup event with its stream position."""

    kind: EventKind
    position: Position
    name: Optional[str] = None
    text: Optional[str] = None


class _EventCollector(ContentHandler):
    """Buffers SAX callbacks until the reader drains them."""

    def __init__(self) -> None:
        super().__init__()
        self._locator: Optional[Locator] = None
        self._pending: List[Event] = []
        self._text: List[str] = []
        self._text_position: Optional[Position] = None

    def setDocumentLocator(self, locator: Locator) -> None:  # noqa: N802 - SAX API
        self._locator = locator

    def drain(self) -> List[Event]:
        events, self._pending = self._pending, []
        return events

    # SAX callbacks -----------------------------------------------------

    def startDocument(self) -> None:  # noqa: N802 - SAX API
        self._emit(EventKind.START_DOCUMENT)

    def endDocument(self) -> None:  # noqa: N802 - SAX API
        self._emit(EventKind.END_DOCUMENT)

    def startElement(self, name, attrs) -> None:  # noqa: N802 - SAX API
        self._emit(EventKind.START_ELEMENT, name=_local_name(name))

    def endElement(self, name) -> None:  # noqa: N802 - SAX API
        self._emit(EventKind.END_ELEMENT, name=_local_name(name))

    def characters(self, content: str) -> None:
        if self._text_position is None:
            self._text_position = self._position()
        self._text.append(content)

    ignorableWhitespace = characters

    # Helpers -----------------------------------------------------------

    def _emit(self, kind: EventKind, *, name: Optional[str] = None) -> None:
        self._flush_text()
        self._pending.append(Event(kind=kind, position=self._position(), name=name))

    def _flush_text(self) -> None:
        if self._text_position is None:
            return
        text = "".join(self._text).strip()
        if text:
            self._pending.append(
                Event(kind=EventKind.CHARACTERS, position=self._text_position, text=text)
            )
        self._text = []
        self._text_position = None

    def _position(self) -> Position:
        if self._locator is None:
            return Position(line=1, column=1)
        return Position(
            line=self._locator.getLineNumber() or 1,
            column=(self._locator.getColumnNumber() or 0) + 1,
        )


def iter_events(stream: BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Event]:
    """Yield normalised markup events read lazily from ``stream``.

    Malformed markup raises :class:`~resgen.errors.ManifestError` carrying the
    position reported by the underlying reader.
    """
    collector = _EventCollector()
    reader = make_parser()
    reader.setFeature(feature_namespaces, False)
    reader.setFeature(feature_external_ges, False)
    reader.setContentHandler(collector)
    # The expat reader is its own locator once feeding starts.
    collector.setDocumentLocator(reader)

    failure: Optional[SAXParseException] = None
    try:
        while True:
            chunk = stream.read(chunk_size)
            reader.feed(chunk)
            yield from collector.drain()
            if not chunk:
                break
        reader.close()
    except SAXParseException as exc:
        failure = exc

    # Events reported before the reader failed still reach the consumer first.
    yield from collector.drain()
    if failure is not None:
        position = Position(
            line=failure.getLineNumber(), column=(failure.getColumnNumber() or 0) + 1
        )
        raise ManifestError(f"malformed XML: {failure.getMessage()}", position) from failure


def _local_name(name: str) -> str:
    return name.rpartition(":")[2]


__all__ = ["DEFAULT_CHUNK_SIZE", "Event", "EventKind", "iter_events"]
