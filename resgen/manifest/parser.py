"""Recursive-descent parser for GResource manifests."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import ManifestError
from ..logging import get_logger
from ..models import Manifest, Position
from .events import Event, EventKind, iter_events

CONTAINER_TAG = "gresources"
SECTION_TAG = "gresource"
LEAF_TAG = "file"

_LOGGER = get_logger("manifest")


class State(enum.Enum):
    """Nesting levels the parser moves through."""

    START = "start"
    DOCUMENT = "document"
    CONTAINER = "container"
    SECTION = "section"


# The single child tag each level accepts, and the level it descends into.
# ``None`` marks a leaf whose text content is collected.
_CHILDREN: Dict[State, Tuple[str, Optional[State]]] = {
    State.DOCUMENT: (CONTAINER_TAG, State.CONTAINER),
    State.CONTAINER: (SECTION_TAG, State.SECTION),
    State.SECTION: (LEAF_TAG, None),
}


class ManifestParser:
    """Validates manifest structure and collects referenced file paths."""

    def __init__(self, events: Iterable[Event]) -> None:
        self._events: Iterator[Event] = iter(events)
        self._position = Position(line=1, column=1)
        self._files: List[str] = []
        self.state = State.START

    def parse(self) -> List[str]:
        """Consume the event stream and return referenced paths in document order."""
        event = self._next()
        if event.kind is not EventKind.START_DOCUMENT:
            raise self._error("malformed XML")
        self.state = State.DOCUMENT
        self._read_document()
        return list(self._files)

    def _read_document(self) -> None:
        seen_container = False
        while True:
            event = self._next()
            if event.kind is EventKind.START_ELEMENT:
                if event.name != CONTAINER_TAG or seen_container:
                    raise self._unexpected_element(event)
                self._read_children(State.CONTAINER)
                seen_container = True
            elif event.kind is EventKind.END_DOCUMENT:
                if not seen_container:
                    raise self._error("unexpected EOF")
                return
            elif event.kind is EventKind.CHARACTERS:
                raise self._error("unexpected data")
            else:
                raise self._error("malformed XML")

    def _read_children(self, state: State) -> None:
        tag, child = _CHILDREN[state]
        parent, self.state = self.state, state
        while True:
            event = self._next()
            if event.kind is EventKind.START_ELEMENT:
                if event.name != tag:
                    raise self._unexpected_element(event)
                if child is None:
                    self._files.append(self._read_leaf())
                else:
                    self._read_children(child)
            elif event.kind is EventKind.END_ELEMENT:
                self.state = parent
                return
            elif event.kind is EventKind.CHARACTERS:
                raise self._error("unexpected data")
            elif event.kind is EventKind.END_DOCUMENT:
                raise self._error("unexpected EOF")
            else:
                raise self._error("malformed XML")

    def _read_leaf(self) -> str:
        text: Optional[str] = None
        while True:
            event = self._next()
            if event.kind is EventKind.CHARACTERS:
                text = event.text
            elif event.kind is EventKind.END_ELEMENT:
                if not text:
                    raise self._error("missing data")
                return text
            elif event.kind is EventKind.START_ELEMENT:
                raise self._unexpected_element(event)
            elif event.kind is EventKind.END_DOCUMENT:
                raise self._error("unexpected EOF")
            else:
                raise self._error("malformed XML")

    def _next(self) -> Event:
        event = next(self._events, None)
        if event is None:
            raise self._error("unexpected EOF")
        self._position = event.position
        return event

    def _unexpected_element(self, event: Event) -> ManifestError:
        return self._error(f"unexpected element <{event.name}>")

    def _error(self, message: str) -> ManifestError:
        return ManifestError(message, self._position)


def parse_manifest(stream: BinaryIO) -> List[str]:
    """Parse manifest markup from a binary stream and return its file paths."""
    return ManifestParser(iter_events(stream)).parse()


def read_manifest(path: Path | str) -> Manifest:
    """Read and validate the manifest at ``path``."""
    manifest_path = Path(path)
    with manifest_path.open("rb") as handle:
        files = parse_manifest(handle)
    _LOGGER.debug("Manifest %s references %d files", manifest_path, len(files))
    return Manifest(path=manifest_path, files=tuple(files))


__all__ = [
    "CONTAINER_TAG",
    "LEAF_TAG",
    "SECTION_TAG",
    "ManifestParser",
    "State",
    "parse_manifest",
    "read_manifest",
]
