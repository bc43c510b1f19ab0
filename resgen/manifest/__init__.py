"""Manifest reading: markup events and the structural parser."""

from .events import Event, EventKind, iter_events
from .parser import ManifestParser, State, parse_manifest, read_manifest

__all__ = [
    "Event",
    "EventKind",
    "ManifestParser",
    "State",
    "iter_events",
    "parse_manifest",
    "read_manifest",
]
