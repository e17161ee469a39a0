"""Core transcoding engine.

WHY: The core package holds the format-agnostic heart of jyt: the
format registry, the event vocabulary, the bridge that copies one value
from any cursor to any sink, and the stream driver that splits input into
documents.

HOW: formats.py defines the closed Format enum, events.py the shared
event types, bridge.py the structural copy, stream.py the per-format
document iteration and the ``run()`` entry point.

RULES:
- No module here performs file I/O or inspects paths
- The bridge never builds an intermediate value tree
- Submodules are imported explicitly; this package imports nothing
"""
