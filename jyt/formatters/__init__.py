"""Output formatter registry.

WHY: The stream driver needs a single lookup from a destination Format to
the class that writes it. A central dict makes adding an output format
one new module plus one line here.

HOW: OUTPUTS maps each writable Format to its Output *class* (not an
instance). The driver instantiates it once per run with the output
stream; JSON additionally takes the run's pretty/compact decision.

RULES:
- Keys are exactly the formats whose ``can_output`` is True
- Values are Output subclasses
- Every module listed here must be importable without side effects
"""

from __future__ import annotations

from typing import Dict, Type

from jyt.core.formats import Format
from jyt.formatters.base import Output, Sink
from jyt.formatters.json_output import JsonOutput, JsonSink
from jyt.formatters.yaml_output import YamlOutput, YamlSink

OUTPUTS: Dict[Format, Type[Output]] = {
    Format.JSON: JsonOutput,
    Format.YAML: YamlOutput,
}

__all__ = ["OUTPUTS", "JsonOutput", "JsonSink", "Output", "Sink", "YamlOutput", "YamlSink"]
