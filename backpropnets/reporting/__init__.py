"""Reporting utilities for backpropnets."""

from .artifacts import write_manifest
from .console import ConsoleReporter, print_startup_summary
from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter

__all__ = [
    "ConsoleReporter",
    "CsvSink",
    "JsonlSink",
    "PlotAdapter",
    "print_startup_summary",
    "write_manifest",
]
