"""Outputters: clipboard, keystroke, combined and the in-memory mock."""

from speakout.output.base import IOutputter
from speakout.output.clipboard_outputter import ClipboardOutputter
from speakout.output.combined_outputter import CombinedOutputter
from speakout.output.factory import (
    OutputFactory,
    get_outputter_from_config,
    select_clipboard_tool,
    select_type_tool,
)
from speakout.output.mock_outputter import MockOutputter, MockOutputterWithErrors
from speakout.output.type_outputter import TypeOutputter

__all__ = [
    'ClipboardOutputter',
    'CombinedOutputter',
    'IOutputter',
    'MockOutputter',
    'MockOutputterWithErrors',
    'OutputFactory',
    'TypeOutputter',
    'get_outputter_from_config',
    'select_clipboard_tool',
    'select_type_tool',
]
