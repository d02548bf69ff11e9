"""Tests for MockOutputter: the in-memory double upstream code tests against."""

from __future__ import annotations

import pytest

from speakout.errors import ExecutionFailedError, OutputError, OutputTimeoutError
from speakout.output.base import IOutputter
from speakout.output.mock_outputter import MockOutputter, MockOutputterWithErrors


@pytest.fixture
def mock_outputter() -> MockOutputter:
    return MockOutputter()


class TestMockOutputter:

    def test_implements_interface(self, mock_outputter):
        assert isinstance(mock_outputter, IOutputter)
        assert mock_outputter.get_tool_names() == ('mock-clipboard', 'mock-type')

    def test_history_preserves_order(self, mock_outputter):
        for text in ('first', 'second', 'third'):
            mock_outputter.copy_to_clipboard(text)
        assert mock_outputter.clipboard_call_count == 3
        assert mock_outputter.clipboard_call_history == ['first', 'second', 'third']
        assert mock_outputter.last_clipboard_call() == 'third'
        assert mock_outputter.clipboard_content == 'third'
        assert mock_outputter.type_call_count == 0

    def test_type_calls_tracked_separately(self, mock_outputter):
        mock_outputter.type_to_active_window('hello world')
        assert mock_outputter.was_type_called()
        assert not mock_outputter.was_clipboard_called()
        assert mock_outputter.typed_content == 'hello world'
        assert mock_outputter.contains_type_text('lo wo')
        assert not mock_outputter.contains_clipboard_text('hello')

    def test_empty_accessors(self, mock_outputter):
        assert mock_outputter.last_clipboard_call() == ''
        assert mock_outputter.last_type_call() == ''
        assert mock_outputter.clipboard_call_history == []

    def test_history_is_a_copy(self, mock_outputter):
        mock_outputter.copy_to_clipboard('a')
        mock_outputter.clipboard_call_history.append('b')
        assert mock_outputter.clipboard_call_count == 1

    def test_injected_error(self, mock_outputter):
        boom = OutputError('boom')
        mock_outputter.set_type_error(boom)
        with pytest.raises(OutputError) as exc_info:
            mock_outputter.type_to_active_window('x')
        assert exc_info.value is boom
        assert mock_outputter.type_call_count == 0
        mock_outputter.copy_to_clipboard('still works')
        assert mock_outputter.clipboard_call_count == 1

    def test_clearing_error(self, mock_outputter):
        mock_outputter.set_clipboard_error(OutputError('boom'))
        mock_outputter.set_clipboard_error(None)
        mock_outputter.copy_to_clipboard('ok')
        assert mock_outputter.last_clipboard_call() == 'ok'

    def test_reset(self, mock_outputter):
        mock_outputter.copy_to_clipboard('a')
        mock_outputter.set_type_error(OutputError('boom'))
        mock_outputter.reset()
        assert mock_outputter.clipboard_call_count == 0
        mock_outputter.type_to_active_window('b')
        assert mock_outputter.type_call_history == ['b']


class TestMockOutputterWithErrors:

    def test_clipboard_unavailable(self):
        m = MockOutputterWithErrors()
        m.simulate_clipboard_unavailable()
        with pytest.raises(ExecutionFailedError, match='unavailable'):
            m.copy_to_clipboard('x')
        m.type_to_active_window('x')

    def test_permission_denied(self):
        m = MockOutputterWithErrors()
        m.simulate_permission_denied()
        with pytest.raises(ExecutionFailedError, match='permission denied'):
            m.type_to_active_window('x')

    def test_timeout(self):
        m = MockOutputterWithErrors()
        m.simulate_timeout()
        with pytest.raises(OutputTimeoutError):
            m.copy_to_clipboard('x')
        with pytest.raises(OutputTimeoutError):
            m.type_to_active_window('x')

    def test_invalid_input(self):
        m = MockOutputterWithErrors()
        m.simulate_invalid_input()
        with pytest.raises(OutputError, match='invalid input'):
            m.copy_to_clipboard('')
