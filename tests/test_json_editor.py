"""Tests for the JSON configuration editor adapter."""

import asyncio
import json

import pytest

from shopadmin.console.json_editor import PLACEHOLDER, JSONEditorAdapter


class Recorder:
    def __init__(self):
        self.changes = []
        self.validations = []

    def on_change(self, value):
        self.changes.append(value)

    def on_validate(self, is_valid, errors):
        self.validations.append((is_valid, list(errors)))


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
async def editor(recorder):
    editor = JSONEditorAdapter(recorder.on_change, recorder.on_validate, debounce_seconds=0.01)
    yield editor
    editor.close()


class TestSetValue:
    def test_serializes_with_two_space_indent(self, editor):
        editor.set_value({"a": 1, "b": [1, 2]})
        assert editor.text == json.dumps({"a": 1, "b": [1, 2]}, indent=2)

    def test_round_trip(self, editor):
        value = {"siteName": "Shal", "nested": {"flag": True, "items": [1, "two", None]}}
        editor.set_value(value)
        assert json.loads(editor.text) == value

    def test_unserializable_value_falls_back_to_placeholder(self, editor):
        circular = {}
        circular["self"] = circular
        editor.set_value(circular)
        assert editor.text == PLACEHOLDER

        editor.set_value({"when": object()})
        assert editor.text == PLACEHOLDER

        editor.set_value({"ratio": float("nan")})
        assert editor.text == PLACEHOLDER


class TestEdit:
    async def test_trailing_comma_marks_invalid_without_propagating(self, editor, recorder):
        editor.edit('{"a":1,}')
        await asyncio.sleep(0.05)

        assert editor.text == '{"a":1,}'
        assert editor.is_valid is False
        assert len(editor.errors) == 1
        assert recorder.changes == []
        assert recorder.validations == [(False, editor.errors)]

    async def test_valid_edit_propagates_parsed_value(self, editor, recorder):
        editor.edit('{"a": 1}')
        assert recorder.changes == []

        await asyncio.sleep(0.05)
        assert editor.is_valid is True
        assert editor.errors == []
        assert recorder.changes == [{"a": 1}]
        assert recorder.validations == [(True, [])]

    async def test_only_the_last_edit_is_validated(self, editor, recorder):
        editor.edit('{"a": 1')
        editor.edit('{"a": 12')
        editor.edit('{"a": 123}')
        await asyncio.sleep(0.05)

        assert recorder.changes == [{"a": 123}]
        assert len(recorder.validations) == 1

    async def test_blank_buffer_is_valid_and_propagates_nothing(self, editor, recorder):
        editor.edit("   \n")
        await asyncio.sleep(0.05)

        assert editor.is_valid is True
        assert recorder.changes == []
        assert recorder.validations == []

    @pytest.mark.parametrize("text", ['{"a": NaN}', "Infinity", '[1, -Infinity]'])
    async def test_non_finite_constants_are_invalid(self, editor, recorder, text):
        editor.edit(text)

        assert editor.flush() is False
        assert editor.is_valid is False
        assert len(editor.errors) == 1
        assert recorder.changes == []
        assert recorder.validations == [(False, editor.errors)]

    async def test_flush_validates_immediately(self, recorder):
        editor = JSONEditorAdapter(recorder.on_change, debounce_seconds=60)
        editor.edit("[1, 2]")

        assert editor.flush() is True
        assert recorder.changes == [[1, 2]]
        editor.close()


class TestFormatting:
    async def test_format_is_idempotent(self, editor):
        editor.edit('{"b":[1,2],"a":{"c":null}}')
        assert editor.format() is True
        once = editor.text
        assert editor.format() is True
        assert editor.text == once
        assert once == json.dumps({"b": [1, 2], "a": {"c": None}}, indent=2)

    async def test_minify_removes_whitespace(self, editor, recorder):
        editor.edit('{\n  "a": [1, 2]\n}')
        assert editor.minify() is True
        assert editor.text == '{"a":[1,2]}'
        assert recorder.changes == [{"a": [1, 2]}]

    async def test_format_and_minify_leave_invalid_buffer_alone(self, editor, recorder):
        editor.edit('{"a":1,}')
        assert editor.format() is False
        assert editor.minify() is False
        assert editor.text == '{"a":1,}'
        assert recorder.changes == []

    async def test_format_rejects_non_finite_constants(self, editor, recorder):
        editor.edit('{"a": NaN}')
        assert editor.format() is False
        assert editor.minify() is False
        assert editor.text == '{"a": NaN}'
        assert recorder.changes == []


class TestClipboard:
    async def test_copies_raw_buffer_with_injected_writer(self, recorder):
        copied = []
        editor = JSONEditorAdapter(recorder.on_change, clipboard_writer=copied.append)
        editor.set_value({"a": 1})

        assert await editor.copy_to_clipboard() is True
        assert copied == [editor.text]

    async def test_async_writer_is_awaited(self, recorder):
        copied = []

        async def writer(text):
            copied.append(text)

        editor = JSONEditorAdapter(recorder.on_change, clipboard_writer=writer)
        editor.set_value([1])

        assert await editor.copy_to_clipboard() is True
        assert copied == ["[\n  1\n]"]

    async def test_no_clipboard_available(self, recorder, monkeypatch):
        monkeypatch.setattr("shopadmin.console.json_editor._clipboard_command", lambda: None)
        editor = JSONEditorAdapter(recorder.on_change)

        assert await editor.copy_to_clipboard() is False
