"""Text-buffer adapter for editing JSON configuration values."""

import asyncio
import json
import logging
import os
import shutil
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from shopadmin.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

PLACEHOLDER = '{\n  "key": "value"\n}'


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _clipboard_command() -> list[str] | None:
    """Platform clipboard command available on this machine."""
    if sys.platform == "darwin":
        candidates = [["pbcopy"]]
    elif sys.platform == "win32":
        candidates = [["clip"]]
    elif os.environ.get("WAYLAND_DISPLAY"):
        candidates = [["wl-copy"], ["xclip", "-selection", "clipboard"]]
    else:
        candidates = [["xclip", "-selection", "clipboard"], ["wl-copy"]]

    for command in candidates:
        if shutil.which(command[0]):
            return command
    return None


class JSONEditorAdapter:
    """
    Keeps a raw text buffer and a validity flag for a JSON value.

    Edits update the buffer immediately; parsing and propagation through
    ``on_change`` happen once the buffer has been quiet for the debounce
    window. Only the last scheduled validation runs.
    """

    def __init__(
        self,
        on_change: Callable[[Any], None],
        on_validate: Callable[[bool, list[str]], None] | None = None,
        debounce_seconds: float | None = None,
        placeholder: str = PLACEHOLDER,
        clipboard_writer: Callable[[str], Awaitable[None] | None] | None = None,
    ):
        self.on_change = on_change
        self.on_validate = on_validate
        self.debounce_seconds = (
            settings.json_editor_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.placeholder = placeholder
        self.clipboard_writer = clipboard_writer
        self.text = ""
        self.errors: list[str] = []
        self.is_valid = True
        self._pending: asyncio.Task | None = None

    def set_value(self, value: Any) -> None:
        """Replace the buffer with the serialized form of ``value``."""
        try:
            self.text = json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError):
            self.text = self.placeholder

    def edit(self, text: str) -> None:
        """Update the buffer and (re)schedule validation."""
        self.text = text
        self._cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(self._validate_later())

    async def _validate_later(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._pending = None
        self.validate()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def validate(self) -> bool:
        """
        Parse the buffer now, propagating the value when it parses.

        A blank buffer counts as valid and is neither propagated nor
        reported through ``on_validate``.
        """
        if not self.text.strip():
            self.errors = []
            self.is_valid = True
            return True

        try:
            parsed = _parse(self.text)
        except ValueError as e:
            self.errors = [str(e) or "Invalid JSON format"]
            self.is_valid = False
            if self.on_validate is not None:
                self.on_validate(False, self.errors)
            return False

        self.errors = []
        self.is_valid = True
        if self.on_validate is not None:
            self.on_validate(True, [])
        self.on_change(parsed)
        return True

    def flush(self) -> bool:
        """Run a pending validation immediately."""
        if self._pending is not None:
            self._cancel_pending()
            return self.validate()
        return self.is_valid

    def close(self) -> None:
        self._cancel_pending()

    def _reserialize(self, **dump_options) -> bool:
        try:
            parsed = _parse(self.text)
        except ValueError:
            return False
        self._cancel_pending()
        self.text = json.dumps(parsed, ensure_ascii=False, **dump_options)
        self.errors = []
        self.is_valid = True
        self.on_change(parsed)
        return True

    def format(self) -> bool:
        """Pretty-print the buffer with two-space indentation."""
        return self._reserialize(indent=2)

    def minify(self) -> bool:
        """Rewrite the buffer without whitespace."""
        return self._reserialize(separators=(",", ":"))

    async def copy_to_clipboard(self) -> bool:
        """Copy the raw buffer, falling back to the platform clipboard command."""
        if self.clipboard_writer is not None:
            try:
                result = self.clipboard_writer(self.text)
                if asyncio.iscoroutine(result):
                    await result
                return True
            except Exception as e:
                logger.warning(f"Clipboard writer failed, trying system clipboard: {e}")

        command = _clipboard_command()
        if command is None:
            logger.error("No clipboard command available")
            return False

        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        await process.communicate(self.text.encode("utf-8"))
        if process.returncode != 0:
            logger.error(f"{command[0]} exited with status {process.returncode}")
            return False
        return True
