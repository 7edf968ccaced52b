"""Filesystem and in-memory script providers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path

from installguard.exceptions import ScriptReadError
from installguard.providers.base import ScriptProvider

logger = logging.getLogger(__name__)


class FileScriptProvider(ScriptProvider):
    """Read scripts from disk, relative to a base directory.

    Absolute identifiers are used as-is. Reads run in a worker thread so the
    event loop is never blocked by file I/O.

    Args:
        base_dir: Directory that relative identifiers are resolved against.
        encoding: Text encoding of the scripts.
    """

    def __init__(self, base_dir: Path | str = ".", encoding: str = "utf-8") -> None:
        self.base_dir = Path(base_dir)
        self.encoding = encoding

    def resolve(self, script_id: str) -> Path:
        path = Path(script_id)
        return path if path.is_absolute() else self.base_dir / path

    async def read(self, script_id: str) -> str:
        path = self.resolve(script_id)
        logger.debug("Reading script %s from %s", script_id, path)
        try:
            return await asyncio.to_thread(path.read_text, encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise ScriptReadError(script_id, str(exc)) from exc


class InMemoryScriptProvider(ScriptProvider):
    """Serve scripts from a mapping of identifier to text.

    Useful for embedding the evaluator and for tests. Unknown identifiers
    raise ``ScriptReadError``.
    """

    def __init__(self, scripts: Mapping[str, str]) -> None:
        self._scripts = dict(scripts)

    async def read(self, script_id: str) -> str:
        try:
            return self._scripts[script_id]
        except KeyError:
            raise ScriptReadError(script_id, "no such script") from None
