"""Abstract base class for script-content providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ScriptProvider(ABC):
    """Source of raw script text, addressed by identifier.

    Subclasses implement ``read``. Any failure must surface as an exception;
    callers do not distinguish between causes.
    """

    @abstractmethod
    async def read(self, script_id: str) -> str:
        """Return the full text of ``script_id``.

        Args:
            script_id: Provider-specific identifier (a relative path, a URL,
                a mapping key).

        Returns:
            The script content as a string.

        Raises:
            ScriptReadError: If the script cannot be read.
        """
