"""Script-content providers.

A provider turns a script identifier into the script's text, or raises
``ScriptReadError``. The aggregator depends only on the ``ScriptProvider``
interface.
"""

from installguard.providers.base import ScriptProvider
from installguard.providers.local import FileScriptProvider, InMemoryScriptProvider

__all__ = [
    "FileScriptProvider",
    "InMemoryScriptProvider",
    "ScriptProvider",
]
