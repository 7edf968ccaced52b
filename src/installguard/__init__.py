"""InstallGuard: Production-readiness evaluation for shell installation scripts."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
