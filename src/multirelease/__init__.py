"""multi-release: dependency-aware versioning for multi-module projects."""

from __future__ import annotations

__version__ = "0.1.0"
