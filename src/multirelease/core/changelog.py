"""Per-module changelog rendering.

Each released module gets a section listing its breaking changes,
features and fixes since the previous release. The section is
prepended to the module's existing changelog by the project writer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from multirelease.core.commits import group_commits

if TYPE_CHECKING:
    from multirelease.config.models import CommitsConfig
    from multirelease.core.version import Version


def render_module_changelog(
    module_name: str,
    version: Version | str,
    commits: Sequence[str],
    config: CommitsConfig | None = None,
) -> str:
    """Render a changelog section for one module release.

    Args:
        module_name: Name of the released module
        version: Version being released
        commits: Commit subjects since the previous release
        config: Prefix configuration used for grouping

    Returns:
        Markdown section, ending with a blank line
    """
    grouped = group_commits(commits, config)
    lines = [f"# {module_name} v{version}", ""]

    sections = (
        ("## ⚠ BREAKING CHANGES", grouped.breaking),
        ("## ✨ Features", grouped.features),
        ("## 🐛 Bug Fixes", grouped.fixes),
    )
    for title, entries in sections:
        if not entries:
            continue
        lines.append(title)
        lines.append("")
        lines.extend(f"* {entry}" for entry in entries)
        lines.append("")

    return "\n".join(lines) + "\n"
