"""Health checks and small helpers behind the project maintenance commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

_BADGES = {
    "ok": "  [ok]  ",
    "warn": " [warn] ",
    "fail": " [fail] ",
}

FULL_ID_LENGTH = 26


class CheckLevel(str, Enum):
    """Outcome of one health check."""

    OK = "ok"
    WARN = "warn"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CheckResult:
    """One line of a health report."""

    level: CheckLevel
    label: str
    message: str

    @property
    def is_issue(self) -> bool:
        """True for warnings and failures."""
        return self.level is not CheckLevel.OK


def format_check(result: CheckResult) -> str:
    """Render a check as a badge, a padded label and its message."""
    badge = _BADGES[CheckLevel(result.level).value]
    return f"{badge} {result.label + ':':<18} {result.message}"


def check_mcp_config(project_root: str | Path, home: str | Path | None = None) -> CheckResult:
    """Look for a memtrace entry in the known MCP config files."""
    root = Path(project_root)
    home_dir = Path(home) if home is not None else Path.home()
    candidates = (
        (root / ".claude" / "mcp.json", ".claude/mcp.json"),
        (root / ".cursor" / "mcp.json", ".cursor/mcp.json"),
        (root / ".vscode" / "mcp.json", ".vscode/mcp.json"),
        (home_dir / ".claude" / "mcp.json", "~/.claude/mcp.json"),
    )
    for path, label in candidates:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        if "memtrace" in text:
            return CheckResult(CheckLevel.OK, "MCP config", f"found in {label}")
    return CheckResult(
        CheckLevel.WARN,
        "MCP config",
        "memtrace not found in any MCP config — run 'memtrace setup'",
    )


def check_claude_md(project_root: str | Path) -> CheckResult:
    """Check that CLAUDE.md exists and carries memtrace instructions."""
    path = Path(project_root) / "CLAUDE.md"
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return CheckResult(
            CheckLevel.WARN,
            "CLAUDE.md",
            "not found — run 'memtrace init' to add memtrace instructions",
        )
    if "memtrace" in text or "memory_save" in text:
        return CheckResult(CheckLevel.OK, "CLAUDE.md", "memtrace instructions present")
    return CheckResult(
        CheckLevel.WARN, "CLAUDE.md", "CLAUDE.md exists but has no memtrace instructions"
    )


def add_to_gitignore(project_root: str | Path) -> bool:
    """Append .memtrace/ to an existing .gitignore that lacks it.

    Returns True when the file was changed.
    """
    path = Path(project_root) / ".gitignore"
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    if ".memtrace" in text:
        return False
    prefix = "" if text.endswith("\n") else "\n"
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"{prefix}.memtrace/\n")
    except OSError:
        return False
    return True


def mask_key(value: str) -> str:
    """Hide all but the first and last four characters of a credential."""
    if len(value) <= 8:
        return "*" * len(value)
    return value[:4] + "*" * (len(value) - 8) + value[-4:]


def truncate_summary(summary: str, content: str) -> str:
    """The summary (or content when empty), cut to 80 characters."""
    text = summary or content
    if len(text) > 80:
        return text[:77] + "..."
    return text


def db_file_size(path: str | Path) -> str:
    """Human-readable size of a file, or "unknown" when it cannot be read."""
    try:
        size = os.stat(path).st_size
    except OSError:
        return "unknown"
    kb = size // 1024
    if kb < 1024:
        return f"{kb} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def resolve_id(memory_ids: Iterable[str], prefix: str) -> str | None:
    """Resolve a full ID or a unique short prefix; None if missing or ambiguous."""
    if len(prefix) >= FULL_ID_LENGTH:
        return prefix
    wanted = prefix.upper()
    matches = [memory_id for memory_id in memory_ids if memory_id.startswith(wanted)]
    return matches[0] if len(matches) == 1 else None