"""Wire the memtrace MCP server into the configuration of AI coding agents."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

SUPPORTED_AGENTS = ("claude-code", "cursor", "vscode", "opencode", "windsurf", "gemini")

_ALIASES = {
    "claude": "claude-code",
    "claude-code": "claude-code",
    "claudecode": "claude-code",
    "cursor": "cursor",
    "vscode": "vscode",
    "vs-code": "vscode",
    "code": "vscode",
    "opencode": "opencode",
    "open-code": "opencode",
    "windsurf": "windsurf",
    "gemini": "gemini",
    "gemini-cli": "gemini",
}

_DETECTION = (
    (".claude", "claude-code"),
    (".cursor", "cursor"),
    (".vscode", "vscode"),
    ("opencode.json", "opencode"),
    (".gemini", "gemini"),
)

INSTRUCTIONS_CORE = (
    "This project has the memtrace MCP server connected. Use its tools for all memory "
    "operations — never use built-in memory tools.\n"
    "\n"
    "Memory tools: memory_recall, memory_save, memory_get, memory_update, memory_forget, "
    "memory_context, memory_prompt\n"
    "\n"
    "Rules:\n"
    "- Before every task — call memory_recall with a relevant query, no exceptions. "
    "This includes commits, quick fixes, and one-liners.\n"
    "- Before committing — call memory_recall to check for commit conventions.\n"
    "- Learn something new — call memory_save to persist it.\n"
    "- User says forget/delete/remove — call memory_forget.\n"
    "- Never write memory files manually or use built-in memory features."
)

CLAUDE_MD_SNIPPET = "\n## memtrace (memory)\n\n" + INSTRUCTIONS_CORE + "\n"
CURSOR_RULES_SNIPPET = (
    "---\ndescription: memtrace memory instructions\nalwaysApply: true\n---\n\n"
    + INSTRUCTIONS_CORE
    + "\n"
)
COPILOT_INSTRUCTIONS_SNIPPET = "\n## memtrace\n\n" + INSTRUCTIONS_CORE + "\n"
WINDSURF_RULES_SNIPPET = "\n# memtrace\n\n" + INSTRUCTIONS_CORE + "\n"
GEMINI_MD_SNIPPET = "\n## memtrace\n\n" + INSTRUCTIONS_CORE + "\n"


def _stdio_entry() -> dict[str, Any]:
    return {"command": "memtrace", "args": ["serve"]}


def normalize_agent(name: str) -> str:
    """Map an agent alias to its canonical name; unknown names pass through."""
    return _ALIASES.get(name.lower(), name)


def detect_agents(project_root: str | Path) -> list[str]:
    """Agents whose config exists in the project; claude-code when none do."""
    root = Path(project_root)
    found = [agent for marker, agent in _DETECTION if (root / marker).exists()]
    return found or ["claude-code"]


def write_mcp_entry(path: str | Path, servers_key: str, entry: dict[str, Any]) -> bool:
    """Merge the memtrace entry under servers_key in a JSON config.

    Returns False when an entry is already present. Raises ValueError when the
    existing file is not a JSON object.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    config: Any = None
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        raw = None
    if raw is not None:
        try:
            config = json.loads(raw)
        except ValueError as exc:
            raise ValueError(f"parsing {path}: {exc}") from exc
        if config is not None and not isinstance(config, dict):
            raise ValueError(f"parsing {path}: expected a JSON object")
    if config is None:
        config = {}

    servers = config.get(servers_key)
    if not isinstance(servers, dict):
        servers = {}
    if "memtrace" in servers:
        return False

    servers["memtrace"] = entry
    config[servers_key] = servers
    try:
        path.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError as exc:
        raise OSError(f"writing {path}: {exc}") from exc
    return True


def append_instructions(path: str | Path, snippet: str) -> None:
    """Append snippet to the file unless it already mentions memtrace."""
    path = Path(path)
    try:
        existing = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        existing = ""
    if "memtrace" in existing:
        return
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(snippet)
    except OSError:
        pass


def add_to_claude_md(project_root: str | Path) -> None:
    """Add memtrace instructions to CLAUDE.md."""
    append_instructions(Path(project_root) / "CLAUDE.md", CLAUDE_MD_SNIPPET)


def add_to_cursor_rules(project_root: str | Path) -> None:
    """Write .cursor/rules/memtrace.mdc unless it already exists."""
    rules_dir = Path(project_root) / ".cursor" / "rules"
    try:
        rules_dir.mkdir(parents=True, exist_ok=True)
        rule_path = rules_dir / "memtrace.mdc"
        if rule_path.exists():
            return
        rule_path.write_text(CURSOR_RULES_SNIPPET, encoding="utf-8")
    except OSError:
        pass


def add_to_copilot_instructions(project_root: str | Path) -> None:
    """Add memtrace instructions to .github/copilot-instructions.md."""
    github_dir = Path(project_root) / ".github"
    try:
        github_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return
    append_instructions(github_dir / "copilot-instructions.md", COPILOT_INSTRUCTIONS_SNIPPET)


def add_to_windsurf_rules(project_root: str | Path) -> None:
    """Add memtrace instructions to .windsurfrules."""
    append_instructions(Path(project_root) / ".windsurfrules", WINDSURF_RULES_SNIPPET)


def add_to_gemini_md(project_root: str | Path) -> None:
    """Add memtrace instructions to GEMINI.md."""
    append_instructions(Path(project_root) / "GEMINI.md", GEMINI_MD_SNIPPET)


def _home() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise OSError(f"could not find home directory: {exc}") from exc


def setup_agent(agent: str, project_root: str | Path, global_scope: bool = False) -> bool:
    """Write the memtrace MCP entry for one agent.

    Returns True when written, False when already present. Raises ValueError
    for an unknown agent.
    """
    root = Path(project_root)
    if agent == "claude-code":
        base = _home() if global_scope else root
        written = write_mcp_entry(base / ".claude" / "mcp.json", "mcpServers", _stdio_entry())
        if not global_scope:
            add_to_claude_md(root)
        return written
    if agent == "cursor":
        written = write_mcp_entry(root / ".cursor" / "mcp.json", "mcpServers", _stdio_entry())
        add_to_cursor_rules(root)
        return written
    if agent == "vscode":
        written = write_mcp_entry(
            root / ".vscode" / "mcp.json", "servers", {"type": "stdio", **_stdio_entry()}
        )
        add_to_copilot_instructions(root)
        return written
    if agent == "opencode":
        return write_mcp_entry(
            root / "opencode.json", "mcp", {"type": "local", "command": ["memtrace", "serve"]}
        )
    if agent == "windsurf":
        config_path = _home() / ".codeium" / "windsurf" / "mcp_config.json"
        written = write_mcp_entry(config_path, "mcpServers", _stdio_entry())
        add_to_windsurf_rules(root)
        return written
    if agent == "gemini":
        written = write_mcp_entry(root / ".gemini" / "settings.json", "mcpServers", _stdio_entry())
        add_to_gemini_md(root)
        return written
    raise ValueError(f"unknown agent {agent!r} — supported: {', '.join(SUPPORTED_AGENTS)}")


def main(argv: list[str] | None = None) -> int:
    """Set up one named agent, or every agent detected in the current directory."""
    parser = argparse.ArgumentParser(
        prog="memtrace setup",
        description="Wire memtrace into your AI coding agent's MCP config.",
    )
    parser.add_argument("agent", nargs="?", help="agent to set up (default: auto-detect)")
    parser.add_argument(
        "--global",
        dest="global_scope",
        action="store_true",
        help="install at user scope (claude-code only)",
    )
    args = parser.parse_args(argv)

    project_root = Path(os.getcwd())
    agents = [normalize_agent(args.agent)] if args.agent else detect_agents(project_root)

    any_done = False
    for agent in agents:
        try:
            written = setup_agent(agent, project_root, args.global_scope)
        except (OSError, ValueError) as exc:
            print(f"  [error] {agent}: {exc}", file=sys.stderr)
            continue
        state = "configured" if written else "already configured"
        print(f"  [ok] {agent:<12} {state}")
        any_done = True

    if not any_done:
        print("No agents set up. Specify an agent:")
        for agent in SUPPORTED_AGENTS:
            print(f"  memtrace setup {agent}")
    return 0