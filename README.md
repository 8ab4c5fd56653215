# memtrace

Helpers for connecting AI coding agents to the memtrace MCP server and for
checking that a project is set up to use it.

The package has two modules:

- `memtrace.agents` writes the MCP server entry and instruction snippets
  into the configuration of Claude Code, Cursor, VS Code, opencode,
  Windsurf and Gemini.
- `memtrace.housekeeping` holds health checks and small helpers for project
  maintenance.

## Install

```
pip install .
```

## Wiring an agent

From the project directory:

```
memtrace-setup
```

With no argument, the agents whose configuration already exists in the
current directory are detected (`.claude`, `.cursor`, `.vscode`,
`opencode.json`, `.gemini`); when none is found, Claude Code is used. Name an
agent to set it up explicitly. Aliases such as `claude`, `code` or
`gemini-cli` are accepted:

```
memtrace-setup cursor
memtrace-setup vscode
memtrace-setup claude-code --global
```

`--global` writes the Claude Code entry to `~/.claude/mcp.json` instead of
the project's `.claude/mcp.json`.

What each agent gets:

| Agent        | MCP config                                   | Instructions                          |
|--------------|----------------------------------------------|---------------------------------------|
| claude-code  | `.claude/mcp.json` (`mcpServers`)            | `CLAUDE.md` (project scope only)      |
| cursor       | `.cursor/mcp.json` (`mcpServers`)            | `.cursor/rules/memtrace.mdc`          |
| vscode       | `.vscode/mcp.json` (`servers`)               | `.github/copilot-instructions.md`     |
| opencode     | `opencode.json` (`mcp`)                      | none                                  |
| windsurf     | `~/.codeium/windsurf/mcp_config.json`        | `.windsurfrules`                      |
| gemini       | `.gemini/settings.json` (`mcpServers`)       | `GEMINI.md`                           |

Running the command again is safe. An existing `memtrace` entry is left
alone and reported as "already configured", other servers in the file are
kept, and instruction files that already mention memtrace are not touched.
An unknown agent name is reported on standard error.

## Library use

```python
from memtrace.agents import detect_agents, setup_agent, write_mcp_entry

for agent in detect_agents("."):
    written = setup_agent(agent, ".")
    print(agent, "configured" if written else "already configured")

write_mcp_entry("tools/mcp.json", "mcpServers", {"command": "memtrace", "args": ["serve"]})
```

`setup_agent` returns `True` when it wrote an entry and `False` when one was
already there; it raises `ValueError` for an unknown agent.
`write_mcp_entry` raises `ValueError` when the existing file is not a JSON
object.

```python
from memtrace.housekeeping import (
    check_claude_md,
    check_mcp_config,
    format_check,
    mask_key,
    resolve_id,
)

for result in (check_mcp_config("."), check_claude_md(".")):
    print(format_check(result))

print(mask_key("placeholder"))              # "plac***lder"
print(resolve_id(["01HXABC", "01HYDEF"], "01hx"))  # "01HXABC"
```

Also in `memtrace.housekeeping`:

- `CheckLevel` (`OK`, `WARN`, `FAIL`) and `CheckResult`, whose `is_issue`
  is true for warnings and failures.
- `add_to_gitignore(project_root)` appends `.memtrace/` to an existing
  `.gitignore` that lacks it and returns whether the file changed.
- `truncate_summary(summary, content)` cuts the summary (or the content when
  the summary is empty) to 80 characters.
- `db_file_size(path)` gives a size such as `"12 KB"` or `"1.5 MB"`, or
  `"unknown"` when the file cannot be read.
- `resolve_id(memory_ids, prefix)` returns a prefix of 26 characters or more
  as is. A shorter one is upper-cased and matched against the given IDs, and
  the result is `None` when nothing or more than one ID matches.

## What this package does not do

It does not store, search, import or export memories, and it does not run
the MCP server itself. The entries it writes start a `memtrace serve`
command, which must be installed separately.

## Tests

```
pip install .[test]
pytest
```