import json

import pytest

from memtrace.agents import (
    CURSOR_RULES_SNIPPET,
    append_instructions,
    detect_agents,
    main,
    normalize_agent,
    setup_agent,
    write_mcp_entry,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("claude", "claude-code"),
        ("Claude-Code", "claude-code"),
        ("claudecode", "claude-code"),
        ("cursor", "cursor"),
        ("vscode", "vscode"),
        ("vs-code", "vscode"),
        ("code", "vscode"),
        ("opencode", "opencode"),
        ("open-code", "opencode"),
        ("windsurf", "windsurf"),
        ("gemini", "gemini"),
        ("gemini-cli", "gemini"),
        ("unknown", "unknown"),
    ],
)
def test_normalize_agent(name, expected):
    assert normalize_agent(name) == expected


def test_detect_agents_none_found(tmp_path):
    assert detect_agents(tmp_path) == ["claude-code"]


def test_detect_agents_finds_existing_dirs(tmp_path):
    (tmp_path / ".claude").mkdir()
    (tmp_path / ".cursor").mkdir()
    agents = detect_agents(tmp_path)
    assert len(agents) == 2
    assert set(agents) == {"claude-code", "cursor"}


def test_detect_agents_finds_opencode_and_gemini(tmp_path):
    (tmp_path / "opencode.json").write_text("{}")
    (tmp_path / ".gemini").mkdir()
    agents = detect_agents(tmp_path)
    assert "opencode" in agents
    assert "gemini" in agents


def test_write_mcp_entry_creates_file(tmp_path):
    path = tmp_path / "mcp.json"
    wrote = write_mcp_entry(path, "mcpServers", {"command": "memtrace", "args": ["serve"]})
    assert wrote is True
    cfg = json.loads(path.read_text())
    assert cfg["mcpServers"]["memtrace"]["command"] == "memtrace"


def test_write_mcp_entry_merges_existing_config(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text(
        json.dumps({"mcpServers": {"other-tool": {"command": "other", "args": ["run"]}}})
    )
    wrote = write_mcp_entry(path, "mcpServers", {"command": "memtrace", "args": ["serve"]})
    assert wrote is True
    servers = json.loads(path.read_text())["mcpServers"]
    assert "other-tool" in servers
    assert "memtrace" in servers


def test_write_mcp_entry_idempotent(tmp_path):
    path = tmp_path / "mcp.json"
    entry = {"command": "memtrace", "args": ["serve"]}
    assert write_mcp_entry(path, "mcpServers", entry) is True
    assert write_mcp_entry(path, "mcpServers", entry) is False


def test_write_mcp_entry_creates_parent_dir(tmp_path):
    path = tmp_path / ".claude" / "mcp.json"
    assert write_mcp_entry(path, "mcpServers", {"command": "memtrace", "args": ["serve"]}) is True
    assert path.is_file()


def test_write_mcp_entry_vscode_format(tmp_path):
    path = tmp_path / "mcp.json"
    write_mcp_entry(path, "servers", {"type": "stdio", "command": "memtrace", "args": ["serve"]})
    cfg = json.loads(path.read_text())
    assert "servers" in cfg
    assert "mcpServers" not in cfg


def test_write_mcp_entry_invalid_json(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text("not json")
    with pytest.raises(ValueError):
        write_mcp_entry(path, "mcpServers", {"command": "memtrace"})


def test_setup_agent_opencode(tmp_path):
    assert setup_agent("opencode", tmp_path, False) is True
    cfg = json.loads((tmp_path / "opencode.json").read_text())
    assert cfg["mcp"]["memtrace"]["type"] == "local"


def test_setup_agent_gemini(tmp_path):
    assert setup_agent("gemini", tmp_path, False) is True
    cfg = json.loads((tmp_path / ".gemini" / "settings.json").read_text())
    assert "memtrace" in cfg["mcpServers"]
    assert "memory_save" in (tmp_path / "GEMINI.md").read_text()


def test_setup_agent_unknown_agent(tmp_path):
    with pytest.raises(ValueError):
        setup_agent("notanagent", tmp_path, False)


def test_setup_agent_claude_code_adds_claude_md(tmp_path):
    assert setup_agent("claude-code", tmp_path, False) is True
    assert "## memtrace (memory)" in (tmp_path / "CLAUDE.md").read_text()
    assert (tmp_path / ".claude" / "mcp.json").is_file()


def test_setup_agent_claude_code_global(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    assert setup_agent("claude-code", project, True) is True
    assert (home / ".claude" / "mcp.json").is_file()
    assert not (project / "CLAUDE.md").exists()


def test_setup_agent_cursor_writes_rule_file(tmp_path):
    setup_agent("cursor", tmp_path, False)
    rule = tmp_path / ".cursor" / "rules" / "memtrace.mdc"
    assert rule.read_text() == CURSOR_RULES_SNIPPET


def test_setup_agent_vscode(tmp_path):
    setup_agent("vscode", tmp_path, False)
    cfg = json.loads((tmp_path / ".vscode" / "mcp.json").read_text())
    assert cfg["servers"]["memtrace"]["type"] == "stdio"
    assert "memtrace" in (tmp_path / ".github" / "copilot-instructions.md").read_text()


def test_setup_agent_windsurf(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    assert setup_agent("windsurf", tmp_path, False) is True
    assert (home / ".codeium" / "windsurf" / "mcp_config.json").is_file()
    assert "# memtrace" in (tmp_path / ".windsurfrules").read_text()


def test_append_instructions_is_idempotent(tmp_path):
    path = tmp_path / "NOTES.md"
    append_instructions(path, "\nuse memtrace\n")
    append_instructions(path, "\nuse memtrace\n")
    assert path.read_text().count("memtrace") == 1


def test_append_instructions_keeps_existing_text(tmp_path):
    path = tmp_path / "NOTES.md"
    path.write_text("# Notes\n")
    append_instructions(path, "\nuse memtrace\n")
    assert path.read_text() == "# Notes\n\nuse memtrace\n"


def test_main_configures_then_reports_already_configured(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["cursor"]) == 0
    assert "[ok] cursor       configured" in capsys.readouterr().out
    main(["cursor"])
    assert "already configured" in capsys.readouterr().out


def test_main_unknown_agent(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["notanagent"]) == 0
    captured = capsys.readouterr()
    assert "[error] notanagent" in captured.err
    assert "No agents set up" in captured.out


def test_main_autodetects(tmp_path, monkeypatch, capsys):
    (tmp_path / ".gemini").mkdir()
    monkeypatch.chdir(tmp_path)
    main([])
    out = capsys.readouterr().out
    assert "gemini" in out
    assert "claude-code" not in out