"""Tests for project name cleanup and session file discovery."""

import pytest

from ccprojects.discover import (
    DirectoryUnreadable,
    clean_project_name,
    default_projects_dir,
    discover_sessions,
    iter_session_files,
    list_project_dirs,
)


@pytest.mark.parametrize("raw, expected", [
    ("-home-alice-projects-myapp", "myapp"),
    ("-home-alice-projects-my-app", "my-app"),
    ("-home-alice-code-myapp", "code-myapp"),
    ("-home-alice", "~"),
    ("-home-alice-projects", "~"),
    ("-tmp-pytest-of-alice-42", "/tmp"),
    ("-tmp", "/tmp"),
    ("-Users-ove-git-foo", "-Users-ove-git-foo"),
    ("scratch", "scratch"),
])
def test_clean_project_name(raw, expected):
    assert clean_project_name(raw) == expected


def test_list_project_dirs_skips_files(tmp_path):
    (tmp_path / "-home-bob-projects-b").mkdir()
    (tmp_path / "-home-bob-projects-a").mkdir()
    (tmp_path / "stray.jsonl").write_text("{}\n")
    assert [p.name for p in list_project_dirs(tmp_path)] == [
        "-home-bob-projects-a",
        "-home-bob-projects-b",
    ]


def test_list_project_dirs_missing_root(tmp_path):
    missing = tmp_path / "nope"
    with pytest.raises(DirectoryUnreadable) as excinfo:
        list_project_dirs(missing)
    assert excinfo.value.path == missing


def test_iter_session_files_tags_subagents(projects_root):
    alpha = projects_root / "-home-alice-projects-alpha"
    beta = projects_root / "-home-alice-projects-beta"

    alpha_files = list(iter_session_files(alpha, "alpha"))
    assert [f.path.name for f in alpha_files] == ["s1.jsonl", "s2.jsonl"]
    assert not any(f.autonomous for f in alpha_files)

    beta_files = list(iter_session_files(beta, "beta"))
    assert [f.path.name for f in beta_files] == ["agent-a.jsonl", "agent-b.jsonl"]
    assert all(f.autonomous and f.project == "beta" for f in beta_files)


def test_iter_session_files_ignores_other_files(tmp_path):
    proj = tmp_path / "proj"
    (proj / "abc" / "subagents").mkdir(parents=True)
    (proj / "notes.txt").write_text("hello")
    (proj / "abc" / "subagents" / "agent.log").write_text("hello")
    (proj / "abc" / "tool-results").mkdir()
    (proj / "dir.jsonl").mkdir()
    assert list(iter_session_files(proj, "proj")) == []


def test_iter_session_files_missing_project(tmp_path):
    assert list(iter_session_files(tmp_path / "gone", "gone")) == []


def test_default_projects_dir_env(monkeypatch, tmp_path):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    assert default_projects_dir() == tmp_path / "projects"


def test_default_projects_dir_config_fallback(monkeypatch, tmp_path):
    monkeypatch.delenv("CLAUDE_CONFIG_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_projects_dir() == tmp_path / ".claude" / "projects"

    (tmp_path / ".config" / "claude" / "projects").mkdir(parents=True)
    assert default_projects_dir() == tmp_path / ".config" / "claude" / "projects"


def test_discover_sessions_walks_all_projects(projects_root):
    sessions = list(discover_sessions(projects_root))
    assert [(s.project, s.path.name, s.autonomous) for s in sessions] == [
        ("alpha", "s1.jsonl", False),
        ("alpha", "s2.jsonl", False),
        ("beta", "agent-a.jsonl", True),
        ("beta", "agent-b.jsonl", True),
    ]


def test_discover_sessions_raises_before_iteration(tmp_path):
    with pytest.raises(DirectoryUnreadable):
        discover_sessions(tmp_path / "missing")
