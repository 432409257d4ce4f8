"""Tests for the CLI commands."""

import json
import subprocess
from pathlib import Path

from typer.testing import CliRunner

from convcheck.cli import app

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "convcheck" in result.output


class TestCheck:
    def test_pass(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(
            app, ["check", "feat/CRM-100-add-new-application-form", "-k", "branch"]
        )
        assert result.exit_code == 0
        assert "matches" in result.output

    def test_fail_prints_reason(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "update-stuff", "--convention", "branch"])
        assert result.exit_code == 1
        assert "missing ticket prefix" in result.output

    def test_commit_convention(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        ok = runner.invoke(app, ["check", "feat(forms): add new form", "-k", "commit"])
        bad = runner.invoke(app, ["check", "added a form", "-k", "commit"])
        assert ok.exit_code == 0
        assert bad.exit_code == 1
        assert "missing type prefix" in bad.output

    def test_text_format(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "update-stuff", "-k", "branch", "-f", "text"])
        assert result.exit_code == 1
        assert 'FAIL [branch] "update-stuff": missing ticket prefix' in result.output

    def test_json_format(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "update-stuff", "-k", "branch", "-f", "json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["passed"] is False
        assert data["results"][0]["message"] == "missing ticket prefix"

    def test_json_format_reason_on_stderr(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "update-stuff", "-k", "branch", "-f", "json"])
        assert result.exit_code == 1
        assert "missing ticket prefix" in result.stderr
        assert json.loads(result.stdout)["passed"] is False

    def test_unknown_convention(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "x", "-k", "nope"])
        assert result.exit_code == 2
        assert "Unknown convention" in result.output

    def test_disabled_convention(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CI_CONVCHECK_DISABLE", "branch")
        result = runner.invoke(app, ["check", "update-stuff", "-k", "branch"])
        assert result.exit_code == 2

    def test_bad_format(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "x", "-k", "branch", "-f", "sarif"])
        assert result.exit_code == 2

    def test_custom_convention_from_config(self, tmp_path: Path, monkeypatch, custom_toml: str):
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "conv.toml"
        cfg.write_text(custom_toml)
        ok = runner.invoke(app, ["check", "release/1.2.3", "-k", "release", "-c", str(cfg)])
        bad = runner.invoke(app, ["check", "rel/1.2", "-k", "release", "-c", str(cfg)])
        assert ok.exit_code == 0
        assert bad.exit_code == 1
        assert "missing release/ prefix" in bad.output

    def test_config_error(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "conv.toml"
        cfg.write_text('[[conventions.custom]]\nid = "bad"\npattern = "feat/("\n')
        result = runner.invoke(app, ["check", "x", "-k", "branch", "-c", str(cfg)])
        assert result.exit_code == 2
        assert "Config error" in result.output


class TestBranch:
    def test_named_branch(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["branch", "--name", "fix/BUG-1-crash", "-f", "text"])
        assert result.exit_code == 0
        assert 'PASS [branch] "fix/BUG-1-crash"' in result.output

    def test_exempt_main(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["branch", "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["skipped"] == ["main"]
        assert data["total"] == 0

    def test_current_branch_fails(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        subprocess.run(["git", "checkout", "-b", "wip"], cwd=tmp_git_repo, capture_output=True)
        result = runner.invoke(app, ["branch", "-f", "text"])
        assert result.exit_code == 1
        assert "missing ticket prefix" in result.output

    def test_current_branch_passes(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        subprocess.run(
            ["git", "checkout", "-b", "feat/CRM-100-add-new-application-form"],
            cwd=tmp_git_repo, capture_output=True,
        )
        result = runner.invoke(app, ["branch"])
        assert result.exit_code == 0


    def test_string_exempt_is_config_error(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "conv.toml"
        cfg.write_text('[branch]\nexempt = "main"\n')
        result = runner.invoke(app, ["branch", "--name", "ai", "-c", str(cfg)])
        assert result.exit_code == 2
        assert "branch.exempt" in result.output

    def test_commit_convention_rejected(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "conv.toml"
        cfg.write_text('[branch]\nconvention = "commit"\n')
        result = runner.invoke(app, ["branch", "--name", "feat: x", "-c", str(cfg)])
        assert result.exit_code == 2
        assert "checks commit values" in result.output


class TestMessage:
    def test_valid_message_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        msg = tmp_path / "COMMIT_EDITMSG"
        msg.write_text("feat: add form\n\n# Please enter the commit message\n")
        result = runner.invoke(app, ["message", str(msg)])
        assert result.exit_code == 0

    def test_invalid_message_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        msg = tmp_path / "COMMIT_EDITMSG"
        msg.write_text("fix: typo.\n")
        result = runner.invoke(app, ["message", str(msg), "-f", "text"])
        assert result.exit_code == 1
        assert "subject must not end with a period" in result.output

    def test_merge_message_skipped(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        msg = tmp_path / "MERGE_MSG"
        msg.write_text("Merge branch 'main' into feat/CRM-1-x\n")
        result = runner.invoke(app, ["message", str(msg), "-f", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["skipped"]

    def test_comment_only_message_fails(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        msg = tmp_path / "COMMIT_EDITMSG"
        msg.write_text("# nothing here\n")
        result = runner.invoke(app, ["message", str(msg), "-f", "text"])
        assert result.exit_code == 1
        assert "empty input" in result.output

    def test_missing_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["message", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_last_commit(self, tmp_git_repo: Path, monkeypatch, commit_file):
        monkeypatch.chdir(tmp_git_repo)
        commit_file("Did some things")
        result = runner.invoke(app, ["message", "-f", "text"])
        assert result.exit_code == 1
        assert "missing type prefix" in result.output


    def test_branch_convention_rejected(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "conv.toml"
        cfg.write_text('[commit]\nconvention = "branch"\n')
        msg = tmp_path / "COMMIT_EDITMSG"
        msg.write_text("feat/CRM-1-x\n")
        result = runner.invoke(app, ["message", str(msg), "-c", str(cfg)])
        assert result.exit_code == 2


class TestLog:
    def test_range_with_failure(self, tmp_git_repo: Path, monkeypatch, commit_file):
        monkeypatch.chdir(tmp_git_repo)
        commit_file("feat: one")
        commit_file("Merge branch 'x'")
        commit_file("oops")
        result = runner.invoke(app, ["log", "--from", "HEAD~3", "-f", "json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["total"] == 2
        assert data["failed"] == 1
        assert len(data["skipped"]) == 1
        assert data["results"][1]["value"] == "oops"

    def test_clean_range(self, tmp_git_repo: Path, monkeypatch, commit_file):
        monkeypatch.chdir(tmp_git_repo)
        commit_file("feat: one")
        commit_file("fix(core): two")
        result = runner.invoke(app, ["log", "--from", "HEAD~2", "--to", "HEAD"])
        assert result.exit_code == 0

    def test_bad_ref(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["log", "--from", "does-not-exist"])
        assert result.exit_code == 2


class TestList:
    def test_lists_builtins(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "branch" in result.output
        assert "commit" in result.output


class TestInit:
    def test_creates_config(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_git_repo / ".convcheck.toml").exists()

    def test_generated_config_loads(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        runner.invoke(app, ["init"])
        result = runner.invoke(app, ["check", "update-stuff", "-k", "branch"])
        assert result.exit_code == 1

    def test_refuses_overwrite(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / ".convcheck.toml").write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1


class TestInstallUninstall:
    def test_install_creates_hook(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["install"])
        assert result.exit_code == 0
        hook = tmp_git_repo / ".git" / "hooks" / "commit-msg"
        assert hook.exists()
        assert 'convcheck message "$1"' in hook.read_text()

    def test_install_twice(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        runner.invoke(app, ["install"])
        result = runner.invoke(app, ["install"])
        assert result.exit_code == 0
        assert "already installed" in result.output

    def test_uninstall_removes_hook(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        runner.invoke(app, ["install"])
        result = runner.invoke(app, ["uninstall"])
        assert result.exit_code == 0
        assert not (tmp_git_repo / ".git" / "hooks" / "commit-msg").exists()

    def test_install_refuses_existing(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        hooks_dir = tmp_git_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        (hooks_dir / "commit-msg").write_text("#!/bin/sh\necho existing\n")
        result = runner.invoke(app, ["install"])
        assert result.exit_code == 1

    def test_install_force(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        hooks_dir = tmp_git_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        (hooks_dir / "commit-msg").write_text("#!/bin/sh\necho existing\n")
        result = runner.invoke(app, ["install", "--force"])
        assert result.exit_code == 0

    def test_uninstall_foreign_hook(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        hooks_dir = tmp_git_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        (hooks_dir / "commit-msg").write_text("#!/bin/sh\necho existing\n")
        result = runner.invoke(app, ["uninstall"])
        assert result.exit_code == 1
