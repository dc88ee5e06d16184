"""Tests for the repo command-line interface."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from repo_copilot.cli import cli
from repo_copilot.core.models.repository import Repository
from repo_copilot.repositories.manifest import ManifestRepository


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def initialized(runner: CliRunner, config_dir: Path, base_dir: Path) -> Path:
    result = runner.invoke(cli, ["init", "--base-dir", str(base_dir)])
    assert result.exit_code == 0, result.output
    return config_dir


def _repositories(config_dir: Path) -> list[dict]:
    return yaml.safe_load((config_dir / "repositories.yaml").read_text())["repositories"]


@pytest.mark.unit
class TestHelp:
    """Tests for help output."""

    def test_no_command_prints_help(self, runner: CliRunner, config_dir: Path) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        for command in ("help", "init", "add", "remove", "list", "find", "config"):
            assert command in result.output

    def test_help_command(self, runner: CliRunner, config_dir: Path) -> None:
        result = runner.invoke(cli, ["help"])
        assert result.exit_code == 0
        assert "Commands:" in result.output

    def test_help_for_command(self, runner: CliRunner, config_dir: Path) -> None:
        result = runner.invoke(cli, ["help", "remove"])
        assert result.exit_code == 0
        assert "--force" in result.output
        assert "--yes" in result.output

    def test_help_for_unknown_command(self, runner: CliRunner, config_dir: Path) -> None:
        result = runner.invoke(cli, ["help", "frobnicate"])
        assert result.exit_code != 0
        assert "Unknown command: frobnicate" in result.output

    def test_unknown_command(self, runner: CliRunner, config_dir: Path) -> None:
        result = runner.invoke(cli, ["frobnicate"])
        assert result.exit_code != 0


@pytest.mark.unit
class TestInitCommand:
    """Tests for `repo init`."""

    def test_init(self, runner: CliRunner, config_dir: Path, tmp_path: Path) -> None:
        base = tmp_path / "workspace"
        result = runner.invoke(
            cli,
            ["init", "--baseDir", str(base), "-u", "test-user", "-e", "test@example.com"],
        )

        assert result.exit_code == 0, result.output
        assert "Configuration initialized successfully" in result.output
        content = yaml.safe_load((config_dir / "config.yaml").read_text())
        assert content["baseDir"] == str(base)
        assert content["username"] == "test-user"
        assert content["email"] == "test@example.com"
        assert _repositories(config_dir) == []

    def test_init_existing_without_force(self, runner: CliRunner, initialized: Path) -> None:
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 1
        assert "Configuration already exists" in result.output

    def test_init_existing_with_force(
        self, runner: CliRunner, initialized: Path, tmp_path: Path
    ) -> None:
        base = tmp_path / "other"
        result = runner.invoke(cli, ["init", "-f", "-b", str(base), "-u", "test-user"])
        assert result.exit_code == 0, result.output
        content = yaml.safe_load((initialized / "config.yaml").read_text())
        assert content["baseDir"] == str(base)
        assert content["username"] == "test-user"


@pytest.mark.unit
class TestAddCommand:
    """Tests for `repo add`."""

    def test_add(self, runner: CliRunner, initialized: Path, base_dir: Path) -> None:
        result = runner.invoke(cli, ["add", "github.com/atian25/repo-copilot"])

        assert result.exit_code == 0, result.output
        assert "Repository added successfully" in result.output
        repos = _repositories(initialized)
        assert len(repos) == 1
        assert repos[0]["name"] == "repo-copilot"
        assert repos[0]["owner"] == "atian25"
        assert repos[0]["host"] == "github.com"
        assert repos[0]["path"] == str(base_dir / "github.com" / "atian25" / "repo-copilot")

    def test_add_invalid_url(self, runner: CliRunner, initialized: Path) -> None:
        result = runner.invoke(cli, ["add", "invalid-url"])
        assert result.exit_code == 1
        assert "Invalid repository URL" in result.output

    def test_add_duplicate(self, runner: CliRunner, initialized: Path) -> None:
        url = "github.com/atian25/repo-copilot"
        runner.invoke(cli, ["add", url])
        result = runner.invoke(cli, ["add", url])
        assert result.exit_code == 1
        assert "Repository already exists" in result.output
        assert len(_repositories(initialized)) == 1

    def test_add_without_url(self, runner: CliRunner, initialized: Path) -> None:
        result = runner.invoke(cli, ["add"])
        assert result.exit_code == 2
        assert "Missing argument" in result.output


@pytest.mark.unit
class TestRemoveCommand:
    """Tests for `repo remove`."""

    @pytest.fixture
    def tracked(self, runner: CliRunner, initialized: Path, base_dir: Path) -> Path:
        runner.invoke(cli, ["add", "github.com/test/test-repo"])
        path = base_dir / "github.com" / "test" / "test-repo"
        path.mkdir(parents=True)
        (path / "test.txt").write_text("test content")
        return path

    def test_remove(self, runner: CliRunner, initialized: Path, tracked: Path) -> None:
        result = runner.invoke(cli, ["remove", "test-repo"])
        assert result.exit_code == 0, result.output
        assert 'Repository "test-repo" has been removed from management' in result.output
        assert _repositories(initialized) == []
        assert tracked.exists()

    def test_remove_force(self, runner: CliRunner, initialized: Path, tracked: Path) -> None:
        result = runner.invoke(cli, ["remove", "test-repo", "--force"])
        assert result.exit_code == 0, result.output
        assert "local files deleted" in result.output
        assert _repositories(initialized) == []
        assert not tracked.exists()

    def test_remove_unknown(self, runner: CliRunner, initialized: Path, tracked: Path) -> None:
        result = runner.invoke(cli, ["remove", "non-existent-repo"])
        assert result.exit_code == 1
        assert 'Repository "non-existent-repo" not found' in result.output
        assert len(_repositories(initialized)) == 1

    def test_remove_without_name(self, runner: CliRunner, initialized: Path) -> None:
        result = runner.invoke(cli, ["remove"])
        assert result.exit_code == 2

    def test_remove_force_dirty_work_tree(
        self, runner: CliRunner, initialized: Path, base_dir: Path, make_git_repo
    ) -> None:
        runner.invoke(cli, ["add", "github.com/owner/dirty"])
        path = make_git_repo(base_dir / "github.com" / "owner" / "dirty")
        (path / "README.md").write_text("# Uncommitted\n")

        result = runner.invoke(cli, ["remove", "dirty", "--force"])
        assert result.exit_code == 1
        assert "uncommitted changes" in result.output
        assert path.exists()
        assert len(_repositories(initialized)) == 1

        result = runner.invoke(cli, ["remove", "dirty", "-f", "-y"])
        assert result.exit_code == 0, result.output
        assert not path.exists()
        assert _repositories(initialized) == []

    def test_remove_force_outside_base_dir(
        self, runner: CliRunner, initialized: Path, tmp_path: Path
    ) -> None:
        outside = tmp_path / "elsewhere" / "github.com" / "owner" / "name"
        outside.mkdir(parents=True)
        ManifestRepository(initialized).save_repositories(
            [
                Repository(
                    name="name",
                    owner="owner",
                    url="github.com/owner/name",
                    path=str(outside),
                    host="github.com",
                )
            ]
        )

        result = runner.invoke(cli, ["remove", "name", "--force", "--yes"])
        assert result.exit_code == 1
        assert "not inside base directory" in result.output
        assert outside.exists()
        assert len(_repositories(initialized)) == 1


@pytest.mark.unit
class TestListingCommands:
    """Tests for `repo list`, `repo find` and `repo config`."""

    @pytest.fixture
    def populated(self, runner: CliRunner, initialized: Path) -> Path:
        for url in ("github.com/atian25/repo-copilot", "gitlab.com/team/docs"):
            result = runner.invoke(cli, ["add", url])
            assert result.exit_code == 0, result.output
        return initialized

    def test_list_empty(self, runner: CliRunner, initialized: Path) -> None:
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No repositories tracked." in result.output

    def test_list_table(self, runner: CliRunner, populated: Path) -> None:
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0].split() == ["NAME", "OWNER", "HOST", "PATH"]
        assert lines[1].split()[:3] == ["repo-copilot", "atian25", "github.com"]
        assert lines[2].split()[:3] == ["docs", "team", "gitlab.com"]

    def test_list_json(self, runner: CliRunner, populated: Path) -> None:
        result = runner.invoke(cli, ["list", "--format", "json"])
        assert result.exit_code == 0, result.output
        records = json.loads(result.output)
        assert [r["name"] for r in records] == ["repo-copilot", "docs"]

    def test_list_uses_configured_format(self, runner: CliRunner, populated: Path) -> None:
        config_file = populated / "config.yaml"
        content = yaml.safe_load(config_file.read_text())
        content["format"] = "yaml"
        config_file.write_text(yaml.safe_dump(content))

        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        assert [r["url"] for r in yaml.safe_load(result.output)] == [
            "github.com/atian25/repo-copilot",
            "gitlab.com/team/docs",
        ]

    def test_find(self, runner: CliRunner, populated: Path) -> None:
        result = runner.invoke(cli, ["find", "COPILOT", "-o", "json"])
        assert result.exit_code == 0, result.output
        assert [r["name"] for r in json.loads(result.output)] == ["repo-copilot"]

    def test_find_no_match(self, runner: CliRunner, populated: Path) -> None:
        result = runner.invoke(cli, ["find", "nothing"])
        assert result.exit_code == 0
        assert 'No repositories match "nothing".' in result.output

    def test_config(self, runner: CliRunner, initialized: Path, base_dir: Path) -> None:
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0, result.output
        assert str(initialized / "config.yaml") in result.output
        assert f"baseDir: {base_dir}" in result.output

    def test_malformed_manifest_fails(self, runner: CliRunner, initialized: Path) -> None:
        (initialized / "repositories.yaml").write_text("repositories: [unclosed\n")
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 1
        assert "Malformed YAML" in result.output
