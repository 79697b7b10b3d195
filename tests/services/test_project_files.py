from pathlib import Path

import pytest
from returns.result import Failure, Success

from kata_scorer.services.files import ProjectFiles


def test_transient_file_exists_only_inside_block(project: ProjectFiles, tmp_path: Path):
    with project.transient_file(".helper.rb", "require 'x'") as path:
        assert path.read_text(encoding="utf-8") == "require 'x'"
    assert not (tmp_path / ".helper.rb").exists()


def test_transient_file_removed_on_error(project: ProjectFiles, tmp_path: Path):
    with pytest.raises(ValueError):
        with project.transient_file(".helper.rb", ""):
            raise ValueError("tool crashed")
    assert not (tmp_path / ".helper.rb").exists()


def test_read_json_success_and_failure(project: ProjectFiles, write_file):
    write_file("ok.json", '{"result": {"line": 88.1}}')
    write_file("bad.json", '{"result": ')

    ok = project.read_json("ok.json")
    assert isinstance(ok, Success)
    assert ok.unwrap() == {"result": {"line": 88.1}}

    assert isinstance(project.read_json("bad.json"), Failure)
    assert isinstance(project.read_json("missing.json"), Failure)


def test_paths_outside_project_are_never_reached(project: ProjectFiles, tmp_path: Path, tmp_path_factory):
    outside = tmp_path_factory.mktemp("shared") / "AGENTS.md"
    outside.write_text("shared instructions", encoding="utf-8")
    (tmp_path / "AGENTS.md").symlink_to(outside)

    for path in ("../outside.rb", "AGENTS.md"):
        assert not project.exists(path)
        assert not project.is_file(path)
        assert not project.is_dir(path)
        assert isinstance(project.read_text(path), Failure)
    assert project.files_under("..") == []

    with pytest.raises(ValueError):
        with project.transient_file("../helper.rb", ""):
            pass


def test_files_under_includes_hidden_files(project: ProjectFiles, write_file):
    write_file(".claude/.secret")
    write_file(".claude/nested/config.json")
    assert project.files_under(".claude") == [".claude/.secret", ".claude/nested/config.json"]
    assert project.files_under(".cursor") == []
