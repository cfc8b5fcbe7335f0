import pytest

from pipelinefox.detector import GITLAB_CI_FILENAME, find_gitlab_ci


def test_finds_file_at_root(tmp_path):
    ci = tmp_path / GITLAB_CI_FILENAME
    ci.write_text("stages: []\n")
    assert find_gitlab_ci(tmp_path) == ci


def test_finds_nested_file(tmp_path):
    nested = tmp_path / "project" / "sub"
    nested.mkdir(parents=True)
    ci = nested / GITLAB_CI_FILENAME
    ci.write_text("stages: []\n")
    assert find_gitlab_ci(str(tmp_path)) == ci


def test_returns_none_when_absent(tmp_path):
    (tmp_path / "README").write_text("nothing here")
    assert find_gitlab_ci(tmp_path) is None


def test_first_in_lexical_order_wins(tmp_path):
    for name in ("b", "a"):
        (tmp_path / name).mkdir()
        (tmp_path / name / GITLAB_CI_FILENAME).write_text(name)
    found = find_gitlab_ci(tmp_path)
    assert found == tmp_path / "a" / GITLAB_CI_FILENAME
    assert found.read_text() == "a"


def test_directory_with_ci_name_is_skipped(tmp_path):
    fake = tmp_path / GITLAB_CI_FILENAME
    fake.mkdir()
    real = fake / GITLAB_CI_FILENAME
    real.write_text("stages: []\n")
    assert find_gitlab_ci(tmp_path) == real


def test_path_that_is_the_file_itself(tmp_path):
    ci = tmp_path / GITLAB_CI_FILENAME
    ci.write_text("stages: []\n")
    assert find_gitlab_ci(ci) == ci


def test_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_gitlab_ci(tmp_path / "missing")