import pytest
import yaml

from pipelinefox.gitlab import (
    GitlabPipelineParser,
    UnknownScriptObjectError,
    parse_jobs,
    parse_script,
    parse_stages,
)
from pipelinefox.pipeline import JobDescriptor, build_pipeline

SIMPLE_YAML = """\
stages:
  - build

build_app:
  stage: build
  script: echo "I'm building!"
"""


def assert_pipeline(got, want):
    assert got.stages == want.stages
    assert got.jobs() == want.jobs()


def test_parses_a_simple_gitlab_file_correctly():
    expected = build_pipeline(
        ["build"],
        [JobDescriptor("build_app", "build", ['echo "I\'m building!"'])],
    )
    got = GitlabPipelineParser().parse(SIMPLE_YAML.encode())
    assert_pipeline(got, expected)


def test_parses_str_content():
    got = GitlabPipelineParser().parse(SIMPLE_YAML)
    assert got.jobs() == [JobDescriptor("build_app", "build", ['echo "I\'m building!"'])]


def test_list_script_keeps_every_line():
    content = """\
stages: [build]
job:
  stage: build
  script:
    - echo one
    - echo two
"""
    got = GitlabPipelineParser().parse(content)
    assert got.jobs() == [JobDescriptor("job", "build", ["echo one", "echo two"])]


def test_multiple_stages_and_jobs():
    content = """\
stages:
  - build
  - test
zeta:
  stage: build
  script: make
alpha:
  stage: build
  script: make all
check:
  stage: test
  script: make test
"""
    got = GitlabPipelineParser().parse(content)
    assert list(got.stages) == ["build", "test"]
    assert [job.name for job in got.stages["build"]] == ["alpha", "zeta"]
    assert got.stages["test"] == [JobDescriptor("check", "test", ["make test"])]


def test_jobs_of_undeclared_stages_are_ignored():
    content = """\
stages: [build]
job:
  stage: build
  script: make
other:
  stage: deploy
  script: ship
"""
    got = GitlabPipelineParser().parse(content)
    assert [job.name for job in got.jobs()] == ["job"]


def test_non_string_script_entry_is_rejected():
    content = """\
stages: [build]
job:
  stage: build
  script:
    - echo ok
    - 3
"""
    with pytest.raises(UnknownScriptObjectError):
        GitlabPipelineParser().parse(content)


def test_missing_script_is_rejected():
    content = "stages: [build]\njob:\n  stage: build\n"
    with pytest.raises(UnknownScriptObjectError):
        GitlabPipelineParser().parse(content)


def test_invalid_yaml_raises():
    with pytest.raises(yaml.YAMLError):
        GitlabPipelineParser().parse("stages: [build\n")


def test_parse_stages_skips_non_strings():
    assert parse_stages({"stages": ["build", 1, {"x": 1}, "test"]}) == ["build", "test"]


def test_parse_stages_without_declaration():
    assert parse_stages({"job": {"stage": "build"}}) == []
    assert parse_stages(None) == []


def test_parse_jobs_direct():
    document = {"job": {"stage": "build", "script": "make"}}
    assert parse_jobs(["build"], document) == [JobDescriptor("job", "build", ["make"])]


def test_parse_script_variants():
    assert parse_script("echo hi") == ["echo hi"]
    assert parse_script(["a", "b"]) == ["a", "b"]
    with pytest.raises(UnknownScriptObjectError):
        parse_script({"a": 1})
    with pytest.raises(UnknownScriptObjectError):
        parse_script(None)