"""Parser for GitLab CI pipeline descriptors."""

from __future__ import annotations

import logging
from typing import Any, Iterator

import yaml

from .pipeline import JobDescriptor, PipelineDescriptor, build_pipeline

logger = logging.getLogger(__name__)

_SCRIPT_ERROR_MESSAGE = (
    "the script tag in the yaml descriptor is neither a string or an array of string, "
    "this is not handled"
)


class UnknownScriptObjectError(ValueError):
    """Raised when a job's script is neither a string nor a list of strings."""

    def __init__(self, message: str = _SCRIPT_ERROR_MESSAGE) -> None:
        super().__init__(message)


class GitlabPipelineParser:
    """Turns the content of a ``.gitlab-ci.yml`` file into a pipeline."""

    def parse(self, content: str | bytes) -> PipelineDescriptor:
        """Parse YAML ``content`` into a pipeline descriptor."""
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        document = yaml.safe_load(content)
        stages = parse_stages(document)
        jobs = parse_jobs(stages, document)
        return build_pipeline(stages, jobs)


def parse_stages(document: Any) -> list[str]:
    """Return the declared stage names, skipping entries that are not strings."""
    if not isinstance(document, dict):
        return []
    declared = document.get("stages")
    if not isinstance(declared, list):
        return []
    stages = []
    for stage in declared:
        if isinstance(stage, str):
            logger.info("Discovered stage %s", stage)
            stages.append(stage)
        else:
            logger.info("Skipping unknown stage entry: %r", stage)
    return stages


def parse_jobs(stages: list[str], document: Any) -> list[JobDescriptor]:
    """Collect every mapping that names one of ``stages``, stage after stage."""
    jobs = []
    for stage in stages:
        for name, node in _nodes(document):
            if isinstance(node, dict) and node.get("stage") == stage:
                jobs.append(_parse_job(name, node, stage))
    return jobs


def parse_script(value: Any) -> list[str]:
    """Normalise a job's script to a list of command lines."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(line, str) for line in value):
            raise UnknownScriptObjectError()
        return list(value)
    logger.info("Node of type %s is unknown; value is %r", type(value).__name__, value)
    raise UnknownScriptObjectError()


def _parse_job(name: str, node: dict, stage: str) -> JobDescriptor:
    logger.info("Parsing job %s", name)
    return JobDescriptor(name, stage, parse_script(node.get("script")))


def _key_name(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _nodes(node: Any) -> Iterator[tuple[str, Any]]:
    """Yield named nodes in document order, mapping keys sorted by name."""
    if isinstance(node, dict):
        for name, child in sorted(((_key_name(k), v) for k, v in node.items()), key=lambda kv: kv[0]):
            yield name, child
            yield from _nodes(child)
    elif isinstance(node, list):
        for child in node:
            yield "", child
            yield from _nodes(child)