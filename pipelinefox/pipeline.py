"""Pipeline model shared by the CI parsers and the runners."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Iterable


class UnknownStageError(ValueError):
    """Raised when a job refers to a stage the pipeline does not declare."""

    def __init__(self, stage: str, job: str) -> None:
        super().__init__(f"Unknown stage {stage} for job {job}")
        self.stage = stage
        self.job = job


@dataclass(frozen=True)
class JobDescriptor:
    """A single job: its name, the stage it belongs to and its script lines."""

    name: str
    stage: str
    script: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "script", tuple(self.script))


@dataclass
class PipelineDescriptor:
    """Jobs grouped by the stage they run in."""

    stages: dict[str, list[JobDescriptor]] = field(default_factory=dict)

    def jobs(self) -> list[JobDescriptor]:
        """Return every job of the pipeline, stage after stage."""
        return [job for stage_jobs in self.stages.values() for job in stage_jobs]


def build_pipeline(stages: Iterable[str], jobs: Iterable[JobDescriptor]) -> PipelineDescriptor:
    """Group ``jobs`` by stage, rejecting any job whose stage is not declared."""
    declared = set(stages)
    grouped: dict[str, list[JobDescriptor]] = {}
    for job in jobs:
        if job.stage not in declared:
            raise UnknownStageError(job.stage, job.name)
        grouped.setdefault(job.stage, []).append(job)
    return PipelineDescriptor(grouped)


class PipelineRunner(abc.ABC):
    """Something that can execute a pipeline and report its output."""

    @abc.abstractmethod
    def run_pipeline(self, pipeline: PipelineDescriptor) -> str:
        """Run every job of ``pipeline`` and return the collected output."""

    @abc.abstractmethod
    def run_job(self, job: JobDescriptor) -> str:
        """Run a single job and return its output."""