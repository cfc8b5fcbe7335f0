"""Runs pipelines inside Docker containers."""

from __future__ import annotations

import time
from typing import Any

from .docker_api import DockerError, client_from_env
from .pipeline import JobDescriptor, PipelineDescriptor, PipelineRunner

DEFAULT_IMAGE = "ubuntu:25.10"
CONTAINER_PREFIX = "pipelinefox_"


class DockerPipelineRunner(PipelineRunner):
    """Runs each job in a fresh container, one exec per script line."""

    def __init__(self, client: Any, poll_interval: float = 0.5) -> None:
        self._client = client
        self._poll_interval = poll_interval

    def run_pipeline(self, pipeline: PipelineDescriptor) -> str:
        """Run every stage in order and return the trimmed output of each, concatenated."""
        return "".join(self._run_stage(stage, jobs).strip() for stage, jobs in pipeline.stages.items())

    def run_job(self, job: JobDescriptor) -> str:
        """Run one job in its own container and return its output."""
        self._ensure_image(DEFAULT_IMAGE)
        created = self._client.container_create(
            CONTAINER_PREFIX + job.name,
            {
                "Image": DEFAULT_IMAGE,
                "AttachStdin": True,
                "Tty": False,
                "Cmd": ["tail", "-f", "/dev/null"],
                "OpenStdin": True,
            },
        )
        for warning in created.get("Warnings") or []:
            print(warning)
        container_id = created["Id"]
        try:
            self._start(container_id)
            outputs = [self._run_line(container_id, line) for line in job.script]
        finally:
            self._remove(container_id)
        return "\n".join(outputs).strip()

    def _run_stage(self, stage: str, jobs: list[JobDescriptor]) -> str:
        print(f"Running stage {stage}")
        return "".join(self.run_job(job) + "\n" for job in jobs)

    def _ensure_image(self, image: str) -> None:
        try:
            self._client.image_inspect(image)
        except DockerError:
            try:
                self._client.image_pull(image)
            except DockerError as exc:
                print(f"Could not pull image {image} : {exc}")

    def _start(self, container_id: str) -> None:
        self._client.container_start(container_id)
        state = self._client.container_inspect(container_id).get("State") or {}
        while not state.get("Running"):
            if state.get("Status") in ("exited", "dead"):
                raise DockerError(f"container {container_id} stopped before running its job")
            time.sleep(self._poll_interval)
            try:
                state = self._client.container_inspect(container_id).get("State") or {}
            except DockerError:
                state = {}

    def _run_line(self, container_id: str, line: str) -> str:
        exec_id = self._client.exec_create(container_id, line.split())
        output = self._client.exec_start(exec_id).decode("utf-8", "replace")
        return "".join(stripped for stripped in (part.strip() for part in output.split("\n")) if stripped)

    def _remove(self, container_id: str) -> None:
        if not container_id:
            return
        print(f"Deleting container {container_id}...")
        try:
            self._client.container_remove(container_id, force=True, remove_volumes=True)
        except DockerError as exc:
            raise DockerError(f"Could not delete container {container_id} : {exc}", exc.status) from exc


def create_docker_runner(client: Any = None) -> DockerPipelineRunner:
    """Create a runner, checking first that the Docker daemon answers."""
    if client is None:
        client = client_from_env()
    client.info()
    return DockerPipelineRunner(client)