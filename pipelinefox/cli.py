"""Command line entry point: find a CI file and run its pipeline in Docker."""

from __future__ import annotations

import argparse
import os
import sys

from .detector import find_gitlab_ci
from .docker_runner import create_docker_runner
from .gitlab import GitlabPipelineParser


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipelinefox",
        description=(
            "PipelineFox is a local CI runner to locally test pipelines. "
            "It aims to be compatible with multiple CI formats."
        ),
    )
    parser.add_argument(
        "--path",
        default="",
        help="Path for execution context. Pipelinefox will look for CI declarations here.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline found under ``--path`` (default: the working directory)."""
    args = _build_parser().parse_args(argv)
    scan_path = args.path or os.getcwd()
    print(f"Running Pipelinefox in directory {scan_path} ")

    try:
        ci_file = find_gitlab_ci(scan_path)
        if ci_file is None:
            print(f"No CI file was found in {scan_path} :( ")
            return 0
        print(f"Found CI file : {ci_file}")
        pipeline = GitlabPipelineParser().parse(ci_file.read_bytes())
    except Exception as exc:
        print(f"Oops. An error occured while executing Pipelinefox '{exc}'", file=sys.stderr)
        return 1

    try:
        runner = create_docker_runner()
    except Exception as exc:
        print(f"encountered unexpected error when trying to create a pipeline runner : {exc}")
        return 1

    try:
        output = runner.run_pipeline(pipeline)
    except Exception as exc:
        print(f"encountered unexpected error when running pipeline : {exc}")
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())