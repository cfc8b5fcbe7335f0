# pipelinefox

pipelinefox runs a GitLab CI pipeline on your own machine, so you can try
it before you push. It reads a `.gitlab-ci.yml` file and runs each job's
script lines inside a Docker container.

## Installation

```
pip install pipelinefox
```

Docker must be running. pipelinefox talks to the Docker Engine HTTP API.
The connection is set by these environment variables:

- `DOCKER_HOST`: a `unix://`, `tcp://`, `http://` or `https://` address.
  When it is unset, pipelinefox uses `unix:///var/run/docker.sock`.
- `DOCKER_API_VERSION`: an optional API version for the request paths.
- `DOCKER_CERT_PATH`: a directory that holds `ca.pem`, `cert.pem` and
  `key.pem` for TLS.
- `DOCKER_TLS_VERIFY`: when this is unset, TLS connections do not verify
  the server's certificate.

## Usage

From the root of a project:

```
pipelinefox
```

To scan another directory:

```
pipelinefox --path /path/to/project
```

pipelinefox walks the directory tree in lexical order and uses the first
file named `.gitlab-ci.yml` that it finds. If there is no such file, it
says so and exits with status 0.

The pipeline is read from that file as follows:

- The string entries of `stages` are the stages. Entries that are not
  strings are skipped.
- Any mapping in the document whose `stage` is one of those stages is a
  job, and its key is the job's name.
- A job's `script` must be a string or a list of strings. Anything else,
  including a job with no script, is an error.

Stages run in the order they are declared. Stages that have no jobs are
left out. Each job runs in a new `ubuntu:25.10` container named
`pipelinefox_<job name>`. The image is pulled if it is not present, and the
container is force-removed when the job ends. Each script line is split on
whitespace and run directly in the container with `exec`. It does not go
through a shell, so pipes, redirections and variables are not expanded.

When the run is complete, pipelinefox prints the collected output. For
each script line, stdout and stderr are trimmed line by line, blank lines
are dropped, and the rest is joined. Line outputs are separated by
newlines, and so are jobs. Any error exits with status 1.

## Library use

```python
from pipelinefox.gitlab import GitlabPipelineParser
from pipelinefox.docker_api import client_from_env
from pipelinefox.docker_runner import create_docker_runner

with open(".gitlab-ci.yml", "rb") as fh:
    pipeline = GitlabPipelineParser().parse(fh.read())

runner = create_docker_runner(client_from_env())
print(runner.run_pipeline(pipeline))
```

`GitlabPipelineParser.parse` accepts `str` or `bytes`. It raises
`UnknownScriptObjectError` when a script has the wrong shape.
`create_docker_runner()` builds a client from the environment when you do
not pass one. It calls the daemon's `info` endpoint first, so an
unreachable daemon raises `DockerError`.

Main building blocks:

- `pipelinefox.pipeline`: `JobDescriptor`, `PipelineDescriptor` (its
  `stages` mapping and its `jobs()` method), `build_pipeline` and the
  abstract `PipelineRunner`. `build_pipeline` raises `UnknownStageError`
  when a job names a stage that was not declared.
- `pipelinefox.gitlab`: `GitlabPipelineParser`, `parse_stages`,
  `parse_jobs` and `parse_script`.
- `pipelinefox.detector`: `find_gitlab_ci(path)` returns the path of the
  first `.gitlab-ci.yml` file, or `None`.
- `pipelinefox.docker_api`: `DockerClient`, a small Engine API client, with
  `client_from_env()` and `demultiplex()` for multiplexed exec output.
- `pipelinefox.docker_runner`: `DockerPipelineRunner` and
  `create_docker_runner`.

## What it does not do

pipelinefox understands only `stages`, `stage` and `script`. Every job
uses `ubuntu:25.10`. A job's `image`, `variables`, `before_script`,
`after_script`, `rules`, `needs`, artifacts and caches are ignored. The
exit status of a script line is not checked. A failing command does not
stop the pipeline, and its output is collected like any other. GitLab CI
is the only format it reads.

## Running the tests

```
pip install -e ".[test]"
pytest
```