[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pipelinefox"
version = "0.1.0"
description = "A local CI runner that executes GitLab CI pipelines in Docker containers"
requires-python = ">=3.10"
keywords = ["ci", "gitlab", "docker", "pipeline", "local"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pipelinefox = "pipelinefox.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pipelinefox"]

[tool.pytest.ini_options]
addopts = "-ra"
