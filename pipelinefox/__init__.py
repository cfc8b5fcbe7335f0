"""Run GitLab CI pipelines locally in Docker containers."""

__version__ = "0.1.0"