"""projectsync - keeps a GitHub Projects board in step with its issues and pull requests."""

__version__ = "0.1.0"
