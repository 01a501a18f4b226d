"""Git backend for lanegraph."""

from lanegraph.git_backend.source import GitCommitSource

__all__ = ["GitCommitSource"]
