"""
Commit records from a git repository using pygit2
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pygit2

from lanegraph.graph.types import CommitRecord

logger = logging.getLogger(__name__)


class GitCommitSource:
    """Reads commit records from the local branches of a git repository"""

    def __init__(self, repo_path: str | None = None, max_count: int | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        self.repo = pygit2.Repository(repo_path)
        self.max_count = max_count

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def iter_records(self) -> Iterator[CommitRecord[str]]:
        """Walk local branches, yielding each commit once.

        Remote-tracking branches are skipped.

        Order is per-branch time order; callers re-sort with
        topological_sort() before layout.
        """
        seen_oids: set[str] = set()

        for branch_name in self.repo.branches.local:
            branch = self.repo.branches.local[branch_name]
            commit = branch.peel(pygit2.Commit)

            for c in self.repo.walk(commit.id, pygit2.enums.SortMode.TIME):
                oid = str(c.id)
                if oid in seen_oids:
                    continue
                if self.max_count is not None and len(seen_oids) >= self.max_count:
                    return
                seen_oids.add(oid)

                yield CommitRecord(
                    id=oid,
                    parent_ids=tuple(str(p) for p in c.parent_ids),
                    timestamp=c.commit_time,
                )

        logger.debug("Read %d commits from %s", len(seen_oids), self.repo.path)
