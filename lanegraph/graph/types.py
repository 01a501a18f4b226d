"""Types shared by the ordering and lane layout passes."""

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

IdT = TypeVar("IdT", bound=Hashable)


@dataclass(frozen=True)
class CommitRecord(Generic[IdT]):
    """A commit as supplied by a commit source.

    Only `id` and `parent_ids` matter to the layout. `timestamp` is used to
    order commits that have no ancestry relation; any comparable value works
    (epoch seconds, datetime), and None sorts as oldest.
    """

    id: IdT
    parent_ids: tuple[IdT, ...] = ()
    timestamp: Any = None

    def __post_init__(self) -> None:
        # A bare string is one id, not a sequence of them
        if isinstance(self.parent_ids, str):
            object.__setattr__(self, "parent_ids", (self.parent_ids,))
        elif not isinstance(self.parent_ids, tuple):
            object.__setattr__(self, "parent_ids", tuple(self.parent_ids))


@dataclass(frozen=True)
class LayoutRow(Generic[IdT]):
    """Layout of a single commit row."""

    id: IdT
    row: int
    lane: int
    # One entry per parent id; None when the parent is outside the loaded window
    parent_lanes: tuple[int | None, ...] = ()
    pass_through_lanes: frozenset[int] = field(default_factory=frozenset)
    child_lanes: tuple[int, ...] = ()

    @property
    def is_merge(self) -> bool:
        return len(self.parent_lanes) > 1

    @property
    def is_root(self) -> bool:
        """True when no parent edge continues below this row."""
        return all(lane is None for lane in self.parent_lanes)

    def color_index(self, palette_size: int) -> int:
        return self.lane % palette_size


class GraphLayout(Generic[IdT]):
    """Result of one layout pass: rows in display order, addressable by id."""

    def __init__(self, rows: list[LayoutRow[IdT]], width: int) -> None:
        self.rows: tuple[LayoutRow[IdT], ...] = tuple(rows)
        self.width = width
        self._by_id: dict[IdT, LayoutRow[IdT]] = {row.id: row for row in self.rows}

    def __getitem__(self, commit_id: IdT) -> LayoutRow[IdT]:
        return self._by_id[commit_id]

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._by_id

    def __iter__(self) -> Iterator[LayoutRow[IdT]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def get(self, commit_id: IdT) -> LayoutRow[IdT] | None:
        return self._by_id.get(commit_id)

    def row_of(self, commit_id: IdT) -> int:
        """Row index of a commit (its position in the ordered input)."""
        return self._by_id[commit_id].row

    def by_id(self) -> dict[IdT, LayoutRow[IdT]]:
        return dict(self._by_id)


class CommitSource(Protocol):
    """Anything that can produce commit records, e.g. a VCS log query."""

    def iter_records(self) -> Iterator[CommitRecord[Any]]: ...
