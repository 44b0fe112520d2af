"""
In-memory projection of jobs into the four status columns.

``jobs`` maps id -> job dict; ``columns`` maps status -> ordered ids. Every id
in ``jobs`` sits in exactly one column and every column entry has a job.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pathforge.models.job import JobStatus

COLUMN_ORDER = tuple(status.value for status in JobStatus)
COLUMN_TITLES = {
    JobStatus.APPLIED.value: "Applied",
    JobStatus.INTERVIEW.value: "Interview",
    JobStatus.OFFER.value: "Offer",
    JobStatus.REJECTED.value: "Rejected",
}


class Board:
    def __init__(self):
        self.jobs: Dict[Any, Dict[str, Any]] = {}
        self.columns: Dict[str, List[Any]] = {column_id: [] for column_id in COLUMN_ORDER}

    @classmethod
    def from_jobs(cls, jobs: Iterable[Dict[str, Any]]) -> "Board":
        """Partition jobs by status, keeping their incoming order inside each column."""
        board = cls()
        for job in jobs:
            if job.get("status") not in board.columns:
                raise ValueError(f"Job {job.get('id')!r} has unknown status {job.get('status')!r}")
            board.jobs[job["id"]] = dict(job)
            board.columns[job["status"]].append(job["id"])
        board.validate()
        return board

    def _check_column(self, column_id: Any) -> None:
        if column_id not in self.columns:
            raise KeyError(f"Unknown column {column_id!r}")

    def __len__(self) -> int:
        return len(self.jobs)

    def column_of(self, job_id: Any) -> Optional[str]:
        for column_id, ids in self.columns.items():
            if job_id in ids:
                return column_id
        return None

    def jobs_in(self, column_id: str) -> List[Dict[str, Any]]:
        self._check_column(column_id)
        return [self.jobs[job_id] for job_id in self.columns[column_id]]

    def snapshot(self) -> Dict[str, List[Any]]:
        return {column_id: list(ids) for column_id, ids in self.columns.items()}

    def move_within_column(self, column_id: str, from_index: int, to_index: int) -> None:
        """Reorder one card inside a column. Ordering is view-only and never persisted."""
        self._check_column(column_id)
        ids = self.columns[column_id]
        if not 0 <= from_index < len(ids):
            raise IndexError(f"from_index {from_index} out of range for column {column_id!r}")
        if not 0 <= to_index < len(ids):
            raise IndexError(f"to_index {to_index} out of range for column {column_id!r}")
        job_id = ids.pop(from_index)
        ids.insert(to_index, job_id)

    def move_across_columns(
        self,
        source_column_id: str,
        dest_column_id: str,
        from_index: int,
        to_index: int,
        job_id: Any,
    ) -> None:
        """Move a card to another column and optimistically set its status to that column."""
        self._check_column(source_column_id)
        self._check_column(dest_column_id)
        source = self.columns[source_column_id]
        dest = self.columns[dest_column_id]
        if not 0 <= from_index < len(source):
            raise IndexError(f"from_index {from_index} out of range for column {source_column_id!r}")
        if source[from_index] != job_id:
            raise ValueError(f"Job {job_id!r} is not at index {from_index} of column {source_column_id!r}")
        if to_index < 0:
            raise IndexError(f"to_index {to_index} out of range for column {dest_column_id!r}")

        source.pop(from_index)
        dest.insert(min(to_index, len(dest)), job_id)
        job = self.jobs[job_id]
        job["status"] = dest_column_id
        job["updatedAt"] = datetime.now(timezone.utc).isoformat()

    def add(self, job: Dict[str, Any], index: int = 0) -> None:
        self._check_column(job.get("status"))
        if job["id"] in self.jobs:
            raise ValueError(f"Job {job['id']!r} is already on the board")
        self.jobs[job["id"]] = dict(job)
        self.columns[job["status"]].insert(index, job["id"])

    def remove(self, job_id: Any) -> Dict[str, Any]:
        column_id = self.column_of(job_id)
        if column_id is None:
            raise KeyError(f"Job {job_id!r} is not on the board")
        self.columns[column_id].remove(job_id)
        return self.jobs.pop(job_id)

    def replace(self, job: Dict[str, Any]) -> None:
        """Swap in a server-confirmed record; a changed status moves it to the top of its new column."""
        job_id = job["id"]
        current = self.column_of(job_id)
        if current is None:
            raise KeyError(f"Job {job_id!r} is not on the board")
        self._check_column(job.get("status"))
        if job["status"] != current:
            self.columns[current].remove(job_id)
            self.columns[job["status"]].insert(0, job_id)
        self.jobs[job_id] = dict(job)

    def validate(self) -> None:
        """Raise ValueError if any id is duplicated, orphaned, or filed under the wrong status."""
        seen: Dict[Any, str] = {}
        for column_id, ids in self.columns.items():
            for job_id in ids:
                if job_id in seen:
                    raise ValueError(f"Job {job_id!r} appears in both {seen[job_id]!r} and {column_id!r}")
                seen[job_id] = column_id
                if job_id not in self.jobs:
                    raise ValueError(f"Column {column_id!r} references unknown job {job_id!r}")
                if self.jobs[job_id].get("status") != column_id:
                    raise ValueError(f"Job {job_id!r} has status {self.jobs[job_id].get('status')!r} but sits in {column_id!r}")
        orphans = set(self.jobs) - set(seen)
        if orphans:
            raise ValueError(f"Jobs missing from every column: {sorted(map(str, orphans))}")

    def stats(self) -> Dict[str, int]:
        return {
            "total": len(self.jobs),
            "active": len(self.columns[JobStatus.INTERVIEW.value]) + len(self.columns[JobStatus.OFFER.value]),
            **{column_id: len(ids) for column_id, ids in self.columns.items()},
        }
