"""
Drag-and-drop controller for the board.

Cross-column drops are applied locally first and then confirmed with a
status PATCH. If the PATCH fails the board is rebuilt from a fresh
``list_jobs()``; that reload also discards any other optimistic edit made
while the failed request was in flight. If that reload fails as well, the
board returns to its state from before the drop. Reordering inside a column
is never sent to the server.
"""
import copy
import logging
from typing import Any, Dict, NamedTuple, Optional

from pathforge.client.api import ApiAuthError, ApiError, JobsApi
from pathforge.client.board import Board

logger = logging.getLogger(__name__)


class DragLocation(NamedTuple):
    column_id: str
    index: int


class BoardController:
    def __init__(self, api: JobsApi):
        self.api = api
        self.board = Board()
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.login_required = False

    def _report(self, exc: ApiError, action: str) -> None:
        self.error = exc.message
        self.field_errors = exc.field_errors
        if isinstance(exc, ApiAuthError):
            self.login_required = True
        logger.warning(f"{action} failed: {exc.message}", extra={"status_code": exc.status_code})

    def clear_error(self) -> None:
        self.error = None
        self.field_errors = {}

    def load(self) -> bool:
        """Rebuild the board from the server. Returns False (and sets ``error``) on failure."""
        try:
            jobs = self.api.list_jobs()
        except ApiError as e:
            self._report(e, "Loading jobs")
            if isinstance(e, ApiAuthError):
                self.board = Board()
            return False
        self.board = Board.from_jobs(jobs)
        return True

    def on_drag_end(self, job_id: Any, source: DragLocation, destination: Optional[DragLocation]) -> bool:
        """
        Apply a finished drag. Returns True if the board changed.

        A cancelled drag (no destination) or a drop onto the starting slot is a no-op.
        """
        if destination is None:
            return False
        if destination.column_id == source.column_id and destination.index == source.index:
            return False

        if destination.column_id == source.column_id:
            self.clear_error()
            self.board.move_within_column(source.column_id, source.index, destination.index)
            return True

        self.clear_error()
        previous = copy.deepcopy(self.board)
        self.board.move_across_columns(
            source.column_id, destination.column_id, source.index, destination.index, job_id
        )
        try:
            confirmed = self.api.update_status(job_id, destination.column_id)
        except ApiError as e:
            self._report(e, f"Moving job {job_id} to {destination.column_id}")
            if not self.load() and not self.login_required:
                # Server unreachable for the reload too; fall back to the last known state
                self.board = previous
            self.error = f"Could not update job status: {e.message}"
            return True

        self.board.jobs[job_id] = dict(confirmed)
        return True

    def add_job(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.clear_error()
        try:
            job = self.api.create_job(data)
        except ApiError as e:
            self._report(e, "Creating job")
            return None
        self.board.add(job)
        return job

    def edit_job(self, job_id: Any, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.clear_error()
        try:
            job = self.api.update_job(job_id, changes)
        except ApiError as e:
            self._report(e, f"Updating job {job_id}")
            return None
        self.board.replace(job)
        return job

    def delete_job(self, job_id: Any) -> bool:
        self.clear_error()
        try:
            self.api.delete_job(job_id)
        except ApiError as e:
            self._report(e, f"Deleting job {job_id}")
            return False
        self.board.remove(job_id)
        return True

    def stats(self) -> Dict[str, int]:
        return self.board.stats()
