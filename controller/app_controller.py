import logging
import random
import threading
from dataclasses import replace
from typing import Dict, List, Optional, Tuple, Type

from core.config import SUBJECT_COLORS
from core.exceptions import (DeleteFailed, InsertFailed, LoadFailed, PBError,
                             SyncError, UpdateFailed)
from core.models import Subject, Task
from storage.pocketbase import PocketBaseClient

logger = logging.getLogger(__name__)

# what a failed remote call can raise once it reaches us
_REMOTE_ERRORS = (PBError, KeyError, ValueError)


class AppController:
    """
    Local mirror of the `subjects` and `tasks` collections.

    Tasks are stored once, keyed by id. The pending/completed lists are
    computed from that mapping on every read, and each task's `subject` is
    resolved from the subject mapping by `subject_id`.

    Every mutating operation does one remote call and patches local state only
    after it succeeds. Failures are logged, kept in `last_error` and never
    raised to the caller.
    """

    def __init__(self, client: PocketBaseClient, *, palette=SUBJECT_COLORS,
                 rng: Optional[random.Random] = None):
        self.client = client
        self._palette = tuple(palette)
        self._rng = rng or random.Random()
        self._lock = threading.RLock()

        self._subjects: Dict[str, Subject] = {}
        self._tasks: Dict[str, Task] = {}
        # partition ordering: <0 added (front), 0 loaded, >0 toggled (end)
        self._rank: Dict[str, int] = {}
        self._seq = 0

        self.loading = True
        self.last_error: Optional[SyncError] = None

    # ---- read-only views ----
    @property
    def subjects(self) -> List[Subject]:
        with self._lock:
            return list(self._subjects.values())

    @property
    def tasks(self) -> List[Task]:
        with self._lock:
            return [self._resolve(t) for t in self._tasks.values()]

    @property
    def pending_tasks(self) -> List[Task]:
        return self._partition(False)

    @property
    def completed_tasks(self) -> List[Task]:
        return self._partition(True)

    def get_task(self, task_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        return self._resolve(task) if task else None

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return self._subjects.get(subject_id)

    def tasks_for_subject(self, subject_id: str) -> List[Task]:
        return [t for t in self.tasks if t.subject_id == subject_id]

    def progress(self) -> Tuple[int, int]:
        """(completed, total) for the "N of M tasks completed" line."""
        with self._lock:
            done = sum(1 for t in self._tasks.values() if t.completed)
            return done, len(self._tasks)

    def _partition(self, completed: bool) -> List[Task]:
        with self._lock:
            chosen = [t for t in self._tasks.values() if t.completed is completed]
            chosen.sort(key=lambda t: self._rank.get(t.id, 0))
            return [self._resolve(t) for t in chosen]

    def _resolve(self, task: Task) -> Task:
        subject = self._subjects.get(task.subject_id)
        if subject is None and task.subject is not None and task.subject.id == task.subject_id:
            subject = task.subject
        return task.with_subject(subject)

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _fail(self, kind: Type[SyncError], err: Exception, detail: str) -> None:
        self.last_error = kind(err, detail)
        logger.error("%s", self.last_error)

    # ---- load ----
    def load(self) -> bool:
        """Replace the whole mirror with the remote state. Keeps old state on failure."""
        with self._lock:
            self.last_error = None
            try:
                subjects = [Subject.from_record(r) for r in self.client.list_subjects()]
                tasks = [Task.from_record(r) for r in self.client.list_tasks()]
            except _REMOTE_ERRORS as e:
                self._fail(LoadFailed, e, "subjects/tasks")
                return False

            self._subjects = {s.id: s for s in subjects}
            self._tasks = {t.id: t for t in tasks}
            self._rank = {}
            self.loading = False
            logger.info("Loaded %d subjects, %d tasks", len(subjects), len(tasks))
            return True

    # ---- subjects ----
    def add_subject(self, name: str) -> Optional[Subject]:
        name = (name or "").strip()
        with self._lock:
            self.last_error = None
            if not name:
                return None
            color = self._rng.choice(self._palette)
            try:
                subject = Subject.from_record(self.client.create_subject(name, color))
            except _REMOTE_ERRORS as e:
                self._fail(InsertFailed, e, f"subject {name!r}")
                return None
            self._subjects = {**self._subjects, subject.id: subject}
            logger.info("Added subject %s (%s)", subject.id, subject.name)
            return subject

    # ---- tasks ----
    def add_task(self, name: str, subject_id: str) -> Optional[Task]:
        name = (name or "").strip()
        with self._lock:
            self.last_error = None
            if not name or not subject_id or subject_id not in self._subjects:
                return None
            try:
                task = Task.from_record(self.client.create_task(name=name, subject_id=subject_id))
            except _REMOTE_ERRORS as e:
                self._fail(InsertFailed, e, f"task {name!r}")
                return None
            self._tasks = {task.id: task, **self._tasks}
            self._rank[task.id] = -self._next_seq()
            logger.info("Added task %s to subject %s", task.id, subject_id)
            return self._resolve(task)

    def edit_task(self, task_id: str, new_name: str = "", new_subject_id: str = "") -> Optional[Task]:
        """Rename and/or move a task. Empty values keep the current ones."""
        with self._lock:
            self.last_error = None
            task = self._tasks.get(task_id)
            if task is None:
                return None
            name = (new_name or "").strip() or task.name
            subject_id = (new_subject_id or "").strip() or task.subject_id
            try:
                self.client.patch_task(task_id, name=name, subject=subject_id)
            except _REMOTE_ERRORS as e:
                self._fail(UpdateFailed, e, f"task {task_id}")
                return None
            task = replace(task, name=name, subject_id=subject_id)
            self._tasks[task_id] = task
            return self._resolve(task)

    def toggle_completion(self, task_id: str, completed: bool) -> Optional[Task]:
        with self._lock:
            self.last_error = None
            task = self._tasks.get(task_id)
            if task is None:
                return None
            completed = bool(completed)
            try:
                self.client.patch_task(task_id, completed=completed)
            except _REMOTE_ERRORS as e:
                self._fail(UpdateFailed, e, f"task {task_id}")
                return None
            if task.completed is not completed:
                task = replace(task, completed=completed)
                self._tasks[task_id] = task
                self._rank[task_id] = self._next_seq()
            return self._resolve(task)

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            self.last_error = None
            try:
                self.client.delete_task(task_id)
            except _REMOTE_ERRORS as e:
                self._fail(DeleteFailed, e, f"task {task_id}")
                return False
            self._tasks = {k: v for k, v in self._tasks.items() if k != task_id}
            self._rank.pop(task_id, None)
            logger.info("Deleted task %s", task_id)
            return True
