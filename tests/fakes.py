# tests/fakes.py

from __future__ import annotations

from typing import Any

from core.exceptions import PBError


class FakeStore:
    """
    In-memory stand-in for PocketBaseClient.

    - Records look like PocketBase rows (`created`, relation `subject`, `expand`)
    - Enforces the subject relation like the real store
    - Method names listed in `fail` raise PBError instead of touching data
    - Captures calls for assertions
    """

    def __init__(self) -> None:
        self.subjects: dict[str, dict[str, Any]] = {}
        self.tasks: dict[str, dict[str, Any]] = {}
        self.fail: set[str] = set()
        self.calls: list[tuple[str, tuple, dict]] = []
        self._n = 0

    # ---- helpers ----
    def _tick(self) -> str:
        self._n += 1
        return f"2024-01-01 00:00:00.{self._n:03d}Z"

    def _call(self, method: str, /, *args, **kwargs) -> None:
        self.calls.append((method, args, kwargs))
        if method in self.fail:
            raise PBError(f"{method}: 500 boom", status=500)

    def _expanded(self, rec: dict[str, Any]) -> dict[str, Any]:
        out = dict(rec)
        subj = self.subjects.get(rec["subject"])
        if subj is not None:
            out["expand"] = {"subject": {k: subj[k] for k in ("id", "name", "color")}}
        return out

    def seed_subject(self, sid: str, name: str, color: str = "#ef4444") -> dict[str, Any]:
        rec = {"id": sid, "name": name, "color": color, "created": self._tick()}
        self.subjects[sid] = rec
        return rec

    def seed_task(self, tid: str, subject_id: str, name: str, completed: bool = False) -> dict[str, Any]:
        rec = {"id": tid, "subject": subject_id, "name": name, "completed": completed, "created": self._tick()}
        self.tasks[tid] = rec
        return rec

    # ---- client surface ----
    def list_subjects(self) -> list[dict[str, Any]]:
        self._call("list_subjects")
        return sorted((dict(r) for r in self.subjects.values()), key=lambda r: r["created"])

    def list_tasks(self) -> list[dict[str, Any]]:
        self._call("list_tasks")
        rows = sorted(self.tasks.values(), key=lambda r: r["created"], reverse=True)
        return [self._expanded(r) for r in rows]

    def create_subject(self, name: str, color: str) -> dict[str, Any]:
        self._call("create_subject", name, color)
        sid = f"s{len(self.subjects) + 1}"
        return dict(self.seed_subject(sid, name, color))

    def create_task(self, *, name: str, subject_id: str) -> dict[str, Any]:
        self._call("create_task", name=name, subject_id=subject_id)
        if subject_id not in self.subjects:
            raise PBError("create_task: 400 invalid subject", status=400)
        tid = f"t{self._n + 1}"
        return self._expanded(self.seed_task(tid, subject_id, name))

    def patch_task(self, task_id: str, **fields) -> dict[str, Any]:
        self._call("patch_task", task_id, **fields)
        rec = self.tasks.get(task_id)
        if rec is None:
            raise PBError("patch_task: 404 not found", status=404)
        if "subject" in fields and fields["subject"] not in self.subjects:
            raise PBError("patch_task: 400 invalid subject", status=400)
        rec.update(fields)
        return dict(rec)

    def delete_task(self, task_id: str) -> None:
        self._call("delete_task", task_id)
        if self.tasks.pop(task_id, None) is None:
            raise PBError("delete_task: 404 not found", status=404)
