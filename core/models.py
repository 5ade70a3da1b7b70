from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    color: str
    created_at: str = ""

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "Subject":
        return cls(
            id=rec["id"],
            name=rec.get("name") or "",
            color=rec.get("color") or "",
            created_at=rec.get("created") or rec.get("created_at") or "",
        )


@dataclass(frozen=True)
class Task:
    id: str
    subject_id: str  # subject id (relation "subject" in PocketBase)
    name: str
    completed: bool = False
    created_at: str = ""
    subject: Optional[Subject] = None  # snapshot from expand, not authoritative

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "Task":
        expanded = (rec.get("expand") or {}).get("subject")
        return cls(
            id=rec["id"],
            subject_id=rec.get("subject") or rec.get("subject_id") or "",
            name=rec.get("name") or "",
            completed=bool(rec.get("completed")),
            created_at=rec.get("created") or rec.get("created_at") or "",
            subject=Subject.from_record(expanded) if expanded else None,
        )

    def with_subject(self, subject: Optional[Subject]) -> "Task":
        return replace(self, subject=subject)
