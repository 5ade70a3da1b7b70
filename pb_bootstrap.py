# ==== pb_bootstrap.py ====
# Creates/updates the `subjects` and `tasks` collections through the PocketBase Admin API.
# Run with:  python pb_bootstrap.py   (admin credentials from STUDY_PB_ADMIN_* / .env)

import sys
from core.config import BASE_URL, ADMIN_EMAIL, ADMIN_PASSWORD
from core.exceptions import PBError
from storage.pocketbase import PocketBaseClient


def die(msg):
    print(msg)
    sys.exit(1)


class PBAdmin(PocketBaseClient):
    """Admin session on top of the record client; any error ends the script."""

    def admin_login(self, email, password):
        try:
            r = self._request("POST", "/api/admins/auth-with-password",
                              json={"identity": email, "password": password})
        except PBError as e:
            die(f"[LOGIN] {e}")
        self.token = r.json().get("token")
        if not self.token:
            die("[LOGIN] missing token")
        self.session.headers.update({"Authorization": f"Bearer {self.token}"})
        print("[OK] Admin login")

    def get_collection(self, name_or_id):
        try:
            return self._request("GET", f"/api/collections/{name_or_id}").json()
        except PBError as e:
            if e.not_found:
                return None
            die(f"[GET {name_or_id}] {e}")

    def save_collection(self, payload, collection_id=None):
        """Create, or patch `collection_id` when given."""
        method, path = ("PATCH", f"/api/collections/{collection_id}") if collection_id else ("POST", "/api/collections")
        try:
            return self._request(method, path, json=payload).json()
        except PBError as e:
            die(f"[SAVE {payload.get('name')}] {e}")


_AUTH_RULES = {
    "listRule": "@request.auth.id != ''",
    "viewRule": "@request.auth.id != ''",
    "createRule": "@request.auth.id != ''",
    "updateRule": "@request.auth.id != ''",
    "deleteRule": "@request.auth.id != ''",
}


def subjects_collection():
    return {
        "name": "subjects",
        "type": "base",
        "schema": [
            {"name": "name", "type": "text", "required": True, "options": {"min": 1, "max": 120}},
            {"name": "color", "type": "text", "required": False, "options": {"pattern": "^#[0-9A-Fa-f]{6}$"}},
        ],
        "indexes": [
            "CREATE INDEX idx_subjects_created ON subjects (created)"
        ],
        **_AUTH_RULES,
    }


def tasks_collection(subjects_id: str):
    return {
        "name": "tasks",
        "type": "base",
        "schema": [
            {"name": "name", "type": "text", "required": True, "options": {"min": 1, "max": 200}},
            {"name": "completed", "type": "bool", "required": False, "options": {}},
            # no cascade: subjects are never deleted by the app
            {"name": "subject", "type": "relation", "required": True,
             "options": {"collectionId": subjects_id, "cascadeDelete": False, "maxSelect": 1}},
        ],
        "indexes": [
            "CREATE INDEX idx_tasks_subject ON tasks (subject)",
            "CREATE INDEX idx_tasks_completed_created ON tasks (completed, created)"
        ],
        **_AUTH_RULES,
    }


def upsert_collection(pb: PBAdmin, payload: dict):
    existing = pb.get_collection(payload["name"])
    if not existing:
        return pb.save_collection(payload)
    cid = existing.get("id") or payload["name"]
    payload = payload.copy()
    payload["id"] = cid
    payload["name"] = existing["name"]
    return pb.save_collection(payload, cid)


def main(base=BASE_URL, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    if not email or not password:
        die("Set STUDY_PB_ADMIN_EMAIL and STUDY_PB_ADMIN_PASSWORD first")
    pb = PBAdmin(base)
    pb.admin_login(email, password)

    subjects = upsert_collection(pb, subjects_collection())
    subjects_id = subjects.get("id")
    print("OK: subjects", subjects_id)

    tasks = upsert_collection(pb, tasks_collection(subjects_id))
    print("OK: tasks", tasks.get("id"))

    print("Bootstrap complete.")


if __name__ == "__main__":
    main()
