from __future__ import annotations
import logging
import requests
from typing import List, Dict, Any, Optional
from core.config import PER_PAGE, REQUEST_TIMEOUT
from core.exceptions import PBError

logger = logging.getLogger(__name__)


class PocketBaseClient:
    def __init__(self, base_url: str, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.token: Optional[str] = ""
        self.user_id: Optional[str] = ""

    # ---------- transport ----------
    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise PBError(f"{method} {path}: {e}") from e
        if not r.ok:
            raise PBError(f"{method} {path}: {r.status_code} {r.text}", status=r.status_code)
        logger.debug("%s %s -> %s", method, path, r.status_code)
        return r

    def _records(self, collection: str) -> str:
        return f"/api/collections/{collection}/records"

    # ---------- auth ----------
    def login(self, identity: str, password: str) -> bool:
        r = self._request("POST", "/api/collections/users/auth-with-password",
                          json={"identity": identity, "password": password})
        data = r.json()
        self.token = data.get("token")
        self.user_id = data.get("record", {}).get("id")
        if not self.token or not self.user_id:
            raise PBError("Missing token or user id in login response")
        self.session.headers.update({"Authorization": f"Bearer {self.token}"})
        logger.info("Logged in as %s", self.user_id)
        return True

    # ---------- rows ----------
    def select(self, collection: str, *, filt: Optional[str] = None, sort: Optional[str] = None,
               expand: Optional[str] = None) -> List[Dict[str, Any]]:
        """All rows of a collection, walking every page."""
        params: Dict[str, Any] = {"perPage": PER_PAGE}
        if filt:
            params["filter"] = filt
        if sort:
            params["sort"] = sort
        if expand:
            params["expand"] = expand

        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._request("GET", self._records(collection), params={**params, "page": page}).json()
            items.extend(data.get("items", []))
            if page >= (data.get("totalPages") or 1):
                break
            page += 1
        return items

    def insert(self, collection: str, row: Dict[str, Any], *, expand: Optional[str] = None) -> Dict[str, Any]:
        params = {"expand": expand} if expand else None
        return self._request("POST", self._records(collection), json=row, params=params).json()

    def update(self, collection: str, record_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"{self._records(collection)}/{record_id}", json=patch).json()

    def delete(self, collection: str, record_id: str) -> None:
        self._request("DELETE", f"{self._records(collection)}/{record_id}")

    # ---------- subjects ----------
    def list_subjects(self) -> List[Dict[str, Any]]:
        return self.select("subjects", sort="created")

    def create_subject(self, name: str, color: str) -> Dict[str, Any]:
        return self.insert("subjects", {"name": name, "color": color})

    # ---------- tasks ----------
    def list_tasks(self) -> List[Dict[str, Any]]:
        return self.select("tasks", sort="-created", expand="subject")

    def create_task(self, *, name: str, subject_id: str) -> Dict[str, Any]:
        payload = {
            "name": name,
            "subject": subject_id,
            "completed": False,
        }
        return self.insert("tasks", payload, expand="subject")

    def patch_task(self, task_id: str, **fields) -> Dict[str, Any]:
        return self.update("tasks", task_id, fields)

    def delete_task(self, task_id: str) -> None:
        self.delete("tasks", task_id)
