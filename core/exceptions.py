from typing import Optional


class PBError(Exception):
    """Error returned by PocketBase (or raised while talking to it)."""
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

    @property
    def not_found(self) -> bool:
        return self.status == 404


class SyncError(Exception):
    """A controller operation whose remote call failed; wraps the store error."""
    action = "sync"

    def __init__(self, cause: Exception, detail: str = ""):
        msg = f"{self.action} failed"
        if detail:
            msg += f" ({detail})"
        super().__init__(f"{msg}: {cause}")
        self.cause = cause


class LoadFailed(SyncError):
    action = "load"


class InsertFailed(SyncError):
    action = "insert"


class UpdateFailed(SyncError):
    action = "update"


class DeleteFailed(SyncError):
    action = "delete"
