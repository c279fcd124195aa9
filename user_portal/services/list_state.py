import logging
import threading
from typing import List, Optional, Set

from ..errors import NetworkError, NotFoundError, ValidationError
from ..models import UserRecord
from .form_state import Status


logger = logging.getLogger(__name__)

LOADING = "loading"
LOADED = "loaded"
ERROR = "error"


class UserListView:
    """State behind the users table.

    Deleting a row is a two step affair: ``request_delete`` records the
    pending confirmation and ``confirm_delete`` issues the request. Rows are
    deleted independently; a failure leaves the list exactly as it was.
    """

    def __init__(self):
        self.users: List[UserRecord] = []
        self.state = LOADING
        self.error: Optional[str] = None
        self.status = Status.idle()
        self.error_detail: Optional[str] = None
        self._pending: Set[int] = set()
        self._deleting: Set[int] = set()
        self._lock = threading.Lock()

    def load(self, client) -> None:
        self.state = LOADING
        try:
            users = client.list()
        except NetworkError as e:
            logger.info("Failed to fetch users: %s", e)
            self.error = str(e)
            self.state = ERROR
            return
        with self._lock:
            self.users = users
            self._pending.clear()
        self.error = None
        self.state = LOADED

    def find(self, user_id: int) -> Optional[UserRecord]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def request_delete(self, user_id: int) -> UserRecord:
        user = self.find(user_id)
        if user is None:
            raise NotFoundError(user_id)
        self._pending.add(user_id)
        return user

    def cancel_delete(self, user_id: int) -> None:
        self._pending.discard(user_id)

    def is_pending(self, user_id: int) -> bool:
        return user_id in self._pending

    def is_deleting(self, user_id: int) -> bool:
        return user_id in self._deleting

    def confirm_delete(self, user_id: int, client) -> bool:
        with self._lock:
            if user_id in self._deleting:
                return False
            if user_id not in self._pending:
                raise ValidationError(f"Delete of user {user_id} was not confirmed")
            self._pending.discard(user_id)
            self._deleting.add(user_id)

        try:
            client.delete_by_id(user_id)
        except NetworkError as e:
            logger.info("Failed to delete user %s: %s", user_id, e)
            self.status = Status.error("Failed to delete user. Please try again.")
            self.error_detail = str(e)
            return False
        finally:
            with self._lock:
                self._deleting.discard(user_id)

        with self._lock:
            self.users = [user for user in self.users if user.id != user_id]
        self.status = Status.success("User deleted successfully")
        self.error_detail = None
        return True

    def take_status(self) -> Status:
        """Return the current status and reset it; statuses are shown once."""
        status, self.status = self.status, Status.idle()
        if status.kind == "error" and self.error_detail:
            status = Status.error(f"{status.message} (Error: {self.error_detail})")
        self.error_detail = None
        return status
