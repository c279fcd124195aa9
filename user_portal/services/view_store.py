import threading
import uuid
from collections import OrderedDict
from typing import Optional

from flask import current_app, session

from .list_state import UserListView


SESSION_KEY = "view_id"


class ViewStore:
    """Keeps one list view per browser session, oldest evicted first."""

    def __init__(self, limit: int = 256):
        self.limit = limit
        self._views: "OrderedDict[str, UserListView]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, view_id: str) -> Optional[UserListView]:
        with self._lock:
            view = self._views.get(view_id)
            if view is not None:
                self._views.move_to_end(view_id)
            return view

    def mount(self, view_id: str) -> UserListView:
        """Replace whatever view the session held with a fresh one."""
        view = UserListView()
        with self._lock:
            self._views[view_id] = view
            self._views.move_to_end(view_id)
            while len(self._views) > self.limit:
                self._views.popitem(last=False)
        return view

    def __len__(self) -> int:
        return len(self._views)


def _view_id() -> str:
    if SESSION_KEY not in session:
        session[SESSION_KEY] = uuid.uuid4().hex
    return session[SESSION_KEY]


def mount_list_view() -> UserListView:
    return current_app.extensions["view_store"].mount(_view_id())


def current_list_view() -> Optional[UserListView]:
    return current_app.extensions["view_store"].get(_view_id())
