from dataclasses import asdict, dataclass
from typing import Any, Dict

from .errors import NetworkError


# Editable fields, in form order. Wire names match the remote API.
USER_FIELDS = ("name", "tel", "address", "intro")

FIELD_LABELS = {
    "name": "Name",
    "tel": "Telephone",
    "address": "Address",
    "intro": "Introduction",
}


@dataclass
class UserRecord:
    id: int
    name: str = ""
    tel: str = ""
    address: str = ""
    intro: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "UserRecord":
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected user payload: {data!r}")
        user_id = data.get("id")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise NetworkError(f"User payload has no integer id: {data!r}")
        fields = {name: "" if data.get(name) is None else str(data[name]) for name in USER_FIELDS}
        return cls(id=user_id, **fields)

    def to_form(self) -> Dict[str, str]:
        values = asdict(self)
        values.pop("id")
        return values


def empty_form() -> Dict[str, str]:
    return dict.fromkeys(USER_FIELDS, "")
