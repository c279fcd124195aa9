from unittest.mock import MagicMock

import pytest
import requests

from user_portal.errors import NetworkError, NotFoundError
from user_portal.models import UserRecord
from user_portal.services.api_client import UserApiClient, edit_paths


FORM = {"name": "Alice", "tel": "555-0101", "address": "1 Main St", "intro": "Hi"}


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def make_client(*responses):
    session = MagicMock()
    session.request.side_effect = list(responses)
    return UserApiClient("http://api.test/", timeout=5, session=session), session


def test_create_posts_form():
    client, session = make_client(make_response(200, {"success": True}))
    assert client.create(FORM) == {"success": True}
    session.request.assert_called_once_with(
        "POST", "http://api.test/api/create-user", json=FORM, timeout=5
    )


def test_create_reports_server_refusal():
    client, _ = make_client(make_response(200, {"success": False}))
    assert client.create(FORM) == {"success": False}


def test_list_parses_records():
    client, session = make_client(make_response(200, [dict(FORM, id=1), dict(FORM, id=2, name="Bob")]))
    users = client.list()
    assert users == [UserRecord(id=1, **FORM), UserRecord(id=2, **dict(FORM, name="Bob"))]
    session.request.assert_called_once_with("GET", "http://api.test/api", json=None, timeout=5)


def test_list_all_uses_users_endpoint():
    client, session = make_client(make_response(200, []))
    assert client.list_all() == []
    assert session.request.call_args[0] == ("GET", "http://api.test/api/users")


def test_non_success_status_is_network_error():
    client, _ = make_client(make_response(500))
    with pytest.raises(NetworkError) as excinfo:
        client.list()
    assert str(excinfo.value) == "HTTP error! status: 500"
    assert excinfo.value.status_code == 500


def test_transport_failure_is_network_error():
    session = MagicMock()
    session.request.side_effect = requests.exceptions.ConnectionError("connection refused")
    client = UserApiClient("http://api.test", session=session)
    with pytest.raises(NetworkError, match="connection refused"):
        client.list()


def test_malformed_payloads_are_network_errors():
    client, _ = make_client(
        make_response(200, ValueError("no json")),
        make_response(200, {"not": "a list"}),
        make_response(200, [{"name": "no id"}]),
    )
    for _ in range(3):
        with pytest.raises(NetworkError):
            client.list()


def test_get_by_id():
    client, session = make_client(make_response(200, dict(FORM, id=7)))
    assert client.get_by_id(7) == UserRecord(id=7, **FORM)
    assert session.request.call_args[0] == ("GET", "http://api.test/api/user/7")


def test_get_by_id_missing_is_not_found():
    client, _ = make_client(make_response(404))
    with pytest.raises(NotFoundError):
        client.get_by_id(99)


def test_get_by_id_server_error_stays_network_error():
    client, _ = make_client(make_response(503))
    with pytest.raises(NetworkError) as excinfo:
        client.get_by_id(1)
    assert not isinstance(excinfo.value, NotFoundError)


def test_update_and_delete_ignore_body():
    client, session = make_client(make_response(204, ValueError("empty")), make_response(200, ValueError("empty")))
    assert client.update(3, FORM) is None
    assert client.delete_by_id(3) is None
    calls = [c[0] for c in session.request.call_args_list]
    assert calls == [("PUT", "http://api.test/api/update/3"), ("DELETE", "http://api.test/api/3")]
    assert session.request.call_args_list[0][1]["json"] == FORM


def test_delete_failure():
    client, _ = make_client(make_response(404))
    with pytest.raises(NetworkError):
        client.delete_by_id(3)


def test_edit_paths():
    client, _ = make_client(make_response(200, [dict(FORM, id=1), dict(FORM, id=5)]))
    assert edit_paths(client) == ["/edit/1", "/edit/5"]


def test_edit_paths_falls_back_to_empty():
    client, _ = make_client(make_response(500))
    assert edit_paths(client) == []


def test_close_closes_session():
    client, session = make_client()
    client.close()
    session.close.assert_called_once_with()
