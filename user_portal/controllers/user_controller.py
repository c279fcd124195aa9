import logging

from flask import Blueprint, flash, jsonify, redirect, render_template, request, url_for

from ..errors import NetworkError, NotFoundError, ValidationError
from ..models import FIELD_LABELS, USER_FIELDS, UserRecord
from ..services.api_client import edit_paths, get_api_client
from ..services.form_state import DONE, CreateUserForm, EditUserForm
from ..services.list_state import ERROR
from ..services.view_store import current_list_view, mount_list_view


logger = logging.getLogger(__name__)

user_bp = Blueprint("users", __name__)

# Disables the submit button while the browser posts the form.
DISABLE_ON_SUBMIT = "this.querySelectorAll('button[type=submit]').forEach(function (b) { b.disabled = true; });"


@user_bp.context_processor
def form_guards():
    return {"disable_on_submit": DISABLE_ON_SUBMIT}


def _render_form(template: str, form, status_code: int = 200, **context):
    return render_template(
        template,
        form=form,
        fields=USER_FIELDS,
        labels=FIELD_LABELS,
        **context,
    ), status_code


def _render_list(view):
    if view.state == ERROR:
        return render_template("users/error.html", error=view.error), 502
    status = view.take_status()
    if status.message:
        flash(status.message, "success" if status.kind == "success" else "danger")
    return render_template("users/list.html", view=view, users=view.users), 200


@user_bp.errorhandler(NotFoundError)
def user_not_found(error):
    return render_template("not_found.html", message=str(error)), 404


@user_bp.get("/")
def index():
    return redirect(url_for("users.list_users"))


@user_bp.get("/users")
def list_users():
    view = mount_list_view()
    view.load(get_api_client())
    return _render_list(view)


@user_bp.route("/users/new", methods=["GET", "POST"])
def create_user():
    form = CreateUserForm()
    if request.method == "GET":
        return _render_form("users/create.html", form)

    form.apply(request.form)
    try:
        form.validate()
    except ValidationError as e:
        return _render_form("users/create.html", form, 400, validation_error=str(e))

    if form.submit(get_api_client()):
        flash(form.status.message, "success")
        return redirect(url_for("users.create_user"))
    return _render_form("users/create.html", form)


@user_bp.get("/users/<int:user_id>/delete")
def confirm_delete(user_id: int):
    view = current_list_view()
    if view is None or view.state == ERROR:
        return redirect(url_for("users.list_users"))
    user = view.request_delete(user_id)
    return render_template("users/confirm_delete.html", user=user, deleting=view.is_deleting(user_id))


@user_bp.post("/users/<int:user_id>/delete")
def delete_user(user_id: int):
    view = current_list_view()
    if view is None or view.state == ERROR:
        return redirect(url_for("users.list_users"))

    if request.form.get("confirm") != "yes":
        view.cancel_delete(user_id)
        return redirect(url_for("users.current_users"))
    if not view.is_pending(user_id):
        return redirect(url_for("users.confirm_delete", user_id=user_id))

    try:
        view.confirm_delete(user_id, get_api_client())
    except ValidationError:
        # Another request consumed the confirmation first
        return redirect(url_for("users.confirm_delete", user_id=user_id))
    return redirect(url_for("users.current_users"))


@user_bp.get("/users/current")
def current_users():
    """The list as this session last saw it, without fetching again."""
    view = current_list_view()
    if view is None:
        return redirect(url_for("users.list_users"))
    return _render_list(view)


@user_bp.get("/edit/paths")
def list_edit_paths():
    return jsonify({"paths": edit_paths(get_api_client())}), 200


@user_bp.route("/edit/<int:user_id>", methods=["GET", "POST"])
def edit_user(user_id: int):
    if request.method == "GET":
        try:
            record = get_api_client().get_by_id(user_id)
        except NetworkError as e:
            logger.info("Could not resolve user %s: %s", user_id, e)
            raise NotFoundError(user_id) from e
        return _render_form("users/edit.html", EditUserForm(record), user_id=user_id)

    # The posted values are the form state; the server copy is not re-read.
    form = EditUserForm(UserRecord(id=user_id), request.form)
    try:
        form.validate()
    except ValidationError as e:
        return _render_form("users/edit.html", form, 400, user_id=user_id, validation_error=str(e))

    form.submit(get_api_client())
    if form.state == DONE:
        flash(form.status.message, "success")
        return redirect(url_for("users.list_users"))
    return _render_form("users/edit.html", form, user_id=user_id)
