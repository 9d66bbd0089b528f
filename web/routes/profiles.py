"""Page routes: list, add/edit form, delete and avatar upload."""

import structlog
from quart import Blueprint, current_app, flash, redirect, render_template, request, url_for
from api.errors import UploadFailed, ValidationError
from api.upload import UploadFile
from config.constants import COUNTRIES, IMAGE_EXTENSIONS, ErrorMessage

log = structlog.get_logger(__name__)

profiles_bp = Blueprint("profiles", __name__)


def _state():
    app = current_app
    return app.profile_store, app.profile_form  # type: ignore[attr-defined]


def _home():
    return redirect(url_for("profiles.index"))


def _apply_fields(form, data) -> None:
    """Copy posted profile fields into the form. No-op when the profile form was not posted."""
    if "fullName" not in data:
        return
    form.update(
        full_name=data.get("fullName", ""),
        email=data.get("email", ""),
        phone_number=data.get("phoneNumber", ""),
        country=data.get("country", ""),
        is_active=data.get("isActive") is not None,
    )


async def _flash_store_error(store) -> None:
    # The redirect re-fetches the list, which clears store.error
    if store.error:
        await flash(store.error)


@profiles_bp.route("/")
async def index():
    store, form = _state()
    await store.refresh()
    return await render_template(
        "index.html",
        store=store,
        form=form,
        countries=COUNTRIES,
        accept=",".join(["image/*", *IMAGE_EXTENSIONS]),
        uploading=current_app.upload_adapter.is_uploading,  # type: ignore[attr-defined]
    )


@profiles_bp.route("/profiles", methods=["POST"])
async def submit_profile():
    store, form = _state()
    _apply_fields(form, await request.form)
    if form.is_complete() and not await form.submit(store):
        await _flash_store_error(store)
    return _home()


@profiles_bp.route("/profiles/<profile_id>/edit")
async def edit_profile(profile_id: str):
    store, form = _state()
    profile = store.get(profile_id)
    if profile is None:
        await store.refresh()
        profile = store.get(profile_id)
    if profile is not None:
        form.begin_edit(profile)
    else:
        log.warning("edit_unknown_profile", profile_id=profile_id)
    return _home()


@profiles_bp.route("/profiles/cancel", methods=["POST"])
async def cancel_edit():
    _, form = _state()
    form.reset()
    return _home()


@profiles_bp.route("/profiles/<profile_id>/delete", methods=["POST"])
async def delete_profile(profile_id: str):
    store, _ = _state()
    if not await store.remove(profile_id):
        await _flash_store_error(store)
    return _home()


@profiles_bp.route("/avatar", methods=["POST"])
async def upload_avatar():
    _, form = _state()
    adapter = current_app.upload_adapter  # type: ignore[attr-defined]
    _apply_fields(form, await request.form)
    files = await request.files
    dropped = [
        UploadFile(
            filename=storage.filename or "upload",
            content=storage.read(),
            content_type=storage.content_type or "",
        )
        for storage in files.getlist("file")
        if storage.filename
    ]
    try:
        await form.attach_avatar(adapter, dropped)
    except ValidationError as e:
        await flash(str(e))
    except UploadFailed:
        await flash(ErrorMessage.UPLOAD.value)
    return _home()


@profiles_bp.route("/avatar/remove", methods=["POST"])
async def remove_avatar():
    _, form = _state()
    _apply_fields(form, await request.form)
    form.remove_avatar()
    return _home()
