"""Quart app factory for the profile management page."""

import asyncio

import structlog
from quart import Quart
from api.client import ApiClient
from api.upload import UploadAdapter
from config.logging_config import setup_logging
from config.settings import settings
from profiles.form import ProfileForm
from profiles.store import ProfileStore

log = structlog.get_logger(__name__)


def create_app(client: ApiClient | None = None) -> Quart:
    """Create and configure the Quart web application.

    The store, form and upload adapter live on the app, so every browser
    session shares one form and one edit mode. The page is a single-user
    desk tool; run one instance per operator.
    """
    app = Quart(
        __name__,
        template_folder="templates",
    )
    app.secret_key = settings.web_secret_key

    client = client or ApiClient()

    app.api_client = client  # type: ignore[attr-defined]
    app.profile_store = ProfileStore(client)  # type: ignore[attr-defined]
    app.profile_form = ProfileForm()  # type: ignore[attr-defined]
    app.upload_adapter = UploadAdapter(client)  # type: ignore[attr-defined]

    from web.routes.profiles import profiles_bp

    app.register_blueprint(profiles_bp)

    @app.route("/health")
    async def health():
        return {"status": "ok"}, 200

    @app.after_serving
    async def close_client() -> None:
        await client.close()
        log.info("api_client_closed")

    return app


async def start_web() -> None:
    """Start the profile page."""
    app = create_app()
    log.info("starting_profile_web", port=settings.web_port, api_url=settings.api_url)
    await app.run_task(host="0.0.0.0", port=settings.web_port)


def main() -> None:
    setup_logging()
    asyncio.run(start_web())


if __name__ == "__main__":
    main()
