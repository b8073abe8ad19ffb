"""ASGI entry point: ``uvicorn stayboard.main:app`` or the ``stayboard`` script."""

from dotenv import load_dotenv

from stayboard.config import BASE_DIR, get_settings
from stayboard.core.app_factory import create_app
from stayboard.logging_config import setup_logging

# Settings read os.environ too, so .env must be loaded before the first get_settings()
load_dotenv(BASE_DIR / ".env")

settings = get_settings()
setup_logging(settings.log_level, settings.log_dir)

app = create_app()


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "stayboard.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
