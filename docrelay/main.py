"""Main application entry point.

Runs the FastAPI relay with the NiceGUI page mounted on it, or the relay
and the page as two servers. Settings come from RelayConfig (.env aware).
"""

import logging
import sys

from docrelay.config import RelayConfig, get_config

logger = logging.getLogger(__name__)


def configure_logging(config: RelayConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def run_integrated(config: RelayConfig) -> None:
    """Serve the relay routes and the page from one server on PORT."""
    import uvicorn
    from nicegui import ui

    from docrelay.api.app import create_app
    from docrelay.ui.upload_page import upload_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(app, title="Document Q&A")

    logger.info(f"UI and relay on http://localhost:{config.port}/")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def run_separate(config: RelayConfig) -> None:
    """Serve the relay on PORT in a child process and the page on UI_PORT.

    The relay process is stopped when the UI server exits.
    """
    import subprocess

    from docrelay.ui.upload_page import main as run_ui

    relay_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "docrelay.api.app:app",
            "--host",
            config.host,
            "--port",
            str(config.port),
        ]
    )
    logger.info(f"Relay on http://localhost:{config.port}, UI on http://localhost:{config.ui_port}")

    try:
        run_ui()
    finally:
        relay_proc.terminate()
        relay_proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run the relay and the UI on different ports.
    """
    config = get_config()
    configure_logging(config)

    logger.info(f"Starting document relay in {config.run_mode} mode")
    logger.info(f"Forwarding /upload-document and /ask-query to {config.backend_url}")
    logger.info(f"UI reaches the relay at {config.relay_url}")

    if config.run_mode == "separate":
        run_separate(config)
    else:
        run_integrated(config)


if __name__ == "__main__":
    main()
