"""socketpaw entry point.

Runs a bolt app over Socket Mode with a ``/health`` route on the HTTP surface.
"""

import argparse
import asyncio
import json
import logging

from socketpaw.config import Settings, get_settings
from socketpaw.logging_setup import setup_logging
from socketpaw.receiver import SocketModeReceiver

logger = logging.getLogger(__name__)


def health(request, response) -> None:
    response.write_head(200, {"Content-Type": "application/json"})
    response.end(json.dumps({"status": "ok"}))


async def run(settings: Settings, **receiver_kwargs) -> None:
    """Run until cancelled. A failed HTTP listen ends the run with exit code 1."""
    from slack_bolt.async_app import AsyncApp

    done = asyncio.Event()
    failures: list[BaseException] = []

    def on_error(error: BaseException) -> None:
        failures.append(error)
        done.set()

    receiver = SocketModeReceiver.from_settings(
        settings,
        app=AsyncApp(token=settings.bot_token),
        custom_routes=[{"path": "/health", "method": "GET", "handler": health}],
        on_error=on_error,
        **receiver_kwargs,
    )

    started = False
    try:
        if not done.is_set():
            await receiver.start()
            started = True
            logger.info("Socket Mode connected; HTTP routes on port %d", settings.port)
            await done.wait()
    except asyncio.CancelledError:
        logger.info("Shutting down...")
    finally:
        if started:
            await receiver.stop()
        await receiver.close_http_server()

    if failures:
        logger.error("Stopping: %s", failures[0])
        raise SystemExit(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Socket Mode receiver")
    parser.add_argument("--port", type=int, default=None, help="HTTP port (default 3000)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    args = parser.parse_args()

    settings = get_settings()
    if args.port is not None:
        settings.port = args.port
    setup_logging(args.log_level or settings.log_level)

    if not settings.app_token:
        logger.error("SOCKETPAW_APP_TOKEN is not set")
        raise SystemExit(1)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
