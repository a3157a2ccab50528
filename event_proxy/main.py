# event_proxy/main.py
import logging
from argparse import ArgumentParser
from contextlib import asynccontextmanager
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI

from event_proxy.api.routes import events
from event_proxy.core.config import LOG_LEVELS, Settings, settings as default_settings
from event_proxy.core.logging_config import setup_logging
from event_proxy.services.capability import Capability
from event_proxy.services.memory_queue import DiscardQueue
from event_proxy.services.proxy import Proxy
from event_proxy.services.redis_queue import RedisQueue, build_redis_client
from event_proxy.services.shared_queue import SharedQueue
from event_proxy.services.sqs_queue import SQSQueue, build_sqs_client

logger = logging.getLogger(__name__)


def build_queue(cfg: Settings) -> Capability[Any, Any]:
    """Construct the queue backend selected by QUEUE_BACKEND."""
    if cfg.QUEUE_BACKEND == "sqs":
        if not cfg.QUEUE_URL:
            raise ValueError("QUEUE_URL is required when QUEUE_BACKEND=sqs")
        client = build_sqs_client(region=cfg.AWS_REGION, endpoint_url=cfg.SQS_ENDPOINT_URL)
        return SQSQueue(client, cfg.QUEUE_URL)
    if cfg.QUEUE_BACKEND == "redis":
        return RedisQueue(build_redis_client(cfg.REDIS_URL), cfg.REDIS_QUEUE_KEY)
    return DiscardQueue()


def create_app(cfg: Optional[Settings] = None, queue: Optional[Capability[Any, Any]] = None) -> FastAPI:
    cfg = cfg or default_settings

    def install(backend: Capability[Any, Any]) -> None:
        shared = SharedQueue(backend, lock_timeout=cfg.QUEUE_LOCK_TIMEOUT)
        app.state.proxy = Proxy(shared, source=cfg.EVENT_SOURCE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.proxy is None:
            install(build_queue(cfg))
        logger.info(
            "event proxy ready: backend=%s source=%s env=%s",
            cfg.QUEUE_BACKEND, cfg.EVENT_SOURCE, cfg.APP_ENV,
        )
        yield

    app = FastAPI(title=cfg.SERVICE_NAME, lifespan=lifespan)
    app.state.settings = cfg
    app.state.proxy = None

    # an injected backend is ready now, otherwise build it at startup
    if queue is not None:
        install(queue)

    app.include_router(events.router)

    @app.get("/health")
    async def health():
        return {
            "status": "ok" if app.state.proxy is not None else "starting",
            "service": cfg.SERVICE_NAME,
            "env": cfg.APP_ENV,
            "backend": cfg.QUEUE_BACKEND,
        }

    return app


app = create_app()


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="event-proxy",
        description="Accept security events over HTTP and forward them to a queue.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Listen port (default: 8080)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override LOG_LEVEL",
    )
    return parser


def run(argv=None) -> None:
    args = build_parser().parse_args(argv)
    level = args.log_level or default_settings.LOG_LEVEL
    setup_logging(level)
    uvicorn.run(app, host=args.host, port=args.port, log_level=level.lower(), log_config=None)


if __name__ == "__main__":
    run()
