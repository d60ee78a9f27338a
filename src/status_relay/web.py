import asyncio

import aiohttp
import gidgethub
from aiolimiter import AsyncLimiter
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from gidgethub import aiohttp as gh_aiohttp
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sanic import Sanic, response
from sanic.log import logger

from status_relay.codepipeline.utils import client_for_region
from status_relay.config import Config
from status_relay.exceptions import (
    InvalidEventError,
    NotificationError,
    RelayError,
    ResolutionError,
    UpstreamError,
)
from status_relay.relay import handle_event

ERROR_STATUS = (
    (InvalidEventError, 400),
    (ResolutionError, 422),
    (UpstreamError, 502),
    (NotificationError, 502),
)


def error_status(error: RelayError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


def create_app(config: Config | None = None, codepipeline: BaseClient | None = None):
    if config is None:
        config = Config()

    app = Sanic("status-relay")
    app.ctx.config = config
    logger.setLevel(config.OVERRIDE_LOGGING)

    app.ctx.codepipeline = (
        codepipeline if codepipeline is not None else client_for_region(config)
    )

    limiter = AsyncLimiter(10)

    @app.listener("before_server_start")
    async def init(app, loop):
        app.ctx.config.print_config()

    @app.route("/")
    async def index(request):
        logger.debug("status check")
        return response.text("ok")

    @app.route("/health")
    async def health(request):
        if not limiter.has_capacity():
            return response.text("Rate limited", status=429)
        await limiter.acquire()

        github_ok = False
        codepipeline_ok = False

        logger.info("Checking health")
        async with aiohttp.ClientSession() as session:
            gh = gh_aiohttp.GitHubAPI(
                session, "status-relay", base_url=config.GITHUB_API_URL
            )
            try:
                await gh.getitem("/rate_limit")
                logger.info("GitHub ok")
                github_ok = True
            except (gidgethub.GitHubException, aiohttp.ClientError) as e:
                logger.error("GitHub rate limit query failed: %s", e)

        try:
            await asyncio.to_thread(app.ctx.codepipeline.list_pipelines, maxResults=1)
            logger.info("CodePipeline ok")
            codepipeline_ok = True
        except (ClientError, BotoCoreError) as e:
            logger.error("CodePipeline list pipelines failed: %s", e)

        status = 200 if github_ok and codepipeline_ok else 500
        github_str = "ok" if github_ok else "not ok"
        codepipeline_str = "ok" if codepipeline_ok else "not ok"
        text = f"GitHub: {github_str}, CodePipeline: {codepipeline_str}"
        return response.text(text, status=status)

    @app.route("/relay", methods=["POST"])
    async def relay(request):
        logger.debug("Relay request received")

        try:
            result = await handle_event(
                request.json,
                codepipeline=app.ctx.codepipeline,
                config=app.ctx.config,
            )
        except RelayError as e:
            logger.error("Status relay failed: %s", e)
            return response.json(
                {"error": str(e), "kind": type(e).__name__}, status=error_status(e)
            )

        return response.json(result.model_dump(mode="json"), status=201)

    @app.route("/metrics")
    async def metrics(request):
        return response.raw(generate_latest(), content_type=CONTENT_TYPE_LATEST)

    return app
