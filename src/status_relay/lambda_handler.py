"""
Lambda entry point.

Wired to an EventBridge rule on CodePipeline execution state changes whose
input transformer produces::

    {"execution-id": "...", "github-token": "...", "pipeline": "..."}
"""

import asyncio

from sanic.log import logger

from status_relay.codepipeline.utils import client_for_region
from status_relay.config import Config
from status_relay.exceptions import RelayError
from status_relay.relay import handle_event


def handle(event, context):
    config = Config()
    logger.setLevel(config.OVERRIDE_LOGGING)

    codepipeline = client_for_region(config)

    try:
        result = asyncio.run(
            handle_event(event, codepipeline=codepipeline, config=config)
        )
    except RelayError as e:
        logger.error("Status relay failed: %s", e)
        raise

    return result.model_dump(mode="json")
