from unittest.mock import MagicMock

import pytest
from sanic import Sanic
from sanic_testing import TestManager
from sanic.log import logger

from status_relay.config import Config
from tests.utils import make_execution_response, make_session


@pytest.fixture
def config():
    config = Config(
        CONSOLE_REGION="eu-west-1",
        CONSOLE_DOMAIN="aws.amazon.com",
        AWS_REGION=None,
        GITHUB_HOST="github.com",
        GITHUB_API_URL="https://api.github.com",
        STATUS_CONTEXT="continuous-integration/codepipeline",
        SOURCE_ARTIFACT_NAME="SourceArtifact",
        REQUEST_TIMEOUT=5.0,
        OVERRIDE_LOGGING="DEBUG",
        STERILE=False,
    )

    logger.setLevel(config.OVERRIDE_LOGGING)

    return config


@pytest.fixture
def codepipeline():
    client = MagicMock()
    client.get_pipeline_execution.return_value = make_execution_response()
    return client


@pytest.fixture
def session():
    return make_session()


@pytest.fixture(scope="function")
def app(config, codepipeline) -> Sanic:
    """Create a Sanic app for testing."""
    from status_relay.web import create_app

    Sanic.test_mode = True
    app = create_app(config=config, codepipeline=codepipeline)
    TestManager(app)
    return app
