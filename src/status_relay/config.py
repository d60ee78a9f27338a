from typing import Literal

from pydantic_settings import BaseSettings
from sanic.log import logger


class Config(BaseSettings):
    CONSOLE_REGION: str = "eu-west-1"
    CONSOLE_DOMAIN: str = "aws.amazon.com"
    AWS_REGION: str | None = None

    GITHUB_HOST: str = "github.com"
    GITHUB_API_URL: str = "https://api.github.com"

    STATUS_CONTEXT: str = "continuous-integration/codepipeline"
    SOURCE_ARTIFACT_NAME: str = "SourceArtifact"

    REQUEST_TIMEOUT: float = 30.0

    OVERRIDE_LOGGING: Literal[
        "CRITICAL",
        "FATAL",
        "ERROR",
        "WARNING",
        "WARN",
        "INFO",
        "DEBUG",
        "NOTSET",
    ] = "INFO"

    STERILE: bool = False

    @property
    def console_host(self) -> str:
        return f"{self.CONSOLE_REGION}.console.{self.CONSOLE_DOMAIN}"

    @property
    def client_region(self) -> str:
        return self.AWS_REGION or self.CONSOLE_REGION

    def print_config(self):
        """Print configuration values"""
        logger.info("=== Status Relay Configuration ===")
        for field_name, field_value in self.model_dump().items():
            logger.info(f"{field_name}: {field_value}")
        logger.info("==================================")
