"""
boto3 client factory for the R2 S3 endpoint.
"""

from typing import Any, Callable

import boto3
from botocore.config import Config

from storage_gateway.domain.exceptions import StorageConfigError
from storage_gateway.infra.config.settings import Settings

ClientFactory = Callable[[], Any]


def r2_client_factory(settings: Settings) -> ClientFactory:
    """Return a callable building a fresh S3 client from ``settings``.

    Credentials are checked when a client is built, not at startup, so a
    misconfigured deployment still serves login/whoami.
    """

    def build() -> Any:
        missing = [
            env
            for env, value in (
                ("R2_ACCOUNT_ID", settings.r2_endpoint()),
                ("R2_ACCESS_KEY_ID", settings.r2_access_key_id),
                ("R2_SECRET_ACCESS_KEY", settings.r2_secret_access_key),
            )
            if not value
        ]
        if missing:
            raise StorageConfigError(missing)

        return boto3.client(
            "s3",
            endpoint_url=settings.r2_endpoint(),
            aws_access_key_id=settings.r2_access_key_id,
            aws_secret_access_key=settings.r2_secret_access_key,
            region_name=settings.r2_region,
            config=Config(signature_version="s3v4"),
        )

    return build
