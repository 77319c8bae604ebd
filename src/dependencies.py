from typing import List, Optional

import boto3
import httpx
import structlog
from fastapi.requests import Request

from src.config.health_config import HealthConfig, DYNAMODB_DEPENDENCY_NAME, S3_DEPENDENCY_NAME
from src.services.dynamodb_probe import DynamoDBTableProbe
from src.services.http_probe import HttpServiceProbe
from src.services.s3_probe import S3BucketProbe
from src.services.status_service import StatusService
from src.utils.checkable import Checkable

logger = structlog.get_logger()


def get_dynamodb_resource(config: HealthConfig):
    if config.dynamodb_endpoint_url:
        logger.info("Using local DynamoDB resource")
        return boto3.resource('dynamodb', region_name=config.aws_region, endpoint_url=config.dynamodb_endpoint_url)
    return boto3.resource('dynamodb', region_name=config.aws_region)


def get_s3_client(config: HealthConfig):
    if config.s3_endpoint_url:
        logger.info("Using local S3 client")
        return boto3.client('s3', region_name=config.aws_region, endpoint_url=config.s3_endpoint_url)
    return boto3.client('s3', region_name=config.aws_region)


def build_dependencies(config: HealthConfig, http_client: Optional[httpx.AsyncClient] = None,
                       dynamodb_resource=None, s3_client=None) -> List[Checkable]:
    """
    Creates one Checkable per dependency named in the config. Clients not passed in are created here, but are
    then owned by the caller.

    :param config: HealthConfig
    :param http_client: shared client for all HTTP dependencies
    :param dynamodb_resource: boto3 DynamoDB resource
    :param s3_client: boto3 S3 client
    :return: list of Checkable in a stable order: database, storage, then HTTP dependencies as configured
    """
    dependencies: List[Checkable] = []

    if config.dynamodb_table:
        if dynamodb_resource is None:
            dynamodb_resource = get_dynamodb_resource(config)
        dependencies.append(DynamoDBTableProbe(
            DYNAMODB_DEPENDENCY_NAME, config.dynamodb_table, dynamodb_resource,
            critical=config.is_critical(DYNAMODB_DEPENDENCY_NAME)
        ))

    if config.s3_bucket:
        if s3_client is None:
            s3_client = get_s3_client(config)
        dependencies.append(S3BucketProbe(
            S3_DEPENDENCY_NAME, config.s3_bucket, s3_client,
            critical=config.is_critical(S3_DEPENDENCY_NAME)
        ))

    if config.http_dependencies and http_client is None:
        raise ValueError('An HTTP client is required to probe HTTP dependencies')
    for name, url in config.http_dependencies.items():
        dependencies.append(HttpServiceProbe(name, url, http_client, critical=config.is_critical(name)))

    logger.info(f"Configured health dependencies {dependencies}")
    return dependencies


def get_status_service(request: Request) -> StatusService:
    """
    The StatusService built when the application started, or one without dependencies if it was not started
    through its lifespan.
    """
    status_service = getattr(request.app.state, 'status_service', None)
    if status_service is None:
        status_service = StatusService()
    return status_service
