import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

load_dotenv()

DYNAMODB_DEPENDENCY_NAME = 'database'
S3_DEPENDENCY_NAME = 'storage'


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_http_dependencies(value: Optional[str]) -> Dict[str, str]:
    """
    Parses comma separated name=url pairs, e.g. 'search=http://search/health,cache=http://cache/ping'
    """
    dependencies = {}
    for pair in _split(value):
        name, separator, url = pair.partition('=')
        name, url = name.strip(), url.strip()
        if not separator or not name or not url:
            raise ValueError(f'Expected name=url in HEALTH_HTTP_DEPENDENCIES, got {pair!r}')
        if name in dependencies:
            raise ValueError(f'Duplicate dependency name {name!r} in HEALTH_HTTP_DEPENDENCIES')
        dependencies[name] = url
    return dependencies


class HealthConfig(BaseModel):
    """
    Which dependencies are probed for the health report, and how.
    """
    probe_timeout: float = 2.0
    non_critical: List[str] = Field(default_factory=list)
    http_dependencies: Dict[str, str] = Field(default_factory=dict)
    dynamodb_table: Optional[str] = None
    s3_bucket: Optional[str] = None
    aws_region: Optional[str] = None
    dynamodb_endpoint_url: Optional[str] = None
    s3_endpoint_url: Optional[str] = None
    api_prefix: str = ''
    cors_allow_origins: List[str] = Field(default_factory=lambda: ['*'])

    @field_validator('probe_timeout')
    @classmethod
    def timeout_is_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f'HEALTH_PROBE_TIMEOUT_SECONDS must be positive, got {value}')
        return value

    @field_validator('api_prefix')
    @classmethod
    def prefix_is_rooted(cls, value: str) -> str:
        value = value.strip().rstrip('/')
        if value and not value.startswith('/'):
            value = f'/{value}'
        return value

    @model_validator(mode='after')
    def names_are_unique(self) -> 'HealthConfig':
        names = self.dependency_names()
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f'Duplicate dependency names {duplicates}')
        return self

    def dependency_names(self) -> List[str]:
        names = []
        if self.dynamodb_table:
            names.append(DYNAMODB_DEPENDENCY_NAME)
        if self.s3_bucket:
            names.append(S3_DEPENDENCY_NAME)
        names.extend(self.http_dependencies.keys())
        return names

    def is_critical(self, name: str) -> bool:
        return name not in self.non_critical


def get_health_config() -> HealthConfig:
    """
    Builds the HealthConfig from environment variables, including any set in a .env file.

    :return: HealthConfig
    :raises ValueError: if any value is malformed
    """
    timeout = os.getenv('HEALTH_PROBE_TIMEOUT_SECONDS', '2.0')
    try:
        probe_timeout = float(timeout)
    except ValueError:
        raise ValueError(f'HEALTH_PROBE_TIMEOUT_SECONDS must be a number, got {timeout!r}')

    return HealthConfig(
        probe_timeout=probe_timeout,
        non_critical=_split(os.getenv('HEALTH_NON_CRITICAL')),
        http_dependencies=parse_http_dependencies(os.getenv('HEALTH_HTTP_DEPENDENCIES')),
        dynamodb_table=os.getenv('HEALTH_DYNAMODB_TABLE') or None,
        s3_bucket=os.getenv('HEALTH_S3_BUCKET') or None,
        aws_region=os.getenv('AWS_REGION') or None,
        dynamodb_endpoint_url=os.getenv('DYNAMODB_ENDPOINT_URL') or None,
        s3_endpoint_url=os.getenv('S3_ENDPOINT_URL') or None,
        api_prefix=os.getenv('API_PREFIX', ''),
        cors_allow_origins=_split(os.getenv('CORS_ALLOW_ORIGINS', '*')),
    )
