import asyncio

from botocore.exceptions import ClientError

from src.models.exceptions.probe_failure import ProbeFailure
from src.models.status_report import SubsystemCheck
from src.utils.checkable import Checkable


class S3BucketProbe(Checkable):
    """
    Healthy if the configured bucket exists and is accessible.
    """

    def __init__(self, name: str, bucket_name: str, client, critical: bool = True):
        super().__init__(name, critical)
        self.bucket_name = bucket_name
        # boto3 S3 client, owned by the application
        self.client = client

    async def probe(self) -> SubsystemCheck:
        try:
            await asyncio.to_thread(self.client.head_bucket, Bucket=self.bucket_name)
        except ClientError as ce:
            # The service responded, but the bucket is missing or forbidden
            error = ce.response.get('Error', {})
            raise ProbeFailure(f"{error.get('Code', 'Unknown')} {error.get('Message', '')}".strip())
        return SubsystemCheck(name=self.name, healthy=True)
