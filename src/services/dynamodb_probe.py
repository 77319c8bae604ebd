import asyncio

from src.models.exceptions.probe_failure import ProbeFailure
from src.models.status_report import SubsystemCheck
from src.utils.checkable import Checkable


class DynamoDBTableProbe(Checkable):
    """
    Healthy if the configured table can be described and is ACTIVE.
    """

    def __init__(self, name: str, table_name: str, resource, critical: bool = True):
        super().__init__(name, critical)
        self.table_name = table_name
        # boto3 DynamoDB service resource, owned by the application
        self.resource = resource

    def _table_status(self) -> str:
        table = self.resource.Table(self.table_name)
        # Getting table_status triggers an actual connection attempt
        return table.table_status

    async def probe(self) -> SubsystemCheck:
        table_status = await asyncio.to_thread(self._table_status)
        if table_status != 'ACTIVE':
            raise ProbeFailure(f'table status {table_status}')
        return SubsystemCheck(name=self.name, healthy=True)
