import httpx

from src.models.exceptions.probe_failure import ProbeFailure
from src.models.status_report import SubsystemCheck
from src.utils.checkable import Checkable


class HttpServiceProbe(Checkable):
    """
    Reachable and responding if a GET of the configured URL returns the expected status code.

    The httpx.AsyncClient is shared with the rest of the application and is not closed here.
    """

    def __init__(self, name: str, url: str, client: httpx.AsyncClient, critical: bool = True,
                 expected_status: int = 200):
        super().__init__(name, critical)
        self.url = url
        self.client = client
        self.expected_status = expected_status

    async def probe(self) -> SubsystemCheck:
        response = await self.client.get(self.url)
        if response.status_code != self.expected_status:
            raise ProbeFailure(f'HTTP {response.status_code}')
        return SubsystemCheck(name=self.name, healthy=True)
