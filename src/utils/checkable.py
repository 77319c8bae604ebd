from src.models.status_report import SubsystemCheck


class Checkable:
    """
    Implemented by clients of the services this API depends on, to enable reporting of the health of each
    dependency, and hence also the overall status of the service.

    Instances are passed explicitly to the StatusService, which probes them concurrently for each health check.
    """
    def __init__(self, name: str, critical: bool = True):
        # Used to label the check in the status report
        self.name = name
        # Failure of a critical dependency makes the whole service unavailable rather than degraded
        self.critical = critical

    async def probe(self) -> SubsystemCheck:
        """
        Checks the dependency is reachable and usable. Either returns a SubsystemCheck or raises, in which case
        the check is recorded as unhealthy with a summary of the error.
        """
        raise NotImplementedError()

    def __repr__(self):
        return f'{self.__class__.__name__}(name={self.name!r}, critical={self.critical})'
