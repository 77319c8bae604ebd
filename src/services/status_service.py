import asyncio
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

import structlog

from src.models.exceptions.probe_failure import ProbeFailure
from src.models.exceptions.reporter_failure import ReporterFailure
from src.models.status_report import StatusReport, Status, SubsystemCheck, derive_status
from src.utils.checkable import Checkable

logger = structlog.get_logger()

DEFAULT_PROBE_TIMEOUT = 2.0

BASIC_MESSAGE = 'Server is running!'
HEALTH_MESSAGES = {
    Status.ok: 'API is running!',
    Status.degraded: 'API is running with degraded dependencies',
    Status.unavailable: 'API is unavailable',
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(instant: datetime) -> str:
    """
    ISO-8601 UTC with millisecond precision and a Z suffix, e.g. 2024-05-01T12:00:00.000Z
    """
    return instant.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class StatusService:
    """
    Answers whether this process is alive and whether the services it depends on are healthy.

    Holds no state between calls: every report gets a fresh timestamp and, for health reports, a fresh round
    of probing. The dependencies are owned by the application, the service never opens or closes them.
    """

    def __init__(self, dependencies: Iterable[Checkable] = (), timeout: float = DEFAULT_PROBE_TIMEOUT,
                 clock: Callable[[], datetime] = utc_now):
        if timeout <= 0:
            raise ValueError(f'Probe timeout must be positive, got {timeout}')
        self.dependencies = list(dependencies)
        self.timeout = timeout
        self.clock = clock

    def get_basic_status(self) -> StatusReport:
        """
        Liveness only, no dependencies are consulted.
        """
        return StatusReport(
            status=Status.ok,
            message=BASIC_MESSAGE,
            timestamp=format_timestamp(self.clock())
        )

    async def get_health_status(self, dependencies: Optional[Iterable[Checkable]] = None) -> StatusReport:
        """
        Probes all dependencies concurrently and returns a StatusReport with one check per dependency, in the
        order the dependencies were given.

        Probe errors and timeouts are recorded as unhealthy checks and never raised. A ReporterFailure is raised
        only if the report itself cannot be assembled.

        :param dependencies: Checkables to probe, defaults to those given on construction
        :return: StatusReport
        """
        if dependencies is None:
            dependencies = self.dependencies
        dependencies = list(dependencies)

        checks = await asyncio.gather(*[self._run_probe(dependency) for dependency in dependencies])

        try:
            status = derive_status(list(checks), [dependency.critical for dependency in dependencies])
            report = StatusReport(
                status=status,
                message=HEALTH_MESSAGES[status],
                timestamp=format_timestamp(self.clock()),
                checks=list(checks)
            )
        except Exception as error:
            logger.exception(f'Error assembling status report {error.__class__.__name__} {error}')
            raise ReporterFailure('Status report could not be generated') from error

        if report.status != Status.ok:
            logger.warning(f'Status report {report.status.value}: '
                           f'{", ".join(check.name for check in report.checks if not check.healthy)} unhealthy')
        return report

    async def _run_probe(self, dependency: Checkable) -> SubsystemCheck:
        """
        Runs a single probe within the timeout, converting any failure into an unhealthy check.

        A probe may also return an exception rather than raising it, which is recorded the same way.
        """
        try:
            check = await asyncio.wait_for(dependency.probe(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f'Status check {dependency.name} timed out after {self.timeout}s')
            return SubsystemCheck(name=dependency.name, healthy=False, detail='timeout')
        except Exception as error:
            return self._failed_check(dependency, error)

        if isinstance(check, Exception):
            return self._failed_check(dependency, check)
        if not isinstance(check, SubsystemCheck):
            detail = f'invalid probe result {type(check).__name__}'
            logger.error(f'Status check {dependency.name} failed: {detail}')
            return SubsystemCheck(name=dependency.name, healthy=False, detail=detail)

        if check.name != dependency.name:
            check = check.model_copy(update={'name': dependency.name})
        if not check.healthy:
            logger.warning(f'Status check {dependency.name} unhealthy: {check.detail}')
        return check

    @staticmethod
    def _failed_check(dependency: Checkable, error: Exception) -> SubsystemCheck:
        if isinstance(error, ProbeFailure):
            detail = error.detail
        elif str(error):
            detail = f'{error.__class__.__name__}: {error}'
        else:
            detail = error.__class__.__name__
        logger.warning(f'Status check {dependency.name} failed: {detail}')
        return SubsystemCheck(name=dependency.name, healthy=False, detail=detail)
