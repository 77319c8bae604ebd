from typing import List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Status(str, Enum):
    """
    The supported outcomes for a status report.
    """
    ok = 'ok'
    degraded = 'degraded'
    unavailable = 'unavailable'


class SubsystemCheck(BaseModel):
    """
    The result of probing a single dependency.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    healthy: bool = False
    detail: Optional[str] = None


class StatusReport(BaseModel):
    """
    All the dependency checks combined into a single status report.
    """
    model_config = ConfigDict(frozen=True)

    status: Status = Status.ok
    message: str
    timestamp: str
    checks: List[SubsystemCheck] = Field(default_factory=list)

    def has_failures(self) -> bool:
        """
        Returns True if any check is unhealthy.
        :return: bool
        """
        for check in self.checks:
            if not check.healthy:
                return True
        return False

    @model_validator(mode='after')
    def status_matches_checks(self) -> 'StatusReport':
        """
        A report is ok exactly when none of its checks failed.
        """
        if self.status == Status.ok and self.has_failures():
            raise ValueError('Status ok is not allowed with unhealthy checks')
        if self.status != Status.ok and not self.has_failures():
            raise ValueError(f'Status {self.status.value} requires at least one unhealthy check')
        return self

    def is_available(self) -> bool:
        return self.status != Status.unavailable


def derive_status(checks: List[SubsystemCheck], critical: List[bool]) -> Status:
    """
    Computes the overall status from checks and the matching criticality of each dependency.

    Any unhealthy critical check makes the service unavailable, any other unhealthy check degrades it.

    :param checks: SubsystemCheck results in dependency order
    :param critical: True where the dependency at the same position is critical
    :return: Status
    """
    if len(checks) != len(critical):
        raise ValueError(f'Got {len(checks)} checks but {len(critical)} criticality flags')
    status = Status.ok
    for check, is_critical in zip(checks, critical):
        if check.healthy:
            continue
        if is_critical:
            return Status.unavailable
        status = Status.degraded
    return status
