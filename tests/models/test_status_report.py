import pytest
from pydantic import ValidationError

from src.models.status_report import StatusReport, Status, SubsystemCheck, derive_status


def test_derive_status_no_checks():
    assert derive_status([], []) == Status.ok


def test_derive_status_all_healthy():
    checks = [SubsystemCheck(name='a', healthy=True), SubsystemCheck(name='b', healthy=True)]

    assert derive_status(checks, [True, False]) == Status.ok


@pytest.mark.parametrize("critical,expected", [
    ([True, True], Status.unavailable),
    ([False, True], Status.unavailable),
    ([True, False], Status.degraded),
    ([False, False], Status.degraded),
])
def test_derive_status_second_check_unhealthy(critical, expected):
    checks = [SubsystemCheck(name='a', healthy=True), SubsystemCheck(name='b', healthy=False)]

    assert derive_status(checks, critical) == expected


def test_derive_status_mismatched_lengths():
    with pytest.raises(ValueError):
        derive_status([SubsystemCheck(name='a', healthy=True)], [])


def test_subsystemcheck_defaults_to_unhealthy():
    check = SubsystemCheck(name='a')

    assert check.healthy is False
    assert check.detail is None


def test_report_has_failures():
    report = StatusReport(
        status=Status.degraded, message='m', timestamp='t',
        checks=[SubsystemCheck(name='a', healthy=True), SubsystemCheck(name='b', healthy=False)]
    )

    assert report.has_failures()
    assert report.is_available()


def test_report_without_checks():
    report = StatusReport(message='m', timestamp='t')

    assert report.status == Status.ok
    assert report.has_failures() is False
    assert report.is_available()


def test_report_unavailable():
    report = StatusReport(
        status=Status.unavailable, message='m', timestamp='t', checks=[SubsystemCheck(name='a', healthy=False)]
    )

    assert report.is_available() is False


def test_report_ok_with_unhealthy_check_rejected():
    with pytest.raises(ValidationError):
        StatusReport(status=Status.ok, message='m', timestamp='t', checks=[SubsystemCheck(name='a', healthy=False)])


@pytest.mark.parametrize("status", [Status.degraded, Status.unavailable])
def test_report_not_ok_without_unhealthy_check_rejected(status):
    with pytest.raises(ValidationError):
        StatusReport(status=status, message='m', timestamp='t', checks=[SubsystemCheck(name='a', healthy=True)])

    with pytest.raises(ValidationError):
        StatusReport(status=status, message='m', timestamp='t')


def test_report_is_immutable():
    report = StatusReport(message='m', timestamp='t')

    with pytest.raises(ValidationError):
        report.status = Status.unavailable


def test_check_is_immutable():
    check = SubsystemCheck(name='a', healthy=True)

    with pytest.raises(ValidationError):
        check.healthy = False


def test_report_serialisation_omits_empty_detail():
    report = StatusReport(
        status=Status.ok, message='API is running!', timestamp='2024-05-01T12:00:00.000Z',
        checks=[SubsystemCheck(name='database', healthy=True)]
    )

    assert report.model_dump(mode='json', exclude_none=True) == {
        'status': 'ok',
        'message': 'API is running!',
        'timestamp': '2024-05-01T12:00:00.000Z',
        'checks': [{'name': 'database', 'healthy': True}],
    }
