from src.services.status_service import StatusService


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Server is running!"
    assert set(body.keys()) == {"message", "timestamp"}


def test_root_timestamp(test_client, use_status_service, fixed_clock):
    use_status_service(StatusService(clock=fixed_clock))

    response = test_client.get("/")

    assert response.json() == {"message": "Server is running!", "timestamp": "2024-05-01T12:00:00.000Z"}


def test_root_does_not_probe_dependencies(test_client, use_status_service, failing_database):
    use_status_service(StatusService(dependencies=[failing_database]))

    response = test_client.get("/")

    assert response.status_code == 200
