import logging
from types import SimpleNamespace

import pytest

from deployadactyl.healthchecker import (
    ClientError,
    DeleteRouteError,
    HealthChecker,
    HealthCheckError,
    MapRouteError,
)
from deployadactyl.interfaces import CFContext, DeploymentLogger


class CourierFailure(Exception):
    def __init__(self, out):
        super().__init__("courier failure")
        self.out = out


class FakeCourier:
    def __init__(self, fail_map=False, fail_unmap=False, fail_delete=False):
        self.calls = []
        self.fail_map = fail_map
        self.fail_unmap = fail_unmap
        self.fail_delete = fail_delete

    def map_route(self, app_name, domain, hostname):
        self.calls.append(("map_route", app_name, domain, hostname))
        if self.fail_map:
            raise CourierFailure(b"map output")
        return b""

    def unmap_route(self, app_name, domain, hostname):
        self.calls.append(("unmap_route", app_name, domain, hostname))
        if self.fail_unmap:
            raise CourierFailure(b"unmap output")
        return b""

    def delete_route(self, domain, hostname):
        self.calls.append(("delete_route", domain, hostname))
        if self.fail_delete:
            raise CourierFailure(b"delete output")
        return b""


class FakeClient:
    def __init__(self, status_code=200, content=b"", error=None):
        self.urls = []
        self.status_code = status_code
        self.content = content
        self.error = error

    def get(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(status_code=self.status_code, content=self.content)


TEMP_APP = "myapp-new-build-abc"


def make_event(courier, endpoint="/health", environment="prod",
               foundation_url="https://api.cf.example.com"):
    return SimpleNamespace(
        health_check_endpoint=endpoint,
        courier=courier,
        log=DeploymentLogger(logging.getLogger("healthchecker-test"), "uuid"),
        cf_context=CFContext(environment=environment, application="myapp"),
        foundation_url=foundation_url,
        temp_app_with_uuid=TEMP_APP,
    )


def make_checker(client, **kwargs):
    return HealthChecker(old_url="api.cf", new_url="apps", client=client, **kwargs)


def test_no_endpoint_does_nothing():
    courier = FakeCourier()
    client = FakeClient()
    assert make_checker(client).push_finished_event_handler(make_event(courier, endpoint="")) is None
    assert courier.calls == []
    assert client.urls == []


def test_successful_check_maps_checks_and_cleans_up():
    courier = FakeCourier()
    client = FakeClient()
    make_checker(client).push_finished_event_handler(make_event(courier))

    domain = "apps.example.com"
    assert courier.calls == [
        ("map_route", TEMP_APP, domain, TEMP_APP),
        ("unmap_route", TEMP_APP, domain, TEMP_APP),
        ("delete_route", domain, TEMP_APP),
    ]
    assert client.urls == [f"https://{TEMP_APP}.{domain}/health"]


def test_failed_check_raises_and_still_cleans_up():
    courier = FakeCourier()
    client = FakeClient(status_code=404, content=b"not here")
    with pytest.raises(HealthCheckError) as info:
        make_checker(client).push_finished_event_handler(make_event(courier))
    assert info.value.status_code == 404
    assert info.value.endpoint == "/health"
    assert info.value.body == b"not here"
    assert [call[0] for call in courier.calls] == ["map_route", "unmap_route", "delete_route"]


def test_map_route_failure_raises_without_check():
    courier = FakeCourier(fail_map=True)
    client = FakeClient()
    with pytest.raises(MapRouteError) as info:
        make_checker(client).push_finished_event_handler(make_event(courier))
    assert info.value.app_name == TEMP_APP
    assert client.urls == []
    assert [call[0] for call in courier.calls] == ["map_route"]


def test_cleanup_failures_are_not_raised():
    courier = FakeCourier(fail_unmap=True, fail_delete=True)
    client = FakeClient()
    make_checker(client).push_finished_event_handler(make_event(courier))
    assert [call[0] for call in courier.calls] == ["map_route", "unmap_route", "delete_route"]
    assert len(client.urls) == 1


def test_silent_deploy_environment_uses_silent_url():
    courier = FakeCourier()
    client = FakeClient()
    checker = make_checker(client, silent_deploy_url="silent", silent_deploy_environment="quiet")
    checker.push_finished_event_handler(make_event(courier, environment="quiet"))
    mapped_domain = courier.calls[0][2]
    assert mapped_domain == "silent.example.com"


def test_check_trims_leading_slash():
    client = FakeClient()
    log = DeploymentLogger(logging.getLogger("healthchecker-test"))
    make_checker(client).check("https://host", "/status", log)
    make_checker(client).check("https://host", "status", log)
    assert client.urls == ["https://host/status", "https://host/status"]


def test_check_wraps_client_errors():
    client = FakeClient(error=OSError("connection refused"))
    log = DeploymentLogger(logging.getLogger("healthchecker-test"))
    with pytest.raises(ClientError) as info:
        make_checker(client).check("https://host", "/health", log)
    assert str(info.value) == "could not perform GET request: connection refused"


def test_health_check_error_message():
    err = HealthCheckError(500, "/health", b"boom")
    text = str(err)
    assert "health check failed:" in text
    assert "status code: 500" in text
    assert "endpoint: /health" in text
    assert text.endswith("boom")


def test_delete_route_error_message():
    assert str(DeleteRouteError("example.com", "host")) == (
        "could not delete temporary health check route host.example.com")