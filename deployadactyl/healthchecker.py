"""Health check of a freshly pushed application through a temporary route."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

import requests

from deployadactyl.interfaces import DeploymentLogger

_HTTP_OK = 200


def _text(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return str(data)


def _output(exc: BaseException) -> Union[bytes, str]:
    return getattr(exc, "out", b"")


class HealthCheckError(Exception):
    """Raised when the health check endpoint does not answer with 200."""

    def __init__(self, status_code: int, endpoint: str, body: Union[bytes, str] = b""):
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body
        super().__init__(
            "\nhealth check failed:\n"
            f"  status code: {status_code}\n"
            f"  endpoint: {endpoint}\n"
            "  response body:\n"
            f"    {_text(body)}"
        )


class MapRouteError(Exception):
    def __init__(self, app_name: str, domain: str):
        self.app_name = app_name
        self.domain = domain
        super().__init__(f"could not map temporary health check route {app_name}.{domain}")


class DeleteRouteError(Exception):
    def __init__(self, domain: str, hostname: str):
        self.domain = domain
        self.hostname = hostname
        super().__init__(f"could not delete temporary health check route {hostname}.{domain}")


class ClientError(Exception):
    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(f"could not perform GET request: {err}")


class LoginError(Exception):
    def __init__(self, foundation_url: str):
        self.foundation_url = foundation_url
        super().__init__(f"could not login to {foundation_url}")


class WrongEventTypeError(Exception):
    def __init__(self, type: str):
        self.type = type
        super().__init__(f"wrong event type for healthchecker: {type}")


class _InsecureClient:
    """GET client that does not verify TLS certificates."""

    def get(self, url: str) -> Any:
        return requests.get(url, verify=False)


@dataclass
class HealthChecker:
    """Checks that a newly pushed application answers 200 on its health endpoint.

    ``old_url`` is the part of the foundation URL replaced by ``new_url`` to
    build the application's URL; ``silent_deploy_url`` replaces it instead when
    the deployment's environment is ``silent_deploy_environment``.
    """

    old_url: str = ""
    new_url: str = ""
    silent_deploy_url: str = ""
    silent_deploy_environment: str = ""
    client: Any = field(default_factory=_InsecureClient)
    courier: Any = None

    def push_finished_event_handler(self, event: Any) -> None:
        """Map a temporary route, check the endpoint, then remove the route."""
        if not event.health_check_endpoint:
            return

        courier = event.courier
        log: DeploymentLogger = event.log
        log.debugf("starting health check")

        replacement = (
            self.new_url
            if event.cf_context.environment != self.silent_deploy_environment
            else self.silent_deploy_url
        )
        new_foundation_url = event.foundation_url.replace(self.old_url, replacement, 1)
        match = re.search(f"{replacement}.*", new_foundation_url)
        domain = match.group(0) if match else ""

        temp_app = event.temp_app_with_uuid
        self._map_temporary_route(courier, temp_app, domain, log)
        try:
            new_foundation_url = new_foundation_url.replace(
                self.new_url, f"{temp_app}.{self.new_url}", 1)
            self.check(new_foundation_url, event.health_check_endpoint, log)
        finally:
            self._unmap_temporary_route(courier, temp_app, domain, log)
            self._delete_temporary_route(courier, temp_app, domain, log)

    def check(self, url: str, endpoint: str, log: DeploymentLogger) -> None:
        """GET ``url``/``endpoint``; raise unless the status is 200."""
        trimmed = endpoint[1:] if endpoint.startswith("/") else endpoint
        log.debugf("checking route %s%s", url, endpoint)

        try:
            response = self.client.get(f"{url}/{trimmed}")
        except Exception as exc:
            log.error(ClientError(exc))
            raise ClientError(exc) from exc

        if response.status_code != _HTTP_OK:
            body = getattr(response, "content", b"")
            log.errorf("health check failed for %s/%s", url, trimmed)
            raise HealthCheckError(response.status_code, endpoint, body)

        log.infof("health check successful for %s%s", url, endpoint)

    def _map_temporary_route(self, courier: Any, temp_app: str, domain: str,
                             log: DeploymentLogger) -> None:
        log.debugf("mapping temporary route %s.%s", temp_app, domain)
        try:
            courier.map_route(temp_app, domain, temp_app)
        except Exception as exc:
            log.errorf("failed to map temporary route: %s", _text(_output(exc)))
            raise MapRouteError(temp_app, domain) from exc
        log.infof("mapped temporary route %s.%s", temp_app, domain)

    def _delete_temporary_route(self, courier: Any, temp_app: str, domain: str,
                                log: DeploymentLogger) -> None:
        log.debugf("deleting temporary route %s.%s", temp_app, domain)
        try:
            courier.delete_route(domain, temp_app)
        except Exception as exc:
            log.errorf("failed to delete temporary route: %s", _text(_output(exc)))
            return
        log.infof("deleted temporary route %s.%s", temp_app, domain)

    def _unmap_temporary_route(self, courier: Any, temp_app: str, domain: str,
                               log: DeploymentLogger) -> None:
        log.debugf("unmapping temporary route %s.%s", temp_app, domain)
        try:
            courier.unmap_route(temp_app, domain, temp_app)
        except Exception as exc:
            log.errorf("failed to unmap temporary route: %s", _text(_output(exc)))
        else:
            log.infof("unmapped temporary route %s.%s", temp_app, domain)
        log.infof("finished health check")