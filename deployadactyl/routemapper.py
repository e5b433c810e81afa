"""Maps the custom routes named in a manifest to a newly pushed application."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import yaml

from deployadactyl.interfaces import DeploymentLogger


def _text(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return str(data)


class MapRouteError(Exception):
    def __init__(self, route: str, out: Union[bytes, str] = b""):
        self.route = route
        self.out = out
        super().__init__(f"failed to map route: {route}: {_text(out)}")


class InvalidRouteError(Exception):
    def __init__(self, route: str):
        self.route = route
        super().__init__(
            f"invalid route provided, check that the domain exists in the foundation: {route}")


class ReadFileError(Exception):
    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(f"failed to read manifest file: {err}")


def _custom_routes(text: Union[bytes, str]) -> List[str]:
    """Return the custom routes of the manifest's first application.

    Raises ValueError if the manifest cannot be parsed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"cannot parse manifest: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ValueError(f"manifest: expected a mapping, got {type(data).__name__}")
    applications = data.get("applications")
    if applications is None:
        return []
    if not isinstance(applications, list):
        raise ValueError("applications: expected a list")
    if not applications or applications[0] is None:
        return []
    first = applications[0]
    if not isinstance(first, dict):
        raise ValueError("application: expected a mapping")
    routes = first.get("custom-routes") or []
    if not isinstance(routes, list):
        raise ValueError("custom-routes: expected a list")
    result = []
    for item in routes:
        if item is None:
            result.append("")
        elif isinstance(item, dict):
            value = item.get("route")
            result.append("" if value is None else str(value))
        else:
            raise ValueError("custom-routes: expected a mapping")
    return result


@dataclass
class RouteMapper:
    """Maps additional routes from the manifest at deploy time."""

    courier: Any = None

    def push_finished_event_handler(self, event: Any) -> None:
        """Map every custom route in the event's manifest to the new application.

        Raises ReadFileError, ValueError, MapRouteError or InvalidRouteError.
        """
        log: DeploymentLogger = event.log
        log.debugf("starting route mapper")
        courier = event.courier

        manifest_bytes = self._read_manifest(event.manifest, event.app_path, log)
        if manifest_bytes is None:
            return

        log.debugf("looking for routes in the manifest")
        try:
            routes = _custom_routes(manifest_bytes)
        except ValueError as exc:
            log.errorf("failed to parse manifest: %s", exc)
            raise

        if not routes:
            log.info("finished mapping routes: no routes to map")
            return

        log.infof("found %d routes in the manifest", len(routes))

        try:
            domains = list(courier.domains())
        except Exception:
            domains = []

        log.debugf("mapping routes to %s", event.temp_app_with_uuid)
        self._map_routes(courier, routes, event.temp_app_with_uuid, domains,
                         event.cf_context.application, log)

    def _read_manifest(self, manifest: Optional[str], app_path: Optional[str],
                       log: DeploymentLogger) -> Optional[bytes]:
        if manifest:
            return manifest.encode("utf-8")
        if app_path:
            try:
                return (Path(app_path) / "manifest.yml").read_bytes()
            except OSError as exc:
                log.errorf("failed to read manifest file: %s", exc)
                raise ReadFileError(exc) from exc
        log.info("finished mapping routes: no manifest found")
        return None

    def _map_routes(self, courier: Any, routes: Sequence[str], temp_app: str,
                    domains: Sequence[str], app_name: str, log: DeploymentLogger) -> None:
        for route in routes:
            app_and_domain = route.split(".", 1)
            domain_and_path = app_and_domain[1].split("/", 1) if len(app_and_domain) >= 2 else None

            try:
                if route in domains:
                    courier.map_route(temp_app, route, app_name)
                elif len(app_and_domain) >= 2 and app_and_domain[1] in domains:
                    courier.map_route(temp_app, app_and_domain[1], app_and_domain[0])
                elif domain_and_path is not None and domain_and_path[0] in domains:
                    courier.map_route_with_path(
                        temp_app, domain_and_path[0], app_and_domain[0], domain_and_path[1])
                else:
                    raise InvalidRouteError(route)
            except InvalidRouteError:
                raise
            except Exception as exc:
                out = getattr(exc, "out", b"")
                log.errorf("failed to map route: %s: %s", route, _text(out))
                raise MapRouteError(route, out) from exc

            log.infof("mapped route %s to %s", route, temp_app)

        log.info("route mapping successful: finished mapping routes")