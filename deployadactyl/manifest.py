"""Reading, editing and writing Cloud Foundry application manifests."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml as pyyaml

from deployadactyl.interfaces import DeploymentLogger

_UINT16_MAX = 0xFFFF


@dataclass
class Application:
    """One application entry of a manifest."""

    name: str = ""
    memory: str = ""
    timeout: Optional[int] = None
    instances: Optional[int] = None
    path: str = ""
    java_opts: str = ""
    command: str = ""
    buildpack: str = ""
    disk_quota: str = ""
    domain: str = ""
    domains: List[str] = field(default_factory=list)
    stack: str = ""
    health_check_type: str = ""
    host: str = ""
    hosts: List[str] = field(default_factory=list)
    no_hostname: str = ""
    routes: List[str] = field(default_factory=list)
    services: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class ManifestContent:
    """The parsed body of a manifest."""

    applications: List[Application] = field(default_factory=list)


class ManifestError(Exception):
    """Raised when a manifest file cannot be opened or written."""

    def __init__(self, err: BaseException) -> None:
        self.err = err
        super().__init__(f"cannot open or write manifest file: {err}")


def _scalar(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{key}: expected a scalar value, got {type(value).__name__}")


def _uint16(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _UINT16_MAX:
        raise ValueError(f"{key}: expected an integer between 0 and {_UINT16_MAX}, got {value!r}")
    return value


def _string_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key}: expected a list, got {type(value).__name__}")
    return [_scalar(item, key) for item in value]


def _routes(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key}: expected a list, got {type(value).__name__}")
    routes = []
    for item in value:
        if item is None:
            routes.append("")
        elif isinstance(item, dict):
            routes.append(_scalar(item.get("route"), f"{key}.route"))
        else:
            raise ValueError(f"{key}: expected a mapping, got {type(item).__name__}")
    return routes


def _env(value: Any, key: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key}: expected a mapping, got {type(value).__name__}")
    return {str(name): _scalar(item, f"{key}.{name}") for name, item in value.items()}


_DECODERS: Dict[str, Callable[[Any, str], Any]] = {
    "str": _scalar,
    "uint16": _uint16,
    "list": _string_list,
    "routes": _routes,
    "env": _env,
}

# Attribute name, manifest key and kind, in the order they are written out.
_FIELDS = (
    ("name", "name", "str"),
    ("memory", "memory", "str"),
    ("timeout", "timeout", "uint16"),
    ("instances", "instances", "uint16"),
    ("path", "path", "str"),
    ("java_opts", "JAVA_OPTS", "str"),
    ("command", "command", "str"),
    ("buildpack", "buildpack", "str"),
    ("disk_quota", "disk_quota", "str"),
    ("domain", "domain", "str"),
    ("domains", "domains", "list"),
    ("stack", "stack", "str"),
    ("health_check_type", "health-check-type", "str"),
    ("host", "host", "str"),
    ("hosts", "hosts", "list"),
    ("no_hostname", "no-hostname", "str"),
    ("routes", "routes", "routes"),
    ("services", "services", "list"),
    ("env", "env", "env"),
)


def _decode_application(data: Any) -> Application:
    if not isinstance(data, dict):
        raise ValueError(f"application: expected a mapping, got {type(data).__name__}")
    values = {
        attr: _DECODERS[kind](data[key], key)
        for attr, key, kind in _FIELDS
        if key in data
    }
    return Application(**values)


def _decode_content(data: Any) -> ManifestContent:
    if data is None:
        return ManifestContent()
    if not isinstance(data, dict):
        raise ValueError(f"manifest: expected a mapping, got {type(data).__name__}")
    applications = data.get("applications")
    if applications is None:
        return ManifestContent()
    if not isinstance(applications, list):
        raise ValueError(
            f"applications: expected a list, got {type(applications).__name__}")
    return ManifestContent([_decode_application(item) for item in applications])


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, dict)) and not value)


def _encode_application(app: Application) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for attr, key, kind in _FIELDS:
        value = getattr(app, attr)
        if attr != "name" and _is_empty(value):
            continue
        if kind == "routes":
            value = [{"route": route} if route else {} for route in value]
        elif kind in ("list", "env"):
            value = list(value) if kind == "list" else dict(value)
        out[key] = value
    return out


def _encode_content(content: ManifestContent) -> Dict[str, Any]:
    return {"applications": [_encode_application(app) for app in content.applications]}


def _default_log() -> DeploymentLogger:
    return DeploymentLogger(logging.getLogger(__name__))


@dataclass
class Manifest:
    """A manifest's text together with its parsed content."""

    name: str = ""
    yaml: str = ""
    log: DeploymentLogger = field(default_factory=_default_log)
    content: ManifestContent = field(default_factory=ManifestContent)
    _parsed: bool = field(default=False, init=False, repr=False)

    def _ensure_parsed(self) -> bool:
        if self._parsed:
            return True
        try:
            self.unmarshal()
        except ValueError:
            return False
        return True

    def get_instances(self) -> Optional[int]:
        """Return the first application's instance count, or None if absent or below 1."""
        if not self._ensure_parsed():
            return None
        apps = self.content.applications
        if not apps or apps[0].instances is None or apps[0].instances < 1:
            return None
        return apps[0].instances

    def add_env_var(self, name: str, value: str) -> None:
        """Set an environment variable on the first application."""
        self.log.debugf("Attempting to add Map of Environment Variable [%s] to Manifest", name)
        if not self._parsed:
            self.unmarshal()
        if self.has_applications():
            self.content.applications[0].env[name] = value

    def add_environment_variables(self, env: Dict[str, str]) -> bool:
        """Add every variable in ``env``; return whether there were any."""
        self.log.debugf("Attempting to add Map of Environment Variables to Manifest")
        if not env:
            return False
        for name, value in env.items():
            self.add_env_var(name, value)
        return True

    def has_applications(self) -> bool:
        if not self._ensure_parsed():
            return False
        return bool(self.content.applications)

    def unmarshal(self) -> None:
        """Parse the manifest text; an empty text yields one blank application.

        Raises ValueError when the text is not a valid manifest.
        """
        if not self.yaml:
            self.log.infof(
                "Found No Manifest Content for App [%s]. Adding blank manifest....", self.name)
            self.content.applications.append(Application(name=self.name))
            self._parsed = True
            return

        self.log.debugf("UnMarshaling Yaml => %s", self.yaml)
        try:
            content = _decode_content(pyyaml.safe_load(self.yaml))
        except (pyyaml.YAMLError, ValueError) as exc:
            self.log.errorf("Error Unmarshalling Manifest! Details: %s", exc)
            raise ValueError(f"cannot parse manifest: {exc}") from exc
        self.content = content
        self._parsed = True
        self.log.debugf("UnMarshalled Manifest Contents = %s", self.content)

    def marshal(self) -> str:
        """Return the content as YAML, or the original text if that fails."""
        self.log.debugf("Marshaling Manifest Contents = %s", self.content)
        try:
            return pyyaml.safe_dump(
                _encode_content(self.content), sort_keys=False, default_flow_style=False)
        except pyyaml.YAMLError as exc:
            self.log.errorf("Error occurred marshalling Manifest Yaml! Details: %s", exc)
            return self.yaml

    def write_manifest(self, destination: str, include_prefix: bool) -> None:
        """Write the content to ``destination``/manifest.yml."""
        text = self.marshal()
        if not text:
            return
        if include_prefix and not text.startswith("---"):
            text = f"---\n{text}"
        target = Path(destination) / "manifest.yml"
        try:
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise ManifestError(exc) from exc


def create_manifest(app_name: str, content: str, logger: DeploymentLogger) -> Manifest:
    """Build and parse a manifest; raises ValueError if the content is invalid."""
    manifest = Manifest(name=app_name, yaml=content, log=logger)
    try:
        manifest.unmarshal()
    except ValueError as exc:
        logger.errorf("Error Occurred during manifest creation/unmarshal! Details: %s", exc)
        raise
    return manifest