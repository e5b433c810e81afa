"""Shared data types, protocols and logging helpers used across the service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Any, Optional, Protocol, Sequence, Union, runtime_checkable

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "NOTICE": NOTICE,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_LOG_FORMAT = "%(asctime)s %(levelname).4s \u25b6 %(message)s"
_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


@dataclass
class Event:
    """A named event carrying arbitrary data and an optional error."""

    type: str
    data: Any = None
    error: Optional[BaseException] = None

    def name(self) -> str:
        return self.type


@runtime_checkable
class IEvent(Protocol):
    """Anything that can be emitted through an event manager."""

    def name(self) -> str: ...


@runtime_checkable
class Binding(Protocol):
    """Decides whether it accepts an event and delivers it."""

    def accepts(self, event: Any) -> bool: ...

    def emit(self, event: Any) -> None: ...


@runtime_checkable
class Handler(Protocol):
    """Receives legacy events."""

    def on_event(self, event: Event) -> None: ...


class Client(Protocol):
    """An HTTP client able to perform GET requests."""

    def get(self, url: str) -> Any: ...


class Courier(Protocol):
    """Runs Cloud Foundry commands against one foundation."""

    def login(self, foundation_url: str, username: str, password: str,
              org: str, space: str, skip_ssl: bool) -> bytes: ...

    def delete(self, app_name: str) -> bytes: ...

    def push(self, app_name: str, app_location: str, hostname: str,
             instances: int) -> bytes: ...

    def rename(self, old_name: str, new_name: str) -> bytes: ...

    def map_route(self, app_name: str, domain: str, hostname: str) -> bytes: ...

    def map_route_with_path(self, app_name: str, domain: str, hostname: str,
                            path: str) -> bytes: ...

    def unmap_route(self, app_name: str, domain: str, hostname: str) -> bytes: ...

    def unmap_route_with_path(self, app_name: str, domain: str, hostname: str,
                              path: str) -> bytes: ...

    def delete_route(self, domain: str, hostname: str) -> bytes: ...

    def create_service(self, service: str, plan: str, name: str) -> bytes: ...

    def bind_service(self, app_name: str, service_name: str) -> bytes: ...

    def unbind_service(self, app_name: str, service_name: str) -> bytes: ...

    def delete_service(self, service_name: str) -> bytes: ...

    def start(self, app_name: str) -> bytes: ...

    def stop(self, app_name: str) -> bytes: ...

    def restage(self, app_name: str) -> bytes: ...

    def logs(self, app_name: str) -> bytes: ...

    def exists(self, app_name: str) -> bool: ...

    def cups(self, app_name: str, body: str) -> bytes: ...

    def uups(self, app_name: str, body: str) -> bytes: ...

    def domains(self) -> Sequence[str]: ...

    def clean_up(self) -> None: ...


@dataclass
class DeploymentType:
    """Which kind of request body a deployment carries."""

    json: bool = False
    zip: bool = False


@dataclass
class Authorization:
    """Credentials used to log in to a foundation."""

    username: str = ""
    password: str = ""


@dataclass
class CFContext:
    """Where an application lives in Cloud Foundry."""

    environment: str = ""
    organization: str = ""
    space: str = ""
    application: str = ""
    skip_ssl: bool = False


@dataclass
class Deployment:
    """A deployment request."""

    body: Optional[bytes] = None
    type: DeploymentType = field(default_factory=DeploymentType)
    authorization: Authorization = field(default_factory=Authorization)
    cf_context: CFContext = field(default_factory=CFContext)


@dataclass
class StartStopEventData:
    """Data handed to handlers of start and stop events."""

    foundation_url: str = ""
    context: CFContext = field(default_factory=CFContext)
    courier: Any = None
    response: Optional[IO[Any]] = None


def parse_log_level(level: str) -> int:
    """Return the logging level for a level name, ignoring case."""
    try:
        return _LEVELS[level.upper()]
    except (KeyError, AttributeError):
        raise ValueError(f"logger: invalid log level: {level}") from None


def default_logger(out: IO[str], level: Union[int, str], module: str) -> logging.Logger:
    """Return a logger named ``module`` writing formatted records to ``out``."""
    if isinstance(level, str):
        level = parse_log_level(level)
    logger = logging.getLogger(module)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(out)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


@dataclass
class DeploymentLogger:
    """A logger that prefixes every message with a deployment's UUID."""

    log: logging.Logger
    uuid: str = ""

    def _join(self, args: tuple) -> str:
        return " ".join(str(part) for part in (self.uuid, *args))

    def _prefix(self, fmt: str) -> str:
        return f"{self.uuid} {fmt}"

    def error(self, *args: Any) -> None:
        self.log.error("%s", self._join(args))

    def errorf(self, fmt: str, *args: Any) -> None:
        self.log.error(self._prefix(fmt), *args)

    def debug(self, *args: Any) -> None:
        self.log.debug("%s", self._join(args))

    def debugf(self, fmt: str, *args: Any) -> None:
        self.log.debug(self._prefix(fmt), *args)

    def info(self, *args: Any) -> None:
        self.log.info("%s", self._join(args))

    def infof(self, fmt: str, *args: Any) -> None:
        self.log.info(self._prefix(fmt), *args)

    def fatal(self, *args: Any) -> None:
        """Log at critical level and exit with status 1."""
        self.log.critical("%s", self._join(args))
        raise SystemExit(1)