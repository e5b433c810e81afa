"""Errors raised while changing the state of applications."""

from __future__ import annotations

from typing import Union

Output = Union[bytes, str]


def _text(out: Output) -> str:
    if isinstance(out, bytes):
        return out.decode("utf-8", errors="replace")
    return out


class CloudFoundryGetLogsError(Exception):
    def __init__(self, cf_task_err: BaseException, cf_log_err: BaseException):
        self.cf_task_err = cf_task_err
        self.cf_log_err = cf_log_err
        super().__init__(f"{cf_task_err}: cannot get Cloud Foundry logs: {cf_log_err}")


class DeleteApplicationError(Exception):
    def __init__(self, application_name: str, out: Output = b""):
        self.application_name = application_name
        self.out = out
        super().__init__(f"cannot delete {application_name}: {_text(out)}")


class LoginError(Exception):
    def __init__(self, foundation_url: str, out: Output = b""):
        self.foundation_url = foundation_url
        self.out = out
        super().__init__(f"cannot login to {foundation_url}: {_text(out)}")


class RenameError(Exception):
    def __init__(self, application_name: str, out: Output = b""):
        self.application_name = application_name
        self.out = out
        super().__init__(f"cannot rename {application_name}: {_text(out)}")


class PushError(Exception):
    def __init__(self) -> None:
        super().__init__("check the Cloud Foundry output above for more information")


class MapRouteError(Exception):
    def __init__(self, out: Output = b""):
        self.out = out
        super().__init__(f"map route failed: {_text(out)}")


class UnmapRouteError(Exception):
    def __init__(self, application_name: str, out: Output = b""):
        self.application_name = application_name
        self.out = out
        super().__init__(f"failed to unmap route for {application_name}: {_text(out)}")


class InvalidContentTypeError(Exception):
    def __init__(self) -> None:
        super().__init__("must be application/json or application/zip")


class AppPathError(Exception):
    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(f"unzipped app path failed: {err}")


class ManifestError(Exception):
    def __init__(self) -> None:
        super().__init__("manifest decoding error")


class UnzippingError(Exception):
    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(f"unzipping request body error: {err}")


class CourierCreationError(Exception):
    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(f"failed to create Courier: {err}")


class StartError(Exception):
    def __init__(self, application_name: str, out: Output = b""):
        self.application_name = application_name
        self.out = out
        super().__init__(f"cannot start {application_name}: {_text(out)}")


class StopError(Exception):
    def __init__(self, application_name: str, out: Output = b""):
        self.application_name = application_name
        self.out = out
        super().__init__(f"cannot stop {application_name}: {_text(out)}")


class ExistsError(Exception):
    def __init__(self, application_name: str):
        self.application_name = application_name
        super().__init__(f"app {application_name} doesn't exist")