"""Event manager, deployment event handlers and manifest tooling for Cloud Foundry deployments."""

__version__ = "0.1.0"

__all__ = [
    "envvar",
    "eventmanager",
    "geterrors",
    "healthchecker",
    "interfaces",
    "manifest",
    "randomizer",
    "routemapper",
    "state_errors",
]