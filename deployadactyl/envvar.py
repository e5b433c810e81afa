"""Event handler that writes requested environment variables into the manifest."""

from __future__ import annotations

from typing import Any

from deployadactyl.manifest import ManifestError, create_manifest


class EnvVarHandler:
    """Adds a deployment's environment variables to the application manifest."""

    def artifact_retrieval_success_event_handler(self, event: Any) -> None:
        """Rewrite the manifest under ``event.app_path`` with the event's variables.

        Raises ValueError if the event's manifest cannot be parsed.
        """
        log = event.log
        log.debugf("Environment Variable Handler Processing Event => %s", event)

        if not event.environment_variables:
            log.info("No Deployment Info or Environment Variables to process!")
            return

        try:
            manifest = create_manifest(event.cf_context.application, event.manifest or "", log)
        except ValueError as exc:
            log.errorf("Error Parsing Manifest! Details: %s", exc)
            raise

        try:
            added = manifest.add_environment_variables(event.environment_variables)
        except ValueError:
            added = False

        if not manifest.has_applications():
            return

        app = manifest.content.applications[0]
        if app.path or added:
            # The deploy uses the exploded artifact, so any path in the manifest is dropped.
            app.path = ""
            try:
                manifest.write_manifest(event.app_path, True)
            except ManifestError as exc:
                log.errorf("Error writing Manifest! Details: %s", exc)