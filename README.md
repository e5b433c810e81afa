# deployadactyl

Building blocks for pushing applications to one or more Cloud Foundry
foundations: an event manager that dispatches deployment events to
handlers, and the handlers that act on those events.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `deployadactyl.interfaces`: the shared data types (`Event`, `CFContext`,
  `Authorization`, `Deployment`, `DeploymentType`, `StartStopEventData`),
  the protocols `IEvent`, `Binding`, `Handler`, `Client` and `Courier`, and
  `DeploymentLogger`, which prefixes every log line with a deployment UUID.
  `default_logger` sets up a standard logger writing to a stream, and
  `parse_log_level` turns a level name such as `"DEBUG"` or `"NOTICE"` into
  a logging level (raising `ValueError` for unknown names).
- `deployadactyl.eventmanager`: `EventManager` keeps a list of bindings and
  hands each emitted event to every binding that accepts it; the first error
  raised by a binding stops delivery and propagates. `add_handler` registers
  an object with an `on_event` method for a named event type (raising
  `InvalidArgumentError` for `None`); `add_binding` registers any object with
  `accepts` and `emit` methods.
- `deployadactyl.manifest`: `Manifest` and `create_manifest` parse, edit and
  write application manifests (`manifest.yml`): reading the instance count
  of the first application, adding environment variables, and writing the
  result with an optional `---` prefix. An empty manifest yields one blank
  application named after the app.
- `deployadactyl.envvar`: `EnvVarHandler` writes the request's environment
  variables into the application's manifest once the artifact has been
  fetched, clearing any `path` entry.
- `deployadactyl.healthchecker`: `HealthChecker` maps a temporary route to a
  freshly pushed application, sends a GET to its health endpoint (by default
  without verifying TLS certificates), then unmaps and deletes the route.
  A non-200 answer raises `HealthCheckError`.
- `deployadactyl.routemapper`: `RouteMapper` maps the `custom-routes` listed
  in a manifest to the new application, raising `InvalidRouteError` for a
  route whose domain the foundation does not have.
- `deployadactyl.geterrors`: `wrap_func` wraps a lookup function and
  collects the keys that came back empty, so missing settings can be
  reported together.
- `deployadactyl.randomizer`: `string_runes` and `Randomizer` produce random
  strings of ASCII letters.
- `deployadactyl.state_errors`: the exceptions raised by deployment steps.

## Example

```python
from deployadactyl.eventmanager import EventManager
from deployadactyl.interfaces import Event, default_logger


class Printer:
    def on_event(self, event):
        print("received", event.type, event.data)


log = default_logger(None, "DEBUG", "example")
manager = EventManager(log)
manager.add_handler(Printer(), "deploy.start")
manager.emit(Event(type="deploy.start", data="my-app"))
```

Reading settings and reporting every missing one at once:

```python
import os

from deployadactyl.geterrors import wrap_func

getter = wrap_func(lambda key: os.environ.get(key, ""))
org = getter.get("CF_ORG")
space = getter.get("CF_SPACE")
getter.check("missing environment variables")
```

`check` raises `MissingKeysError` with a message such as
`missing environment variables: CF_ORG, CF_SPACE` when keys are missing,
and returns quietly otherwise.

## What the package does not do

There is no server, no HTTP endpoint and no command to run. The package
does not itself run the Cloud Foundry command line: the handlers act
through a courier object that the caller supplies, one that provides the
methods described by the `Courier` protocol (`map_route`, `unmap_route`,
`delete_route`, `map_route_with_path`, `domains` and so on). Fetching
artifacts, pushing applications and running a blue-green deployment across
foundations are left to the code that uses these pieces.