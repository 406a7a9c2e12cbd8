import inspect

import structlog
from flask import jsonify, request

from .errors import CommandError

log = structlog.get_logger(__name__)


class CommandRegistry:
    """Maps command names to plain callables invoked with keyword arguments."""

    def __init__(self, commands=None):
        self._commands = dict(commands or {})

    def add(self, name, fn):
        if not callable(fn):
            raise TypeError(f"command {name!r} is not callable")
        self._commands[name] = fn
        return fn

    def get(self, name):
        return self._commands.get(name)

    def names(self):
        return sorted(self._commands)

    def __contains__(self, name):
        return name in self._commands

    def __len__(self):
        return len(self._commands)

    def copy(self):
        return CommandRegistry(self._commands)

    def dispatch(self, name, args=None):
        """
        Run a command and return (ok, value).

        value is the command result on success and the error string otherwise.
        """
        fn = self._commands.get(name)
        if fn is None:
            return False, f"unknown command: {name}"

        if args is None:
            args = {}
        if not isinstance(args, dict):
            return False, f"invalid arguments for {name}: expected an object"

        try:
            bound = inspect.signature(fn).bind(**args)
        except TypeError as err:
            return False, f"invalid arguments for {name}: {err}"

        try:
            result = fn(*bound.args, **bound.kwargs)
        except CommandError as err:
            log.info("command failed", command=name, error=str(err))
            return False, str(err)
        except Exception as err:  # noqa: BLE001
            log.exception("command crashed", command=name)
            return False, f"internal error: {err}"

        return True, result


_default_registry = CommandRegistry()


def default_registry():
    return _default_registry


def command(name=None, registry=None):
    """Register the decorated function as a host command."""
    target = registry if registry is not None else _default_registry

    def decorator(fn):
        target.add(name or fn.__name__, fn)
        fn.command_name = name or fn.__name__
        return fn

    return decorator


def register_routes(app, registry=None):
    registry = registry if registry is not None else _default_registry

    @app.route("/commands", methods=["GET"])
    def list_commands():
        return jsonify(ok=True, result=registry.names())

    @app.route("/invoke/<name>", methods=["OPTIONS"])
    def invoke_options(name):
        return ("", 204)

    @app.route("/invoke/<name>", methods=["POST"])
    def invoke(name):
        if name not in registry:
            return jsonify(ok=False, error=f"unknown command: {name}"), 404

        body = request.get_data()
        if request.is_json and body.strip():
            args = request.get_json(silent=True)
            if args is None and body.strip() != b"null":
                return jsonify(ok=False, error=f"invalid arguments for {name}: body is not json"), 400
        elif body:
            return jsonify(ok=False, error=f"invalid arguments for {name}: body is not json"), 400
        else:
            args = {}

        ok, value = registry.dispatch(name, args)
        if ok:
            return jsonify(ok=True, result=value)
        return jsonify(ok=False, error=value), 400

    return app
