import structlog

from .bridge import Bridge
from .commands import CommandRegistry
from .config import AppConfig
from .export import save_export_image
from .logconfig import silence_logging
from .plugins import DialogPlugin, LogPlugin

log = structlog.get_logger(__name__)


class ShellApp:
    """
    Host side of the desktop shell: plugins, setup hooks and commands wired
    into a Bridge.

    Nothing is registered until start(); plugins added from a setup hook are
    registered right away.
    """

    def __init__(self, config=None):
        self.config = config or AppConfig()
        self.registry = CommandRegistry()
        self.plugins = []
        self._pending_plugins = []
        self._setup_hooks = []
        self._commands = []
        self._started = False
        self.bridge = None

    def plugin(self, plugin):
        if self._started:
            self._register_plugin(plugin)
        else:
            self._pending_plugins.append(plugin)
        return self

    def setup(self, hook):
        self._setup_hooks.append(hook)
        return self

    def invoke_handler(self, *fns):
        for fn in fns:
            self._commands.append((getattr(fn, "command_name", fn.__name__), fn))
        return self

    def has_plugin(self, name):
        return any(p.name == name for p in self.plugins)

    def build(self):
        """Register plugins, run setup hooks and commands; return the Bridge."""
        if self.bridge is not None:
            return self.bridge
        self._started = True
        try:
            for plugin in self._pending_plugins:
                self._register_plugin(plugin)
            for hook in self._setup_hooks:
                hook(self)
        except Exception as err:
            # a later start() runs plugins and hooks again from scratch
            self._started = False
            self.registry = CommandRegistry()
            self.plugins = []
            raise RuntimeError("error while running application") from err

        if not self.has_plugin(LogPlugin.name):
            silence_logging()

        for name, fn in self._commands:
            self.registry.add(name, fn)

        cfg = self.config
        self.bridge = Bridge(
            registry=self.registry,
            host=cfg.host,
            http_port=cfg.http_port,
            ws_port=cfg.ws_port,
            requests=cfg.requests,
            websocket=cfg.websocket,
            on_background=cfg.on_background,
        )
        return self.bridge

    def start(self):
        bridge = self.build()
        log.info("starting", commands=self.registry.names(), plugins=[p.name for p in self.plugins])
        return bridge.start()

    def stop(self):
        if self.bridge is not None:
            self.bridge.stop()

    def _register_plugin(self, plugin):
        plugin.register(self)
        self.plugins.append(plugin)


def create_app(config=None):
    config = config or AppConfig()

    def enable_debug_logging(app):
        if app.config.enable_debug_logging:
            app.plugin(LogPlugin(level="info"))

    return (
        ShellApp(config)
        .plugin(DialogPlugin())
        .setup(enable_debug_logging)
        .invoke_handler(save_export_image)
    )


def run(config=None):
    app = create_app(config)
    app.start()
    return app
