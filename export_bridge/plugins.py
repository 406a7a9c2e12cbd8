import structlog

from .logconfig import configure_logging

log = structlog.get_logger(__name__)


class Plugin:
    """A host capability registered with a ShellApp before it starts."""

    name = "plugin"

    def register(self, app):
        raise NotImplementedError


def _ask_save_path(default_path=None, title=None):
    # tkinter is imported lazily: headless hosts never open a dialog
    import tkinter
    from tkinter import filedialog

    root = tkinter.Tk()
    root.withdraw()
    try:
        root.attributes("-topmost", True)
        chosen = filedialog.asksaveasfilename(
            title=title or "Save image",
            initialfile=default_path or "",
        )
    finally:
        root.destroy()
    return chosen or None


class DialogPlugin(Plugin):
    name = "dialog"

    def register(self, app):
        def dialog_save(default_path=None, title=None):
            return _ask_save_path(default_path=default_path, title=title)

        app.registry.add("dialog_save", dialog_save)


class LogPlugin(Plugin):
    name = "log"

    def __init__(self, level="info"):
        self.level = level

    def register(self, app):
        configure_logging(self.level)
        log.info("logging enabled", level=self.level)
