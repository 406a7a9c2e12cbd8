from .errors import CommandError, DecodeFailure, ExportError, InvalidDataUrl, WriteFailure
from .commands import CommandRegistry, command, register_routes
from .export import save_export_image
from .bridge import Bridge
from .client import invoke, send
from .config import AppConfig
from .plugins import DialogPlugin, LogPlugin, Plugin
from .app import ShellApp, create_app, run

__all__ = [
    "AppConfig",
    "Bridge",
    "CommandError",
    "CommandRegistry",
    "DecodeFailure",
    "DialogPlugin",
    "ExportError",
    "InvalidDataUrl",
    "LogPlugin",
    "Plugin",
    "ShellApp",
    "WriteFailure",
    "command",
    "create_app",
    "invoke",
    "register_routes",
    "run",
    "save_export_image",
    "send",
]
