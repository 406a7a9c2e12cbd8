import os
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_PREFIX = "EXPORT_BRIDGE_"


def _env_bool(name, default):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    return int(raw)


@dataclass
class AppConfig:
    enable_debug_logging: bool = False
    host: str = "127.0.0.1"
    http_port: int = 5001
    ws_port: int = 8765
    requests: bool = True
    websocket: bool = True
    on_background: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        load_dotenv()
        values = dict(
            enable_debug_logging=_env_bool("DEBUG", cls.enable_debug_logging),
            host=os.getenv(ENV_PREFIX + "HOST", cls.host),
            http_port=_env_int("HTTP_PORT", cls.http_port),
            ws_port=_env_int("WS_PORT", cls.ws_port),
            requests=_env_bool("HTTP", cls.requests),
            websocket=_env_bool("WS", cls.websocket),
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
