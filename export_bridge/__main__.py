import argparse

from .app import run
from .config import AppConfig


def main(argv=None):
    parser = argparse.ArgumentParser(prog="export_bridge", description="Image export host bridge")
    parser.add_argument("--debug", action="store_true", default=None, help="enable info logging")
    parser.add_argument("--host")
    parser.add_argument("--http-port", type=int)
    parser.add_argument("--ws-port", type=int)
    parser.add_argument("--no-http", dest="requests", action="store_false", default=None)
    parser.add_argument("--no-ws", dest="websocket", action="store_false", default=None)
    args = parser.parse_args(argv)

    config = AppConfig.from_env(
        enable_debug_logging=args.debug,
        host=args.host,
        http_port=args.http_port,
        ws_port=args.ws_port,
        requests=args.requests,
        websocket=args.websocket,
        on_background=False,
    )
    run(config)


if __name__ == "__main__":
    main()
