import asyncio
import json
import threading
import time

import structlog
from flask import Flask
from websockets.asyncio.server import serve
from websockets.exceptions import ConnectionClosed
from werkzeug.serving import make_server

from .commands import default_registry, register_routes

log = structlog.get_logger(__name__)


def create_http_app(registry=None):
    app = Flask(__name__)

    @app.after_request
    def cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "*"
        return response

    register_routes(app, registry)
    return app


def handle_message(registry, raw):
    """Dispatch one websocket frame and build the reply envelope."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return {"id": None, "ok": False, "error": "invalid message"}

    if not isinstance(data, dict):
        return {"id": None, "ok": False, "error": "invalid message"}
    if not isinstance(data.get("cmd"), str):
        return {"id": data.get("id"), "ok": False, "error": "invalid message"}

    ok, value = registry.dispatch(data["cmd"], data.get("args"))
    reply = {"id": data.get("id"), "ok": ok}
    reply["result" if ok else "error"] = value
    return reply


class Bridge:
    """
    Serves the command registry to the UI layer.

    HTTP (Flask) and WebSocket endpoints run in background threads. Port 0
    asks the OS for a free port; the bound port is written back to
    http_port / ws_port once start() returns.
    """

    def __init__(
        self,
        registry=None,
        host="127.0.0.1",
        http_port=5001,
        ws_port=8765,
        requests=True,
        websocket=True,
        on_background=True,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.host = host
        self.http_port = http_port
        self.ws_port = ws_port
        self.requests = requests
        self.websocket = websocket
        self.on_background = on_background

        self._http_server = None
        self._ws_loop = None
        self._ws_stop = None
        self._threads = []

    def start(self):
        if not self.requests and not self.websocket:
            raise RuntimeError("Bridge needs requests=True or websocket=True")

        try:
            if self.requests:
                self._start_http()
            if self.websocket:
                self._start_ws()
        except Exception:
            self.stop()
            raise

        threads = list(self._threads)
        if not self.on_background:
            try:
                while any(t.is_alive() for t in self._threads):
                    time.sleep(1)
            except KeyboardInterrupt:
                pass
            self.stop()
        return threads

    def stop(self):
        if self._http_server is not None:
            self._http_server.shutdown()
            self._http_server.server_close()
            self._http_server = None

        loop, stop = self._ws_loop, self._ws_stop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(lambda: stop.done() or stop.set_result(None))
        self._ws_loop = self._ws_stop = None

        for thread in self._threads:
            thread.join(timeout=5)
        self._threads = []
        log.info("bridge stopped")

    def _start_http(self):
        app = create_http_app(self.registry)
        self._http_server = make_server(self.host, self.http_port, app, threaded=True)
        self.http_port = self._http_server.server_port

        thread = threading.Thread(
            target=self._http_server.serve_forever,
            name="export-bridge-http",
            daemon=True,
        )
        thread.start()
        self._threads.append(thread)
        log.info("http listening", url=f"http://{self.host}:{self.http_port}")

    def _start_ws(self):
        ready = threading.Event()
        errors = []
        thread = threading.Thread(
            target=self._run_ws,
            args=(ready, errors),
            name="export-bridge-ws",
            daemon=True,
        )
        thread.start()
        ready.wait()
        if errors:
            thread.join(timeout=5)
            raise RuntimeError(f"failed to start websocket server: {errors[0]}") from errors[0]
        self._threads.append(thread)
        log.info("ws listening", url=f"ws://{self.host}:{self.ws_port}")

    def _run_ws(self, ready, errors):
        try:
            asyncio.run(self._serve_ws(ready))
        except Exception as err:  # noqa: BLE001
            if ready.is_set():
                log.exception("websocket server crashed")
            else:
                errors.append(err)
                ready.set()

    async def _serve_ws(self, ready):
        self._ws_loop = asyncio.get_running_loop()
        self._ws_stop = self._ws_loop.create_future()
        async with serve(self._handle_client, self.host, self.ws_port) as server:
            self.ws_port = next(iter(server.sockets)).getsockname()[1]
            ready.set()
            await self._ws_stop

    async def _handle_client(self, websocket):
        log.info("ws client connected", remote=websocket.remote_address)
        try:
            async for message in websocket:
                reply = await asyncio.to_thread(handle_message, self.registry, message)
                await websocket.send(json.dumps(reply, default=str))
        except ConnectionClosed:
            pass
        log.info("ws client disconnected", remote=websocket.remote_address)
