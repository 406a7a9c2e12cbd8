import json
import uuid

from websockets.sync.client import connect

from .errors import CommandError

DEFAULT_ENDPOINT = "ws://127.0.0.1:8765"


def send(endpoint, message, timeout=5):
    """Send one text frame and return the first reply, or None on timeout."""
    with connect(endpoint, open_timeout=timeout) as ws:
        ws.send(message)
        try:
            return ws.recv(timeout=timeout)
        except TimeoutError:
            return None


def invoke(endpoint, name, args=None, timeout=5):
    envelope = {"id": uuid.uuid4().hex[:8], "cmd": name, "args": args or {}}
    reply = send(endpoint, json.dumps(envelope), timeout=timeout)
    if reply is None:
        raise CommandError(f"no reply from {endpoint}")

    data = json.loads(reply)
    if not data.get("ok"):
        raise CommandError(data.get("error") or "unknown error")
    return data.get("result")
