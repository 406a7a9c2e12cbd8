import sys
from export_bridge import CommandError, invoke

# 1x1 transparent png
PIXEL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "pixel.png"
    try:
        invoke("ws://127.0.0.1:8765", "save_export_image", {"path": path, "data_url": PIXEL})
    except CommandError as err:
        raise SystemExit(str(err))
    print("saved", path)


if __name__ == "__main__":
    main()
