import os
from export_bridge import AppConfig, ShellApp, save_export_image


def list_exports(directory):
    return sorted(f for f in os.listdir(directory) if f.endswith(".png"))


def main():
    app = ShellApp(AppConfig(http_port=5055, ws_port=8787)).invoke_handler(save_export_image, list_exports)
    print("HTTP: http://127.0.0.1:5055/invoke/<command> | WS: ws://127.0.0.1:8787")
    app.start()


if __name__ == "__main__":
    main()
