from export_bridge import Bridge, CommandRegistry, save_export_image


def main():
    registry = CommandRegistry()
    registry.add("save_export_image", save_export_image)

    # no dialog plugin here: callers send an explicit path
    bridge = Bridge(registry=registry, http_port=0, ws_port=0, on_background=True)
    threads = bridge.start()
    print(f"POST {{path, data_url}} to http://{bridge.host}:{bridge.http_port}/invoke/save_export_image")
    print(f'or send {{"cmd": "save_export_image", "args": {{...}}}} to ws://{bridge.host}:{bridge.ws_port}')
    try:
        for thread in threads:
            thread.join()
    except KeyboardInterrupt:
        pass
    bridge.stop()


if __name__ == "__main__":
    main()
