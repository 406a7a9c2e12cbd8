from export_bridge import AppConfig, run


def main():
    run(AppConfig(enable_debug_logging=True, on_background=False))


if __name__ == "__main__":
    main()
