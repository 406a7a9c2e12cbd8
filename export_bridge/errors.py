class CommandError(Exception):
    """A command failed; str(error) is what the caller receives."""


class ExportError(CommandError):
    pass


class InvalidDataUrl(ExportError):
    def __init__(self):
        super().__init__("invalid image data url")


class DecodeFailure(ExportError):
    def __init__(self, details):
        super().__init__(f"failed to decode image data: {details}")


class WriteFailure(ExportError):
    def __init__(self, details):
        super().__init__(f"failed to save image: {details}")
