class HeapDumpError(Exception):
    """Base class for every failure the heap dump command reports."""


class ConfigError(HeapDumpError):
    pass


class NoProcessesError(HeapDumpError):
    def __init__(self, app: str):
        super().__init__(f"The application {app} does not have any dynos!")
        self.app = app


class InvalidDynoError(HeapDumpError):
    def __init__(self, dyno: str):
        super().__init__(f"Invalid dyno name: {dyno}")
        self.dyno = dyno


class SelectionAbortedError(HeapDumpError):
    def __init__(self):
        super().__init__("No dyno selected")


class RemoteExecutionError(HeapDumpError):
    """The remote command reported a failure on stderr or printed diagnostics instead of a dump."""

    def __init__(self, output: str):
        super().__init__(output)
        self.output = output


class NoJavaProcessError(HeapDumpError):
    def __init__(self):
        super().__init__(
            "Unspecified error running command. "
            "Please make sure that a Java process is running on the selected dyno."
        )


class CorruptPayloadError(HeapDumpError):
    pass


class FileWriteError(HeapDumpError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Unable to write heap dump to {path}: {reason}")
        self.path = path


class ApiResponseError(HeapDumpError):
    """The platform API answered with a body that is not the expected JSON shape."""
