class AlsaBuildError(Exception):
    """Base class for every fatal alsabuild condition."""


class MissingEnvironmentError(AlsaBuildError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Environment variable not found: {name}")


class ConfigError(AlsaBuildError):
    pass


class ProbeError(AlsaBuildError):
    """pkg-config failed for a reason other than the library being absent or too old."""


class StageFailedError(AlsaBuildError):
    def __init__(self, command, cwd, returncode):
        self.command = list(command)
        self.cwd = cwd
        self.returncode = returncode
        super().__init__(
            f"Command {' '.join(self.command)!r} in {cwd} failed with exit status {returncode}"
        )


class PathEncodingError(AlsaBuildError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Could not convert {path!r} to a string")
