from pathlib import Path


class WebappFetchError(Exception):
    pass


class ConfigurationError(WebappFetchError):
    pass


class CommandError(WebappFetchError):
    def __init__(self, args: tuple[str | Path, ...], returncode: int):
        self.command = tuple(str(x) for x in args)
        self.returncode = returncode
        super().__init__(
            f'{" ".join(self.command)!r} exited with code {returncode}'
        )


class OutputMissingError(WebappFetchError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'Output path {path} does not exist')
