from enum import Enum
from pydantic import BaseModel

from webappfetch.schemas.manifest import WebappConfig


class Stage(str, Enum):
    host_build = 'host_build'
    clean = 'clean'
    init = 'init'
    add_remote = 'add_remote'
    fetch = 'fetch'
    checkout = 'checkout'
    build = 'build'
    move = 'move'


class StageResult(BaseModel):
    stage: Stage
    ok: bool
    exit_code: int | None = None
    error: str | None = None
    config: WebappConfig | None = None


class WebappResult(BaseModel):
    name: str
    stages: dict[Stage, StageResult]
    menu_entry: str | None = None

    @property
    def ok(self) -> bool:
        return self.menu_entry is not None and all(
            x.ok for x in self.stages.values()
        )


class RunResult(BaseModel):
    host_build: StageResult
    webapps: dict[str, WebappResult] = {}
    menu_entries: list[str] = []
    menu_written: bool = False

    @property
    def failed(self) -> list[str]:
        return [name for name, res in self.webapps.items() if not res.ok]
