from pathlib import Path, PurePosixPath
from pydantic import (
    BaseModel,
    ConfigDict,
    RootModel,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from typing import Annotated

PathSegment = Annotated[str, StringConstraints(pattern=r'^[A-Za-z0-9_][\w.\-]*$')]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WebappDef(_CamelModel):
    repository_url: str
    branch: str
    title: str
    webapp_name: PathSegment


class WebappConfig(_CamelModel):
    build_command: str | None = None
    webapp_output: str

    @field_validator('webapp_output')
    @classmethod
    def v_webapp_output(cls, v: str):
        basedir = PurePosixPath('/meow')
        path = PurePosixPath(v)
        if path.is_absolute() or '..' in path.parts:
            raise ValueError('path must be relative to the repository root')
        if basedir / path == basedir:
            raise ValueError('path must point below the repository root')
        return v


class WebappDescriptor(_CamelModel):
    model_config = ConfigDict(frozen=True)

    name: PathSegment
    repository_url: str
    branch: str
    title: str
    webapp_name: PathSegment
    workspace: Path

    build_command: str | None = None
    webapp_output: str | None = None

    @property
    def output_dir(self) -> Path | None:
        if self.webapp_output is None:
            return None
        return self.workspace / self.webapp_output

    def merge(self, webapp_config: WebappConfig) -> 'WebappDescriptor':
        return self.model_copy(
            update={
                'build_command': webapp_config.build_command,
                'webapp_output': webapp_config.webapp_output,
            }
        )


class Manifest(RootModel[dict[PathSegment, WebappDef]]):
    @model_validator(mode='after')
    def v_unique_webapp_names(self):
        seen = {}
        for key, webapp in self.root.items():
            if (other := seen.setdefault(webapp.webapp_name, key)) != key:
                raise ValueError(
                    f'webappName {webapp.webapp_name!r} is used by both '
                    f'{other!r} and {key!r}'
                )
        return self

    def descriptors(self, workspaces_dir: Path) -> list[WebappDescriptor]:
        return [
            WebappDescriptor(
                name=key,
                workspace=workspaces_dir / key,
                **webapp.model_dump(),
            )
            for key, webapp in self.root.items()
        ]
