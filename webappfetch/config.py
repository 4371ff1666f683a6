import os
import tempfile
import yaml
from pathlib import Path
from pydantic import AfterValidator, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Annotated

from webappfetch.const import (
    DEFAULT_HOST_BUILD_COMMAND,
    MANIFEST_FILENAME,
    MENU_ITEM_TEMPLATE,
    MENU_MARKER,
    MENU_TEMPLATE_PATH,
    WEBAPP_CONFIG_FILENAME,
)


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='WEBAPPFETCH_')

    debug: bool = False

    root_dir: Annotated[Path, AfterValidator(lambda path: path.absolute())] = Path(
        '.'
    )
    manifest_file: Path = None
    workspaces_dir: Path = None
    dist_dir: Path = None
    menu_template: Path = None

    webapp_config_file: str = WEBAPP_CONFIG_FILENAME
    host_build_command: str = DEFAULT_HOST_BUILD_COMMAND
    skip_host_build: bool = False

    menu_marker: str = MENU_MARKER
    menu_separator: str = '\n'
    menu_item_template: str = MENU_ITEM_TEMPLATE

    # exit with a nonzero status when any webapp fails
    strict: bool = False

    # noinspection PyNestedDecorators
    @field_validator(
        'manifest_file',
        'workspaces_dir',
        'dist_dir',
        'menu_template',
        mode='before',
    )
    @classmethod
    def default_paths(cls, v: Path | str | None, info: ValidationInfo):
        if 'root_dir' not in info.data:
            # root_dir failed validation, don't report every path as errored
            return ''
        root_dir = info.data['root_dir']
        if v is None:
            match info.field_name:
                case 'manifest_file':
                    return root_dir / MANIFEST_FILENAME
                case 'workspaces_dir':
                    return Path(tempfile.gettempdir()) / 'webappfetch'
                case 'dist_dir':
                    return root_dir / 'dist'
                case 'menu_template':
                    return root_dir / MENU_TEMPLATE_PATH
        return root_dir / v


def load_config(**overrides) -> Config:
    config_home = Path(
        os.getenv('XDG_CONFIG_HOME') or os.path.expanduser('~/.config')
    )
    config_file = config_home / 'webappfetch' / 'config.yml'
    if config_file.is_file():
        config_values = yaml.safe_load(config_file.read_text()) or {}
    else:
        config_values = {}
    return Config(**(config_values | overrides), _env_file='.env')


config = load_config()

__all__ = ['Config', 'config', 'load_config']
