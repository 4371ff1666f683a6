import logging
import shutil
from pydantic import ValidationError
from typing import Awaitable, Callable

from webappfetch.config import Config
from webappfetch.const import DIST_WEBAPPS_DIR
from webappfetch.exceptions import (
    CommandError,
    ConfigurationError,
    OutputMissingError,
    WebappFetchError,
)
from webappfetch.runner.utils import git_add_remote, git_checkout, git_fetch, git_init
from webappfetch.schemas import Stage, StageResult
from webappfetch.schemas.manifest import WebappConfig, WebappDescriptor
from webappfetch.utils import MV, async_run, async_shell, load_document

logger = logging.getLogger(__name__)

StageFunc = Callable[[WebappDescriptor, Config], Awaitable[StageResult]]


async def clean(descriptor: WebappDescriptor, config: Config) -> StageResult:
    if descriptor.workspace.exists():
        logger.debug(f'Removing {descriptor.workspace}')
        shutil.rmtree(descriptor.workspace)
    descriptor.workspace.mkdir(parents=True)
    return StageResult(stage=Stage.clean, ok=True)


async def init(descriptor: WebappDescriptor, config: Config) -> StageResult:
    logger.info(f'Initializing new webapp build for {descriptor.name}...')
    code = await git_init(descriptor.workspace)
    return StageResult(stage=Stage.init, ok=True, exit_code=code)


async def add_remote(descriptor: WebappDescriptor, config: Config) -> StageResult:
    logger.info(
        f'Setting up new webapp build for {descriptor.name} '
        f'from {descriptor.repository_url}...'
    )
    code = await git_add_remote(
        descriptor.name, descriptor.repository_url, descriptor.workspace
    )
    return StageResult(stage=Stage.add_remote, ok=True, exit_code=code)


async def fetch(descriptor: WebappDescriptor, config: Config) -> StageResult:
    logger.info(f'Fetching {descriptor.name}...')
    code = await git_fetch(descriptor.name, descriptor.workspace)
    return StageResult(stage=Stage.fetch, ok=True, exit_code=code)


async def checkout(descriptor: WebappDescriptor, config: Config) -> StageResult:
    logger.info(f'Checking out branch {descriptor.branch}...')
    code = await git_checkout(descriptor.branch, descriptor.workspace)

    file = descriptor.workspace / config.webapp_config_file
    if not file.is_file():
        raise ConfigurationError(
            f'Could not find configuration file for {descriptor.name} webapp'
        )
    try:
        webapp_config = WebappConfig.model_validate(load_document(file))
    except ValidationError as e:
        raise ConfigurationError(str(e))
    return StageResult(
        stage=Stage.checkout, ok=True, exit_code=code, config=webapp_config
    )


async def build(descriptor: WebappDescriptor, config: Config) -> StageResult:
    if not descriptor.build_command:
        logger.info(f'No build command for {descriptor.name}, skipping build')
        return StageResult(stage=Stage.build, ok=True)

    logger.info(
        f'Building {descriptor.name} using '
        f'{descriptor.workspace} ${descriptor.build_command}...'
    )
    code = await async_shell(descriptor.build_command, cwd=descriptor.workspace)

    output = descriptor.output_dir
    try:
        stat = output.stat()
    except FileNotFoundError:
        raise OutputMissingError(output)
    logger.debug(f'Output {output}: {stat}')
    if not output.is_dir():
        raise OutputMissingError(output)
    return StageResult(stage=Stage.build, ok=True, exit_code=code)


async def move(descriptor: WebappDescriptor, config: Config) -> StageResult:
    target = config.dist_dir / DIST_WEBAPPS_DIR / descriptor.webapp_name
    logger.info(f'Moving {descriptor.webapp_output} to {target}...')
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.exists():
        # left over from a previous run
        shutil.rmtree(target)
    code = await async_run(
        MV, descriptor.output_dir, target, cwd=descriptor.workspace
    )
    return StageResult(stage=Stage.move, ok=True, exit_code=code)


STAGES: list[tuple[Stage, StageFunc]] = [
    (Stage.clean, clean),
    (Stage.init, init),
    (Stage.add_remote, add_remote),
    (Stage.fetch, fetch),
    (Stage.checkout, checkout),
    (Stage.build, build),
    (Stage.move, move),
]


async def run_stage(
    stage: Stage, func: StageFunc, descriptor: WebappDescriptor, config: Config
) -> StageResult:
    """Run one stage, turning any failure into a failed StageResult."""
    try:
        return await func(descriptor, config)
    except CommandError as e:
        error, exit_code = str(e), e.returncode
    except (WebappFetchError, OSError) as e:
        error, exit_code = str(e) or e.__class__.__name__, None
    logger.error(f'[{descriptor.name}] {stage.value} failed: {error}')
    return StageResult(stage=stage, ok=False, exit_code=exit_code, error=error)
