import logging
from pydantic import ValidationError

from webappfetch.config import Config
from webappfetch.exceptions import CommandError, ConfigurationError
from webappfetch.menu import write_menu
from webappfetch.runner.webapp import WebappRunner
from webappfetch.schemas import RunResult, Stage, StageResult
from webappfetch.schemas.manifest import Manifest, WebappDescriptor
from webappfetch.utils import async_shell, load_document

logger = logging.getLogger(__name__)


class Runner:
    config: Config
    manifest: Manifest | None

    def __init__(self, config: Config):
        self.config = config
        self.manifest = None

    def load_manifest(self) -> list[WebappDescriptor]:
        file = self.config.manifest_file
        if not file.is_file():
            raise ConfigurationError(f'Manifest {file} not found')
        try:
            self.manifest = Manifest.model_validate(load_document(file))
        except ValidationError as e:
            raise ConfigurationError(str(e))
        return self.manifest.descriptors(self.config.workspaces_dir)

    async def build_host(self) -> StageResult:
        if self.config.skip_host_build:
            logger.info('Skipping host build')
            return StageResult(stage=Stage.host_build, ok=True)
        logger.info(f'Building host project with {self.config.host_build_command!r}')
        try:
            code = await async_shell(
                self.config.host_build_command, cwd=self.config.root_dir
            )
        except (CommandError, OSError) as e:
            logger.error(f'Error in building: {e}')
            return StageResult(
                stage=Stage.host_build,
                ok=False,
                exit_code=getattr(e, 'returncode', None),
                error=str(e),
            )
        return StageResult(stage=Stage.host_build, ok=True, exit_code=code)

    async def run(self) -> RunResult:
        descriptors = self.load_manifest()

        host_build = await self.build_host()
        if not host_build.ok:
            return RunResult(host_build=host_build)

        results = {}
        entries = []
        for descriptor in descriptors:
            webapp_runner = WebappRunner(self.config, descriptor)
            result = await webapp_runner.run()
            results[descriptor.name] = result
            if result.menu_entry is not None:
                entries.append(result.menu_entry)

        try:
            write_menu(
                self.config.menu_template,
                self.config.menu_marker,
                entries,
                self.config.menu_separator,
            )
            menu_written = True
        except (ConfigurationError, OSError) as e:
            logger.error(f'Could not update menu: {e}')
            menu_written = False

        return RunResult(
            host_build=host_build,
            webapps=results,
            menu_entries=entries,
            menu_written=menu_written,
        )
