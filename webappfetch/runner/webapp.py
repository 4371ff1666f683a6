import logging

from webappfetch.config import Config
from webappfetch.menu import render_menu_entry
from webappfetch.runner.stage import STAGES, run_stage
from webappfetch.schemas import WebappResult
from webappfetch.schemas.manifest import WebappDescriptor

logger = logging.getLogger(__name__)


class WebappRunner:
    config: Config
    descriptor: WebappDescriptor

    def __init__(self, config: Config, descriptor: WebappDescriptor):
        self.config = config
        self.descriptor = descriptor

    async def run(self) -> WebappResult:
        logger.info(
            f'Generating webapp with config:\n'
            f'{self.descriptor.model_dump_json(indent=2, by_alias=True)}'
        )
        results = {}
        for stage, func in STAGES:
            result = await run_stage(stage, func, self.descriptor, self.config)
            results[stage] = result
            if not result.ok:
                return WebappResult(name=self.descriptor.name, stages=results)
            if result.config is not None:
                self.descriptor = self.descriptor.merge(result.config)
                logger.debug(
                    f'Updated configuration: '
                    f'{self.descriptor.model_dump_json(indent=2, by_alias=True)}'
                )

        entry = render_menu_entry(self.descriptor, self.config.menu_item_template)
        logger.info(f'Build complete for {self.descriptor.name}.')
        return WebappResult(name=self.descriptor.name, stages=results, menu_entry=entry)
