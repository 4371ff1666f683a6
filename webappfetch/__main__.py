import sys

import asyncio
import logging

from webappfetch.config import config
from webappfetch.exceptions import ConfigurationError
from webappfetch.runner import Runner

logger = logging.getLogger('webappfetch')


def main():
    if len(sys.argv) == 1 or sys.argv[1] != 'run':
        raise ValueError('Usage: webappfetch run')

    try:
        res = asyncio.run(Runner(config).run())
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    if not res.host_build.ok:
        sys.exit(1)
    if res.failed:
        logger.warning(f'Failed webapps: {", ".join(res.failed)}')
        if config.strict:
            sys.exit(2)


if __name__ == '__main__':
    main()
