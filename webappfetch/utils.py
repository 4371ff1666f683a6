from asyncio import create_subprocess_exec

import json
import logging
import subprocess
import yaml
from pathlib import Path
from subprocess import DEVNULL
from yaml import YAMLError

from webappfetch.exceptions import CommandError, ConfigurationError

logger = logging.getLogger(__name__)


def get_bin(name: str) -> str:
    try:
        return subprocess.check_output(
            f'which {name}', shell=True, stderr=DEVNULL
        ).decode().strip()
    except subprocess.CalledProcessError:
        # resolved through PATH at exec time
        return name


BASH = get_bin('bash')
GIT = get_bin('git')
MV = get_bin('mv')


async def async_run(*args: str | Path, cwd: Path | str) -> int:
    """Run a command with stdout/stderr forwarded to the console.

    Raises CommandError if the process exits with a nonzero code.
    """
    logger.debug(f'Running {args} in {cwd}')
    p = await create_subprocess_exec(*args, cwd=cwd, stdin=DEVNULL)
    await p.wait()
    if p.returncode:
        logger.debug(f'Process exited with code {p.returncode}')
        raise CommandError(args, p.returncode)
    return p.returncode


async def async_shell(command: str, cwd: Path | str) -> int:
    return await async_run(BASH, '-c', command, cwd=cwd)


def load_document(file: Path) -> dict:
    """Parse a JSON or YAML document, picking the parser by extension."""
    if not file.is_file():
        raise ConfigurationError(f'{file} not found')
    try:
        if file.suffix in ('.yml', '.yaml'):
            data = yaml.safe_load(file.read_text())
        else:
            data = json.loads(file.read_text())
    except (YAMLError, ValueError) as e:
        raise ConfigurationError(f'Could not parse {file}: {e}')
    if not isinstance(data, dict):
        raise ConfigurationError(f'{file} must contain a mapping')
    return data
