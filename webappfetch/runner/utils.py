from pathlib import Path

from webappfetch.utils import async_run, GIT


async def git_init(at: str | Path) -> int:
    return await async_run(GIT, 'init', cwd=at)


async def git_add_remote(alias: str, url: str, at: str | Path) -> int:
    return await async_run(GIT, 'remote', 'add', alias, url, cwd=at)


async def git_fetch(alias: str, at: str | Path) -> int:
    return await async_run(GIT, 'fetch', alias, cwd=at)


async def git_checkout(branch: str, at: str | Path) -> int:
    return await async_run(GIT, 'checkout', branch, cwd=at)
