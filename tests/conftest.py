import json
import shutil
from pathlib import Path

import pytest

from webappfetch.config import Config

MENU_TEMPLATE = '''<ul class="menu">
  <li><a href="/">Home</a></li>
  <!-- webapps -->
</ul>
'''


class FakeProcess:
    def __init__(self, returncode: int):
        self.returncode = returncode

    async def wait(self):
        return self.returncode


class FakeExec:
    """Stands in for create_subprocess_exec, emulating git, bash and mv.

    Remote repositories are plain dicts: url -> branch -> {relpath: content}.
    Shell commands map to callables taking the working directory and
    returning an exit code.
    """

    def __init__(self):
        self.calls: list[tuple[list[str], Path]] = []
        self.repos: dict[str, dict[str, dict[str, str]]] = {}
        self.commands = {}
        self._remotes: dict[Path, dict[str, str]] = {}

    async def __call__(self, *args, cwd, **kwargs):
        args = [str(x) for x in args]
        cwd = Path(cwd)
        self.calls.append((args, cwd))
        return FakeProcess(self.handle(args, cwd))

    def handle(self, args: list[str], cwd: Path) -> int:
        program = Path(args[0]).name
        if program == 'git':
            return getattr(self, 'git_' + args[1])(cwd, *args[2:])
        if program == 'bash':
            command = self.commands.get(args[2])
            return 0 if command is None else command(cwd)
        if program == 'mv':
            src, dst = Path(cwd) / args[1], Path(args[2])
            if not src.exists():
                return 1
            shutil.move(src, dst)
            return 0
        raise AssertionError(f'unexpected command {args}')

    def git_init(self, cwd: Path) -> int:
        (cwd / '.git').mkdir()
        self._remotes[cwd] = {}
        return 0

    def git_remote(self, cwd: Path, action: str, alias: str, url: str) -> int:
        assert action == 'add'
        if alias in self._remotes[cwd]:
            return 3
        self._remotes[cwd][alias] = url
        return 0

    def git_fetch(self, cwd: Path, alias: str) -> int:
        url = self._remotes[cwd].get(alias)
        return 0 if url in self.repos else 128

    def git_checkout(self, cwd: Path, branch: str) -> int:
        (url,) = self._remotes[cwd].values()
        files = self.repos[url].get(branch)
        if files is None:
            return 1
        for name, content in files.items():
            (cwd / name).parent.mkdir(parents=True, exist_ok=True)
            (cwd / name).write_text(content)
        return 0

    def commands_for(self, program: str) -> list[list[str]]:
        return [args for args, _ in self.calls if Path(args[0]).name == program]


@pytest.fixture
def fake_exec(monkeypatch) -> FakeExec:
    fake = FakeExec()
    monkeypatch.setattr('webappfetch.utils.create_subprocess_exec', fake)
    return fake


@pytest.fixture
def config(tmp_path: Path) -> Config:
    template = tmp_path / 'src' / 'template' / 'partial' / 'menu.hbs'
    template.parent.mkdir(parents=True)
    template.write_text(MENU_TEMPLATE)
    return Config(
        root_dir=tmp_path,
        workspaces_dir=tmp_path / 'workspaces',
        host_build_command='npm run build',
    )


def write_manifest(config: Config, webapps: dict[str, dict]):
    config.manifest_file.write_text(json.dumps(webapps, indent=2))


def webapp_entry(name: str, url: str, branch: str = 'main', title: str = None):
    return {
        'repositoryUrl': url,
        'branch': branch,
        'title': title or name.title(),
        'webappName': name,
    }
