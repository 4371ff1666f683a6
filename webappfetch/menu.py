import logging
from pathlib import Path
from string import Template

from webappfetch.exceptions import ConfigurationError
from webappfetch.schemas.manifest import WebappDescriptor

logger = logging.getLogger(__name__)


def render_menu_entry(descriptor: WebappDescriptor, item_template: str) -> str:
    return Template(item_template).safe_substitute(
        webappName=descriptor.webapp_name, title=descriptor.title
    )


def write_menu(
    template: Path, marker: str, entries: list[str], separator: str = '\n'
) -> None:
    """Replace the first occurrence of marker in template with the entries.

    The file is rewritten in place, everything besides the marker is kept.
    """
    if not template.is_file():
        raise ConfigurationError(f'Menu template {template} not found')
    try:
        content = template.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ConfigurationError(f'Could not read {template}: {e}')
    if marker not in content:
        raise ConfigurationError(f'Marker {marker!r} not found in {template}')
    template.write_text(
        content.replace(marker, separator.join(entries), 1), encoding='utf-8'
    )
    logger.info(f'Wrote {len(entries)} menu entries to {template}')
