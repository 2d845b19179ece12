"""Static asset writer: icon placeholders, manifest, service worker, app page."""

import html
import json
from pathlib import Path
from typing import Any, Dict, List

from fourd.config.settings import Config
from fourd.scraper.models import Company
from fourd.storage import templates
from fourd.storage.workspace import WorkspaceLayout
from fourd.utils.logger import get_logger

logger = get_logger(__name__)


def _js_literal(value: Any) -> str:
    """JSON literal safe to embed inside a <script> element."""
    return json.dumps(value).replace('</', '<\\/')


def build_manifest(config: Config) -> Dict[str, Any]:
    return {
        'name': config.title,
        'short_name': config.short_name,
        'start_url': '.',
        'display': 'standalone',
        'background_color': config.background_color,
        'theme_color': config.theme_color,
        'icons': [dict(icon) for icon in templates.MANIFEST_ICONS],
    }


def render_service_worker(config: Config) -> str:
    return templates.render(templates.SERVICE_WORKER, {
        'CACHE_NAME': _js_literal(config.cache_name),
        'PRECACHE': _js_literal(templates.PRECACHE_PATHS),
        'DATA_EXTENSION': _js_literal(templates.DATA_EXTENSION),
    })


def render_index(config: Config) -> str:
    return templates.render(templates.INDEX_HTML, {
        'TITLE': html.escape(config.title),
        'THEME_COLOR': html.escape(config.theme_color),
        'COMPANIES': _js_literal(Company.as_client_list()),
        'DEBOUNCE_MS': str(templates.SEARCH_DEBOUNCE_MS),
        'TOP_N': str(templates.TOP_N),
    })


class AssetWriter:
    """Writes every file of the site that does not depend on fetched data."""

    def __init__(self, config: Config, layout: WorkspaceLayout):
        self.config = config
        self.layout = layout

    def write_icons(self) -> List[Path]:
        # Empty placeholders, replaced by hand before publishing
        return [self.layout.write_text(icon, '') for icon in templates.ICON_PATHS]

    def write_manifest(self) -> Path:
        content = json.dumps(build_manifest(self.config), indent=2, ensure_ascii=False)
        return self.layout.write_text('manifest.json', content)

    def write_service_worker(self) -> Path:
        return self.layout.write_text('service-worker.js', render_service_worker(self.config))

    def write_index(self) -> Path:
        return self.layout.write_text('index.html', render_index(self.config))

    def write_all(self) -> List[Path]:
        """Write all static assets, overwriting existing files."""
        written = self.write_icons()
        written.append(self.write_manifest())
        written.append(self.write_service_worker())
        written.append(self.write_index())
        logger.info(f"Wrote {len(written)} static assets")
        return written
