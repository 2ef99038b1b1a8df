# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from ..file_io.template_renderer import TemplateRenderer
from ..models.definition import Definition, Parameter, thaw_literal

logger = logging.getLogger(__name__)

DEFINITION_TEMPLATE = "definition.md.jinja2"


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", "<br>")


class DefinitionDocGenerator:
    """Generates Markdown reference pages for Definitions.

    Nested schema entries are flattened into table rows whose name is
    prefixed with their depth so the template stays a single loop.
    """

    def __init__(self, template_renderer: Optional[TemplateRenderer] = None):
        self.template_renderer = template_renderer or TemplateRenderer()

    def render(self, definition: Definition, key: Optional[str] = None) -> str:
        return self.template_renderer.render_template(
            DEFINITION_TEMPLATE, **self._context(definition, key)
        )

    def _context(self, definition: Definition, key: Optional[str]) -> Dict[str, Any]:
        title = key if key is not None else definition.pathname
        returns = definition.returns
        return dict(
            title=title or "/",
            description=definition.description,
            params=self._collect_rows(definition.params),
            returns=returns,
            return_schema=self._collect_rows(returns.schema or ()),
            pathname=definition.pathname,
            charge=definition.charge,
            keys=list(definition.keys),
            context=definition.context is not None,
        )

    def render_all(self, definitions: Dict[str, Definition]) -> Dict[str, str]:
        pages = {}
        for key in sorted(definitions):
            pages[key] = self.render(definitions[key], key)
        logger.debug(f"Rendered {len(pages)} definition page(s)")
        return pages

    def write_all(self, definitions: Dict[str, Definition], output_dir: str) -> List[str]:
        """Write one ``<key>.md`` page per definition; the index key becomes ``index.md``."""
        written = []
        for key in sorted(definitions):
            output_path = os.path.join(output_dir, f"{key or 'index'}.md")
            definition = definitions[key]
            self.template_renderer.render_template_to_file(
                DEFINITION_TEMPLATE, output_path, **self._context(definition, key)
            )
            written.append(output_path)
        logger.info(f"Wrote {len(written)} definition page(s) to {output_dir}")
        return written

    def _collect_rows(self, entries: Sequence[Parameter], depth: int = 0) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        for entry in entries:
            description = entry.description
            if entry.members:
                labels = ", ".join(f"`{label}`" for label, _ in entry.members)
                description = f"{description} One of: {labels}".strip()
            rows.append({
                "prefix": "&nbsp;&nbsp;" * depth + ("└ " if depth else ""),
                "name": entry.name,
                "type": entry.type,
                "has_default": entry.has_default,
                "default": thaw_literal(entry.default_value) if entry.has_default else None,
                "description": _cell(description),
            })
            if entry.schema:
                rows.extend(self._collect_rows(entry.schema, depth + 1))
        return rows


def render_definition(definition: Definition, key: Optional[str] = None) -> str:
    """Render one Definition as a Markdown page with the bundled template."""
    return DefinitionDocGenerator().render(definition, key)
