"""Template rendering utilities for consistent Jinja2 rendering across the project."""

from __future__ import annotations

import base64
import json
import os

from jinja2 import Environment, FileSystemLoader


def _get_template_directories() -> list[str]:
    """Resolve template search paths bundled in-package."""

    # Base dir is .../funcdoc/file_io
    base_dir = os.path.dirname(os.path.abspath(__file__))
    core_template_dir = os.path.abspath(os.path.join(base_dir, "../template"))

    if os.path.exists(core_template_dir):
        return [core_template_dir]
    return []


def custom_serializer(obj):
    """Custom JSON serializer for domain objects."""

    if isinstance(obj, (bytes, bytearray)):
        return {"_base64": base64.b64encode(bytes(obj)).decode("ascii")}

    if hasattr(obj, "to_dict"):
        return obj.to_dict()

    return str(obj)


def tojson_filter(value):
    """Jinja2 filter to serialize objects to JSON."""

    return json.dumps(value, default=custom_serializer)


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
        )
        self.env.filters["tojson"] = tojson_filter

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

    def render_template_to_file(self, template_name: str, output_path: str, **kwargs) -> None:
        content = self.render_template(template_name, **kwargs)
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
