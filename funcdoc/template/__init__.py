"""Documentation generation from bundled Jinja2 templates."""

from .doc_generator import DefinitionDocGenerator, render_definition

__all__ = ["DefinitionDocGenerator", "render_definition"]
