"""File I/O related utilities.

Small modules that primarily deal with rendering file-backed output.
"""

from .template_renderer import TemplateRenderer

__all__ = [
    "TemplateRenderer",
]
