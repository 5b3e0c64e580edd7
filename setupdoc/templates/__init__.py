"""Markup templating for setupdoc documents."""

from setupdoc.templates.engine import TemplateEngine

__all__ = ["TemplateEngine"]
