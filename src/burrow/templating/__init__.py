"""Template rendering for resolved routes, backed by kida."""

from burrow.templating.renderer import Renderer, create_environment, template_context

__all__ = ["Renderer", "create_environment", "template_context"]
