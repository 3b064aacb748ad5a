"""
Template Registry

Jinja2 templates that lay out generated LaTeX documents. The delimiters are
chosen so that LaTeX braces and percent signs never clash with template syntax:

    <<< expression >>>     value
    <%% statement %%>      for / if blocks
    <# comment #>
"""

from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

TEMPLATE_PATH = Path(__file__).parent / "template"


class TemplateRegistry:
    """
    Loads document layouts from {base_path}/structure/{name}.tex.jinja and caches them.

    Block tags sit on lines of their own and leave no blank lines behind; the
    rendered text carries no trailing newline.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Args:
            base_path: Template root (default: the packaged templates)
        """
        self.base_path = Path(base_path or TEMPLATE_PATH)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.base_path)),
            # Missing context variables fail loudly instead of rendering empty
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    def get_template_path(self, name: str) -> Path:
        return self.base_path / "structure" / f"{name}.tex.jinja"

    def get_template(self, name: str) -> Template:
        """
        Return the named layout, loading it on first use.

        Raises:
            TemplateNotFound: If no such layout exists
            TemplateSyntaxError: If the layout is not valid Jinja2
        """
        template = self._cache.get(name)
        if template is not None:
            return template

        try:
            template = self.env.get_template(f"structure/{name}.tex.jinja")
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Layout '{name}' not found at {self.get_template_path(name)}"
            ) from e

        self._cache[name] = template
        return template

    def render(self, name: str, **context) -> str:
        """Render the named layout with the given context variables."""
        return self.get_template(name).render(**context)

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()


_default_registry: Optional[TemplateRegistry] = None


def default_registry() -> TemplateRegistry:
    """Registry over the packaged templates, shared by every document."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry()
    return _default_registry
