# src/specsmith/emit/renderer.py
from __future__ import annotations

from collections.abc import Mapping

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from ..errors import EmissionError


class TemplateRenderer:
    """Renders the packaged artifact templates.

    Undefined variables raise instead of rendering as empty text, and newlines
    are normalized, so identical inputs always render byte-identical output.
    """

    def __init__(self, *, package: str = "specsmith", template_dir: str = "templates") -> None:
        self._environment = Environment(
            loader=PackageLoader(package, template_dir),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            newline_sequence="\n",
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, variables: Mapping[str, object]) -> str:
        try:
            template = self._environment.get_template(template_name)
            return template.render(**dict(variables))
        except TemplateError as e:
            raise EmissionError(
                f"Failed to render template {template_name}: {e}",
                data={"template": template_name, "error": f"{type(e).__name__}: {e}"},
            ) from e
