"""Jinja2 rendering shared by the scaffolder and the doc generator.

Templates live in ``fhevm_examples/templates/`` (``scaffold/`` for project
files, ``docs/`` for markdown).  Autoescaping is off: descriptor text and
embedded source listings must come out exactly as written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from fhevm_examples.utils import to_pascal_case, write_text_async

BUNDLED_TEMPLATES = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Thin wrapper over a Jinja2 ``Environment`` bound to one template folder.

    Undefined variables raise at render time, so a template that drifts from
    its context fails loudly instead of producing a silently blank section.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else BUNDLED_TEMPLATES
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = to_pascal_case

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render the template *name* (e.g. ``"scaffold/README.md.j2"``).

        Raises:
            jinja2.TemplateNotFound: If *name* does not exist.
            jinja2.UndefinedError: If the template uses a missing variable.
        """
        return self.env.get_template(name).render(context)

    async def render_to_file(
        self,
        name: str,
        destination: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *name* and write it to *destination*, creating parents."""
        return await write_text_async(destination, self.render(name, context))
