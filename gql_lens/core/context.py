"""Prompt context rendering for merged lookup responses.

Renders a ``MergedLookupResponse`` as a compact, SDL-like text block that can
be dropped into the next LLM prompt. Works for results from either schema
form: type references are printed in compact notation in both cases.

Supports custom templates via the template_dir parameter:
    renderer = ContextRenderer(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

from pathlib import Path
from typing import Any, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .ir import type_string
from .lookup import MergedLookupResponse

DEFAULT_TEMPLATE = "context.md.j2"


def member_names(values: list[Any] | None) -> list[str]:
    """Names from enum values / interfaces / possible types in either form."""
    names = []
    for value in values or []:
        if isinstance(value, str):
            names.append(value)
        elif value.get("name"):
            names.append(value["name"])
    return names


def format_args(args: list[dict[str, Any]] | None) -> str:
    """Render field arguments as ``(id: ID!, first: Int = 10)``."""
    if not args:
        return ""
    parts = []
    for arg in args:
        part = f"{arg['name']}: {type_string(arg.get('type'))}"
        default = arg.get("default", arg.get("defaultValue"))
        if default not in (None, ""):
            part += f" = {default}"
        parts.append(part)
    return f"({', '.join(parts)})"


def one_line(text: str | None) -> str:
    """Collapse a description onto a single line."""
    if not text:
        return ""
    return " ".join(text.split())


class ContextRenderer:
    """Renders lookup results through Jinja2 templates."""

    def __init__(self, template_dir: Optional[str] = None):
        """Initialize the renderer.

        Args:
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_lens", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["type_string"] = type_string
        self.env.filters["member_names"] = member_names
        self.env.filters["format_args"] = format_args
        self.env.filters["one_line"] = one_line

    def render(self, merged: MergedLookupResponse, template_name: str = DEFAULT_TEMPLATE) -> str:
        template = self.env.get_template(template_name)
        return template.render(
            types=merged.types,
            fields=merged.fields,
            relationships=merged.relationships,
            search_results=merged.search_results,
            patterns=merged.patterns,
            metadata=merged.metadata,
        ).strip() + "\n"


def render_context(merged: MergedLookupResponse, template_dir: Optional[str] = None) -> str:
    """Render a merged lookup response with the default template."""
    return ContextRenderer(template_dir).render(merged)
