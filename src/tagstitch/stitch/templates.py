"""Built-in host templates shipped as package data."""

from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

from ..core.errors import TemplateError

BUILTIN_TEMPLATES: Dict[str, str] = {
    "latex": "template.tex",
    "html": "template.html",
    "markdown": "template.md",
}


def list_templates() -> List[str]:
    return sorted(BUILTIN_TEMPLATES)


def resolve_template(name_or_path: str, template_dir: Optional[str] = None) -> str:
    """Return the text of a template given a built-in name or a path.

    Lookup order: an existing file path, ``<template_dir>/<name>``, then the
    built-in templates.

    Raises:
        TemplateError: if nothing matches.
    """
    path = Path(name_or_path)
    if path.is_file():
        return path.read_text(encoding="utf-8-sig")

    if template_dir:
        candidates = [Path(template_dir) / name_or_path]
        candidates += [
            Path(template_dir) / filename
            for key, filename in BUILTIN_TEMPLATES.items()
            if key == name_or_path
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate.read_text(encoding="utf-8-sig")

    filename = BUILTIN_TEMPLATES.get(name_or_path)
    if filename is None:
        raise TemplateError(
            f"Unknown template {name_or_path!r}; built-in templates: "
            f"{', '.join(list_templates())}"
        )
    return resources.files("tagstitch.templates").joinpath(filename).read_text(
        encoding="utf-8"
    )
