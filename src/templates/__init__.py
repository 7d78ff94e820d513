"""
Jinja2 template-based report rendering.

Text report layouts are stored as .j2 templates in this directory.
Use render() to produce report text with template variables.
"""

from jinja2 import Environment, FileSystemLoader
from pathlib import Path

_TEMPLATES_DIR = Path(__file__).parent


def _one_line(text: str, max_len: int = 80) -> str:
    """Collapse a snippet to a single display line."""
    text = text.replace("\r\n", "\n").replace("\n", "\\n")
    if len(text) > max_len:
        return text[:max_len] + "..."
    return text


_env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=False,  # Plain terminal text
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)
_env.filters["one_line"] = _one_line


def render(template_name: str, **kwargs) -> str:
    """Render a report template with given parameters.

    Args:
        template_name: Path relative to templates dir (e.g., "report_short.j2")
        **kwargs: Template variables

    Returns:
        Rendered report text
    """
    template = _env.get_template(template_name)
    return template.render(**kwargs)
