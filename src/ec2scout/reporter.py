from pathlib import Path
from typing import Any, TextIO

import jinja2

from .core import AMI_DESCRIPTION_WIDTH, AMI_NAME_WIDTH, ELLIPSIS, TOOL_VERSION

TEMPLATE_DIR = Path(__file__).parent / "templates"


def truncate_text(value: Any, width: int) -> str:
    """
    Cuts a value to `width` characters, marking the cut with an ellipsis.
    A value of exactly `width` characters is left untouched.
    """
    text = "" if value is None else str(value)
    if len(text) > width:
        return text[:width] + ELLIPSIS
    return text


def md_cell(value: Any) -> str:
    """Keeps free text from breaking a Markdown table row."""
    text = "" if value is None else str(value)
    return text.replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def get_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=jinja2.select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["truncate_text"] = truncate_text
    env.filters["md_cell"] = md_cell
    env.globals.update(
        ami_name_width=AMI_NAME_WIDTH,
        ami_description_width=AMI_DESCRIPTION_WIDTH,
        tool_version=TOOL_VERSION,
    )
    return env


def render(template_name: str, **context: Any) -> str:
    return get_environment().get_template(template_name).render(**context)


def render_terraform(region: str) -> str:
    """
    Static EC2 scaffold. Only the region is interpolated; the variables are
    left for the reader to fill from the tables in the report.
    """
    return render("terraform.tf.j2", region=region)


class MarkdownReport:
    """
    Append-only Markdown document. The file stays open for the whole run and
    is line buffered, so an interrupted run still leaves every completed
    section on disk.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._fh: TextIO = path.open("a", encoding="utf-8", buffering=1)

    def append(self, text: str) -> None:
        self._fh.write(text)
        if not text.endswith("\n"):
            self._fh.write("\n")

    def append_template(self, template_name: str, **context: Any) -> None:
        self.append(render(template_name, **context))

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> "MarkdownReport":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
