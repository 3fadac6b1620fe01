"""Violation reports for checktool.

Reports are plain text on stdout, rendered from small jinja2 templates.
"""

import sys
from typing import Iterable, Optional, Sequence, TextIO, Tuple

from jinja2 import DictLoader, Environment

COLUMN_WIDTH = 40

TEMPLATES = {
    "order_table.txt.j2": """\
{{ title }}
{{ "%-*s %s"|format(width, "ACTUAL", "CORRECT") }}
{{ "%-*s %s"|format(width, "=" * (width - 1), "=" * (width - 1)) }}
{% for actual, correct in rows %}
{{ "%-*s %s"|format(width, actual, correct) }}
{% endfor %}
""",
    "name_list.txt.j2": """\
{{ title }}
{% for name in names %}
	{{ name }}
{% endfor %}
""",
    "message.txt.j2": """\
{{ message }}
{% if detail %}
{{ detail }}
{% endif %}
""",
}


class Reporter:
    """Writes violation reports and tracks the pass/fail status of a run."""

    def __init__(self, stream: Optional[TextIO] = None):
        """Initialize the reporter.

        Args:
            stream: Output stream; defaults to the current sys.stdout
        """
        self._stream = stream
        self.failed = False
        self.violations = 0
        self.jinja_env = Environment(
            loader=DictLoader(TEMPLATES),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def fail(self) -> None:
        """Mark the run as failing without printing a violation."""
        self.failed = True

    def violation(self, message: str, detail: Optional[str] = None) -> None:
        """Report a single violation, optionally followed by verbatim detail."""
        self._emit("message.txt.j2", message=message, detail=(detail or "").rstrip("\n"))

    def order_table(self, title: str, rows: Sequence[Tuple[str, str]]) -> None:
        """Report an ordering violation as an ACTUAL/CORRECT table."""
        self._emit("order_table.txt.j2", title=title, rows=rows, width=COLUMN_WIDTH)

    def name_list(self, title: str, names: Iterable[str]) -> None:
        """Report a violation listing offending names, one per line."""
        self._emit("name_list.txt.j2", title=title, names=list(names))

    def _emit(self, template_name: str, **context) -> None:
        template = self.jinja_env.get_template(template_name)
        self.stream.write(template.render(**context))
        self.stream.flush()
        self.violations += 1
        self.failed = True
