"""Order of the top-level documentation headers."""

import re
from typing import List
import logging

from .base import ToolCheck, ToolContext

logger = logging.getLogger(__name__)

HEAD1_PATTERN = "^=head1"
_HEAD1_MARKER = re.compile(r"^=head1\s?")


class HeaderOrderCheck(ToolCheck):
    """Checks that required ``=head1`` headers appear in the canonical order.

    Headers that are not required are ignored. The found headers are compared
    with the required list position by position, for as many positions as
    required headers were found.
    """

    name = "header order"

    def run(self, ctx: ToolContext) -> None:
        required = ctx.conventions.required_headers(ctx.tool_name)
        wanted = set(required)
        found = [header for header in self._headers(ctx) if header in wanted]

        for i, correct in enumerate(required[:len(found)]):
            if found[i] == correct:
                continue
            rows = [
                (found[j] if j < len(found) else "", required[j])
                for j in range(i, len(required))
            ]
            ctx.reporter.order_table(f"{ctx.tool_name} has headers out of order:", rows)
            return

    def _headers(self, ctx: ToolContext) -> List[str]:
        headers = []
        for line in ctx.search.lines(HEAD1_PATTERN, ctx.path):
            header = _HEAD1_MARKER.sub("", line, count=1)
            stripped = header.rstrip()
            if stripped != header:
                ctx.reporter.violation(f"{ctx.tool_name} header has trailing whitespace: {header!r}")
            headers.append(stripped)
        logger.debug(f"{ctx.tool_name}: headers {headers}")
        return headers
