"""Minimal POD scanning for the documentation embedded in tool files.

Only what the checks need is recognised: POD blocks, ``=headN`` commands and
``=item --option`` entries. Everything else is skipped.
"""

import re
from typing import Iterator, List, Optional

_COMMAND = re.compile(r"^=([a-zA-Z]\w*)")
_HEAD = re.compile(r"^=head(\d)\s+(.*?)\s*$")
OPTION_ITEM = re.compile(r"^=item\s+--(?:\[no\])?([\w-]+)", re.MULTILINE)


class PodSection:
    """A documentation section with its own option entries and subsections."""

    def __init__(self, name: str, level: int):
        self.name = name
        self.level = level
        self.options: List[str] = []
        self.subsections: List["PodSection"] = []

    def walk(self) -> Iterator["PodSection"]:
        """Yield this section followed by every nested subsection, depth first."""
        yield self
        for subsection in self.subsections:
            yield from subsection.walk()

    def __repr__(self) -> str:
        return f"PodSection({self.name!r}, level={self.level}, options={self.options!r})"


def pod_lines(text: str) -> Iterator[str]:
    """Yield the lines of text that belong to POD blocks."""
    in_pod = False
    for line in text.splitlines():
        match = _COMMAND.match(line)
        if match:
            if match.group(1) == "cut":
                in_pod = False
                continue
            in_pod = True
        if in_pod:
            yield line


def documented_options(text: str) -> List[str]:
    """Return every documented long option name, without ``[no]``, in order."""
    return OPTION_ITEM.findall(text)


def find_section(text: str, name: str) -> Optional[PodSection]:
    """Build the section tree for the first ``=head1`` with the given name.

    The section runs until the next ``=head1``. Deeper headers inside it become
    subsections, nested by level.

    Args:
        text: Full text of the tool file
        name: Header text to look for

    Returns:
        The section, or None if the header does not exist
    """
    root = None
    stack: List[PodSection] = []

    for line in pod_lines(text):
        head = _HEAD.match(line)
        if head:
            level, title = int(head.group(1)), head.group(2)
            if root is None:
                if level == 1 and title == name:
                    root = PodSection(title, level)
                    stack = [root]
                continue
            if level <= root.level:
                break

            while stack[-1].level >= level:
                stack.pop()
            section = PodSection(title, level)
            stack[-1].subsections.append(section)
            stack.append(section)
            continue

        if root is not None:
            item = OPTION_ITEM.match(line)
            if item:
                stack[-1].options.append(item.group(1))

    return root
