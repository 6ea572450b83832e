"""A searchable list picker for projects, tasks, clients and users."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Protocol, Sequence, TextIO

from harvestcli.ui.prompts import Canceled, Reader, read_line
from harvestcli.ui.styles import DIM_STYLE, NORMAL_STYLE, SELECTED_STYLE, TITLE_STYLE

_WORD_BREAKS = " -_|"


class PickerItem(Protocol):
    """Anything the picker can show."""

    @property
    def id(self) -> int: ...

    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...


@dataclass(frozen=True)
class ProjectItem:
    """A project, shown with its client and code."""

    project_id: int
    project_name: str
    client_name: str = ""
    code: str = ""

    @property
    def id(self) -> int:
        return self.project_id

    @property
    def title(self) -> str:
        return self.project_name

    @property
    def description(self) -> str:
        return " | ".join(part for part in (self.client_name, self.code) if part)


@dataclass(frozen=True)
class TaskItem:
    """A task, marked when billable."""

    task_id: int
    task_name: str
    billable: bool = False

    @property
    def id(self) -> int:
        return self.task_id

    @property
    def title(self) -> str:
        return self.task_name

    @property
    def description(self) -> str:
        return "billable" if self.billable else ""


@dataclass(frozen=True)
class ClientItem:
    """A client."""

    client_id: int
    client_name: str

    @property
    def id(self) -> int:
        return self.client_id

    @property
    def title(self) -> str:
        return self.client_name

    @property
    def description(self) -> str:
        return ""


@dataclass(frozen=True)
class UserItem:
    """A user, shown with their e-mail address."""

    user_id: int
    first_name: str
    last_name: str
    email: str = ""

    @property
    def id(self) -> int:
        return self.user_id

    @property
    def title(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def description(self) -> str:
        return self.email


def _filter_value(item: PickerItem) -> str:
    return f"{item.title} {item.description}"


def _fuzzy_score(pattern: str, target: str) -> int | None:
    """Score a case-insensitive subsequence match, or None when there is none."""
    pattern = pattern.lower()
    target = target.lower()
    score = 0
    pos = 0
    previous = -2
    for ch in pattern:
        idx = target.find(ch, pos)
        if idx < 0:
            return None
        if idx == previous + 1:
            score += 5
        if idx == 0 or target[idx - 1] in _WORD_BREAKS:
            score += 3
        score -= idx - pos
        previous = idx
        pos = idx + 1
    return score


def _item_line(item: PickerItem, width: int) -> str:
    line = f"{item.title} - {item.description}" if item.description else item.title
    max_width = width - 4
    if max_width > 0 and len(line) > max_width:
        line = line[: max_width - 3] + "..."
    return line


class Picker:
    """Lists items and lets the user pick one by number, filtering by text.

    An empty answer picks the highlighted first item, a number picks that
    item, "q" cancels, and any other text (or "/text") filters the list.
    """

    def __init__(
        self,
        title: str,
        items: Sequence[PickerItem],
        *,
        read: Reader | None = None,
        out: TextIO | None = None,
        width: int = 60,
    ) -> None:
        self.title = title
        self.items = list(items)
        self.width = width
        self.selected: PickerItem | None = None
        self.canceled = False
        self._read = read or read_line
        self._out = out

    def filter(self, query: str) -> list[PickerItem]:
        """Return the items matching query, best matches first."""
        if not query:
            return list(self.items)
        scored = [
            (score, item)
            for item in self.items
            if (score := _fuzzy_score(query, _filter_value(item))) is not None
        ]
        scored.sort(key=lambda pair: -pair[0])
        return [item for _, item in scored]

    def _show(self, visible: list[PickerItem], query: str) -> None:
        out = self._out if self._out is not None else sys.stderr
        out.write(TITLE_STYLE.render(self.title) + "\n")
        if query:
            out.write(DIM_STYLE.render(f"Filter: {query}") + "\n")
        for number, item in enumerate(visible, start=1):
            line = f"{number}. {_item_line(item, self.width)}"
            if number == 1:
                out.write(SELECTED_STYLE.render("> " + line) + "\n")
            else:
                out.write(NORMAL_STYLE.render("  " + line) + "\n")
        if not visible:
            out.write(DIM_STYLE.render("  No items.") + "\n")
        out.flush()

    def run(self) -> PickerItem | None:
        """Show the picker and return the chosen item; raise Canceled on cancel."""
        query = ""
        while True:
            visible = self.filter(query)
            self._show(visible, query)
            try:
                answer = self._read("Choose (number, text to filter, q to cancel): ")
            except (EOFError, KeyboardInterrupt):
                self.canceled = True
                raise Canceled() from None
            answer = answer.strip()
            if answer.lower() in ("q", "esc"):
                self.canceled = True
                raise Canceled()
            if answer == "":
                if visible:
                    self.selected = visible[0]
                    return self.selected
                continue
            if answer.isdigit():
                number = int(answer)
                if 1 <= number <= len(visible):
                    self.selected = visible[number - 1]
                    return self.selected
                continue
            query = answer[1:] if answer.startswith("/") else answer


def pick_project(
    title: str, projects: Sequence[ProjectItem], *, read: Reader | None = None
) -> ProjectItem | None:
    """Let the user pick a project."""
    return Picker(title, projects, read=read).run()


def pick_task(
    title: str, tasks: Sequence[TaskItem], *, read: Reader | None = None
) -> TaskItem | None:
    """Let the user pick a task."""
    return Picker(title, tasks, read=read).run()