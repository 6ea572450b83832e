"""A multi-step interactive form for collecting a time entry."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, ClassVar, Protocol, Sequence

from harvestcli.dateparse import format_date
from harvestcli.ui.picker import ProjectItem, TaskItem, pick_project, pick_task
from harvestcli.ui.prompts import Canceled, Reader, number_prompt, text_prompt

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class WizardError(Exception):
    """Raised when a wizard step fails for a reason other than cancelling."""


class WizardStep(Protocol):
    """One step of a wizard."""

    name: str

    def run(self, data: dict[str, Any]) -> dict[str, Any]: ...


class Wizard:
    """Runs steps in order, merging each step's results into shared data."""

    def __init__(self, *steps: WizardStep) -> None:
        self.steps = list(steps)
        self.current = 0
        self.data: dict[str, Any] = {}
        self.done = False
        self.canceled = False

    def run(self) -> dict[str, Any]:
        """Run the remaining steps and return the collected data."""
        for step in self.steps[self.current :]:
            try:
                result = step.run(self.data)
            except Canceled:
                self.canceled = True
                raise
            except Exception as exc:
                raise WizardError(f"step {step.name}: {exc}") from exc
            self.data.update(result)
            self.current += 1
        self.done = True
        return self.data


@dataclass
class ProjectStep:
    """Asks the user to pick a project."""

    name: ClassVar[str] = "project"
    projects: Sequence[ProjectItem]
    read: Reader | None = None

    def run(self, data: dict[str, Any]) -> dict[str, Any]:
        proj = pick_project("Select Project", self.projects, read=self.read)
        if proj is None:
            raise Canceled()
        return {
            "project_id": proj.project_id,
            "project_name": proj.project_name,
            "client_name": proj.client_name,
        }


@dataclass
class TaskStep:
    """Asks the user to pick a task of the chosen project."""

    name: ClassVar[str] = "task"
    tasks_fn: Callable[[int], Sequence[TaskItem]]
    read: Reader | None = None

    def run(self, data: dict[str, Any]) -> dict[str, Any]:
        project_id = data.get("project_id")
        if not isinstance(project_id, int) or isinstance(project_id, bool):
            raise ValueError("project_id not found in data")
        try:
            tasks = list(self.tasks_fn(project_id))
        except Exception as exc:
            raise WizardError(f"fetch tasks: {exc}") from exc
        if not tasks:
            raise WizardError("no tasks found for project")
        task = pick_task("Select Task", tasks, read=self.read)
        if task is None:
            raise Canceled()
        return {
            "task_id": task.task_id,
            "task_name": task.task_name,
            "billable": task.billable,
        }


@dataclass
class DateStep:
    """Asks for a date in YYYY-MM-DD form; today when no default is given."""

    name: ClassVar[str] = "date"
    message: str
    default: date | None = None
    read: Reader | None = None

    def run(self, data: dict[str, Any]) -> dict[str, Any]:
        default_str = format_date(self.default or date.today())
        date_str = text_prompt(self.message, default_str, read=self.read) or default_str
        try:
            if not _ISO_DATE.fullmatch(date_str):
                raise ValueError(f"{date_str!r} is not YYYY-MM-DD")
            parsed = date.fromisoformat(date_str)
        except ValueError as exc:
            raise ValueError(f"invalid date format (use YYYY-MM-DD): {exc}") from exc
        return {"spent_date": format_date(parsed)}


@dataclass
class HoursStep:
    """Asks for a number of hours between 0 and 24."""

    name: ClassVar[str] = "hours"
    message: str
    default: float = 0.0
    read: Reader | None = None

    def run(self, data: dict[str, Any]) -> dict[str, Any]:
        hours = number_prompt(self.message, self.default, read=self.read)
        if hours <= 0:
            raise ValueError("hours must be greater than 0")
        if hours > 24:
            raise ValueError("hours cannot exceed 24")
        return {"hours": hours}


@dataclass
class NotesStep:
    """Asks for notes, optionally required."""

    name: ClassVar[str] = "notes"
    message: str
    required: bool = False
    read: Reader | None = None

    def run(self, data: dict[str, Any]) -> dict[str, Any]:
        notes = text_prompt(self.message, "", read=self.read)
        if self.required and not notes:
            raise ValueError("notes are required")
        return {"notes": notes}


@dataclass
class TimeEntryData:
    """Time entry fields collected by the wizard."""

    project_id: int
    task_id: int
    spent_date: str
    hours: float
    project_name: str = ""
    task_name: str = ""
    notes: str = field(default="")


def new_time_entry_wizard(
    projects: Sequence[ProjectItem], tasks_fn: Callable[[int], Sequence[TaskItem]]
) -> Wizard:
    """Build the wizard that collects a new time entry."""
    return Wizard(
        ProjectStep(projects),
        TaskStep(tasks_fn),
        DateStep("Date (YYYY-MM-DD):", date.today()),
        HoursStep("Hours:", 1.0),
        NotesStep("Notes (optional):"),
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_time_entry_data(data: dict[str, Any]) -> TimeEntryData:
    """Extract the time entry fields from wizard results."""
    project_id = data.get("project_id")
    if not _is_int(project_id):
        raise ValueError("missing project_id")
    task_id = data.get("task_id")
    if not _is_int(task_id):
        raise ValueError("missing task_id")
    spent_date = data.get("spent_date")
    if not isinstance(spent_date, str):
        raise ValueError("missing spent_date")
    hours = data.get("hours")
    if not isinstance(hours, (int, float)) or isinstance(hours, bool):
        raise ValueError("missing hours")

    def text(key: str) -> str:
        value = data.get(key)
        return value if isinstance(value, str) else ""

    return TimeEntryData(
        project_id=project_id,
        task_id=task_id,
        spent_date=spent_date,
        hours=float(hours),
        project_name=text("project_name"),
        task_name=text("task_name"),
        notes=text("notes"),
    )