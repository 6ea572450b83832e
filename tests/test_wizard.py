from datetime import date

import pytest

from harvestcli.ui.picker import ProjectItem, TaskItem
from harvestcli.ui.prompts import Canceled
from harvestcli.ui.wizard import (
    DateStep,
    HoursStep,
    NotesStep,
    ProjectStep,
    TaskStep,
    TimeEntryData,
    Wizard,
    WizardError,
    new_time_entry_wizard,
    parse_time_entry_data,
)


def scripted(*answers):
    remaining = list(answers)

    def read(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read


PROJECTS = [ProjectItem(1, "Alpha", "Acme"), ProjectItem(2, "Beta")]
TASKS = [TaskItem(10, "Dev", True), TaskItem(11, "Design")]


class RecordingStep:
    def __init__(self, name, result=None, error=None):
        self.name = name
        self.result = result or {}
        self.error = error
        self.seen = None

    def run(self, data):
        self.seen = dict(data)
        if self.error is not None:
            raise self.error
        return self.result


def test_wizard_merges_results_in_order():
    first = RecordingStep("first", {"a": 1})
    second = RecordingStep("second", {"b": 2})
    wizard = Wizard(first, second)
    assert wizard.run() == {"a": 1, "b": 2}
    assert second.seen == {"a": 1}
    assert wizard.done is True
    assert wizard.canceled is False


def test_wizard_cancel_propagates():
    wizard = Wizard(RecordingStep("first", error=Canceled()))
    with pytest.raises(Canceled):
        wizard.run()
    assert wizard.canceled is True
    assert wizard.done is False


def test_wizard_wraps_step_errors():
    wizard = Wizard(RecordingStep("failing", error=ValueError("bad input")))
    with pytest.raises(WizardError, match="step failing: bad input"):
        wizard.run()


def test_project_step():
    result = ProjectStep(PROJECTS, read=scripted("")).run({})
    assert result == {"project_id": 1, "project_name": "Alpha", "client_name": "Acme"}


def test_project_step_cancel():
    with pytest.raises(Canceled):
        ProjectStep(PROJECTS, read=scripted("q")).run({})


def test_task_step_picks_task_for_project():
    asked = []

    def tasks_fn(project_id):
        asked.append(project_id)
        return TASKS

    result = TaskStep(tasks_fn, read=scripted("2")).run({"project_id": 2})
    assert result == {"task_id": 11, "task_name": "Design", "billable": False}
    assert asked == [2]


def test_task_step_requires_project_id():
    with pytest.raises(ValueError, match="project_id not found in data"):
        TaskStep(lambda pid: TASKS).run({})


def test_task_step_no_tasks():
    with pytest.raises(WizardError, match="no tasks found for project"):
        TaskStep(lambda pid: []).run({"project_id": 1})


def test_task_step_fetch_error():
    def tasks_fn(project_id):
        raise OSError("offline")

    with pytest.raises(WizardError, match="fetch tasks: offline"):
        TaskStep(tasks_fn).run({"project_id": 1})


def test_date_step_default_and_input():
    step = DateStep("Date:", date(2024, 1, 15), read=scripted(""))
    assert step.run({}) == {"spent_date": "2024-01-15"}
    step = DateStep("Date:", date(2024, 1, 15), read=scripted("2024-12-31"))
    assert step.run({}) == {"spent_date": "2024-12-31"}


def test_date_step_rejects_other_formats():
    with pytest.raises(ValueError, match="invalid date format"):
        DateStep("Date:", read=scripted("15/01/2024")).run({})


def test_hours_step_limits():
    assert HoursStep("Hours:", 1.0, read=scripted("")).run({}) == {"hours": 1.0}
    with pytest.raises(ValueError, match="hours must be greater than 0"):
        HoursStep("Hours:", 1.0, read=scripted("0")).run({})
    with pytest.raises(ValueError, match="hours cannot exceed 24"):
        HoursStep("Hours:", 1.0, read=scripted("25")).run({})


def test_notes_step():
    assert NotesStep("Notes:", read=scripted("")).run({}) == {"notes": ""}
    with pytest.raises(ValueError, match="notes are required"):
        NotesStep("Notes:", required=True, read=scripted("")).run({})


def test_full_flow_parses_into_time_entry():
    read = scripted("", "", "", "2.5", "hello")
    wizard = Wizard(
        ProjectStep(PROJECTS, read=read),
        TaskStep(lambda pid: TASKS, read=read),
        DateStep("Date:", date(2024, 1, 15), read=read),
        HoursStep("Hours:", 1.0, read=read),
        NotesStep("Notes:", read=read),
    )
    entry = parse_time_entry_data(wizard.run())
    assert entry == TimeEntryData(
        project_id=1,
        task_id=10,
        spent_date="2024-01-15",
        hours=2.5,
        project_name="Alpha",
        task_name="Dev",
        notes="hello",
    )


@pytest.mark.parametrize(
    "missing, message",
    [
        ("project_id", "missing project_id"),
        ("task_id", "missing task_id"),
        ("spent_date", "missing spent_date"),
        ("hours", "missing hours"),
    ],
)
def test_parse_time_entry_data_missing(missing, message):
    data = {"project_id": 1, "task_id": 2, "spent_date": "2024-01-15", "hours": 1.0}
    del data[missing]
    with pytest.raises(ValueError, match=message):
        parse_time_entry_data(data)


def test_new_time_entry_wizard_steps():
    wizard = new_time_entry_wizard(PROJECTS, lambda pid: TASKS)
    assert [step.name for step in wizard.steps] == [
        "project",
        "task",
        "date",
        "hours",
        "notes",
    ]
    assert wizard.steps[2].message == "Date (YYYY-MM-DD):"
    assert wizard.steps[3].default == 1.0
    assert wizard.steps[4].message == "Notes (optional):"