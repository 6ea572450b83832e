import pytest

from harvestcli.ui.prompts import Canceled, confirm_prompt, number_prompt, text_prompt


def scripted(*answers):
    remaining = list(answers)
    asked = []

    def read(prompt):
        asked.append(prompt)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read, asked


def test_canceled_message():
    assert str(Canceled()) == "operation canceled"


@pytest.mark.parametrize(
    "answer, expected",
    [("", True), ("y", True), ("Y", True), ("yes", True), ("n", False), ("N", False)],
)
def test_confirm_answers(answer, expected):
    read, _ = scripted(answer)
    assert confirm_prompt("Delete?", read=read) is expected


def test_confirm_shows_message():
    read, asked = scripted("y")
    assert confirm_prompt("Delete user?", read=read) is True
    assert "Delete user?" in asked[0]


def test_confirm_repeats_on_unknown_answer():
    read, asked = scripted("maybe", "n")
    assert confirm_prompt("Sure?", read=read) is False
    assert len(asked) == 2


def test_confirm_q_cancels():
    read, _ = scripted("q")
    with pytest.raises(Canceled):
        confirm_prompt("Sure?", read=read)


def test_confirm_eof_cancels():
    read, _ = scripted()
    with pytest.raises(Canceled):
        confirm_prompt("Sure?", read=read)


def test_text_prompt_returns_input():
    read, asked = scripted("some notes")
    assert text_prompt("Notes:", "hint", read=read) == "some notes"
    assert "hint" in asked[0]


def test_text_prompt_empty_does_not_return_placeholder():
    read, _ = scripted("")
    assert text_prompt("Date:", "2024-01-15", read=read) == ""


def test_text_prompt_limits_length():
    read, _ = scripted("a" * 300)
    assert len(text_prompt("Notes:", read=read)) == 256


def test_text_prompt_eof_cancels():
    read, _ = scripted()
    with pytest.raises(Canceled):
        text_prompt("Notes:", read=read)


def test_number_prompt_default_on_empty():
    read, _ = scripted("")
    assert number_prompt("Hours:", 1.0, read=read) == 1.0


def test_number_prompt_parses_value():
    read, _ = scripted("2.5")
    assert number_prompt("Hours:", 1.0, read=read) == 2.5


def test_number_prompt_invalid():
    read, _ = scripted("abc")
    with pytest.raises(ValueError, match="invalid number"):
        number_prompt("Hours:", 1.0, read=read)


def test_number_prompt_eof_cancels():
    read, _ = scripted()
    with pytest.raises(Canceled):
        number_prompt("Hours:", 1.0, read=read)