import pytest

from harvestcli.version import main, version_string


def test_default_version():
    assert version_string() == "0.1.0"


def test_blank_version_becomes_dev():
    assert version_string("   ", "", "") == "dev"


def test_commit_only():
    assert version_string("1.2.3", " abc1234 ", "") == "1.2.3 (abc1234)"


def test_date_only():
    assert version_string("1.2.3", "", "2024-01-15") == "1.2.3 (2024-01-15)"


def test_commit_and_date():
    result = version_string("1.2.3", "abc1234", "2024-01-15")
    assert result == "1.2.3 (abc1234 2024-01-15)"


def test_whitespace_only_parts_are_ignored():
    assert version_string(" 1.2.3 ", "  ", "\t") == "1.2.3"


def test_main_prints_version(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "harvest 0.1.0\n"


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit):
        main(["--bogus"])