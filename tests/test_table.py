import io

from harvestcli.output.table import Table, TableBuilder, simple_table


def test_table_basic():
    buf = io.StringIO()
    table = Table(buf, "Name", "Value")
    table.add_row("foo", "1")
    table.add_row("bar", "2")
    table.render()

    output = buf.getvalue()
    assert "Name" in output and "Value" in output
    assert "----" in output
    assert "foo" in output and "bar" in output
    assert output == "Name  Value\n----  -----\nfoo   1\nbar   2\n"


def test_table_no_headers():
    buf = io.StringIO()
    table = Table(buf)
    table.add_row("foo", "1")
    table.add_row("bar", "2")
    table.render()

    output = buf.getvalue()
    assert output.count("----") == 0
    assert "foo" in output
    assert output == "foo  1\nbar  2\n"


def test_table_row_count():
    table = Table(io.StringIO(), "A", "B")
    assert table.row_count() == 0
    table.add_row("1", "2")
    table.add_row("3", "4")
    assert table.row_count() == 2


def test_table_builder():
    buf = io.StringIO()
    TableBuilder(buf).headers("Col1", "Col2").row("a", "b").row("c", "d").render()

    output = buf.getvalue()
    assert "Col1" in output
    assert "a" in output
    assert output.splitlines()[0] == "Col1  Col2"


def test_table_builder_build_returns_table():
    table = TableBuilder(io.StringIO()).headers("X").row("1").row("2").build()
    assert table.row_count() == 2
    assert table.headers == ["X"]


def test_simple_table():
    buf = io.StringIO()
    simple_table(buf, ["X", "Y"], [["1", "2"], ["3", "4"]])

    output = buf.getvalue()
    assert "X" in output and "Y" in output
    assert output == "X  Y\n-  -\n1  2\n3  4\n"


def test_table_alignment():
    buf = io.StringIO()
    table = Table(buf, "Short", "LongerHeader")
    table.add_row("a", "b")
    table.add_row("longer value", "x")
    table.render()

    lines = buf.getvalue().strip().split("\n")
    assert len(lines) == 4
    assert lines[0] == "Short         LongerHeader"
    assert lines[3] == "longer value  x"
    assert {len(line) - len(line.lstrip()) for line in lines} == {0}
    assert {line[14 - 1] for line in lines} == {" "}


def test_table_uneven_rows_form_separate_column_blocks():
    buf = io.StringIO()
    table = Table(buf)
    table.add_row("a", "b", "c")
    table.add_row("dd", "e")
    table.render()
    assert buf.getvalue() == "a   b  c\ndd  e\n"


def test_empty_table_writes_nothing():
    buf = io.StringIO()
    Table(buf).render()
    assert buf.getvalue() == ""