"""Table, TSV, JSON and coloured terminal output."""