# harvestcli

Building blocks for a command-line client to the Harvest time-tracking
service: where configuration lives and how it is read and written, OAuth
client credentials, account selection, forgiving date and duration parsing,
table/TSV/JSON output, and simple line-based terminal prompts, pickers, a
spinner and a time-entry wizard.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command

```
harvest-version
```

prints the program name and version, for example `harvest 0.1.0`.

## What this package does not do

It does not talk to the Harvest service. There is no HTTP client, no login
flow, no token storage in a keyring, and no commands for timers, time
entries, projects or users. The pieces here are meant to be used by such a
client; the only command is `harvest-version`.

## Configuration

Configuration lives under `$XDG_CONFIG_HOME/harvest/`, or
`~/.config/harvest/` when `XDG_CONFIG_HOME` is unset (see
`harvestcli.config.paths`):

- `config.json5` – the main settings file; comments, single-quoted strings,
  unquoted keys and trailing commas are accepted when reading, and it is
  written back as indented JSON,
- `clients/<name>.json5` – OAuth client credentials, one file per client,
- `state/` and `keyring/` – working directories created by
  `ensure_state_dir()` and `ensure_keyring_dir()`.

Files are written atomically with mode `0600`; directories are created with
mode `0700`. Problems reading, parsing or writing raise `ConfigError`.

```python
from harvestcli.config.settings import read_config, write_config
from harvestcli.config.accounts import (
    resolve_account,
    resolve_client_for_account,
    set_account_alias,
    set_client_domain,
)

set_account_alias("work", "me@example.com")
set_client_domain("example.com", "company")

account = resolve_account("work")                    # "me@example.com"
client = resolve_client_for_account(account, "")     # "company"

cfg = read_config()
cfg.default_account = "me@example.com"
write_config(cfg)
```

The account is chosen in this order: the value passed in, the
`HARVEST_ACCOUNT` environment variable, then `default_account` from the
config file; an alias is resolved to its e-mail address. When none is set,
`resolve_account` raises `ConfigError`. The OAuth client is chosen from an
explicit override, then a per-account mapping, then a per-domain mapping,
and falls back to `default`.

Client credentials:

```python
from harvestcli.config.credentials import (
    ClientCredentials,
    list_clients,
    read_client_credentials,
    write_client_credentials,
)

write_client_credentials("company", ClientCredentials(client_id="my-id", client_secret="secret"))
creds = read_client_credentials("company")
print(list_clients())   # ["company"]
```

An empty client name means `default`. `normalize_client_name_or_default`
lower-cases a name and rejects characters other than letters, digits, `-`,
`_` and `.`.

## Dates and durations

```python
from harvestcli.dateparse import format_duration, parse, parse_duration, parse_time_of_day

parse("yesterday")           # datetime at midnight
parse("3 days ago")
parse("last friday")
parse("this week")           # Monday of the current week
parse("2024-01-15")
parse_duration("1h30m")      # timedelta of 90 minutes
format_duration(parse_duration("1.5h"))  # "1.5h"
parse_time_of_day("9:00pm")  # (21, 0)
```

Input that cannot be understood raises `ValueError`.

## Output

```python
import sys
from harvestcli.output.format import Formatter, Mode, mode_from_flags, write_json
from harvestcli.output.table import simple_table

simple_table(sys.stdout, ["ID", "Name"], [["1", "Alice"], ["2", "Bob"]])

fmt = Formatter(sys.stdout, Mode.PLAIN)
fmt.output({"id": 1}, ["ID"], [["1"]])

write_json(sys.stdout, {"id": 1})
```

`mode_from_flags(json_flag, plain_flag)` picks JSON over plain over the
aligned table. The `output_mode(mode)` context manager sets the mode that
`get_mode()` returns within a block. `Table` and `TableBuilder` build tables
row by row.

`Colors("auto")` is enabled only when standard output is a terminal,
`NO_COLOR` is unset and `TERM` is not `dumb`; `"always"` and `"never"` force
the choice. Its methods (`success`, `error`, `warning`, `dim`, `bold`,
`cyan`, `magenta`) return the text unchanged when colour is off.

## Prompts

`confirm_prompt`, `text_prompt` and `number_prompt` in
`harvestcli.ui.prompts` ask one line at a time on the terminal; each accepts
a `read` callable in place of standard input. An empty answer to
`confirm_prompt` means yes and an empty answer to `number_prompt` gives the
default. End of input or Ctrl-C raises `Canceled`, as does answering `q` to
a confirmation.

`pick_project` and `pick_task` in `harvestcli.ui.picker` list the items:
an empty answer takes the first one, a number takes that item, `q` raises
`Canceled`, and any other text filters the list by fuzzy match.

`Spinner` (also usable as a context manager) and `with_spinner(message, fn)`
show a loading indicator on standard error.

A `Wizard` built with `new_time_entry_wizard(projects, tasks_fn)` walks
through project, task, date, hours and notes, and `parse_time_entry_data`
turns its result into a `TimeEntryData`. A failing step raises
`WizardError`.