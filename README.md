# choretracker

A small command-line tracker for recurring chores. Each chore carries a
crontab-style schedule, and choretracker works out when it is next due.

## Installation

```
pip install .
```

## Usage

Chores are kept in a JSON file (`chores.json` in your user data directory by
default). The global option `--cli` must come before the subcommand. Without
it, `add` and `update` ask for the title, description, schedule and comment
on the terminal, and `get`, `update` and `delete` list the stored chores and
ask you to pick one by id or by a piece of its label.

Add a chore:

```
choretracker --cli add --title "Water plants" --schedule "0 9 * * mon,thu"
```

The chore's id is the Unix time at which it was created. Without `--author`
the name of the current user is taken. The chore is checked before it is
stored: it needs a title and a valid schedule.

Show a chore by id:

```
choretracker --cli get --id 1700000000
```

Update fields of a chore; options left out or empty keep the current value:

```
choretracker --cli update --id 1700000000 --comment "use the blue can"
```

Delete a chore:

```
choretracker --cli delete --id 1700000000
```

Short forms are available: `-t` title, `-d` description, `-a` author,
`-s` schedule, `-c` comment, `-i` id. Running `choretracker` with no
subcommand only prints a start message.

## Schedules

Schedules are cron expressions with five to seven fields:

```
[second] minute hour day-of-month month day-of-week [year]
```

Supported syntax includes `*`, `?`, lists (`1,15`), ranges (`9-17`), steps
(`*/5`, `10/5`, `10-40/10`), month and weekday names (`jan`, `friday`), `L`
(last day of month), `LW` (last weekday of month), `15W` (nearest weekday),
`5L` (last Friday of month), and `6#3` (third Saturday). Years run from 1970
to 2099. The aliases `@yearly`, `@annually`, `@monthly`, `@weekly`, `@daily`
and `@hourly` work as well. When both day-of-month and day-of-week are
restricted, a day matching either one is selected.

## Library use

```python
from datetime import datetime
from choretracker.cronexpr import parse

expr = parse("0 0 29 2 *")
print(expr.next(datetime(2013, 8, 31)))        # 2016-02-29 00:00:00
print(expr.next_n(datetime(2013, 8, 31), 3))
```

`parse` raises `choretracker.cronexpr.CronSyntaxError` (a `ValueError`) for
a malformed expression. `Expression.next` returns `None` when no later
matching instant exists.

The chore service, `choretracker.services.TaskService`, works with any
storage that has `create`, `read`, `update`, `delete` and `get_all`; the
package offers `choretracker.jsonstore.JsonStore` and
`choretracker.memory.InMemoryStorage`.

## Configuration

Settings are read from `config.toml` in the user configuration directory:

```toml
storage_path = "/home/me/chores.json"

[Logger]
level = "info"
"console output" = true
"console color" = false
```

If the file is missing, or cannot be read or parsed, the defaults apply:
storage goes to `chores.json` in the user data directory and debug logging
goes to the console. Everything is also logged to `choretracker.log` in the
user log directory.

## What it does not do

choretracker computes the next due time of each chore but sends no
notifications: the `[Notification]` table of the configuration is read and
nothing acts on it. There are no commands to list or search all chores.