# cronkit

A small cron-style scheduler with second resolution. You register named tasks
against cron expressions and call `tick()` regularly, at least once a second.
Tasks whose time has come are run, and their next run is worked out.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Cron expressions

An expression has six fields, separated by white space:

```
seconds  minutes  hours  day-of-month  month  day-of-week
0-59     0-59     0-23   1-31          1-12   0-6 (Sunday = 0)
```

Each field accepts:

- `*`: every value in the field's range
- `?`: "ignore"; it allows every value, like `*`, but either day-of-month or
  day-of-week must be `?` unless one of them is something other than `*`
- a single number, such as `5`
- a range, such as `1-5`; a reversed range such as `22-2` wraps around
  (22, 23, 0, 1, 2)
- a step, such as `*/15` or `0/15`
- a list of the above, separated by commas

Months accept `JAN`–`DEC` and day-of-week accepts `SUN`–`SAT`, in any case.

The shortcuts `@yearly`, `@annually`, `@monthly`, `@weekly`, `@daily` and
`@hourly` are replaced by the five fields from minutes onwards, so they come
after a seconds field: `0 @weekly` means `0 0 0 * * 0`. `@daily` and `@hourly`
expand to `*` in both day fields, which the `?` rule above rejects.

Examples:

| Expression            | Meaning                                      |
|-----------------------|----------------------------------------------|
| `* * * * * ?`         | every second                                 |
| `0 * * * * ?`         | at the start of every minute                 |
| `0 0 12 * * MON-FRI`  | noon on weekdays                             |
| `0 0 12 1/2 * ?`      | noon on every second day of the month        |
| `0 0 */12 ? * *`      | midnight and noon                            |

An expression naming dates that cannot occur, such as `0 0 * 30 FEB *`, is
invalid.

## Scheduling tasks

```python
from cronkit.cron import Cron

cron = Cron()

def backup(task):
    print(f"{task.name} ran {task.delay} late")

cron.add_schedule("backup", "0 0 3 * * ?", backup)
cron.add_schedules({"report": "0 30 8 ? * MON-FRI", "weekly": "0 @weekly"}, backup)

while True:
    cron.tick()
    # sleep until the next task is due, but no longer than a second
```

The work function is called with the `Task` itself; `name` and `delay` (how
long after its planned time the run started) are the useful attributes.

- `add_schedule(name, schedule, work)` raises `ValueError` for an invalid
  expression.
- `add_schedules(schedules, work)` takes a mapping or an iterable of
  `(name, schedule)` pairs and adds nothing if any expression is invalid,
  raising `ValueError` for the first one.
- `remove_schedule(name)` and `clear_schedules()` remove tasks; `count()` says
  how many are scheduled.
- `tick(now=None)` runs the due tasks and returns how many ran.
- `time_until_next()` is the time until the earliest task is due
  (`timedelta.max` when there are none), and `time_until_expiry_for_tasks()`
  gives a list of `(name, timedelta)` pairs.
- `recalculate_schedule()` reschedules every task from one second after now.
- `str(cron)` gives one status line per task.

`Cron(thread_safe=True)` guards the task list with a re-entrant lock.

Times are naive `datetime` values. By default they are local time (`LocalClock`).
To schedule in UTC pass `UTCClock`, or subclass `CronClock` (implementing
`now()` and `utc_offset(now)`) to drive the scheduler from a clock of your own,
which is handy in tests:

```python
from cronkit.clock import UTCClock
from cronkit.cron import Cron

cron = Cron(clock=UTCClock())
```

Several ticks within one second count as one. A clock change of three hours
or more between ticks, either way, is taken as a correction: every task is
rescheduled from the new time. Smaller jumps forward run the tasks that were
due in between, and smaller jumps back run nothing twice.

## Working with expressions directly

```python
from datetime import datetime
from cronkit.data import CronData
from cronkit.schedule import CronSchedule

data = CronData.create("0 0/15 0/2 * * ?")
assert data.valid
next_run = CronSchedule(data).calculate_from(datetime(2018, 1, 1, 13, 14, 59))
# datetime(2018, 1, 1, 14, 0)
```

`CronData.create` does not raise; check `valid`. Its fields (`seconds`,
`minutes`, `hours`, `day_of_month`, `months`, `day_of_week`) are frozensets of
allowed values. `CronSchedule.calculate_from` returns the first allowed time
at or after the given one, with fractions of a second dropped, and raises
`ValueError` when none is found within its search limit (for instance for
`0 0 * 31 FEB *`).

## Randomized schedules

A field written as `R(low-high)` is given a random value from that range, so
that many installations do not all fire at the same moment:

```python
from cronkit.randomization import CronRandomization

schedule = CronRandomization().parse("0 R(45-15) */12 ? * *")
```

Month and weekday names may be used inside `R(...)`. Day-of-month ranges are
narrowed to days that exist in the chosen months. Pass `seed` to
`CronRandomization` for repeatable results. Input that cannot be expanded
raises `RandomizationError` (a `ValueError`); the returned expression is not
otherwise checked, so add it with `Cron.add_schedule` to validate it.

## What it does not do

cronkit is a library only. It has no command-line program, no crontab files,
no persistence of tasks, and no thread of its own: your code must call
`tick()` regularly.