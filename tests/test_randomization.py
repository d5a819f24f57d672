import pytest

from cronkit.data import CronData
from cronkit.randomization import CronRandomization, RandomizationError

ROUNDS = 500


@pytest.mark.parametrize(
    "schedule",
    [
        "R(0-59) R(0-59) R(0-23) R(1-31) R(1-12) ?",
        "R(45-15) R(30-0) R(18-2) R(28-15) R(8-3) ?",
        "R(0-59) R(0-59) R(0-23) ? R(1-12) R(0-6)",
        "R(45-15) R(30-0) R(18-2) ? R(8-3) R(4-1)",
        "0 0 R(13-20) * * ?",
        "0 0 0 ? * R(0-6)",
        "0 R(45-15) */12 ? * *",
        "0 0 0 ? * R(TUE-FRI)",
        "0 0 0 ? R(JAN-DEC) R(MON-FRI)",
        "0 0 0 ? R(DEC-MAR) R(SAT-SUN)",
        "0 0 0 ? R(JAN-FEB) *",
        "0 0 0 ? R(OCT-OCT) *",
    ],
)
def test_only_valid_schedules_generated(schedule):
    randomizer = CronRandomization(seed=1)
    for _ in range(ROUNDS):
        result = randomizer.parse(schedule)
        assert len(result.split()) == 6
        assert CronData.create(result).valid is True


@pytest.mark.parametrize(
    "schedule",
    [
        "0 0 0 1 R(JAN-DEC) R(MON-SUN)",
        "0 0 0 ? R(JAN) *",
        "0 0 0 ? R(MON-TUE) *",
        "0 0 0 ? * R(JAN-JUN)",
    ],
)
def test_no_valid_schedule_generated(schedule):
    randomizer = CronRandomization(seed=2)
    for _ in range(ROUNDS):
        try:
            result = randomizer.parse(schedule)
        except RandomizationError:
            continue
        # Parsing may succeed while still yielding an unusable schedule.
        assert CronData.create(result).valid is False


def test_hour_within_range_and_other_fields_kept():
    randomizer = CronRandomization(seed=3)
    for _ in range(200):
        parts = randomizer.parse("0 0 R(13-20) * * ?").split()
        assert parts[:2] == ["0", "0"]
        assert 13 <= int(parts[2]) <= 20
        assert parts[3:] == ["*", "*", "?"]


def test_reverse_range_wraps():
    randomizer = CronRandomization(seed=4)
    allowed = set(range(45, 60)) | set(range(0, 16))
    seen = {int(randomizer.parse("R(45-15) 0 0 * * ?").split()[0]) for _ in range(500)}
    assert seen <= allowed
    assert seen & set(range(45, 60))
    assert seen & set(range(0, 16))


def test_day_names_replaced_by_numbers():
    randomizer = CronRandomization(seed=5)
    for _ in range(200):
        assert int(randomizer.parse("0 0 0 ? * R(TUE-FRI)").split()[5]) in {2, 3, 4, 5}


def test_month_names_replaced_in_output():
    randomizer = CronRandomization(seed=6)
    assert randomizer.parse("0 0 0 R(1-31) FEB ?").split()[4] == "2"


def test_february_caps_day_of_month():
    randomizer = CronRandomization(seed=7)
    days = {int(randomizer.parse("0 0 0 R(1-31) FEB ?").split()[3]) for _ in range(500)}
    assert max(days) <= 29
    assert 29 in days


def test_thirty_day_month_caps_day_of_month():
    randomizer = CronRandomization(seed=8)
    days = {int(randomizer.parse("0 0 0 R(20-31) APR ?").split()[3]) for _ in range(500)}
    assert days <= set(range(20, 31))


def test_same_seed_gives_same_result():
    schedule = "R(0-59) R(0-59) R(0-23) R(1-31) R(1-12) ?"
    first = CronRandomization(seed=42)
    second = CronRandomization(seed=42)
    assert [first.parse(schedule) for _ in range(20)] == [second.parse(schedule) for _ in range(20)]


def test_too_few_fields_raises():
    with pytest.raises(RandomizationError):
        CronRandomization(seed=0).parse("* *")


def test_out_of_range_random_hours_raises():
    with pytest.raises(RandomizationError):
        CronRandomization(seed=0).parse("0 0 R(0-25) * * ?")


def test_month_list_is_not_accepted():
    with pytest.raises(RandomizationError):
        CronRandomization(seed=0).parse("0 0 0 ? JAN,MAR *")