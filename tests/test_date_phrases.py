import pytest
from datetime import date

from quickadd.dates import DAY_ABBREVIATIONS, next_occurrence
from quickadd.phrases import resolve, strip_date_phrases


def test_next_week_beats_weekday_patterns(now):
    res = resolve('renew license next week', today=now)
    assert res.date == date(2024, 6, 19)
    assert res.title == 'renew license'
    assert res.phrase == 'next week'


def test_next_weekday_skips_nearest(now):
    res = resolve('call mom next monday', today=now)
    assert res.date == date(2024, 6, 24)
    assert res.title == 'call mom'


def test_bare_weekday_is_nearest(now):
    res = resolve('call mom monday', today=now)
    assert res.date == date(2024, 6, 17)
    assert res.title == 'call mom'


def test_bare_weekday_same_day_is_next_week(now):
    assert resolve('standup wed', today=now).date == date(2024, 6, 19)


@pytest.mark.parametrize('text,expected', [
    ('dentist 21 jun', date(2024, 6, 21)),
    ('dentist 21st June', date(2024, 6, 21)),
    ('dentist 21jun', date(2024, 6, 21)),
    ('dentist jun 21', date(2024, 6, 21)),
    ('dentist June 21st', date(2024, 6, 21)),
    ('dentist sept 3', date(2024, 9, 3)),
    ('dentist 12 jun', date(2024, 6, 12)),
])
def test_month_day_phrases(now, text, expected):
    res = resolve(text, today=now)
    assert res.date == expected
    assert res.title == 'dentist'


def test_month_day_rolls_over_to_next_year(now):
    res = resolve('21 jan', today=now)
    assert res.date == date(2025, 1, 21)
    assert res.title == ''


def test_invalid_month_day_falls_through_to_lower_patterns(now):
    # 31 June does not exist; the tomorrow rule still gets a go
    res = resolve('report 31 jun tomorrow', today=now)
    assert res.date == date(2024, 6, 13)
    assert res.phrase == 'tomorrow'
    assert res.title == 'report 31 jun'


def test_invalid_month_day_alone_is_no_match(now):
    res = resolve('feb 30 plans', today=now)
    assert res.date is None
    assert res.title == 'feb 30 plans'


@pytest.mark.parametrize('word,expected', [
    ('today', date(2024, 6, 12)),
    ('tod', date(2024, 6, 12)),
    ('tomorrow', date(2024, 6, 13)),
    ('tom', date(2024, 6, 13)),
    ('tmr', date(2024, 6, 13)),
    ('TMRW', date(2024, 6, 13)),
])
def test_today_and_tomorrow(now, word, expected):
    res = resolve(f'water plants {word}', today=now)
    assert res.date == expected
    assert res.title == 'water plants'


def test_day_month_outranks_weekday(now):
    res = resolve('fri 5 jul', today=now)
    assert res.date == date(2024, 7, 5)
    assert res.title == 'fri'


def test_whole_words_only(now):
    for text in ('monsoon prep', 'saturate the market', 'tomato sauce', 'nextweek'):
        res = resolve(text, today=now)
        assert res.date is None, text
        assert res.title == text


def test_no_match_returns_text_unchanged(now):
    res = resolve('  buy   milk ', today=now)
    assert res.date is None
    assert res.phrase is None
    assert res.title == '  buy   milk '


def test_matched_phrase_removed_everywhere(now):
    res = resolve('today or Today', today=now)
    assert res.date == now
    assert 'today' not in res.title.lower()


def test_none_text(now):
    res = resolve(None, today=now)
    assert res.title == ''
    assert res.date is None


def test_strip_date_phrases_reaches_fixed_point(now):
    text = strip_date_phrases('lunch today tomorrow with fri team', today=now)
    assert text == 'lunch with team'
    assert resolve(text, today=now).date is None


@pytest.mark.parametrize('abbr,idx', DAY_ABBREVIATIONS)
def test_next_weekday_full_and_abbreviated(now, abbr, idx):
    res = resolve(f'x next {abbr}', today=now)
    assert res.date == next_occurrence(idx, 1, today=now)
    assert res.title == 'x'


@pytest.mark.parametrize('abbr,idx', DAY_ABBREVIATIONS)
def test_bare_weekday_full_and_abbreviated(now, abbr, idx):
    res = resolve(f'x {abbr.upper()}', today=now)
    assert res.date == next_occurrence(idx, 0, today=now)
    assert res.title == 'x'


@pytest.mark.parametrize('text,expected', [
    ('standup next wed', date(2024, 6, 26)),
    ('standup next tues', date(2024, 6, 25)),
    ('standup next thur', date(2024, 6, 20)),
    ('standup tues', date(2024, 6, 18)),
    ('standup thurs', date(2024, 6, 13)),
])
def test_next_and_bare_weekday_dates(now, text, expected):
    res = resolve(text, today=now)
    assert res.date == expected
    assert res.title == 'standup'
