"""Tests for LottoSettings defaults, merging and mutation."""

from __future__ import annotations

import pytest

from lotto.settings import DEFAULT_HOURS, LottoSettings, parse_hours


def test_defaults():
    settings = LottoSettings()
    assert settings.hours == DEFAULT_HOURS == 4
    assert settings.channel_id is None
    assert settings.role_id is None
    assert settings.winners == ()


@pytest.mark.parametrize("record", [None, {}])
def test_from_empty_record_is_default(record):
    assert LottoSettings.from_record(record) == LottoSettings()


def test_from_partial_record_fills_defaults():
    settings = LottoSettings.from_record({"channel": 55})
    assert settings.channel_id == 55
    assert settings.hours == 4
    assert settings.role_id is None
    assert settings.winners == ()


def test_from_record_drops_duplicate_winners_keeping_order():
    settings = LottoSettings.from_record({"winners": [3, 1, 3, 2, 1]})
    assert settings.winners == (3, 1, 2)


@pytest.mark.parametrize("hours", [0, -2, "7", True, None])
def test_from_record_invalid_hours_fall_back(hours):
    assert LottoSettings.from_record({"hours": hours}).hours == DEFAULT_HOURS


def test_to_record_layout():
    settings = LottoSettings(hours=6, channel_id=10, role_id=20, winners=(1, 2))
    assert settings.to_record() == {"hours": 6, "channel": 10, "role": 20, "winners": [1, 2]}


def test_with_helpers_leave_original_untouched():
    original = LottoSettings(winners=(1,))
    changed = original.with_hours(9).with_channel(5).with_role(6).with_winners([2, 1, 2])
    assert original == LottoSettings(winners=(1,))
    assert changed == LottoSettings(hours=9, channel_id=5, role_id=6, winners=(2, 1))


def test_with_hours_rejects_non_positive():
    with pytest.raises(ValueError):
        LottoSettings().with_hours(0)


@pytest.mark.parametrize("argument, expected", [("7", 7), (" 12 ", 12), ("1", 1), ("+3", 3)])
def test_parse_hours(argument, expected):
    assert parse_hours(argument) == expected


@pytest.mark.parametrize("argument", ["abc", "", "0", "-3", "1.5", "4 hours", "1_0", "\u0661\u0662"])
def test_parse_hours_rejects(argument):
    with pytest.raises(ValueError):
        parse_hours(argument)
