"""Tests for reading and updating global variables through the store."""
from __future__ import annotations

import logging
import math

import pytest

from errors import MalformedNumeral, MissingSeparator
from store import EquationStore, ListSlots


class RecordingSlots(ListSlots):
    def __init__(self, slots):
        super().__init__(slots)
        self.writes = []

    def set_text(self, index, text):
        self.writes.append((index, text))
        super().set_text(index, text)


@pytest.fixture
def slots() -> RecordingSlots:
    return RecordingSlots(['"D1" = 5mm', '"D2" = 2in', '"A1"= 90deg'])


@pytest.fixture
def store(slots: RecordingSlots) -> EquationStore:
    return EquationStore(slots)


def test_get_all_keeps_raw_values(store: EquationStore) -> None:
    assert store.get_all() == {"D1": "5mm", "D2": "2in", "A1": "90deg"}


def test_get_all_trims_only_around_value() -> None:
    store = EquationStore(ListSlots(['  "D3"=  7.5 deg ', '"E1" = "D1" * 2']))
    assert store.get_all() == {"D3": "7.5 deg", "E1": '"D1" * 2'}


def test_get_all_last_duplicate_wins() -> None:
    store = EquationStore(ListSlots(['"D1" = 1mm', '"D1" = 2mm']))
    assert store.get_all() == {"D1": "2mm"}


def test_get_all_fails_on_slot_without_separator() -> None:
    store = EquationStore(ListSlots(['"D1" = 1mm', '"D2" 2mm']))
    with pytest.raises(MissingSeparator):
        store.get_all()


def test_get_one(store: EquationStore) -> None:
    assert store.get_one("D2") == "2in"
    assert store.get_one("D9") is None


def test_names_follow_slot_order(store: EquationStore) -> None:
    assert store.names() == ["D1", "D2", "A1"]


def test_set_one_keeps_unit_suffix(store: EquationStore, slots: RecordingSlots) -> None:
    assert store.set_one("D2", 10) is True
    assert slots.slots == ['"D1" = 5mm', '"D2" = 10in', '"A1"= 90deg']
    assert slots.writes == [(1, '"D2" = 10in')]


def test_set_one_unknown_name_does_not_write(store: EquationStore, slots: RecordingSlots) -> None:
    assert store.set_one("D9", 1) is False
    assert slots.writes == []


@pytest.mark.parametrize("value,expected", [(2.5, '"D1" = 2.5mm'), (3.0, '"D1" = 3mm'), (-0.25, '"D1" = -0.25mm')])
def test_set_one_renders_floats(store: EquationStore, slots: RecordingSlots, value: float, expected: str) -> None:
    store.set_one("D1", value)
    assert slots.slots[0] == expected


def test_set_one_replaces_numeral_with_exponent() -> None:
    slots = ListSlots(['"T1" = 1.5e-3m'])
    EquationStore(slots).set_one("T1", 2)
    assert slots.slots == ['"T1" = 2m']


def test_set_one_only_rewrites_first_matching_slot() -> None:
    slots = ListSlots(['"D1" = 1mm', '"D1" = 1mm'])
    assert EquationStore(slots).set_one("D1", 4)
    assert slots.slots == ['"D1" = 4mm', '"D1" = 1mm']


def test_set_one_replaces_every_occurrence_of_old_value_text() -> None:
    # The old value text also occurs inside the name, so the name changes too.
    slots = ListSlots(['"w2in" = 2in'])
    store = EquationStore(slots)
    assert store.set_one("w2in", 10)
    assert slots.slots == ['"w10in" = 10in']
    assert store.get_one("w2in") is None
    assert store.get_one("w10in") == "10in"


def test_set_one_without_value_fails() -> None:
    slots = RecordingSlots(['"D1" ='])
    with pytest.raises(MalformedNumeral):
        EquationStore(slots).set_one("D1", 1)
    assert slots.writes == []


def test_set_one_logs_the_rewrite(store: EquationStore, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="swequations.store")
    store.set_one("D1", 7)
    assert "Set D1" in caplog.text


def test_get_equation_converts_to_si(store: EquationStore) -> None:
    eq = store.get_equation("D2")
    assert eq is not None
    assert math.isclose(eq.value_si, 0.0508)
    assert store.get_equation("D9") is None


def test_equations_parses_every_slot(store: EquationStore) -> None:
    values = [eq.value_si for eq in store.equations()]
    assert len(values) == 3
    assert math.isclose(values[2], math.pi / 2)


def test_set_one_rewrites_quoted_numeral() -> None:
    slots = ListSlots(['"D1" = "5" mm'])
    assert EquationStore(slots).set_one("D1", 10)
    assert slots.slots == ['"D1" = "10" mm']


@pytest.mark.parametrize("slot", ['"E1" = "D1" * 2', '"E1" = + mm', '"E1" = .in', '"E1" = mm'])
def test_set_one_without_leading_number_fails(slot: str) -> None:
    slots = RecordingSlots([slot])
    with pytest.raises(MalformedNumeral):
        EquationStore(slots).set_one("E1", 10)
    assert slots.slots == [slot]
    assert slots.writes == []


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_set_one_rejects_non_finite_values(store: EquationStore, slots: RecordingSlots, value: float) -> None:
    with pytest.raises(MalformedNumeral):
        store.set_one("D1", value)
    assert slots.writes == []
