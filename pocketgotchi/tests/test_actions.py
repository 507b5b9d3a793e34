import pytest

from pocketgotchi import actions
from pocketgotchi.errors import PreconditionNotMet


def test_feed_pizza(pet):
    msg = actions.feed(pet, 1)
    assert "Pizza" in msg
    assert pet.hunger == 95.0
    assert pet.health == 75.0
    assert pet.happiness == 80.0
    assert pet.energy == 70.0


def test_feed_applies_only_nonzero_deltas(pet, monkeypatch):
    food = {'name': 'Test Pie', 'emoji': '?', 'hunger': 15, 'health': -5, 'happiness': 10, 'energy': 0}
    monkeypatch.setattr(actions, "FOODS", [food])
    pet.health = 3.0
    actions.feed(pet, 0)
    assert pet.hunger == 85.0
    assert pet.health == 0.0
    assert pet.happiness == 80.0
    assert pet.energy == 70.0


def test_feed_clamps_at_full(pet):
    pet.hunger = 95.0
    actions.feed(pet, 5)
    assert pet.hunger == 100.0


def test_feed_unknown_food_changes_nothing(pet):
    before = pet.to_dict()
    with pytest.raises(PreconditionNotMet):
        actions.feed(pet, 8)
    assert pet.to_dict() == before


def test_study(pet):
    actions.study(pet)
    assert pet.intelligence == 22.0
    assert pet.energy == 55.0
    assert pet.happiness == 65.0


def test_study_too_tired(pet):
    pet.energy = 14.9
    before = pet.to_dict()
    with pytest.raises(PreconditionNotMet) as exc:
        actions.study(pet)
    assert "too tired" in exc.value.message
    assert pet.to_dict() == before


def test_heal_when_healthy_is_refused(pet):
    before = pet.to_dict()
    with pytest.raises(PreconditionNotMet) as exc:
        actions.heal(pet)
    assert "already healthy" in exc.value.message
    assert pet.to_dict() == before


def test_heal_cures_sickness(pet):
    pet.is_sick = True
    pet.health = 90.0
    actions.heal(pet)
    assert not pet.is_sick
    assert pet.health == 100.0


def test_heal_low_health_without_sickness(pet):
    pet.health = 50.0
    actions.heal(pet)
    assert pet.health == 70.0


def test_bathe_clears_bathroom_need(pet):
    pet.hygiene = 50.0
    pet.needs_bathroom = True
    msg = actions.bathe(pet)
    assert "bathroom" in msg
    assert pet.hygiene == 80.0
    assert not pet.needs_bathroom

    msg = actions.bathe(pet)
    assert "squeaky clean" in msg
    assert pet.hygiene == 100.0


def test_sleeping_pet_only_accepts_sleep_toggle(pet):
    actions.toggle_sleep(pet)
    assert pet.is_sleeping
    before = pet.to_dict()
    for action, args in ((actions.feed, (0,)), (actions.study, ()), (actions.heal, ()), (actions.bathe, ())):
        with pytest.raises(PreconditionNotMet) as exc:
            action(pet, *args)
        assert exc.value.message is None
    assert pet.to_dict() == before

    assert "woke up" in actions.toggle_sleep(pet)
    assert not pet.is_sleeping


def test_dead_pet_refuses_everything(pet):
    pet.is_alive = False
    pet.health = 0.0
    before = pet.to_dict()
    for action, args in ((actions.feed, (0,)), (actions.study, ()), (actions.heal, ()),
                         (actions.bathe, ()), (actions.toggle_sleep, ())):
        with pytest.raises(PreconditionNotMet):
            action(pet, *args)
    assert pet.to_dict() == before


def test_no_pet_refuses():
    with pytest.raises(PreconditionNotMet):
        actions.bathe(None)
