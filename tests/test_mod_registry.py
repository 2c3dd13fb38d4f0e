import pytest

from dropfour.components.match_state import MatchPhase
from dropfour.errors import MatchSetupError
from dropfour.events.bus import EVENT_MOD_ACTIVATED, EVENT_MOD_UNPLACED, EventBus
from dropfour.mods.alien import AlienMod
from dropfour.mods.bombs import BombsMod
from dropfour.mods.factory import available_mods, create_mod, ensure_default_mods_registered
from dropfour.mods.jackpot import JackpotMod
from dropfour.mods.registry import ModDefinition, ModRegistry
from dropfour.session import create_session
from dropfour.systems.state_utils import get_active_mods, get_match_state, get_placement


def test_catalogue_lists_every_built_in_mod():
    definitions = {definition.slug: definition for definition in available_mods()}
    assert set(definitions) == {"bombs", "jackpot", "alien"}
    assert all(definition.display_name and definition.description for definition in definitions.values())
    assert definitions["bombs"].default_metadata["discs_to_remove"] == 2


def test_create_mod_merges_metadata_over_defaults():
    mod = create_mod("alien", {"max_abducted": 7})
    assert isinstance(mod, AlienMod)
    assert mod.metadata["min_abducted"] == 4
    assert mod.metadata["max_abducted"] == 7


def test_unknown_mod_raises_key_error():
    with pytest.raises(KeyError):
        create_mod("lava")


def test_registry_refuses_duplicate_slugs():
    registry = ModRegistry()
    registry.add(ModDefinition(slug="bombs", display_name="Bombs", mod_type=BombsMod))
    with pytest.raises(ValueError):
        registry.add(ModDefinition(slug="bombs", display_name="Bombs again", mod_type=BombsMod))
    assert "bombs" in registry
    with pytest.raises(KeyError):
        registry.lookup("jackpot")


def test_registry_refuses_definition_pointing_at_another_mod_class():
    registry = ModRegistry()
    with pytest.raises(ValueError):
        registry.add(ModDefinition(slug="jackpot", display_name="Jackpot", mod_type=AlienMod))
    assert list(registry) == []


def test_create_mod_uses_the_given_registry():
    registry = ModRegistry()
    with pytest.raises(KeyError):
        create_mod("bombs", registry=registry)
    ensure_default_mods_registered(registry)
    assert isinstance(create_mod("bombs", registry=registry), BombsMod)
    assert [definition.mod_type for definition in available_mods(registry)] == [BombsMod, JackpotMod, AlienMod]


def test_new_match_activates_mods_in_selection_order():
    bus = EventBus()
    activated = []
    bus.subscribe(EVENT_MOD_ACTIVATED, lambda sender, **kw: activated.append(kw["slug"]))
    session = create_session(["jackpot", "bombs"], event_bus=bus)

    assert activated == ["jackpot", "bombs"]
    assert get_active_mods(session.world).slugs() == ["jackpot", "bombs"]
    assert get_match_state(session.world).active_mod_slugs == ["jackpot", "bombs"]


def test_round_start_places_disjoint_features():
    session = create_session(["bombs", "jackpot"])
    placement = get_placement(session.world)
    bombs = placement.claimed_by("bombs")
    jackpot = placement.claimed_by("jackpot")
    assert len(bombs) == 8
    assert len(jackpot) == 1
    assert not bombs & jackpot


def test_more_than_two_mods_is_refused():
    session = create_session(None)
    with pytest.raises(MatchSetupError):
        session.flow.new_match(["bombs", "jackpot", "alien"])
    assert get_match_state(session.world).phase is MatchPhase.SETUP


def test_duplicate_mods_are_refused():
    session = create_session(None)
    with pytest.raises(MatchSetupError):
        session.flow.new_match(["bombs", "bombs"])


def test_unknown_slug_leaves_previous_mods_active():
    session = create_session(["bombs"])
    with pytest.raises(KeyError):
        session.pipeline.activate(["alien", "lava"])
    mods = get_active_mods(session.world).mods
    assert [type(mod) for mod in mods] == [BombsMod]


def test_mod_without_room_reports_unplaced():
    bus = EventBus()
    unplaced = []
    bus.subscribe(EVENT_MOD_UNPLACED, lambda sender, **kw: unplaced.append(kw["slug"]))
    create_session(["bombs"], event_bus=bus, mod_metadata={"bombs": {"bomb_percentage": 0.0}})
    assert unplaced == ["bombs"]
