from poke_teams.data import ALL_TYPES, damage_multiplier, effectiveness_summary


def test_damage_multiplier_stacks_dual_types() -> None:
    assert damage_multiplier("rock", ["fire", "flying"]) == 4.0
    assert damage_multiplier("grass", ["fire", "flying"]) == 0.25
    assert damage_multiplier("ice", ["fire", "flying"]) == 1.0


def test_immunity_wins_over_weakness() -> None:
    assert damage_multiplier("ground", ["fire", "flying"]) == 0.0
    assert damage_multiplier("electric", ["water", "ground"]) == 0.0


def test_unknown_attack_type_is_neutral() -> None:
    assert damage_multiplier("shadow", ["normal"]) == 1.0


def test_summary_for_charizard() -> None:
    summary = effectiveness_summary(["Fire", "Flying"])

    assert set(summary) == {"x4", "x2", "x1", "x0_5", "x0_25", "x0"}
    assert summary["x4"] == ["rock"]
    assert summary["x0"] == ["ground"]
    assert summary["x0_25"] == ["grass", "bug"]
    assert {"water", "electric"} <= set(summary["x2"])
    assert "fighting" in summary["x0_5"]


def test_summary_places_every_attacking_type_once() -> None:
    summary = effectiveness_summary(["ghost", "steel"])

    placed = [attack for bucket in summary.values() for attack in bucket]
    assert sorted(placed) == sorted(ALL_TYPES)
    assert set(summary["x0"]) == {"normal", "fighting", "poison"}
