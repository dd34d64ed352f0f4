from fxparams.ensure import defaults_for, ensure_params
from fxparams.registry import PARAMS
from fxparams.resolve import clamp_param, resolve


def test_numbers_are_clamped_and_coerced():
    assert clamp_param("fire_ignite_chance", 7) == 1.0
    assert clamp_param("fire_ignite_chance", "0.25") == 0.25
    assert clamp_param("fire_ignite_chance", "junk") == PARAMS["fire_ignite_chance"]["default"]
    assert clamp_param("fire_ignite_chance", float("nan")) == PARAMS["fire_ignite_chance"]["default"]
    assert clamp_param("beam_delay", -4) == 0
    assert clamp_param("beam_delay", "3.6") == 4


def test_enums_bools_strings_colors():
    assert clamp_param("pour_direction", "sideways") == "down"
    assert clamp_param("pour_direction", "left") == "left"
    assert clamp_param("display", "yes") is True
    assert clamp_param("display", "off") is False
    assert clamp_param("print_head_symbol", "") == "█"
    assert clamp_param("final_colors", "#FF0000; #00ff00") == ["#ff0000", "#00ff00"]
    assert clamp_param("final_colors", 5) == []


def test_unknown_keys_pass_through():
    assert clamp_param("not_a_param", {"x": 1}) == {"x": 1}


def test_defaults_are_filled_per_uses():
    keys = ["pour_speed", "pour_gap"]
    d = defaults_for(keys)
    assert set(d) == {"pour_speed", "pour_gap", "display"}
    p = ensure_params({"pour_speed": 9}, keys)
    assert p["pour_speed"] == 9 and p["pour_gap"] == PARAMS["pour_gap"]["default"]
    r = resolve({"pour_speed": 1000}, keys)
    assert r["pour_speed"] == PARAMS["pour_speed"]["max"]


def test_color_default_lists_are_copied():
    a = resolve(None, ["decrypt_cipher_colors"])
    a["decrypt_cipher_colors"].append("#000000")
    b = resolve(None, ["decrypt_cipher_colors"])
    assert "#000000" not in b["decrypt_cipher_colors"]


def test_registry_entries_are_well_formed():
    for key, spec in PARAMS.items():
        assert spec["type"] in ("float", "int", "bool", "enum", "str", "colors"), key
        assert "default" in spec, key
        if spec["type"] == "enum":
            assert spec["default"] in spec["choices"], key
        if "min" in spec and "max" in spec:
            assert spec["min"] <= spec["default"] <= spec["max"], key
