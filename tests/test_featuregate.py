import argparse

import pytest

from componentbase.featuregate import (
    FeatureGate,
    FeatureGateError,
    FeatureSpec,
    PreRelease,
    UnregisteredFeatureError,
)

ALPHA = "TestAlpha"
BETA = "TestBeta"


def _all(alpha_all, beta_all, alpha, beta):
    return {"AllAlpha": alpha_all, "AllBeta": beta_all, ALPHA: alpha, BETA: beta}


FLAG_CASES = [
    ("", _all(False, False, False, False), None),
    ("fooBarBaz=true", _all(False, False, False, False), "unrecognized feature gate: fooBarBaz"),
    ("AllAlpha=false", _all(False, False, False, False), None),
    ("AllAlpha=true", _all(True, False, True, False), None),
    ("AllAlpha=banana", _all(False, False, False, False), "invalid value of AllAlpha"),
    ("AllAlpha=false,TestAlpha=true", _all(False, False, True, False), None),
    ("TestAlpha=true,AllAlpha=false", _all(False, False, True, False), None),
    ("AllAlpha=true,TestAlpha=false", _all(True, False, False, False), None),
    ("TestAlpha=false,AllAlpha=true", _all(True, False, False, False), None),
    ("TestBeta=true,AllAlpha=false", _all(False, False, False, True), None),
    ("AllBeta=false", _all(False, False, False, False), None),
    ("AllBeta=true", _all(False, True, False, True), None),
    ("AllBeta=banana", _all(False, False, False, False), "invalid value of AllBeta"),
    ("AllBeta=false,TestBeta=true", _all(False, False, False, True), None),
    ("TestBeta=true,AllBeta=false", _all(False, False, False, True), None),
    ("AllBeta=true,TestBeta=false", _all(False, True, False, False), None),
    ("TestBeta=false,AllBeta=true", _all(False, True, False, False), None),
    ("TestAlpha=true,AllBeta=false", _all(False, False, True, False), None),
]


def _alpha_beta_gate(beta_default=False):
    gate = FeatureGate("test")
    gate.add(
        {
            ALPHA: FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
            BETA: FeatureSpec(default=beta_default, pre_release=PreRelease.BETA),
        }
    )
    return gate


@pytest.mark.parametrize("arg,expect,parse_error", FLAG_CASES)
def test_feature_gate_flag(arg, expect, parse_error):
    parser = argparse.ArgumentParser(exit_on_error=False)
    gate = _alpha_beta_gate()
    gate.add_flag(parser)
    if parse_error:
        with pytest.raises(argparse.ArgumentError) as info:
            parser.parse_args([f"--feature-gates={arg}"])
        assert parse_error in str(info.value)
    else:
        namespace = parser.parse_args([f"--feature-gates={arg}"])
        assert namespace.feature_gates is gate
    explicit = gate.explicitly_set()
    for key, value in expect.items():
        assert explicit.get(key, False) == value


def test_feature_gate_override():
    gate = _alpha_beta_gate()
    gate.set("TestAlpha=true,TestBeta=true")
    assert gate.enabled(ALPHA) is True
    assert gate.enabled(BETA) is True
    gate.set("TestAlpha=false")
    assert gate.enabled(ALPHA) is False
    assert gate.enabled(BETA) is True


def test_feature_gate_flag_defaults():
    gate = _alpha_beta_gate(beta_default=True)
    assert gate.enabled(ALPHA) is False
    assert gate.enabled(BETA) is True


def test_feature_gate_known_features():
    gate = FeatureGate()
    gate.add(
        {
            "TestAlpha": FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
            "TestBeta": FeatureSpec(default=True, pre_release=PreRelease.BETA),
            "TestGA": FeatureSpec(default=True, pre_release=PreRelease.GA),
            "TestDeprecated": FeatureSpec(default=False, pre_release=PreRelease.DEPRECATED),
        }
    )
    known = " ".join(gate.known_features())
    assert "TestAlpha" in known
    assert "TestBeta" in known
    assert "TestGA" not in known
    assert "TestDeprecated" not in known


def test_known_features_format():
    gate = _alpha_beta_gate(beta_default=True)
    assert gate.known_features() == [
        "AllAlpha=true|false (ALPHA - default=false)",
        "AllBeta=true|false (BETA - default=false)",
        "TestAlpha=true|false (ALPHA - default=false)",
        "TestBeta=true|false (BETA - default=true)",
    ]


SET_FROM_MAP_CASES = [
    ({"TestAlpha": True, "TestBeta": True}, {ALPHA: True, BETA: True}, None),
    ({"TestBeta": True}, {ALPHA: False, BETA: True}, None),
    ({"TestAlpha": False}, {ALPHA: False, BETA: False}, None),
    ({"TestInvaild": True}, {ALPHA: False, BETA: False}, "unrecognized feature gate:"),
    ({"TestLockedTrue": True, "TestLockedFalse": False}, {ALPHA: False, BETA: False}, None),
    (
        {"TestLockedTrue": False},
        {ALPHA: False, BETA: False},
        "cannot set feature gate TestLockedTrue to false, feature is locked to true",
    ),
    (
        {"TestLockedFalse": True},
        {ALPHA: False, BETA: False},
        "cannot set feature gate TestLockedFalse to true, feature is locked to false",
    ),
]


@pytest.mark.parametrize("setmap,expect,error", SET_FROM_MAP_CASES)
def test_feature_gate_set_from_map(setmap, expect, error):
    gate = FeatureGate()
    gate.add(
        {
            ALPHA: FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
            BETA: FeatureSpec(default=False, pre_release=PreRelease.BETA),
            "TestLockedTrue": FeatureSpec(default=True, lock_to_default=True),
            "TestLockedFalse": FeatureSpec(default=False, lock_to_default=True),
        }
    )
    if error:
        with pytest.raises(FeatureGateError) as info:
            gate.set_from_map(setmap)
        assert error in str(info.value)
    else:
        gate.set_from_map(setmap)
    for key, value in expect.items():
        assert gate.enabled(key) == value


@pytest.mark.parametrize(
    "setmap,expect",
    [
        ({"TestAlpha": False}, "TestAlpha=false"),
        ({"TestAlpha": False, "TestBeta": True}, "TestAlpha=false,TestBeta=true"),
        (
            {"TestGA": True, "TestAlpha": False, "TestBeta": True},
            "TestAlpha=false,TestBeta=true,TestGA=true",
        ),
    ],
)
def test_feature_gate_string(setmap, expect):
    gate = FeatureGate()
    gate.add(
        {
            "TestGA": FeatureSpec(default=True, pre_release=PreRelease.GA),
            ALPHA: FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
            BETA: FeatureSpec(default=True, pre_release=PreRelease.BETA),
        }
    )
    gate.set_from_map(setmap)
    assert str(gate) == expect


def test_overrides_take_effect():
    gate = FeatureGate()
    gate.add(
        {"TestFeature1": FeatureSpec(default=True), "TestFeature2": FeatureSpec(default=False)}
    )
    gate.override_default("TestFeature1", False)
    gate.override_default("TestFeature2", True)
    assert gate.enabled("TestFeature1") is False
    assert gate.enabled("TestFeature2") is True


def test_overrides_preserved_across_deep_copy():
    gate = FeatureGate()
    gate.add({"TestFeature": FeatureSpec(default=False)})
    gate.override_default("TestFeature", True)
    assert gate.deep_copy().enabled("TestFeature") is True


def test_override_reflected_in_known_features():
    gate = FeatureGate()
    gate.add({"TestFeature": FeatureSpec(default=False, pre_release=PreRelease.ALPHA)})
    gate.override_default("TestFeature", True)
    entries = [s for s in gate.known_features() if "TestFeature" in s]
    assert len(entries) == 1
    assert "default=true" in entries[0]


@pytest.mark.parametrize("value", [False, True])
def test_override_locked_default_rejected(value):
    gate = FeatureGate()
    gate.add({"LockedFeature": FeatureSpec(default=True, lock_to_default=True)})
    with pytest.raises(FeatureGateError):
        gate.override_default("LockedFeature", value)


def test_override_does_not_supersede_explicit_value():
    gate = FeatureGate()
    gate.add({"TestFeature": FeatureSpec(default=True)})
    gate.override_default("TestFeature", False)
    gate.set_from_map({"TestFeature": True})
    assert gate.enabled("TestFeature") is True


def test_reregistration_after_override_rejected():
    gate = FeatureGate()
    spec = FeatureSpec(default=True, pre_release=PreRelease.ALPHA)
    gate.add({"TestFeature": spec})
    gate.override_default("TestFeature", False)
    with pytest.raises(FeatureGateError, match="different spec already exists"):
        gate.add({"TestFeature": spec})


def test_override_unknown_feature_rejected():
    with pytest.raises(FeatureGateError, match="not registered"):
        FeatureGate().override_default("TestFeature", True)


def test_override_after_add_flag_rejected():
    gate = FeatureGate()
    gate.add_flag(argparse.ArgumentParser())
    with pytest.raises(FeatureGateError, match="already added to a flag set"):
        gate.override_default("TestFeature", True)


def test_add_after_add_flag_rejected():
    gate = FeatureGate()
    gate.add_flag(argparse.ArgumentParser())
    with pytest.raises(FeatureGateError, match="after adding it to the flag set"):
        gate.add({"X": FeatureSpec()})


def test_identical_readd_is_allowed():
    gate = _alpha_beta_gate()
    gate.add({ALPHA: FeatureSpec(default=False, pre_release=PreRelease.ALPHA)})
    assert gate.get_all()[ALPHA] == FeatureSpec(default=False, pre_release=PreRelease.ALPHA)


def test_enabled_unknown_feature_raises():
    gate = FeatureGate("mygate")
    with pytest.raises(UnregisteredFeatureError) as info:
        gate.enabled("Nope")
    assert str(info.value) == 'feature "Nope" is not registered in FeatureGate "mygate"'


def test_set_missing_bool_value():
    gate = _alpha_beta_gate()
    with pytest.raises(FeatureGateError, match="missing bool value for TestAlpha"):
        gate.set("TestAlpha")
    assert gate.explicitly_set() == {}


def test_failed_set_from_map_persists_nothing():
    gate = _alpha_beta_gate()
    with pytest.raises(FeatureGateError):
        gate.set_from_map({"TestAlpha": True, "Unknown": True})
    assert gate.enabled(ALPHA) is False


def test_deep_copy_is_independent():
    gate = _alpha_beta_gate()
    copy = gate.deep_copy()
    copy.set("TestAlpha=true")
    assert copy.enabled(ALPHA) is True
    assert gate.enabled(ALPHA) is False


def test_get_all_returns_copy():
    gate = _alpha_beta_gate()
    specs = gate.get_all()
    specs.pop(ALPHA)
    assert ALPHA in gate.get_all()
    assert set(gate.get_all()) == {"AllAlpha", "AllBeta", ALPHA, BETA}


def test_type_name():
    assert FeatureGate().type_name() == "mapStringBool"


def test_add_flag_help_lists_features():
    parser = argparse.ArgumentParser()
    _alpha_beta_gate().add_flag(parser)
    assert "TestAlpha=true|false" in parser.format_help()