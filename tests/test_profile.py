import pytest

from servomap import (
    ControlMode,
    ControlProfile,
    DuplicateNodeError,
    LinearConfig,
    ModeMismatchError,
    NotFoundError,
    PresetConfig,
    UnknownNodeError,
)


@pytest.fixture
def profile():
    return ControlProfile()


def linear_node(profile, name="axis1", group="g1"):
    profile.register_node(name)
    profile.select_mode(name, "Linear")
    profile.set_linear_group(name, group)
    return name


class TestRegisterNode:

    def test_new_node_is_unset(self, profile):
        profile.register_node("axis1")
        assert profile.mode_of("axis1") == ControlMode.UNSET
        assert profile.snapshot("axis1") is None
        assert "axis1" in profile
        assert len(profile) == 1

    def test_duplicate_name_rejected(self, profile):
        profile.register_node("axis1")
        with pytest.raises(DuplicateNodeError) as exc:
            profile.register_node("axis1")
        assert exc.value.node == "axis1"
        assert profile.nodes == ["axis1"]

    def test_clear_drops_nodes(self, profile):
        profile.register_node("axis1")
        profile.register_node("axis2")
        profile.clear()
        assert len(profile) == 0
        assert list(profile) == []


class TestSelectMode:

    def test_unset_to_linear_gets_defaults(self, profile):
        profile.register_node("axis1")
        config = profile.select_mode("axis1", "Linear")
        assert config == LinearConfig(group="choice", invert="Yes")
        assert profile.mode_of("axis1") == ControlMode.LINEAR

    def test_unset_to_preset_gets_defaults(self, profile):
        profile.register_node("axis1")
        assert profile.select_mode("axis1", ControlMode.PRESET) == PresetConfig(items={})

    def test_mode_labels_are_case_insensitive(self, profile):
        profile.register_node("axis1")
        profile.select_mode("axis1", "preset")
        assert profile.mode_of("axis1") == ControlMode.PRESET

    def test_unknown_mode_label_rejected(self, profile):
        profile.register_node("axis1")
        with pytest.raises(ValueError):
            profile.select_mode("axis1", "Toggle")
        assert profile.mode_of("axis1") == ControlMode.UNSET

    def test_unset_cannot_be_selected(self, profile):
        linear_node(profile)
        with pytest.raises(ValueError):
            profile.select_mode("axis1", ControlMode.UNSET)
        assert profile.snapshot("axis1").group == "g1"

    def test_idempotent_reselect_linear(self, profile):
        linear_node(profile)
        profile.set_linear_invert("axis1", "No")
        before = profile.snapshot("axis1")
        profile.select_mode("axis1", "Linear")
        assert profile.snapshot("axis1") == before

    def test_idempotent_reselect_preset(self, profile):
        profile.register_node("btn")
        profile.select_mode("btn", "Preset")
        profile.select_preset_item("btn", "servo3")
        profile.select_mode("btn", "Preset")
        assert profile.snapshot("btn").items == {"servo3": None}

    def test_mode_switch_resets(self, profile):
        linear_node(profile, group="g1")
        profile.select_mode("axis1", "Preset")
        config = profile.select_mode("axis1", "Linear")
        assert config.group == "choice"
        assert config.invert == "Yes"

    def test_switch_discards_preset_items(self, profile):
        profile.register_node("btn")
        profile.select_mode("btn", "Preset")
        profile.select_preset_item("btn", "servoA")
        profile.select_mode("btn", "Linear")
        assert profile.select_mode("btn", "Preset").items == {}

    def test_incomplete_config_is_reset_on_reselect(self, profile):
        linear_node(profile)
        node_config = profile._nodes["axis1"].config
        node_config.invert = "maybe"
        assert not profile.is_preconfigured("axis1", "Linear")
        assert profile.select_mode("axis1", "Linear") == LinearConfig()

    def test_is_preconfigured(self, profile):
        linear_node(profile)
        assert profile.is_preconfigured("axis1", "Linear")
        assert not profile.is_preconfigured("axis1", "Preset")

    def test_snapshot_is_a_copy(self, profile):
        profile.register_node("btn")
        profile.select_mode("btn", "Preset")
        snap = profile.snapshot("btn")
        snap.items["ghost"] = None
        assert profile.snapshot("btn").items == {}


class TestLinearSettings:

    def test_set_group_and_invert(self, profile):
        linear_node(profile, group="legs")
        profile.set_linear_invert("axis1", False)
        assert profile.snapshot("axis1") == LinearConfig(group="legs", invert="No")

    def test_invalid_invert_rejected(self, profile):
        linear_node(profile)
        with pytest.raises(ValueError):
            profile.set_linear_invert("axis1", "Sometimes")
        assert profile.snapshot("axis1").invert == "Yes"

    def test_unknown_node_rejected(self, profile):
        linear_node(profile)
        before = profile.to_dict()
        with pytest.raises(UnknownNodeError) as exc:
            profile.set_linear_group("ghost", "g1")
        assert exc.value.node == "ghost"
        assert profile.to_dict() == before

    @pytest.mark.parametrize("group", ["", None, 3])
    def test_invalid_group_rejected(self, profile, group):
        linear_node(profile, group="legs")
        profile.set_linear_invert("axis1", "No")
        with pytest.raises(ValueError):
            profile.set_linear_group("axis1", group)
        assert profile.snapshot("axis1") == LinearConfig(group="legs", invert="No")

    def test_reselect_keeps_settings_after_any_accepted_group(self, profile):
        linear_node(profile, group="x")
        profile.set_linear_invert("axis1", "No")
        before = profile.snapshot("axis1")
        assert profile.select_mode("axis1", "Linear") == before

    def test_group_requires_linear_mode(self, profile):
        profile.register_node("axis1")
        with pytest.raises(ModeMismatchError):
            profile.set_linear_group("axis1", "legs")

    def test_invert_in_preset_mode_rejected(self, profile):
        profile.register_node("btn")
        profile.select_mode("btn", "Preset")
        profile.select_preset_item("btn", "servo1")
        with pytest.raises(ModeMismatchError) as exc:
            profile.set_linear_invert("btn", "No")
        assert exc.value.expected == ControlMode.LINEAR
        assert exc.value.actual == ControlMode.PRESET
        assert profile.snapshot("btn") == PresetConfig(items={"servo1": None})


class TestPresetSelection:

    def test_retracts_previous_item(self, profile):
        profile.register_node("btn")
        profile.select_mode("btn", "Preset")
        profile.select_preset_item("btn", "servoA")
        profile.select_preset_item("btn", "servoB")
        assert profile.snapshot("btn").items == {"servoB": None}

    def test_reselecting_same_item(self, profile):
        profile.register_node("btn")
        profile.select_mode("btn", "Preset")
        profile.select_preset_item("btn", "servoA")
        profile.select_preset_item("btn", "servoA")
        assert profile.snapshot("btn").items == {"servoA": None}

    def test_memory_is_per_node(self, profile):
        for name in ("a", "b"):
            profile.register_node(name)
            profile.select_mode(name, "Preset")

        profile.select_preset_item("a", "servo1")
        profile.select_preset_item("b", "servo2")
        profile.select_preset_item("a", "servo3")

        assert profile.snapshot("a").items == {"servo3": None}
        assert profile.snapshot("b").items == {"servo2": None}

    def test_requires_preset_mode(self, profile):
        linear_node(profile)
        with pytest.raises(ModeMismatchError):
            profile.select_preset_item("axis1", "servo1")
        assert profile.snapshot("axis1").group == "g1"

    def test_unknown_node_rejected(self, profile):
        with pytest.raises(UnknownNodeError):
            profile.select_preset_item("ghost", "servo1")


def test_end_to_end_scenario(profile):
    profile.register_node("axis1")

    config = profile.select_mode("axis1", "Linear")
    assert config.to_dict() == {"mode": "Linear", "group": "choice", "invert": "Yes"}

    profile.set_linear_group("axis1", "legs")

    config = profile.select_mode("axis1", "Preset")
    assert config.to_dict() == {"mode": "Preset", "items": {}}

    profile.select_preset_item("axis1", "servo3")
    assert profile.snapshot("axis1").items == {"servo3": None}

    config = profile.select_mode("axis1", "Preset")
    assert config.items == {"servo3": None}


class TestControllerAndRobot:

    def test_use_controller_registers_nodes(self, config):
        profile = ControlProfile()
        added = profile.use_controller("xbox")
        assert added == ["left_x", "left_y", "a"]
        assert profile.nodes == ["left_x", "left_y", "a"]
        assert profile.controller == "xbox"

    def test_use_controller_keeps_existing_nodes(self, config):
        profile = ControlProfile()
        profile.register_node("a")
        profile.select_mode("a", "Preset")
        profile.select_preset_item("a", "turret")

        assert profile.use_controller("xbox") == ["left_x", "left_y"]
        assert profile.snapshot("a").items == {"turret": None}

    def test_missing_controller(self, config):
        profile = ControlProfile()
        with pytest.raises(NotFoundError):
            profile.use_controller("ps4")
        assert profile.controller is None
        assert len(profile) == 0

    def test_choices_follow_robot(self, config):
        profile = ControlProfile()
        assert profile.group_choices() == []

        profile.use_robot("hexapod")
        assert profile.robot == "hexapod"
        assert profile.group_choices() == ["legs", "left", "right", "head"]
        assert profile.preset_choices() == {
            "Servos": ["hip_lf", "hip_rf", "turret"],
            "Groups": ["legs", "left", "right", "head"],
        }

    def test_explicit_config(self, config_dir):
        from servomap import ServomapConfig

        profile = ControlProfile(ServomapConfig(config_dir=config_dir))
        profile.use_robot("hexapod")
        assert len(profile.preset_choices()["Servos"]) == 3

    def test_to_dict(self, config):
        profile = ControlProfile()
        profile.use_controller("xbox")
        profile.use_robot("hexapod")
        profile.select_mode("left_x", "Linear")
        profile.set_linear_group("left_x", "legs")
        profile.select_mode("a", "Preset")
        profile.select_preset_item("a", "turret")

        assert profile.to_dict() == {
            "controller": "xbox",
            "robot": "hexapod",
            "nodes": {
                "left_x": {"mode": "Linear", "group": "legs", "invert": "Yes"},
                "left_y": {},
                "a": {"mode": "Preset", "items": {"turret": None}},
            },
        }
