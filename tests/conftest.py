import json

import pytest

from servomap.config import ServomapConfig, reset_config, set_config


HEXAPOD = {
    "hip_lf": {"groups": ["legs", "left"], "id": 1},
    "hip_rf": {"groups": ["legs", "right"], "id": 2},
    "turret": {"groups": ["head"], "model": "MX-28"},
}

XBOX = {
    "nodes": {
        "left_x": {"type": "axis"},
        "left_y": {"type": "axis"},
        "a": {"type": "button"},
    }
}


@pytest.fixture(autouse=True)
def _reset_global_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config_dir(tmp_path):
    robots = tmp_path / "Robots"
    controllers = tmp_path / "Controllers"
    servos = tmp_path / "Servos"
    for d in (robots, controllers, servos):
        d.mkdir()

    (robots / "hexapod.json").write_text(json.dumps(HEXAPOD))
    (robots / "broken.json").write_text("{not json")
    (controllers / "xbox.json").write_text(json.dumps(XBOX))
    (servos / "AX-12A.json").write_text("{}")
    (servos / "MX-28.json").write_text("{}")
    return tmp_path


@pytest.fixture
def config(config_dir):
    config = ServomapConfig(config_dir=config_dir)
    set_config(config)
    return config
