import mark_counter.utils.i18n  # noqa:F401

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def test_load_cfg_from_env():
    input_dict = {"MARK_COUNTER_a": 2, "MARK_COUNTER_eoq__trabson": 3}
    loaded = load_cfg_from_env(edict(), input_dict)
    assert loaded.a == 2
    assert loaded.eoq.trabson == 3


def test_load_cfg_from_env_coerces_to_default_type():
    cfg = edict(zoom=edict(step=0.1, minimum=0.2), report=edict(escape=False))
    env = {
        "MARK_COUNTER_zoom__step": "0.25",
        "MARK_COUNTER_report__escape": "true",
        "UNRELATED": "x",
    }
    loaded = load_cfg_from_env(cfg, env)
    assert loaded.zoom.step == 0.25
    assert loaded.zoom.minimum == 0.2
    assert loaded.report.escape is True
    assert "UNRELATED" not in loaded
