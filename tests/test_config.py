import json

from ascii_art.config import DEFAULT_CONFIG, Config


def test_load_missing_creates_file(tmp_path):
    path = tmp_path / "sub" / "cfg.json"
    cfg = Config.load(str(path))
    assert path.exists()
    assert cfg["font"]["name"] == DEFAULT_CONFIG["font"]["name"]
    assert cfg["matching"]["degenerate_policy"] == "midpoint"


def test_load_missing_without_create(tmp_path):
    path = tmp_path / "cfg.json"
    Config.load(str(path), create_if_missing=False)
    assert not path.exists()


def test_user_values_merge_and_validate(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "shell": {"initial_chars_in_row": "32", "min_pixels_per_char": 0},
        "matching": {"degenerate_policy": "bogus", "workers": 500},
        "output": {"mode": "console"},
    }))
    cfg = Config.load(str(path))
    assert cfg["shell"]["initial_chars_in_row"] == 32
    assert cfg["shell"]["min_pixels_per_char"] == 1
    assert cfg["shell"]["initial_chars"] == "0-9"
    assert cfg["matching"]["degenerate_policy"] == "midpoint"
    assert cfg["matching"]["workers"] == 64
    assert cfg.output_mode == "console"


def test_corrupt_file_is_backed_up(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json")
    cfg = Config.load(str(path))
    assert (tmp_path / "cfg.json.corrupt.bak").exists()
    assert cfg["output"]["mode"] == "html"


def test_save_round_trip(tmp_path):
    path = tmp_path / "cfg.json"
    cfg = Config.load(str(path))
    cfg["font"]["name"] = "DejaVu Sans Mono"
    cfg.save()
    assert Config.load(str(path)).font_name == "DejaVu Sans Mono"


def test_env_override(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    monkeypatch.setenv("ASCII_ART_CONFIG", str(path))
    cfg = Config.load()
    assert cfg.path == str(path)
    assert path.exists()


def test_update_validates(tmp_path):
    cfg = Config(path=str(tmp_path / "c.json"))
    cfg.update({"output": {"mode": "pdf"}, "image": {"pad_to_power_of_two": "no"}})
    assert cfg["output"]["mode"] == "html"
    assert cfg["image"]["pad_to_power_of_two"] is False
