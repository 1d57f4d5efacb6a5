"""Tests for modelsheet settings loader."""

import pytest
import yaml

from modelsheet.settings import load_settings, normalize_settings


def _write_settings(tmp_path, content) -> str:
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump(content))
    return str(path)


class TestDefaults:
    def test_no_file_gives_defaults(self):
        settings = load_settings()
        assert settings["canvas"]["size"] == (2048, 2048)
        assert settings["keywords"] == ["front", "back", "left", "right", "hero"]
        assert settings["grid_order"] == ["front", "right", "left", "back"]
        assert settings["background"] == (128, 128, 128)
        assert settings["jpeg_quality"] == 80
        assert settings["fit"] == {"padding": 0.95, "min_scale": 0.05, "max_scale": 2.0}

    def test_defaults_not_mutated(self):
        first = normalize_settings({"fit": {"padding": 0.5}})
        second = load_settings()
        assert first["fit"]["padding"] == 0.5
        assert second["fit"]["padding"] == 0.95

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path)["jpeg_quality"] == 80


class TestOverrides:
    def test_partial_override(self, tmp_path):
        path = _write_settings(tmp_path, {
            "canvas": {"size": [1024, 512]},
            "background": "#1A1A1A",
            "jpeg_quality": 95,
        })
        settings = load_settings(path)
        assert settings["canvas"]["size"] == (1024, 512)
        assert settings["background"] == (26, 26, 26)
        assert settings["jpeg_quality"] == 95
        assert settings["keywords"][0] == "front"

    def test_nested_merge_keeps_other_fit_keys(self, tmp_path):
        path = _write_settings(tmp_path, {"fit": {"max_scale": 4.0}})
        settings = load_settings(path)
        assert settings["fit"]["max_scale"] == 4.0
        assert settings["fit"]["padding"] == 0.95

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")


class TestValidation:
    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown settings key"):
            normalize_settings({"colour": "#000000"})

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_settings(path)

    @pytest.mark.parametrize("size", [[2048], [0, 10], ["a", "b"], 2048, [True, 2048]])
    def test_bad_canvas_size(self, size):
        with pytest.raises(ValueError, match="canvas.size"):
            normalize_settings({"canvas": {"size": size}})

    def test_canvas_must_be_mapping(self):
        with pytest.raises(ValueError, match="canvas must be a mapping"):
            normalize_settings({"canvas": [2048, 2048]})

    def test_empty_keywords(self):
        with pytest.raises(ValueError, match="keywords"):
            normalize_settings({"keywords": []})

    def test_grid_order_unknown_keyword(self):
        with pytest.raises(ValueError, match="grid_order"):
            normalize_settings({"grid_order": ["front", "top"]})

    def test_grid_order_duplicate_keyword(self):
        with pytest.raises(ValueError, match="grid_order: duplicate keyword 'front'"):
            normalize_settings({"grid_order": ["front", "front", "back"]})

    def test_grid_order_rejects_hero(self):
        with pytest.raises(ValueError, match="hero"):
            normalize_settings({"grid_order": ["hero"]})

    def test_bad_background(self):
        with pytest.raises(ValueError, match="hex color"):
            normalize_settings({"background": "grey"})

    @pytest.mark.parametrize("quality", [0, 101, "high", True])
    def test_bad_quality(self, quality):
        with pytest.raises(ValueError, match="jpeg_quality"):
            normalize_settings({"jpeg_quality": quality})

    def test_bad_padding(self):
        with pytest.raises(ValueError, match="padding"):
            normalize_settings({"fit": {"padding": 1.5}})

    def test_min_above_max(self):
        with pytest.raises(ValueError, match="min_scale"):
            normalize_settings({"fit": {"min_scale": 3.0}})

    def test_unknown_fit_key(self):
        with pytest.raises(ValueError, match="Unknown fit key"):
            normalize_settings({"fit": {"margin": 0.1}})
