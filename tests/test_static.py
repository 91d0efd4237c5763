from machiya import config
from machiya.renderers.static import save_scene_svg


class TestSaveSceneSvg:
    def test_default_path_under_results_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "RESULTS_DIR", tmp_path / "results")
        path = save_scene_svg("<svg/>")
        assert path.parent == tmp_path / "results"
        assert path.name.startswith("machiya__") and path.suffix == ".svg"
        assert path.read_text(encoding="utf-8") == "<svg/>"

    def test_explicit_path(self, tmp_path):
        target = tmp_path / "nested" / "art.svg"
        assert save_scene_svg("<svg/>", target) == target
        assert target.exists()
