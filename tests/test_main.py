import xml.etree.ElementTree as ET

import pytest

from config.render_config import ConfigManager, RenderConfig
from main import main

PROGRAM = """ShutterOpen
MSEG (X,Y),0,0
LINE (X,Y),2,0
ENDS (X,Y)
"""


@pytest.fixture
def prg_file(tmp_path):
    path = tmp_path / "program.prg"
    path.write_text(PROGRAM, encoding="utf-8")
    return path


class TestHeadlessRender:
    def test_render_to_file(self, prg_file, tmp_path):
        out = tmp_path / "out.svg"
        assert main([str(prg_file), "--svg", str(out), "--width", "400",
                     "--line-thickness", "0.2"]) == 0

        root = ET.fromstring(out.read_text(encoding="utf-8"))
        assert root.get("width") == "400"
        assert root.get("height") == "600"
        path = root.find("{http://www.w3.org/2000/svg}g/{http://www.w3.org/2000/svg}path")
        assert path.get("d") == "M 0 0 L 2 0"
        assert path.get("stroke-width") == "0.2"

    def test_config_file(self, prg_file, tmp_path):
        config_path = tmp_path / "render.json"
        ConfigManager.save_config(RenderConfig(name="x", width=123, height=45), str(config_path))
        out = tmp_path / "out.svg"
        assert main([str(prg_file), "--svg", str(out), "--config", str(config_path)]) == 0
        root = ET.fromstring(out.read_text(encoding="utf-8"))
        assert (root.get("width"), root.get("height")) == ("123", "45")

    def test_svg_requires_input(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--svg", str(tmp_path / "out.svg")])

    def test_invalid_override(self, prg_file, tmp_path):
        with pytest.raises(SystemExit):
            main([str(prg_file), "--svg", str(tmp_path / "out.svg"), "--width", "-1"])
