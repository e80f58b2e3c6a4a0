import pytest
from pygments.styles import get_style_by_name

from mdpygments.renderer import new_renderer
from mdpygments.settings import RendererSettings, load_settings


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "mdpygments.yaml"
    path.write_text("""style: friendly
autodetect: false
embed_css: true
formatter_options:
  classprefix: "hl-"
""")
    return path


def test_defaults_without_file(tmp_path):
    settings = load_settings(tmp_path / "missing.yaml", environ={})
    assert settings == RendererSettings()


def test_load_yaml(config_file):
    settings = load_settings(config_file, environ={})
    assert settings.style == "friendly"
    assert settings.autodetect is False
    assert settings.embed_css is True
    assert settings.formatter_options == {"classprefix": "hl-"}


def test_env_overrides_yaml(config_file):
    settings = load_settings(config_file, environ={
        "MDPYGMENTS_STYLE": "emacs",
        "MDPYGMENTS_AUTODETECT": "true",
    })
    assert settings.style == "emacs"
    assert settings.autodetect is True
    assert settings.embed_css is True


def test_config_path_from_env(config_file):
    settings = load_settings(environ={"MDPYGMENTS_CONFIG": str(config_file)})
    assert settings.style == "friendly"


def test_malformed_yaml(tmp_path, caplog):
    path = tmp_path / "bad.yaml"
    path.write_text("[bad yaml\n")
    settings = load_settings(path, environ={})
    assert settings == RendererSettings()
    assert "Failed to parse" in caplog.text


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "invalid.yaml"
    path.write_text("autodetect: maybe\n")
    assert load_settings(path, environ={}) == RendererSettings()


def test_to_options(config_file):
    renderer = new_renderer(*load_settings(config_file, environ={}).to_options())
    assert renderer.style is get_style_by_name("friendly")
    assert renderer.config.autodetect is False
    assert renderer.config.embed_css is True
    assert renderer.formatter.classprefix == "hl-"


def test_invalid_env_value_keeps_yaml_settings(config_file, caplog):
    settings = load_settings(config_file, environ={
        "MDPYGMENTS_AUTODETECT": "maybe",
        "MDPYGMENTS_EMBED_CSS": "false",
    })
    assert settings.style == "friendly"
    assert settings.autodetect is False
    assert settings.embed_css is False
    assert "autodetect" in caplog.text


def test_invalid_yaml_value_keeps_other_keys(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text("style: friendly\nautodetect: maybe\n")
    settings = load_settings(path, environ={})
    assert settings.style == "friendly"
    assert settings.autodetect is True


def test_style_in_formatter_options(tmp_path):
    path = tmp_path / "style.yaml"
    path.write_text("style: friendly\nformatter_options:\n  style: emacs\n")
    renderer = new_renderer(*load_settings(path, environ={}).to_options())
    assert renderer.formatter.style is get_style_by_name("friendly")
