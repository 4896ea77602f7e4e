"""Tests for configuration loading and sandboxing."""

from pathlib import Path

from thoth.config import ThothConfig, get_config_path, get_init_script_path, load_config


class TestThothConfig:
    def test_defaults(self):
        c = ThothConfig()
        assert c.code_theme == "nord"
        assert c.width is None
        assert c.strikethrough is True
        assert c.show_scrollbar is True
        assert c.scroll_step == 5


class TestConfigPaths:
    def test_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "thoth"
        assert get_init_script_path() == tmp_path / "thoth" / "init.py"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_config_path() == Path.home() / ".config" / "thoth"


class TestLoadConfig:
    def test_no_config_file(self, monkeypatch, tmp_config_dir):
        """When no init.py exists, should return defaults with no error."""
        monkeypatch.setattr("thoth.config.get_init_script_path", lambda: tmp_config_dir / "init.py")
        config, error = load_config()
        assert error is None
        assert config.code_theme == "nord"

    def test_valid_config(self, monkeypatch, tmp_config_dir):
        init_file = tmp_config_dir / "init.py"
        init_file.write_text(
            'config.code_theme = "monokai"\n'
            'config.width = 72\n'
            'config.strikethrough = False\n'
        )
        monkeypatch.setattr("thoth.config.get_init_script_path", lambda: init_file)
        config, error = load_config()
        assert error is None
        assert config.code_theme == "monokai"
        assert config.width == 72
        assert config.strikethrough is False

    def test_sandbox_blocks_import(self, monkeypatch, tmp_config_dir):
        """The sandbox should prevent __import__ calls."""
        init_file = tmp_config_dir / "init.py"
        init_file.write_text("import os\n")
        monkeypatch.setattr("thoth.config.get_init_script_path", lambda: init_file)
        config, error = load_config()
        assert error is not None
        assert "Error" in error

    def test_sandbox_blocks_open(self, monkeypatch, tmp_config_dir):
        init_file = tmp_config_dir / "init.py"
        init_file.write_text("f = open('/etc/passwd')\n")
        monkeypatch.setattr("thoth.config.get_init_script_path", lambda: init_file)
        config, error = load_config()
        assert error is not None

    def test_sandbox_allows_basic_types(self, monkeypatch, tmp_config_dir):
        """Basic Python types should work in the sandbox."""
        init_file = tmp_config_dir / "init.py"
        init_file.write_text(
            'config.code_theme = str("monokai")\n'
            'config.scroll_step = len(list(range(3)))\n'
            'config.width = max(20, 10)\n'
        )
        monkeypatch.setattr("thoth.config.get_init_script_path", lambda: init_file)
        config, error = load_config()
        assert error is None
        assert config.code_theme == "monokai"
        assert config.scroll_step == 3
        assert config.width == 20

    def test_syntax_error_in_config(self, monkeypatch, tmp_config_dir):
        init_file = tmp_config_dir / "init.py"
        init_file.write_text("def f(:\n")
        monkeypatch.setattr("thoth.config.get_init_script_path", lambda: init_file)
        config, error = load_config()
        assert error is not None
        assert "SyntaxError" in error
        # Defaults survive a broken config
        assert config.code_theme == "nord"
