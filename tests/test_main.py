import json
import logging
from pathlib import Path

import pytest

from dentry import __version__
from dentry.core import config
from dentry.main import main

APP = """\
[Desktop Entry]
Type=Application
Name=Files
Name[de]=Dateien
Exec=nautilus

[Desktop Action new]
Name=New Window
"""


@pytest.fixture
def data_dirs(tmp_path, monkeypatch):
    system = tmp_path / "share" / "applications"
    system.mkdir(parents=True)
    (system / "nautilus.desktop").write_text(APP)
    (system / "hidden.desktop").write_text("[Desktop Entry]\nType=Application\nName=Hidden\nNoDisplay=true\n")
    (system / "broken.desktop").write_text("[broken\n")
    monkeypatch.setenv("XDG_DATA_DIRS", str(tmp_path / "share"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("LC_MESSAGES", raising=False)
    monkeypatch.delenv("LC_ALL", raising=False)
    return system


def test_list(data_dirs, capsys) -> None:
    assert main(["list"]) == 0
    assert capsys.readouterr().out == "nautilus.desktop\tFiles\n"


def test_list_localized_with_hidden(data_dirs, capsys) -> None:
    assert main(["list", "--locale", "de_DE.UTF-8", "--all"]) == 0
    assert capsys.readouterr().out == "hidden.desktop\tHidden\nnautilus.desktop\tDateien\n"


def test_list_locale_from_env(data_dirs, capsys, monkeypatch) -> None:
    monkeypatch.setenv("LC_ALL", "de_AT")
    assert main(["list"]) == 0
    assert capsys.readouterr().out == "nautilus.desktop\tDateien\n"


def test_list_uses_settings(data_dirs, tmp_path, capsys) -> None:
    extra = tmp_path / "extra"
    extra.mkdir()
    (extra / "tool.desktop").write_text("[Desktop Entry]\nType=Application\nName=Tool\nName[de]=Werkzeug\n")
    config.SETTINGS_FILE.parent.mkdir(parents=True)
    config.SETTINGS_FILE.write_text(json.dumps({"locale": "de", "extra_dirs": [str(extra)]}))

    assert main(["list"]) == 0
    assert capsys.readouterr().out == "nautilus.desktop\tDateien\ntool.desktop\tWerkzeug\n"


def test_find(data_dirs, capsys) -> None:
    assert main(["find", "NAUTILUS"]) == 0
    assert capsys.readouterr().out == f"{data_dirs / 'nautilus.desktop'}\n"
    assert main(["find", "nothing"]) == 1


def test_show(data_dirs, capsys) -> None:
    assert main(["show", str(data_dirs / "nautilus.desktop"), "--group", "Desktop Action new"]) == 0
    assert capsys.readouterr().out == "[Desktop Action new]\nName=New Window\n"


def test_show_all_groups(data_dirs, capsys) -> None:
    assert main(["show", str(data_dirs / "nautilus.desktop")]) == 0
    out = capsys.readouterr().out
    assert "[Desktop Entry]\n" in out
    assert "Name[de]=Dateien\n" in out
    assert "[Desktop Action new]\nName=New Window\n" in out


def test_get(data_dirs, capsys) -> None:
    path = str(data_dirs / "nautilus.desktop")
    assert main(["get", path, "Name", "--locale", "de_CH"]) == 0
    assert main(["get", path, "Name"]) == 0
    assert main(["get", path, "Name", "--group", "Desktop Action new"]) == 0
    assert capsys.readouterr().out == "Dateien\nFiles\nNew Window\n"


def test_get_missing_key(data_dirs, capsys) -> None:
    assert main(["get", str(data_dirs / "nautilus.desktop"), "Comment"]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["get", "broken.desktop", "Name"], "invalid line 1"),
        (["get", "missing.desktop", "Name"], "cannot read"),
        (["get", "nautilus.desktop", "Name", "--locale", "en-US"], "invalid locale"),
    ],
)
def test_errors_exit_with_status_2(data_dirs, capsys, argv, message) -> None:
    argv = [str(data_dirs / arg) if arg.endswith(".desktop") else arg for arg in argv]
    assert main(argv) == 2
    assert message in capsys.readouterr().err


def test_version(capsys) -> None:
    with pytest.raises(SystemExit):
        main(["--version"])
    assert __version__ in capsys.readouterr().out


def test_config_set_get_reset(capsys) -> None:
    assert main(["config", "set", "locale", "de_DE"]) == 0
    assert main(["config", "set", "include_hidden", "true"]) == 0
    assert main(["config", "set", "extra_dirs", '["/opt/apps"]']) == 0
    assert main(["config", "set", "log_level", "info"]) == 0

    saved = json.loads(config.SETTINGS_FILE.read_text())
    assert saved == {
        "locale": "de_DE",
        "extra_dirs": ["/opt/apps"],
        "include_hidden": True,
        "log_level": "INFO",
    }

    assert main(["config", "get", "locale"]) == 0
    assert capsys.readouterr().out == '"de_DE"\n'

    assert main(["config", "reset"]) == 0
    assert main(["config", "get"]) == 0
    assert capsys.readouterr().out == (
        'locale=""\nextra_dirs=[]\ninclude_hidden=false\nlog_level="WARNING"\n'
    )


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["config", "set", "log_level", "verbose"], "unknown log_level"),
        (["config", "set", "extra_dirs", "/opt/apps"], "extra_dirs must be a list"),
        (["config", "set", "theme", "dark"], "unknown setting"),
        (["config", "set", "locale"], "needs KEY and VALUE"),
        (["config", "get", "theme"], "unknown setting"),
    ],
)
def test_config_errors(capsys, argv, message) -> None:
    assert main(argv) == 2
    assert message in capsys.readouterr().err
    assert not config.SETTINGS_FILE.exists()


def test_bad_settings_do_not_break_commands(data_dirs, capsys, monkeypatch) -> None:
    levels = []
    monkeypatch.setattr("dentry.main.setup_logging", levels.append)
    config.SETTINGS_FILE.parent.mkdir(parents=True)
    config.SETTINGS_FILE.write_text(
        json.dumps({"log_level": "debug", "locale": 5, "extra_dirs": "/opt/apps"})
    )

    assert main(["list"]) == 0
    assert capsys.readouterr().out == "nautilus.desktop\tFiles\n"
    assert levels == ["DEBUG"]
    assert levels[0] in logging.getLevelNamesMapping()
