import pytest

from mark_counter.cli import build_parser


def test_subcommands_are_discovered():
    parser = build_parser()
    args = parser.parse_args(["annotate", "image.png", "--reduced"])
    assert args.fn is not None
    assert str(args.image) == "image.png"
    assert args.reduced


def test_colors_command(capsys, monkeypatch):
    monkeypatch.setenv("MARK_COUNTER_zoom__step", "0.5")
    args = build_parser().parse_args(["colors"])
    args.fn(args)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "1\tred\tRed"
    assert lines[2] == "3\tlime\tGreen"


def test_version_flag_parses():
    args = build_parser().parse_args(["-V"])
    assert args.is_show_version


def test_unknown_subcommand():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["train"])


@pytest.mark.parametrize("name", ["broken.png", "scan.pdf"])
def test_open_image_reports_unreadable_files(tmp_path, monkeypatch, name):
    pytest.importorskip("tkinter")
    pytest.importorskip("PIL.ImageTk")
    from unittest.mock import Mock

    from mark_counter.cli.annotate import annotator

    path = tmp_path / name
    path.write_bytes(b"not an image")
    showerror = Mock()
    monkeypatch.setattr(annotator.messagebox, "showerror", showerror)
    app = Mock()

    annotator.MarkCounterApp.open_image(app, path)

    showerror.assert_called_once()
    app.session.load_image.assert_not_called()
