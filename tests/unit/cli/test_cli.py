from pathlib import Path

import pytest

from notesite_kit.cli import EXIT_LINK_ERRORS, EXIT_OK, EXIT_USAGE, main


@pytest.fixture
def notes(tmp_path: Path) -> Path:
    notes_dir = tmp_path / "notes"
    notes_dir.mkdir()
    (notes_dir / "oop.md").write_text("# Encapsulation\nSee [drift](#resource-drift).\n")
    (notes_dir / "cloud.md").write_text("# Resource Drift\nState diverges.\n")
    return notes_dir


def test_build_writes_site_and_exits_zero(notes: Path, tmp_path: Path, capsys) -> None:
    out = tmp_path / "site"

    code = main(["build", str(notes), str(out)])

    assert code == EXIT_OK
    assert (out / "index.html").is_file()
    assert (out / "pages" / "encapsulation.html").is_file()
    assert (out / "pages" / "resource-drift.html").is_file()
    assert "Built 4 pages" in capsys.readouterr().out


def test_dangling_link_exits_nonzero(notes: Path, tmp_path: Path, capsys) -> None:
    (notes / "broken.md").write_text("# Broken\n[nowhere](#nonexistent-slug)\n")
    out = tmp_path / "site"

    code = main(["build", str(notes), str(out)])

    assert code == EXIT_LINK_ERRORS
    err = capsys.readouterr().err
    assert "nonexistent-slug" in err
    assert "Broken" in err
    assert not out.exists()


def test_cli_flags_override_config(notes: Path, tmp_path: Path) -> None:
    config = tmp_path / "notesite.yaml"
    config.write_text("site_title: From File\n")
    out = tmp_path / "site"

    code = main(["build", str(notes), str(out), "--config", str(config), "--title", "From Flag"])

    assert code == EXIT_OK
    assert "<title>From Flag</title>" in (out / "index.html").read_text()


def test_invalid_config_exits_with_usage_error(notes: Path, tmp_path: Path, capsys) -> None:
    code = main(["build", str(notes), str(tmp_path / "site"), "--threshold", "2"])

    assert code == EXIT_USAGE
    assert "duplicate_threshold" in capsys.readouterr().err


def test_missing_input_directory_exits_with_usage_error(tmp_path: Path, capsys) -> None:
    code = main(["build", str(tmp_path / "nope"), str(tmp_path / "site")])

    assert code == EXIT_USAGE
    assert "not found" in capsys.readouterr().err


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == EXIT_USAGE
