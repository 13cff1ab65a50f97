import pytest

from githygiene_cli.config import DEFAULT_CONFIG, load_config
from githygiene_cli.utils import ScanError


def test_defaults_without_file(tmp_path):
    cfg = load_config(str(tmp_path))
    assert cfg.marker == "Cargo.toml"
    assert cfg.vcs == "git"
    assert cfg.workers == 1
    assert cfg.timeout is None
    assert cfg.record_not_a_repository is False
    assert cfg.exclude == []


def test_file_in_scan_root_overrides_defaults(tmp_path):
    (tmp_path / ".githygiene.yml").write_text(
        "marker: package.json\nworkers: 8\nexclude:\n  - node_modules\n", encoding="utf-8"
    )
    cfg = load_config(str(tmp_path))
    assert cfg.marker == "package.json"
    assert cfg.workers == 8
    assert cfg.exclude == ["node_modules"]
    assert DEFAULT_CONFIG["exclude"] == []


def test_malformed_file_warns_and_uses_defaults(tmp_path, capsys):
    (tmp_path / ".githygiene.yml").write_text("marker: [unclosed\n", encoding="utf-8")
    cfg = load_config(str(tmp_path))
    assert cfg.marker == "Cargo.toml"
    assert "[warn]" in capsys.readouterr().out


def test_unknown_key_warns(tmp_path, capsys):
    (tmp_path / ".githygiene.yml").write_text("colour: blue\n", encoding="utf-8")
    load_config(str(tmp_path))
    assert "colour" in capsys.readouterr().out


def test_explicit_missing_file_is_fatal(tmp_path):
    with pytest.raises(ScanError):
        load_config(str(tmp_path), str(tmp_path / "nope.yml"))


@pytest.mark.parametrize(
    "body,key",
    [
        ("workers: many\n", "workers"),
        ("workers: 0\n", "workers"),
        ("timeout: '5'\n", "timeout"),
        ("timeout: -1\n", "timeout"),
        ("marker: 3\n", "marker"),
        ("record_not_a_repository: sometimes\n", "record_not_a_repository"),
        ("exclude: {target: yes}\n", "exclude"),
    ],
)
def test_invalid_value_warns_and_keeps_default(tmp_path, capsys, body, key):
    (tmp_path / ".githygiene.yml").write_text(body, encoding="utf-8")
    cfg = load_config(str(tmp_path))
    assert cfg.data[key] == DEFAULT_CONFIG[key]
    out = capsys.readouterr().out
    assert "[warn]" in out
    assert key in out


def test_valid_values_survive_alongside_invalid_ones(tmp_path):
    (tmp_path / ".githygiene.yml").write_text("workers: many\ntimeout: 2\n", encoding="utf-8")
    cfg = load_config(str(tmp_path))
    assert cfg.workers == 1
    assert cfg.timeout == 2.0


def test_single_exclude_string_becomes_list(tmp_path):
    (tmp_path / ".githygiene.yml").write_text("exclude: target/\n", encoding="utf-8")
    assert load_config(str(tmp_path)).exclude == ["target/"]


def test_non_utf8_file_warns_and_uses_defaults(tmp_path, capsys):
    (tmp_path / ".githygiene.yml").write_bytes(b"marker: \xff\xfe\n")
    cfg = load_config(str(tmp_path))
    assert cfg.marker == "Cargo.toml"
    assert "[warn]" in capsys.readouterr().out
