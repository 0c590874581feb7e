import os

import pytest

import check_vectors
import vectors
from sha256_cli import sha256_hex
from vectors import (
    DEFAULT_VECTORS_PATH,
    SHARE_DIR,
    VECTORS_FILENAME,
    KnownAnswer,
    VectorFileError,
    find_vectors_file,
    load_vectors,
    parse_vectors,
)


ABC_DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def _write(tmp_path, text, name="vectors.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_bundled_vectors_load():
    answers = load_vectors(DEFAULT_VECTORS_PATH)
    names = [answer.name for answer in answers]
    assert "empty" in names
    assert "abc" in names
    assert all(len(answer.digest_hex) == 64 for answer in answers)


def test_bundled_vectors_all_pass():
    for answer in load_vectors():
        assert sha256_hex(answer.message) == answer.digest_hex, answer.name


def test_vectors_file_beside_module_wins(tmp_path):
    module_dir = tmp_path / "src"
    module_dir.mkdir()
    (module_dir / VECTORS_FILENAME).write_text("vectors: []\n", encoding="utf-8")
    data_dir = tmp_path / "prefix"
    (data_dir / SHARE_DIR).mkdir(parents=True)
    (data_dir / SHARE_DIR / VECTORS_FILENAME).write_text("vectors: []\n", encoding="utf-8")

    found = find_vectors_file(str(module_dir), [str(data_dir)])

    assert found == str(module_dir / VECTORS_FILENAME)


def test_vectors_file_found_in_installed_data_dir(tmp_path):
    """A regular install leaves site-packages without the YAML file."""
    site_packages = tmp_path / "site-packages"
    site_packages.mkdir()
    installed = tmp_path / "prefix" / SHARE_DIR / VECTORS_FILENAME
    installed.parent.mkdir(parents=True)
    with open(DEFAULT_VECTORS_PATH, "rb") as f:
        installed.write_bytes(f.read())

    found = find_vectors_file(
        str(site_packages), [str(tmp_path / "missing"), str(tmp_path / "prefix")]
    )

    assert found == str(installed)
    assert [a.name for a in load_vectors(found)] == [a.name for a in load_vectors()]


def test_vectors_file_missing_everywhere_points_beside_module(tmp_path):
    found = find_vectors_file(str(tmp_path), [str(tmp_path / "prefix")])
    assert found == str(tmp_path / VECTORS_FILENAME)


def test_pyproject_installs_vectors_file_into_share_dir():
    tomllib = pytest.importorskip("tomllib")
    pyproject = os.path.join(os.path.dirname(os.path.abspath(vectors.__file__)), "pyproject.toml")
    if not os.path.exists(pyproject):
        pytest.skip("pyproject.toml only exists in a source checkout")
    with open(pyproject, "rb") as f:
        config = tomllib.load(f)

    data_files = config["tool"]["setuptools"]["data-files"]

    assert data_files[SHARE_DIR.replace(os.sep, "/")] == [VECTORS_FILENAME]


def test_message_sources(tmp_path):
    path = _write(
        tmp_path,
        f"""
vectors:
  - name: text
    message: abc
    digest: {ABC_DIGEST}
  - name: hex
    message_hex: "616263"
    digest: {ABC_DIGEST.upper()}
  - name: repeated
    repeat: {{text: ab, count: 3}}
    digest: {ABC_DIGEST}
""",
    )
    answers = load_vectors(path)
    assert answers == [
        KnownAnswer("text", b"abc", ABC_DIGEST),
        KnownAnswer("hex", b"abc", ABC_DIGEST),
        KnownAnswer("repeated", b"ababab", ABC_DIGEST),
    ]


@pytest.mark.parametrize(
    "document",
    [
        None,
        [],
        {"vectors": "nope"},
        {"vectors": ["not a mapping"]},
        # No message source.
        {"vectors": [{"name": "x", "digest": ABC_DIGEST}]},
        # Two message sources.
        {"vectors": [{"message": "a", "message_hex": "61", "digest": ABC_DIGEST}]},
        {"vectors": [{"message_hex": "zz", "digest": ABC_DIGEST}]},
        {"vectors": [{"message_hex": 12, "digest": ABC_DIGEST}]},
        {"vectors": [{"repeat": {"text": "a", "count": -1}, "digest": ABC_DIGEST}]},
        {"vectors": [{"repeat": {"text": "a", "count": True}, "digest": ABC_DIGEST}]},
        {"vectors": [{"repeat": "a", "digest": ABC_DIGEST}]},
        {"vectors": [{"message": "abc", "digest": ABC_DIGEST[:-1]}]},
        {"vectors": [{"message": "abc", "digest": "g" * 64}]},
        {"vectors": [{"message": "abc"}]},
    ],
)
def test_parse_vectors_rejects_malformed_documents(document):
    with pytest.raises(VectorFileError):
        parse_vectors(document)


def test_vector_file_error_is_value_error():
    assert issubclass(VectorFileError, ValueError)


def test_load_vectors_wraps_yaml_errors(tmp_path):
    path = _write(tmp_path, "vectors: [unclosed\n")
    with pytest.raises(VectorFileError):
        load_vectors(path)


def test_load_vectors_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_vectors(str(tmp_path / "missing.yaml"))


#
# check_vectors CLI
#

def test_check_vectors_all_pass(tmp_path, capsys):
    path = _write(
        tmp_path,
        f"vectors:\n  - name: abc\n    message: abc\n    digest: {ABC_DIGEST}\n",
    )

    assert check_vectors.main(["--vectors", path]) == 0

    out = capsys.readouterr().out
    assert "[PASS] abc" in out
    assert "1/1 vectors passed" in out


def test_check_vectors_reports_failures(tmp_path, capsys):
    wrong = "0" * 64
    path = _write(
        tmp_path,
        f"""
vectors:
  - name: good
    message: abc
    digest: {ABC_DIGEST}
  - name: bad
    message: abd
    digest: "{wrong}"
""",
    )

    assert check_vectors.main(["--vectors", path]) == 1

    out = capsys.readouterr().out
    assert "[PASS] good" in out
    assert "[FAIL] bad" in out
    assert f"Expected: {wrong}" in out
    assert "1/2 vectors passed" in out


def test_check_vectors_missing_file(tmp_path, capsys):
    assert check_vectors.main(["--vectors", str(tmp_path / "missing.yaml")]) == 1
    assert "Error reading vector file" in capsys.readouterr().err


def test_check_vectors_malformed_file(tmp_path, capsys):
    path = _write(tmp_path, "something: else\n")
    assert check_vectors.main(["--vectors", path]) == 1
    assert "Invalid vector file" in capsys.readouterr().err
