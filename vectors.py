"""Known-answer SHA-256 vectors stored as YAML.

The file format is a top-level mapping with a ``vectors`` list::

    vectors:
      - name: abc
        message: abc
        digest: ba7816bf...
      - name: one byte 0xbd
        message_hex: bd
        digest: 68325720...
      - name: one million 'a'
        repeat: {text: a, count: 1000000}
        digest: cdc76e5c...

Hex strings made only of digits must be quoted so YAML keeps them as text.
"""

from __future__ import annotations

import os
import site
import string
import sysconfig
from typing import Any, Dict, List, NamedTuple, Sequence

import yaml


VECTORS_FILENAME = "vectors.yaml"
# Install location of the bundled file, relative to a data directory.
# Must match the data-files entry in pyproject.toml.
SHARE_DIR = os.path.join("share", "sha256-from-primes")


def find_vectors_file(module_dir: str, data_dirs: Sequence[str]) -> str:
    """Locate the bundled vectors file.

    A source checkout or editable install keeps it beside this module; a
    regular install puts it under ``<data dir>/share/sha256-from-primes``.
    Falls back to the path beside the module when neither exists.
    """
    local = os.path.join(module_dir, VECTORS_FILENAME)
    if os.path.exists(local):
        return local
    for data_dir in data_dirs:
        candidate = os.path.join(data_dir, SHARE_DIR, VECTORS_FILENAME)
        if os.path.exists(candidate):
            return candidate
    return local


DEFAULT_VECTORS_PATH = find_vectors_file(
    os.path.dirname(os.path.abspath(__file__)),
    [sysconfig.get_path("data"), site.USER_BASE or ""],
)

_MESSAGE_KEYS = ("message", "message_hex", "repeat")


class VectorFileError(ValueError):
    """Raised when a vector file cannot be parsed into known answers."""


class KnownAnswer(NamedTuple):
    name: str
    message: bytes
    digest_hex: str


def _require_str(entry: Dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise VectorFileError(f"{where}: '{key}' must be a string, got {value!r}")
    return value


def _message_from_entry(entry: Dict[str, Any], where: str) -> bytes:
    present = [key for key in _MESSAGE_KEYS if key in entry]
    if len(present) != 1:
        raise VectorFileError(
            f"{where}: expected exactly one of {', '.join(_MESSAGE_KEYS)}, got {present}"
        )
    key = present[0]

    if key == "message":
        return _require_str(entry, "message", where).encode("utf-8")

    if key == "message_hex":
        try:
            return bytes.fromhex(_require_str(entry, "message_hex", where))
        except ValueError as e:
            raise VectorFileError(f"{where}: invalid message_hex: {e}") from e

    repeat = entry["repeat"]
    if not isinstance(repeat, dict):
        raise VectorFileError(f"{where}: 'repeat' must be a mapping")
    text = _require_str(repeat, "text", where)
    count = repeat.get("count")
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise VectorFileError(f"{where}: 'repeat.count' must be a non-negative integer")
    return text.encode("utf-8") * count


def _digest_from_entry(entry: Dict[str, Any], where: str) -> str:
    digest = _require_str(entry, "digest", where).lower()
    if len(digest) != 64 or any(c not in string.hexdigits for c in digest):
        raise VectorFileError(f"{where}: digest must be 64 hex characters, got {digest!r}")
    return digest


def parse_vectors(document: Any) -> List[KnownAnswer]:
    """Turn a loaded YAML document into a list of known answers."""
    if not isinstance(document, dict) or not isinstance(document.get("vectors"), list):
        raise VectorFileError("vector file must contain a top-level 'vectors' list")

    answers: List[KnownAnswer] = []
    for idx, entry in enumerate(document["vectors"]):
        where = f"vector {idx}"
        if not isinstance(entry, dict):
            raise VectorFileError(f"{where}: entry must be a mapping")
        name = str(entry.get("name", where))
        where = f"vector {idx} ({name})"
        answers.append(
            KnownAnswer(
                name=name,
                message=_message_from_entry(entry, where),
                digest_hex=_digest_from_entry(entry, where),
            )
        )
    return answers


def load_vectors(path: str = DEFAULT_VECTORS_PATH) -> List[KnownAnswer]:
    """Load known answers from the YAML file at `path`.

    Raises `OSError` if the file cannot be read and `VectorFileError` if it
    is not a valid vector file.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise VectorFileError(f"{path}: invalid YAML: {e}") from e
    return parse_vectors(document)
