"""Filesystem helpers for the conversion pipeline.

File discovery, exclusion filtering, comment stripping, output path
mapping and writing. These are plain I/O primitives; all conversion
decisions live in the pipeline modules.
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple, Union

from .dialects.models import SourceFile

if TYPE_CHECKING:
    from .config import EdgeCase

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".js"
DEFAULT_FILE_ENCODING = "utf-8"

# A '/' following one of these starts a regex literal, not a division
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORDS = frozenset({
    "return", "typeof", "case", "in", "of", "delete", "void", "throw",
    "new", "instanceof", "else", "do", "yield", "await",
})


# ── Discovery ────────────────────────────────────────────────────────


def discover_files(inputs: Sequence[str]) -> List[Tuple[str, str]]:
    """Return ``(path, root)`` for every file under the given inputs.

    Directories are walked recursively in sorted order. ``root`` is the
    input the file was found under, used to mirror the structure in the
    output tree.

    Raises:
        FileNotFoundError: If an input does not exist
        ValueError: If an entry is neither a file nor a directory
    """
    files: List[Tuple[str, str]] = []
    for input_path in inputs:
        root = os.path.abspath(input_path)
        for path in _walk(root):
            files.append((path, root))
    return files


def _walk(path: str) -> Iterator[str]:
    if not os.path.exists(path):
        raise FileNotFoundError(f'Invalid file path "{path}".')

    if os.path.isfile(path):
        yield path
    elif os.path.isdir(path):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))
    else:
        raise ValueError(f'"{path}" is neither a file nor a directory.')


def is_excluded(path: str, excludes: Sequence[str]) -> bool:
    """Check a path against the exclude patterns.

    A pattern containing a dot must equal the file name; any other
    pattern matches anywhere in the path. Empty patterns are ignored.
    """
    file_name = os.path.basename(path)
    for pattern in excludes:
        if not pattern:
            continue
        if "." in pattern:
            if file_name == pattern:
                return True
        elif pattern in path:
            return True
    return False


# ── Reading ──────────────────────────────────────────────────────────


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments from JavaScript source.

    String, template and regex literal contents are preserved, as are the
    newlines ending line comments.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    # Last token before the cursor: a punctuator character or a whole word
    last_token = ""

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if c in "'\"`":
            end = _skip_quoted(text, i, c)
            out.append(text[i:end])
            last_token = c
            i = end
            continue

        if c == "/" and nxt == "/":
            while i < n and text[i] != "\n":
                i += 1
            continue

        if c == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue

        if c == "/" and _starts_regex(last_token):
            end = _skip_regex(text, i)
            out.append(text[i:end])
            last_token = "/"
            i = end
            continue

        if c.isalnum() or c in "_$":
            end = i
            while end < n and (text[end].isalnum() or text[end] in "_$"):
                end += 1
            last_token = text[i:end]
            out.append(last_token)
            i = end
            continue

        out.append(c)
        if not c.isspace():
            last_token = c
        i += 1

    return "".join(out)


def _starts_regex(last_token: str) -> bool:
    """Whether a '/' after this token opens a regex literal."""
    return (
        not last_token
        or last_token in _REGEX_PRECEDERS
        or last_token in _REGEX_KEYWORDS
    )


def _skip_quoted(text: str, start: int, quote: str) -> int:
    i = start + 1
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1
        if c == "\n" and quote != "`":
            return i
        i += 1
    return len(text)


def _skip_regex(text: str, start: int) -> int:
    i = start + 1
    in_class = False
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == "\n":
            return i
        if c == "[":
            in_class = True
        elif c == "]":
            in_class = False
        elif c == "/" and not in_class:
            return i + 1
        i += 1
    return len(text)


def read_source(path: str, root: str) -> SourceFile:
    """Load one discovered file.

    JavaScript sources are decoded and comment-stripped. Any other file is
    kept as raw bytes so it can be copied verbatim.
    """
    file_name = os.path.basename(path)
    base_name, extension = os.path.splitext(file_name)

    if extension != SOURCE_EXTENSION:
        return SourceFile(
            path=path,
            root=root,
            text="",
            base_name=base_name,
            extension=extension,
            raw=Path(path).read_bytes(),
        )

    text = Path(path).read_text(encoding=DEFAULT_FILE_ENCODING, errors="replace")
    return SourceFile(
        path=path,
        root=root,
        text=strip_comments(text),
        base_name=base_name,
        extension=extension,
    )


# ── Writing ──────────────────────────────────────────────────────────


def output_path_for(
    source: SourceFile,
    output_root: str,
    edge_case: Optional["EdgeCase"] = None,
) -> str:
    """Destination of a file under the output root.

    Mirrors the file's location relative to its input root; an input
    given as a single file lands directly under the output root.
    """
    if edge_case is not None and edge_case.output_override is not None:
        return os.path.join(output_root, edge_case.output_override)

    if source.path == source.root:
        relative = os.path.basename(source.path)
    else:
        relative = os.path.relpath(source.path, source.root)
    return os.path.join(output_root, relative)


def write_output(path: str, content: Union[str, bytes]) -> None:
    """Write a file, creating its parent directories first.

    Text is encoded as UTF-8; bytes are written unchanged.
    """
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    if isinstance(content, bytes):
        with open(path, "wb") as f:
            f.write(content)
        return

    with open(path, "w", encoding=DEFAULT_FILE_ENCODING) as f:
        f.write(content)
