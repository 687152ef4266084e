"""Path, URL and slug helpers shared by the pipeline stages."""

import hashlib
import re
from collections.abc import Iterable
from pathlib import Path
from unicodedata import category, combining, normalize

# Words as lodash's kebabCase splits them.
_WORD_RE = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+[0-9]*|\b|[^A-Za-z])|[A-Z]?[a-z]+[0-9]*|[A-Z]|[0-9]+")
_APOSTROPHE_RE = re.compile(r"['’]")
_PROTOCOL_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*:)//+")


def slugify(text: str) -> str:
    """Convert text to a kebab-case slug.

    Case-insensitive and separator-insensitive, and idempotent: feeding a
    slug back in returns the same slug.

    Examples:
        >>> slugify("My Tag")
        'my-tag'
        >>> slugify("my_tag")
        'my-tag'
        >>> slugify("fooBar")
        'foo-bar'
        >>> slugify("Café")
        'cafe'
        >>> slugify("Русский язык")
        'русский-язык'

    """
    words = _words(_APOSTROPHE_RE.sub("", _fold_latin(text)))
    if not words:
        return "untitled"

    return "-".join(word.lower() for word in words)


def _fold_latin(text: str) -> str:
    """Strip accents from characters whose base letter is ASCII."""
    folded = []
    for char in normalize("NFC", text):
        base = "".join(c for c in normalize("NFKD", char) if not combining(c))
        folded.append(base if base and base.isascii() else char)
    return "".join(folded)


def _is_word_char(char: str) -> bool:
    return char.isalnum() or category(char).startswith("M")


def _words(text: str) -> list[str]:
    """Split on separators, then split ASCII runs at case and digit changes.

    Runs holding other scripts are kept whole, combining marks included.
    """
    words: list[str] = []
    run: list[str] = []
    for char in f"{text} ":
        if _is_word_char(char):
            run.append(char)
            continue
        if run:
            token = "".join(run)
            words.extend(_WORD_RE.findall(token) if token.isascii() else [token])
            run = []
    return words


def normalize_url(parts: Iterable[str]) -> str:
    """Join URL fragments with single slashes.

    A leading protocol (``https://``) is kept intact, duplicate slashes are
    collapsed and a trailing slash is dropped unless the result is the root.

    Examples:
        >>> normalize_url(["/", "blog", "page/2"])
        '/blog/page/2'
        >>> normalize_url(["https://example.com/", "/blog"])
        'https://example.com/blog'

    """
    joined = "/".join(part for part in parts if part)
    if not joined:
        return "/"

    protocol = ""
    match = _PROTOCOL_RE.match(joined)
    if match:
        protocol = f"{match.group(1)}//"
        joined = joined[match.end() :]

    path = re.sub(r"/{2,}", "/", joined)
    if len(path) > 1:
        path = path.rstrip("/")
    return f"{protocol}{path}"


def docu_hash(value: str) -> str:
    """Deterministic, filesystem-safe name for a data blob key."""
    if value == "/":
        return "index"
    short_hash = hashlib.md5(value.encode("utf-8")).hexdigest()[:10]  # noqa: S324
    return f"{slugify(value)}-{short_hash}"


def aliased_site_path(file_path: Path, site_dir: Path) -> str:
    """Return ``@site/<relative path>`` for a file inside the site."""
    relative = Path(file_path).resolve().relative_to(Path(site_dir).resolve())
    return f"@site/{relative.as_posix()}"
