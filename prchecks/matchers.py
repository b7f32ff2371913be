"""Pattern matchers shared by the checkers."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable
from typing import Optional, Union

from prchecks.config import DEFAULT_TEST_FILE_PATTERNS, PRIVATE_CLASS_MODIFIER
from prchecks.models import FileDiff

PatternLike = Union[str, re.Pattern]

# Captures (class name, rest of the declaration up to the opening brace)
ANY_CLASS_DETECTOR = re.compile(r"class ([A-Z]\w+)\s*(.*?)\s*{")

_JAVA_SUPERCLASS = re.compile(r"extends ([A-Z]\w+)")
_KOTLIN_SUPERTYPE = re.compile(r"\s*:\s*([A-Z]\w+)")
_EXTENDS_EXTENSIONS = frozenset({".java", ".groovy", ".scala", ".ts", ".js"})

# Start of the statement a class keyword belongs to
_STATEMENT_BOUNDARY = re.compile(r"[{};]")
_ANNOTATION = re.compile(r"@[\w.]+(?:\([^)]*\))?")
_TYPE_KEYWORD = re.compile(r"\b(class|object|interface|enum)\b")
# Statements that open a function body: `fun f() {`, `void run(int a) throws E {`
_FUNCTION_HEADER = re.compile(r"\bfun\b|\)\s*(?::\s*[\w<>?,. ]+|throws\s+[\w., ]+)?\s*$")


class ConfigError(ValueError):
    """Raised for invalid check configuration (bad regex, unknown key, ...)."""


def compile_patterns(
    patterns: Optional[Iterable[PatternLike]], flags: int = 0
) -> tuple[re.Pattern, ...]:
    """Compile regex strings once; already compiled patterns pass through."""
    compiled: list[re.Pattern] = []
    for pattern in patterns or ():
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern, flags))
        except (re.error, TypeError) as e:
            raise ConfigError(f"Invalid regex {pattern!r}: {e}") from e
    return tuple(compiled)


def matches_any(patterns: Iterable[re.Pattern], text: Optional[str]) -> bool:
    """True iff any pattern is found somewhere in the text."""
    if text is None:
        return False
    return any(p.search(text) for p in patterns)


# ── Test Files ───────────────────────────────────────────────────────────────

_DEFAULT_TEST_FILE_REGEXES = compile_patterns(DEFAULT_TEST_FILE_PATTERNS)


def is_test_file(
    path: str, patterns: Optional[Iterable[re.Pattern]] = None
) -> bool:
    """Check if a file path is a test source."""
    regexes = _DEFAULT_TEST_FILE_REGEXES if patterns is None else patterns
    return matches_any(regexes, path)


def selector_for_paths(
    include: Iterable[re.Pattern] = (), exclude: Iterable[re.Pattern] = ()
) -> Callable[[FileDiff], bool]:
    """Build a file selector from include/exclude path regexes."""
    include = tuple(include)
    exclude = tuple(exclude)

    def select(file_diff: FileDiff) -> bool:
        if include and not matches_any(include, file_diff.path):
            return False
        return not matches_any(exclude, file_diff.path)

    return select


# ── Class Declarations ───────────────────────────────────────────────────────


def find_classes(text: str) -> list[tuple[str, str]]:
    """Return every (class name, declaration tail) captured in the text."""
    return [(m.group(1), m.group(2)) for m in ANY_CLASS_DETECTOR.finditer(text)]


def _last_statement(text: str) -> tuple[str, Optional[re.Match]]:
    """Split off the statement that ends the text, with the boundary before it."""
    boundaries = list(_STATEMENT_BOUNDARY.finditer(text))
    if not boundaries:
        # Diff lines keep their +/- prefix
        return text.lstrip("+-"), None
    return text[boundaries[-1].end():], boundaries[-1]


def _is_private(prefix: str) -> bool:
    words = re.findall(r"\w+", _ANNOTATION.sub(" ", prefix))
    return PRIVATE_CLASS_MODIFIER in words


def _opens_function_body(header: str) -> bool:
    header = _ANNOTATION.sub(" ", header)
    if _TYPE_KEYWORD.search(header):
        return False
    return bool(_FUNCTION_HEADER.search(header))


def find_non_private_classes(text: str) -> list[tuple[str, str]]:
    """Like find_classes, minus private and local class declarations.

    A declaration is private when `private` appears among the words between
    the previous statement boundary and `class`; annotations such as
    `@Deprecated` or `@Suppress("x")` are ignored. It is local when it sits
    right after a `{` that opens a function body on the same line
    (`fun f() { class Local {`). Any other modifier (`expect`, `actual`,
    `internal`...) keeps the class.
    """
    found: list[tuple[str, str]] = []
    for match in ANY_CLASS_DETECTOR.finditer(text):
        prefix, boundary = _last_statement(text[: match.start()])
        if _is_private(prefix):
            continue
        if boundary is not None and boundary.group() == "{":
            header, _ = _last_statement(text[: boundary.start()])
            if _opens_function_body(header):
                continue
        found.append((match.group(1), match.group(2)))
    return found


def parent_type(declaration_tail: str, file_path: str) -> Optional[str]:
    """Extract the parent type name from the tail of a class declaration.

    Java-family files use `extends Parent`, others the colon syntax
    (`: Parent`). When the file's own syntax finds nothing, the other form
    is tried so a mis-named file still resolves its parent.
    """
    if os.path.splitext(file_path)[1] in _EXTENDS_EXTENSIONS:
        detectors = (_JAVA_SUPERCLASS, _KOTLIN_SUPERTYPE)
    else:
        detectors = (_KOTLIN_SUPERTYPE, _JAVA_SUPERCLASS)
    for detector in detectors:
        match = detector.search(declaration_tail)
        if match:
            return match.group(1)
    return None


def is_class_exception(
    class_name: str,
    declaration_tail: str,
    file_path: str,
    classes_exceptions: Iterable[re.Pattern],
    subclasses_exceptions: Iterable[re.Pattern],
) -> bool:
    """True if the class or its parent type is excluded from the check."""
    if matches_any(classes_exceptions, class_name):
        return True
    return matches_any(subclasses_exceptions, parent_type(declaration_tail, file_path))
