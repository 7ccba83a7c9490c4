import logging
import re
from enum import Enum
from typing import Iterable, Optional

from mo_sql_parsing import parse

LOGGER = logging.getLogger(__name__)

WRITE_KEYWORDS = frozenset(
    [
        "insert",
        "update",
        "delete",
        "replace",
        "merge",
        "upsert",
        "create",
        "drop",
        "alter",
        "truncate",
        "rename",
        "grant",
        "revoke",
        "comment",
        "set",
        "use",
        "begin",
        "start",
        "commit",
        "rollback",
        "savepoint",
        "release",
        "lock",
        "unlock",
        "load",
    ]
)

# keys of a mo_sql_parsing tree that mean the statement changes something
PARSED_WRITE_KEYS = frozenset(
    ["insert", "update", "delete", "merge", "truncate", "replace", "set", "use"]
)
# any "create ...", "drop ..." or "alter ..." key
PARSED_WRITE_PREFIXES = ("create", "drop", "alter")

_LEADING_NOISE = re.compile(r"^(?:\s+|--[^\n]*(?:\n|$)|/\*.*?\*/)+", re.DOTALL)
_FIRST_WORD = re.compile(r"[A-Za-z_]+")


class StatementKind(str, Enum):
    READ = "read"
    WRITE = "write"


class KeywordClassifier:
    """
    Lexical classification on the first keyword of the statement.
    Anything that does not start with a write keyword is a read.
    """

    def __init__(self, write_keywords: Optional[Iterable[str]] = None):
        keywords = WRITE_KEYWORDS if write_keywords is None else write_keywords
        self.write_keywords = frozenset(k.lower() for k in keywords)

    def first_keyword(self, statement: str) -> str:
        body = _LEADING_NOISE.sub("", statement, count=1)
        match = _FIRST_WORD.match(body)
        return match.group(0).lower() if match else ""

    def classify(self, statement: str) -> StatementKind:
        if self.first_keyword(statement) in self.write_keywords:
            return StatementKind.WRITE
        return StatementKind.READ


class ParsedClassifier:
    """
    Classification from the mo_sql_parsing tree. Statements the parser does
    not understand are handed to the fallback classifier.
    """

    def __init__(self, fallback=None):
        self.fallback = fallback or KeywordClassifier()

    def classify(self, statement: str) -> StatementKind:
        try:
            tree = parse(statement)
        except Exception as err:
            LOGGER.debug("unparsed statement, using fallback: %s", err)
            return self.fallback.classify(statement)
        if isinstance(tree, dict) and any(self.is_write_key(key) for key in tree):
            return StatementKind.WRITE
        return StatementKind.READ

    def is_write_key(self, key: str) -> bool:
        key = key.lower()
        return key in PARSED_WRITE_KEYS or key.startswith(PARSED_WRITE_PREFIXES)
