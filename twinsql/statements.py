import re
from typing import List

# a statement ends with a semicolon at the end of a line
_END_OF_STATEMENT = re.compile(r";[ \t]*(?:\r?\n|$)")
_COMMENTS = re.compile(r"--[^\n]*|/\*.*?\*/", re.DOTALL)


def _statement(chunk: str) -> str:
    chunk = chunk.strip()
    if not _COMMENTS.sub("", chunk).strip():
        return ""
    return chunk


def split_statements(text: str) -> List[str]:
    """Split a script into statements; blank or comment-only chunks become ''."""
    return [_statement(chunk) for chunk in _END_OF_STATEMENT.split(text)]


def read_statements(filename: str) -> List[str]:
    with open(filename, "r") as fd:
        return split_statements(fd.read())
