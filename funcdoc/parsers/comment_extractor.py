# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Locate and tokenize the structured comment block above a function.

A block looks like::

    # Free text description,
    # possibly over several lines.
    #
    # @param {string} name A name
    # @param {object} obj
    # @ {string} label
    # @ {object} data
    # @   {number} x
    # @param {enum} mode
    #   ["fast", 1]
    #   ["slow", 2]
    # @returns {boolean} Whether it worked
    # @charge 3
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..exceptions import DefinitionError


_TYPE = r"\{\s*(?P<nullable>\?)?\s*(?P<type>[^}\s]*)\s*\}"

PARAM_RE = re.compile(rf"^@param\s+{_TYPE}\s+(?P<name>\S+)(?:\s+(?P<text>.*))?$")
RETURNS_RE = re.compile(rf"^@returns?\s+{_TYPE}(?:\s+(?P<text>.*))?$")
SCHEMA_RE = re.compile(rf"^@(?P<indent>\s+){_TYPE}\s+(?P<name>\S+)(?:\s+(?P<text>.*))?$")
CHARGE_RE = re.compile(r"^@charge\s+(?P<value>\S+)$")
TAG_RE = re.compile(r"^@(?P<tag>\S*)")

_CODING_RE = re.compile(r"^[ \t\f]*#.*?coding[:=][ \t]*[-\w.]+")


@dataclass
class CommentLine:
    text: str
    lineno: int  # 1-based


@dataclass
class Declaration:
    """One ``@`` line plus the plain lines that continue it."""
    kind: str  # "param", "returns", "schema" or "charge"
    lineno: int
    type_name: Optional[str] = None
    nullable: bool = False
    name: Optional[str] = None
    text: str = ""
    indent: int = 0
    extra: List[str] = field(default_factory=list)


@dataclass
class CommentBlock:
    description: str = ""
    declarations: List[Declaration] = field(default_factory=list)


def extract_comment_lines(source_lines: Sequence[str], def_lineno: int) -> List[CommentLine]:
    """Collect the contiguous ``#`` lines directly above line ``def_lineno`` (1-based)."""
    collected: List[CommentLine] = []
    idx = def_lineno - 2
    while idx >= 0:
        raw = source_lines[idx].strip()
        if not raw.startswith("#"):
            break
        if raw.startswith("#!") or (idx < 2 and _CODING_RE.match(raw)):
            break
        text = raw[1:]
        if text.startswith(" "):
            text = text[1:]
        collected.append(CommentLine(text=text.rstrip(), lineno=idx + 1))
        idx -= 1
    collected.reverse()
    return collected


def _parse_declaration(pathname: str, line: CommentLine) -> Declaration:
    stripped = line.text.strip()

    match = SCHEMA_RE.match(stripped)
    if match:
        return Declaration(
            kind="schema",
            lineno=line.lineno,
            type_name=match.group("type"),
            nullable=bool(match.group("nullable")),
            name=match.group("name"),
            text=(match.group("text") or "").strip(),
            indent=len(match.group("indent").expandtabs(4)),
        )

    tag = TAG_RE.match(stripped).group("tag")
    if tag == "param":
        match = PARAM_RE.match(stripped)
        if not match:
            raise DefinitionError(
                pathname, f"Malformed @param line, expected '@param {{type}} name description': '{stripped}'",
                line.lineno,
            )
        return Declaration(
            kind="param",
            lineno=line.lineno,
            type_name=match.group("type"),
            nullable=bool(match.group("nullable")),
            name=match.group("name"),
            text=(match.group("text") or "").strip(),
        )

    if tag in ("returns", "return"):
        match = RETURNS_RE.match(stripped)
        if not match:
            raise DefinitionError(
                pathname, f"Malformed @returns line, expected '@returns {{type}} description': '{stripped}'",
                line.lineno,
            )
        return Declaration(
            kind="returns",
            lineno=line.lineno,
            type_name=match.group("type"),
            nullable=bool(match.group("nullable")),
            text=(match.group("text") or "").strip(),
        )

    if tag == "charge":
        match = CHARGE_RE.match(stripped)
        if not match:
            raise DefinitionError(pathname, f"Malformed @charge line: '{stripped}'", line.lineno)
        return Declaration(kind="charge", lineno=line.lineno, text=match.group("value"))

    if not tag:
        raise DefinitionError(
            pathname, f"Malformed schema line, expected '@ {{type}} name description': '{stripped}'",
            line.lineno,
        )
    raise DefinitionError(pathname, f"Unknown tag '@{tag}'", line.lineno)


def tokenize_comment(pathname: str, lines: Sequence[CommentLine]) -> CommentBlock:
    """Split comment lines into the leading description and the declarations.

    The description is kept verbatim except for the one blank line that
    separates it from the first declaration.
    """
    block = CommentBlock()
    description_lines: List[str] = []

    for line in lines:
        if line.text.strip().startswith("@"):
            if not block.declarations and description_lines and not description_lines[-1].strip():
                description_lines.pop()
            block.declarations.append(_parse_declaration(pathname, line))
        elif not block.declarations:
            description_lines.append(line.text)
        elif line.text.strip():
            block.declarations[-1].extra.append(line.text.strip())

    block.description = "\n".join(description_lines)
    return block
