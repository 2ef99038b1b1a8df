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

"""Build immutable Definitions from a source file's comment block and signature."""

from __future__ import annotations

import ast
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .comment_extractor import CommentBlock, Declaration, extract_comment_lines, tokenize_comment
from .literal_reader import LiteralError, read_literal, read_literal_text
from ..config import ParserConfig, parser_config
from ..exceptions import DefinitionError
from ..models.definition import NO_DEFAULT, Definition, Member, Parameter, ReturnSpec
from ..types import registry
from ..types.checker import check
from ..types.validator import validate
from ..utils.source_location import SourceLocation, location_of

logger = logging.getLogger(__name__)

CONTEXT_PARAM = "context"


@dataclass
class _Entry:
    """Mutable form of a Parameter while the comment is being read."""
    name: Optional[str]
    type_name: str
    nullable: bool
    lineno: int
    description: str = ""
    schema: List["_Entry"] = field(default_factory=list)
    members: Optional[List[Member]] = None

    def freeze(self, default_value: Any = NO_DEFAULT) -> Parameter:
        if default_value is NO_DEFAULT and self.nullable:
            default_value = None
        return Parameter(
            name=self.name,
            type=self.type_name,
            description=self.description,
            default_value=default_value,
            schema=tuple(entry.freeze() for entry in self.schema) if self.schema else None,
            members=tuple(self.members) if self.members is not None else None,
        )

    def nested(self) -> Optional[List[Any]]:
        if self.schema:
            return [entry.freeze() for entry in self.schema]
        return self.members


def _read_members(pathname: str, decl: Declaration) -> List[Member]:
    members: List[Member] = []
    labels = set()
    for offset, text in enumerate(decl.extra, start=1):
        try:
            literal = read_literal_text(text)
        except LiteralError as e:
            raise DefinitionError(pathname, f"Invalid enum member: {e}", decl.lineno + offset) from e

        if isinstance(literal, list):
            if len(literal) != 2 or not isinstance(literal[0], str):
                raise DefinitionError(
                    pathname,
                    f"Enum member must be a [label, value] pair with a string label, got {text}",
                    decl.lineno + offset,
                )
            label, value = literal
        elif isinstance(literal, str):
            label, value = literal, literal
        else:
            label, value = json.dumps(literal), literal

        if label in labels:
            raise DefinitionError(pathname, f"Duplicate enum label '{label}'", decl.lineno + offset)
        labels.add(label)
        members.append((label, value))

    if not members:
        raise DefinitionError(
            pathname, f"Enum '{decl.name or 'returns'}' must list at least one member", decl.lineno
        )
    return members


def _build_entry(pathname: str, decl: Declaration) -> _Entry:
    type_name = decl.type_name
    label = decl.name if decl.name is not None else "returns"
    if not registry.is_supported_type(type_name):
        raise DefinitionError(
            pathname,
            f"Unknown type '{decl.type_name}' for '{label}'. Valid types: {list(registry.list_types())}",
            decl.lineno,
        )

    entry = _Entry(name=decl.name, type_name=type_name, nullable=decl.nullable, lineno=decl.lineno)
    if type_name == registry.ENUM:
        entry.description = decl.text
        entry.members = _read_members(pathname, decl)
    else:
        entry.description = "\n".join(line for line in [decl.text] + decl.extra if line)
    return entry


def _check_unique(pathname: str, entries: Iterable[_Entry], scope: str) -> None:
    seen = set()
    for entry in entries:
        if entry.name in seen:
            raise DefinitionError(pathname, f"Duplicate name '{entry.name}' in {scope}", entry.lineno)
        seen.add(entry.name)
        if entry.schema:
            _check_unique(pathname, entry.schema, f"schema of '{entry.name}'")


class _CommentReader:
    """Turns tokenized declarations into parameter and return entries."""

    def __init__(self, pathname: str):
        self.pathname = pathname
        self.params: List[_Entry] = []
        self.returns: Optional[_Entry] = None
        self.return_name: Optional[str] = None
        self.charge: Optional[int] = None
        # (indent, entry) chain of the declaration currently accepting schema lines
        self._stack: List[Tuple[int, _Entry]] = []

    def read(self, block: CommentBlock) -> None:
        for decl in block.declarations:
            if decl.kind == "param":
                if not decl.name.isidentifier():
                    raise DefinitionError(
                        self.pathname, f"Invalid parameter name '{decl.name}'", decl.lineno
                    )
                entry = _build_entry(self.pathname, decl)
                self.params.append(entry)
                self._stack = [(-1, entry)]
            elif decl.kind == "returns":
                if self.returns is not None:
                    raise DefinitionError(self.pathname, "Duplicate @returns declaration", decl.lineno)
                self.returns = self._build_returns(decl)
                self._stack = [(-1, self.returns)]
            elif decl.kind == "schema":
                self._add_schema_entry(decl)
            elif decl.kind == "charge":
                self._read_charge(decl)
                self._stack = []

        _check_unique(self.pathname, self.params, "parameters")
        if self.returns is not None and self.returns.schema:
            _check_unique(self.pathname, self.returns.schema, "return schema")

    def _build_returns(self, decl: Declaration) -> _Entry:
        words = decl.text.split()
        if (
            len(words) == 1
            and words[0].isidentifier()
            and decl.extra
            and decl.type_name != registry.ENUM
        ):
            # "@returns {type} name" followed by description lines
            self.return_name = words[0]
            decl = Declaration(
                kind=decl.kind,
                lineno=decl.lineno,
                type_name=decl.type_name,
                nullable=decl.nullable,
                text="",
                extra=decl.extra,
            )
        return _build_entry(self.pathname, decl)

    def _add_schema_entry(self, decl: Declaration) -> None:
        if not self._stack:
            raise DefinitionError(
                self.pathname, f"Schema entry '{decl.name}' has no @param or @returns to belong to",
                decl.lineno,
            )
        while self._stack[-1][0] >= decl.indent:
            self._stack.pop()

        parent = self._stack[-1][1]
        parent_label = parent.name if parent.name is not None else "returns"
        if parent.type_name not in registry.SCHEMA_TYPES:
            raise DefinitionError(
                self.pathname,
                f"Schema entry '{decl.name}' is nested under '{parent_label}' "
                f"of type '{parent.type_name}', expected object or array",
                decl.lineno,
            )
        if parent.type_name == registry.ARRAY and parent.schema:
            raise DefinitionError(
                self.pathname,
                f"Array '{parent_label}' accepts exactly one schema entry",
                decl.lineno,
            )

        entry = _build_entry(self.pathname, decl)
        parent.schema.append(entry)
        self._stack.append((decl.indent, entry))

    def _read_charge(self, decl: Declaration) -> None:
        if self.charge is not None:
            raise DefinitionError(self.pathname, "Duplicate @charge declaration", decl.lineno)
        if decl.extra:
            raise DefinitionError(self.pathname, "Unexpected text after @charge", decl.lineno)
        try:
            charge = int(decl.text)
        except ValueError:
            charge = 0
        if charge < 1:
            raise DefinitionError(
                self.pathname, f"Charge must be a positive integer, got '{decl.text}'", decl.lineno
            )
        self.charge = charge

    def build_returns(self) -> ReturnSpec:
        if self.returns is None:
            return ReturnSpec()
        frozen = self.returns.freeze()
        return ReturnSpec(
            type=frozen.type,
            description=frozen.description,
            name=self.return_name,
            default_value=frozen.default_value,
            schema=frozen.schema,
            members=frozen.members,
        )


def _is_environ(node: ast.AST) -> bool:
    if isinstance(node, ast.Attribute):
        return node.attr == "environ" and isinstance(node.value, ast.Name) and node.value.id == "os"
    return isinstance(node, ast.Name) and node.id == "environ"


def _is_getenv(node: ast.AST) -> bool:
    if isinstance(node, ast.Attribute):
        return node.attr == "getenv" and isinstance(node.value, ast.Name) and node.value.id == "os"
    return isinstance(node, ast.Name) and node.id == "getenv"


def find_environment_keys(function: ast.AST) -> Tuple[str, ...]:
    """Distinct environment variable names read in ``function``, in source order."""
    found = []
    for node in ast.walk(function):
        key_node = None
        if isinstance(node, ast.Subscript) and _is_environ(node.value):
            key_node = node.slice
        elif isinstance(node, ast.Call) and node.args:
            func = node.func
            if isinstance(func, ast.Attribute) and func.attr == "get" and _is_environ(func.value):
                key_node = node.args[0]
            elif _is_getenv(func):
                key_node = node.args[0]
        if isinstance(key_node, ast.Constant) and isinstance(key_node.value, str):
            found.append((key_node.lineno, key_node.col_offset, key_node.value))

    keys: List[str] = []
    for _, _, key in sorted(found):
        if key not in keys:
            keys.append(key)
    return tuple(keys)


def _decode(pathname: str, contents: Union[str, bytes]) -> str:
    if isinstance(contents, str):
        return contents
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DefinitionError(pathname, f"File is not valid UTF-8: {e.reason}") from e


def _find_entry_function(pathname: str, tree: ast.Module) -> ast.AST:
    functions = [
        node for node in tree.body if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))
    ]
    if not functions:
        raise DefinitionError(pathname, "No top-level function definition found")
    return functions[-1]


class FunctionParser:
    """Parser turning source files into Definitions."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or parser_config

    def parse_definition(self, pathname: str, contents: Union[str, bytes]) -> Definition:
        """Parse the entry function of one source file.

        Args:
            pathname: Path reported in the Definition and in errors.
            contents: File contents as text or UTF-8 bytes.

        Returns:
            The immutable Definition.

        Raises:
            DefinitionError: If the comment, the signature or their combination is invalid.
        """
        text = _decode(pathname, contents)
        try:
            tree = ast.parse(text, filename=pathname)
        except SyntaxError as e:
            raise DefinitionError(pathname, f"Invalid Python syntax: {e.msg}", e.lineno) from e

        function = _find_entry_function(pathname, tree)
        first_line = min([function.lineno] + [d.lineno for d in function.decorator_list])
        block = tokenize_comment(pathname, extract_comment_lines(text.splitlines(), first_line))

        reader = _CommentReader(pathname)
        reader.read(block)

        formal, defaults, context = self._read_signature(pathname, function)
        if reader.params:
            params = self._match_params(pathname, reader.params, formal, defaults)
        else:
            params = self._infer_params(pathname, formal, defaults)

        definition = Definition(
            pathname=pathname,
            description=block.description,
            context=context,
            returns=reader.build_returns(),
            charge=reader.charge if reader.charge is not None else self.config.default_charge,
            keys=find_environment_keys(function),
            params=tuple(params),
        )
        logger.debug(f"Parsed definition {pathname}: {len(definition.params)} parameter(s)")
        return definition

    def load(
        self,
        root_dir: str,
        seed: Optional[Dict[str, Definition]] = None,
        ignore: Optional[Iterable[str]] = None,
    ) -> Dict[str, Definition]:
        """Load every eligible file under ``root_dir``; see :func:`funcdoc.parsers.loader.load`."""
        from .loader import load

        return load(root_dir, seed, ignore, parser=self)

    def _read_signature(
        self, pathname: str, function: ast.AST
    ) -> Tuple[List[ast.arg], Dict[str, ast.expr], Optional[SourceLocation]]:
        args = function.args
        if args.vararg or args.kwarg:
            raise DefinitionError(
                pathname, "Variadic parameters (*args, **kwargs) are not supported", function.lineno
            )
        if args.kwonlyargs or args.posonlyargs:
            raise DefinitionError(
                pathname, "Keyword-only and positional-only parameters are not supported", function.lineno
            )

        formal = list(args.args)
        defaults: Dict[str, ast.expr] = {}
        for arg, node in zip(formal[len(formal) - len(args.defaults):], args.defaults):
            defaults[arg.arg] = node

        names = [arg.arg for arg in formal]
        for idx, name in enumerate(names):
            if name in names[:idx]:
                raise DefinitionError(pathname, f"Duplicate parameter name '{name}'", formal[idx].lineno)

        context = None
        if formal and formal[-1].arg == CONTEXT_PARAM:
            context = location_of(pathname, formal[-1])
            formal = formal[:-1]
        for arg in formal:
            if arg.arg == CONTEXT_PARAM:
                raise DefinitionError(
                    pathname, f"'{CONTEXT_PARAM}' must be the last parameter", arg.lineno
                )
        return formal, defaults, context

    def _read_default(self, pathname: str, name: str, node: ast.expr) -> Any:
        try:
            return read_literal(node)
        except LiteralError as e:
            raise DefinitionError(
                pathname, f"Invalid default value for parameter '{name}': {e}", e.lineno or node.lineno
            ) from e

    def _match_params(
        self,
        pathname: str,
        entries: List[_Entry],
        formal: List[ast.arg],
        defaults: Dict[str, ast.expr],
    ) -> List[Parameter]:
        if len(entries) != len(formal):
            raise DefinitionError(
                pathname,
                f"Comment declares {len(entries)} parameter(s) but the signature has {len(formal)}",
                entries[0].lineno,
            )

        params = []
        for idx, (entry, arg) in enumerate(zip(entries, formal)):
            if entry.name != arg.arg:
                raise DefinitionError(
                    pathname,
                    f"Parameter #{idx + 1} is named '{arg.arg}' in the signature "
                    f"but '{entry.name}' in the comment",
                    entry.lineno,
                )

            default_value = NO_DEFAULT
            if arg.arg in defaults:
                default_value = self._read_default(pathname, arg.arg, defaults[arg.arg])
                if not validate(entry.type_name, default_value, True, entry.nested()):
                    raise DefinitionError(
                        pathname,
                        f"Default value {default_value!r} for parameter '{arg.arg}' "
                        f"does not match type '{entry.type_name}'",
                        defaults[arg.arg].lineno,
                    )
            params.append(entry.freeze(default_value))
        return params

    def _infer_params(
        self, pathname: str, formal: List[ast.arg], defaults: Dict[str, ast.expr]
    ) -> List[Parameter]:
        params = []
        for arg in formal:
            if arg.arg not in defaults:
                raise DefinitionError(
                    pathname,
                    f"Parameter '{arg.arg}' is not declared in the comment "
                    f"and has no default value to infer its type from",
                    arg.lineno,
                )
            default_value = self._read_default(pathname, arg.arg, defaults[arg.arg])
            type_name = check(default_value)
            logger.debug(f"{pathname}: inferred type '{type_name}' for parameter '{arg.arg}'")
            params.append(Parameter(name=arg.arg, type=type_name, default_value=default_value))
        return params


_default_parser = FunctionParser()


def parse_definition(pathname: str, contents: Union[str, bytes]) -> Definition:
    """Parse ``contents`` with the default parser configuration."""
    return _default_parser.parse_definition(pathname, contents)
