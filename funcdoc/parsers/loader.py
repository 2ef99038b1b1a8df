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

"""Directory loader building a path-keyed mapping of Definitions."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Optional, Set, Tuple, Union

from ..exceptions import DefinitionError
from ..models.definition import Definition

if TYPE_CHECKING:
    from .definition_parser import FunctionParser

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = {"__pycache__"}


def _normalize_ignore(ignore: Optional[Iterable[str]]) -> Set[str]:
    return {PurePosixPath(entry.replace("\\", "/")).as_posix() for entry in ignore or ()}


def _is_ignored(relative: str, ignore: Set[str]) -> bool:
    stem = str(PurePosixPath(relative).with_suffix(""))
    return relative in ignore or stem in ignore


def _walk_sources(root: Path, extensions: Tuple[str, ...]) -> Iterator[str]:
    """Yield eligible source files under ``root`` as sorted posix relative paths."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in _SKIPPED_DIRS
        )
        for filename in sorted(filenames):
            if filename.startswith(".") or not filename.endswith(extensions):
                continue
            full_path = Path(dirpath) / filename
            yield full_path.relative_to(root).as_posix()


def definition_key(relative: str, index_name: str) -> str:
    """Map a relative source path to its definition key.

    ``dir/sub/__main__.py`` -> ``dir/sub``; ``__main__.py`` -> ``""``;
    ``dir/test.py`` -> ``dir/test``.
    """
    path = PurePosixPath(relative)
    if path.stem == index_name:
        parent = path.parent.as_posix()
        return "" if parent == "." else parent
    return path.with_suffix("").as_posix()


def load(
    root_dir: Union[str, Path],
    seed: Optional[Dict[str, Definition]] = None,
    ignore: Optional[Iterable[str]] = None,
    parser: Optional["FunctionParser"] = None,
) -> Dict[str, Definition]:
    """Recursively load every eligible source file under ``root_dir``.

    Args:
        root_dir: Directory to walk.
        seed: Existing mapping; loaded entries are merged over a copy of it.
        ignore: Relative filenames (with or without extension) to skip entirely.
        parser: FunctionParser to use; the default configuration when omitted.

    Returns:
        A new dict mapping definition keys to Definitions.

    Raises:
        FileNotFoundError: If ``root_dir`` is not a directory.
        DefinitionError: On the first invalid file; nothing is returned in that case.
    """
    if parser is None:
        from .definition_parser import FunctionParser

        parser = FunctionParser()
    config = parser.config

    root = Path(root_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Definition root directory not found: {root}")

    ignored = _normalize_ignore(list(config.ignore) + list(ignore or ()))
    loaded: Dict[str, Definition] = {}
    origins: Dict[str, str] = {}

    for relative in _walk_sources(root, config.extensions):
        if _is_ignored(relative, ignored):
            logger.debug(f"Skipping ignored file: {relative}")
            continue

        key = definition_key(relative, config.index_name)
        if key in origins:
            raise DefinitionError(
                relative, f"Definition key '{key}' is already provided by '{origins[key]}'"
            )

        logger.debug(f"Loading definition from: {relative}")
        contents = (root / relative).read_bytes()
        loaded[key] = parser.parse_definition(relative, contents)
        origins[key] = relative

    logger.info(f"Loaded {len(loaded)} definition(s) from {root}")

    definitions: Dict[str, Definition] = dict(seed or {})
    definitions.update(loaded)
    return definitions
