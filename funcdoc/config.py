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
"""Configuration management for funcdoc."""

import os
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from .exceptions import FuncdocError
from .utils.logging_utils import configure_split_stream_logging


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class ParserConfig:
    """Configuration for definition parsing and directory loading."""
    extensions: Tuple[str, ...] = (".py",)
    index_name: str = "__main__"
    ignore: List[str] = field(default_factory=list)
    default_charge: int = 1
    log_level: str = "INFO"
    print_level: str = "ERROR"

    def __post_init__(self) -> None:
        self.extensions = tuple(
            ext if ext.startswith(".") else f".{ext}" for ext in self.extensions
        )
        if not self.extensions:
            raise FuncdocError("At least one source file extension must be configured")
        if isinstance(self.default_charge, bool) or not isinstance(self.default_charge, int) \
                or self.default_charge < 1:
            raise FuncdocError(
                f"default_charge must be a positive integer, got: {self.default_charge!r}"
            )

    @classmethod
    def from_env(cls) -> 'ParserConfig':
        """Create configuration from environment variables."""
        return cls(
            extensions=tuple(_split_list(os.getenv('FUNCDOC_EXTENSIONS', '.py'))),
            index_name=os.getenv('FUNCDOC_INDEX_NAME', '__main__'),
            ignore=_split_list(os.getenv('FUNCDOC_IGNORE', '')),
            default_charge=int(os.getenv('FUNCDOC_DEFAULT_CHARGE', '1')),
            log_level=os.getenv('FUNCDOC_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('FUNCDOC_PRINT_LEVEL', 'ERROR'),
        )

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'ParserConfig':
        """Create configuration from a YAML file.

        Keys match the dataclass fields; unknown keys are rejected so that a
        typo does not silently fall back to a default.
        """
        path = Path(file_path)
        if not path.is_file():
            raise FuncdocError(f"Configuration file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise FuncdocError(f"Error parsing YAML file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise FuncdocError(f"Configuration root must be a mapping. File: {path}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise FuncdocError(f"Unknown configuration keys {unknown}. File: {path}")

        values: Dict[str, Any] = dict(data)
        if "extensions" in values:
            values["extensions"] = tuple(values["extensions"] or ())
        if "ignore" in values:
            values["ignore"] = list(values["ignore"] or [])
        return cls(**values)

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name='funcdoc',
        )


# Global configuration instance
parser_config = ParserConfig.from_env()
