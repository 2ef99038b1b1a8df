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

"""Custom exceptions for funcdoc."""

from typing import Optional


class FuncdocError(Exception):
    """Base exception for funcdoc related errors."""
    pass


class DefinitionError(FuncdocError):
    """Exception raised when a source file does not hold a valid function definition.

    The message always starts with the offending pathname so a directory load
    that fails deep inside a tree still points at the right file.
    """

    def __init__(self, pathname: str, message: str, line: Optional[int] = None):
        self.pathname = pathname
        self.line = line
        location = f"{pathname}:{line}" if line is not None else f"{pathname}"
        super().__init__(f"{location}: {message}")


class ValidationError(FuncdocError):
    """Exception raised when a value breaks the structural rules of its type."""
    pass


class ConversionError(FuncdocError):
    """Exception raised when text cannot be converted to the requested type."""
    pass
