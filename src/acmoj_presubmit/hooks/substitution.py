# Copyright 2026 Pennyworth Technologies, Inc.
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

"""Variable substitution for hook fields."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from acmoj_presubmit.constants import HOOK_VARIABLES

# Variable pattern: ${VARIABLE_NAME}
VARIABLE_PATTERN = re.compile(r"\$\{(\w+)\}")


def substitute_variables(
    text: str,
    variables: Mapping[str, str],
    exclude: Iterable[str] = (),
) -> str:
    """Substitute ${VARIABLE} placeholders with values.

    Values are inserted verbatim, in a single pass: a value that itself
    contains ``${...}`` is not expanded again. Unknown and excluded
    placeholders are left unchanged.

    Args:
        text: Text containing ${VARIABLE} placeholders
        variables: Variable name -> value
        exclude: Names that must not be substituted

    Returns:
        Text with known variables substituted

    Example:
        >>> substitute_variables("echo ${ACMOJ_FILE_NAME}", {"ACMOJ_FILE_NAME": "a.cpp"})
        'echo a.cpp'
    """
    excluded = frozenset(exclude)

    def replace_var(match: re.Match) -> str:
        var_name = match.group(1)
        if var_name in variables and var_name not in excluded:
            return variables[var_name]
        return match.group(0)

    return VARIABLE_PATTERN.sub(replace_var, text)


def find_variables(text: str) -> list[str]:
    """Return placeholder names used in text, in order of first use."""
    seen: dict[str, None] = {}
    for name in VARIABLE_PATTERN.findall(text):
        seen.setdefault(name, None)
    return list(seen)


def get_available_variables() -> list[str]:
    """Get list of variable names that can be used in hook fields."""
    return list(HOOK_VARIABLES)


def validate_variables(text: str) -> list[str]:
    """Find any unknown variables in text.

    Returns:
        Sorted list of unknown variable names (empty if all valid)
    """
    available = set(get_available_variables())
    return sorted(set(find_variables(text)) - available)
