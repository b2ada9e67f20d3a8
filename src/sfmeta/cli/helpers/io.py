# Copyright 2025 CrownOps Engineering
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


"""Console output for CLI commands.

Command results go to stdout so they can be piped; diagnostics go to stderr.
"""

from __future__ import annotations

import json
import sys

from sfmeta.json import normalize_enums_for_json
from sfmeta.runtime import consume


def echo(message: str, *, newline: bool = True, err: bool = False) -> None:
    """Print ``message`` to stdout, or to stderr when ``err`` is set."""
    stream = sys.stderr if err else sys.stdout
    consume(stream.write(f"{message}\n" if newline else message))
    stream.flush()


def echo_json(payload: object, *, indent: int = 2) -> None:
    """Print ``payload`` as JSON; enum members are written as their values."""
    echo(json.dumps(normalize_enums_for_json(payload), indent=indent, ensure_ascii=False))


__all__ = ["echo", "echo_json"]
