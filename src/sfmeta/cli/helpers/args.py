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


"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

import argparse
from typing import Any, Protocol

from sfmeta.core.type_aliases import ApiVersion
from sfmeta.runtime import consume


class SubparserCollection(Protocol):
    """What a command module needs from the object returned by ``add_subparsers``."""

    def add_parser(self, name: str, **kwargs: Any) -> argparse.ArgumentParser: ...


class ArgumentRegistrar(Protocol):
    """Anything exposing ``ArgumentParser.add_argument`` (parsers and argument groups)."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action: ...


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser/argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


def register_api_version_flag(registrar: ArgumentRegistrar) -> None:
    register_argument(
        registrar,
        "--api-version",
        type=parse_api_version_flag,
        default=None,
        help="API version for the manifest (default: configured pin, then the org's version).",
    )


def parse_api_version_flag(raw: str) -> ApiVersion:
    """Validate an ``--api-version`` value of the form ``MAJOR.MINOR``.

    Raises:
        argparse.ArgumentTypeError: If the value is not a dotted version number.
    """
    value = raw.strip()
    major, sep, minor = value.partition(".")
    if not (major.isdigit() and sep and minor.isdigit()):
        msg = f"invalid API version '{raw}' (expected e.g. 64.0)"
        raise argparse.ArgumentTypeError(msg)
    return ApiVersion(value)


__all__ = [
    "ArgumentRegistrar",
    "SubparserCollection",
    "parse_api_version_flag",
    "register_api_version_flag",
    "register_argument",
]
