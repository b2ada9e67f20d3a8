from __future__ import annotations

import nox

nox.options.sessions = ["tests"]

PYTHON = "3.12"


def _install(session: nox.Session) -> None:
    session.install("-e", ".[test]")


@nox.session(python=PYTHON)
def tests(session: nox.Session) -> None:
    _install(session)
    session.run("pytest", "-q", *session.posargs)


@nox.session(python=PYTHON)
def unit(session: nox.Session) -> None:
    _install(session)
    session.run("pytest", "-q", "-m", "unit", *session.posargs)


@nox.session(python=PYTHON)
def properties(session: nox.Session) -> None:
    _install(session)
    session.run("pytest", "-q", "-m", "property", "--hypothesis-show-statistics", *session.posargs)
