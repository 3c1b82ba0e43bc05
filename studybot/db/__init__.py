"""Relational store for uploaded files.

Handlers never write SQL themselves; they go through the functions in
:mod:`studybot.db.user_files`.  This package exposes the shared
:func:`connect` helper and the small exception hierarchy every repository
function raises.
"""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from functools import wraps
from typing import AsyncIterator, Awaitable, Callable, ParamSpec, TypeVar

import aiosqlite

from . import base
from .base import init_db


class RepoError(Exception):
    """Base error for repository operations."""


class RepoNotFound(RepoError):
    """Raised when a requested record is missing."""


class RepoConstraintError(RepoError):
    """Raised when database constraints are violated."""


@asynccontextmanager
async def connect() -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection to :data:`base.DB_PATH`."""

    async with aiosqlite.connect(base.DB_PATH) as db:
        yield db


P = ParamSpec("P")
T = TypeVar("T")


def translate_errors(
    func: Callable[P, Awaitable[T]]
) -> Callable[P, Awaitable[T]]:
    """Translate low-level DB errors to repository exceptions."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except sqlite3.IntegrityError as exc:
            raise RepoConstraintError(str(exc)) from exc
        except sqlite3.Error as exc:
            raise RepoError(str(exc)) from exc

    return wrapper


__all__ = [
    "base",
    "init_db",
    "connect",
    "translate_errors",
    "RepoError",
    "RepoNotFound",
    "RepoConstraintError",
]
