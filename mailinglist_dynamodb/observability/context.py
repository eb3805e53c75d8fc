from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)


def get_run_id() -> str | None:
    return run_id_var.get()


@contextmanager
def bind_run_id(run_id: str | None = None) -> Iterator[str]:
    """
    Bind a run id for the duration of a command so every log line it emits
    can be correlated.
    """
    rid = (str(run_id).strip() if run_id else "") or str(uuid.uuid4())
    token = run_id_var.set(rid)
    try:
        yield rid
    finally:
        run_id_var.reset(token)
