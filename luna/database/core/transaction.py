# luna/database/core/transaction.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def transactional(db: Session) -> Iterator[Session]:
    """
    Unit of work around a multi-step mutation.

    If the session already has a transaction open, the caller owns it and
    decides commit/rollback; an exception simply propagates to that caller.
    Otherwise a new transaction is begun, committed on success and rolled
    back on error.
    """
    if db.in_transaction():
        yield db
        return
    with db.begin():
        yield db
