from contextlib import contextmanager
from typing import Iterator
from sqlalchemy.orm import Session
from codehub.repositories.interfaces import IUnitOfWork

class SqlalchemyUnitOfWork(IUnitOfWork):
    def __init__(self, db_session: Session):
        self.db = db_session
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator["SqlalchemyUnitOfWork"]:
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self.db.rollback()
            raise
        self._depth -= 1
        if self._depth == 0:
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
