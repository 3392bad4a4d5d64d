# authapi/services/_shared/base.py
from __future__ import annotations

from sqlalchemy.orm import Session

from authapi.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session directly; they go through a
      Unit of Work.
    - Field rules live in the models; services translate their errors.
    """

    def __init__(self, *, session: Session | None = None) -> None:
        """
        Initialize the base service.

        :param session: Optional explicit session. When omitted, units of work
            use the Flask-scoped session of the current app context.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session = session

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork(session=self._session)

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(session=self._session)
