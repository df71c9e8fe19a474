"""Owner-scoped access to the ``expenses`` table.

Views build an :class:`ExpenseStore` from the database handle and the current
user's id and pass it to whatever needs to read or write expenses. Every query
issued through it is filtered by owner.
"""
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from .models import Expense
from .pagination import clamp_page, to_page

logger = logging.getLogger(__name__)


class ExpenseStore:
    def __init__(self, db, owner_id):
        if owner_id is None:
            raise ValueError("ExpenseStore needs an owner")
        self.db = db
        self.owner_id = owner_id

    @classmethod
    def for_user(cls, db, user):
        return cls(db, user.id)

    @property
    def session(self):
        return self.db.session

    def _owned(self, stmt):
        return stmt.where(Expense.user_id == self.owner_id)

    def _between(self, stmt, start, end):
        return self._owned(stmt).where(Expense.date >= start, Expense.date <= end)

    # -- writes --------------------------------------------------------

    def insert(self, **fields):
        """Insert one expense for the owner and commit."""
        fields.pop("user_id", None)
        expense = Expense(user_id=self.owner_id, **fields)
        self.session.add(expense)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info("User %s added expense %s (%.2f)", self.owner_id, expense.id, expense.amount)
        return expense

    # -- reads ---------------------------------------------------------

    def amounts_between(self, start, end):
        stmt = self._between(select(Expense.amount), start, end)
        return list(self.session.scalars(stmt))

    def amounts_on(self, day):
        return self.amounts_between(day, day)

    def chart_rows(self, start, end):
        stmt = self._between(
            select(Expense.date, Expense.amount, Expense.payment_method), start, end
        ).order_by(Expense.date.asc())
        return self.session.execute(stmt).all()

    def count_between(self, start, end):
        stmt = self._between(select(func.count(Expense.id)), start, end)
        return self.session.scalar(stmt) or 0

    def _newest_first(self, start, end):
        return self._between(select(Expense), start, end).order_by(
            Expense.date.desc(), Expense.created_at.desc(), Expense.id.desc()
        )

    def records_between(self, start, end):
        return list(self.session.scalars(self._newest_first(start, end)))

    def recent(self, start, end):
        return self.records_between(start, end)

    def page_between(self, start, end, page=1, per_page=10):
        """One page of records, newest first. ``page`` is clamped to the valid range."""
        stmt = self._newest_first(start, end)
        result = self.db.paginate(stmt, page=to_page(page), per_page=per_page, error_out=False)
        if result.page > max(result.pages, 1):
            # Past the last page: serve the last one instead.
            result = self.db.paginate(stmt, page=clamp_page(result.page, result.pages), per_page=per_page, error_out=False)
        return result
