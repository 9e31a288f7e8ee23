from __future__ import annotations

import logging

from rentledger.errors import AggregationInputError
from rentledger.models.expense import Expense
from rentledger.models.period import Period
from rentledger.repositories.base import ExpenseRepository

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, repo: ExpenseRepository) -> None:
        self.repo = repo

    def save_expense(self, expense: Expense) -> Expense:
        """Validate, fill the accounting period from the date if missing, then create or update."""
        if not expense.title or not expense.amount or not expense.date:
            raise ValueError("Title, amount and date are required")
        if expense.amount < 0:
            raise ValueError("Amount cannot be negative")

        derived = Period.from_date(expense.date)
        if expense.month in (None, "") or expense.year in (None, ""):
            expense = expense.model_copy(update={"month": derived.month, "year": derived.year})
        else:
            # Normalize text periods before they reach the store.
            period = Period.parse(expense.month, expense.year)
            expense = expense.model_copy(update={"month": period.month, "year": period.year})

        if expense.id is None:
            result = self.repo.create(expense)
            logger.info(
                "Expense created: id=%s, amount=%d, period=%s/%s",
                result.id,
                result.amount,
                result.month,
                result.year,
            )
        else:
            result = self.repo.update(expense)
            logger.info("Expense updated: id=%s, amount=%d", result.id, result.amount)
        return result

    def remove_expense(self, expense_id: int | None) -> None:
        if not expense_id:
            return
        self.repo.delete(expense_id)
        logger.info("Expense %s deleted", expense_id)

    def list_expenses(self, period: Period | None = None) -> list[Expense]:
        result = self.repo.list_all(period)
        logger.debug("Listed %d expenses", len(result))
        return result

    def normalize_legacy(self) -> int:
        """Backfill month/year on stored expenses that lack them. Returns the number fixed."""
        fixed = 0
        for expense in self.repo.list_all():
            if expense.month not in (None, "") and expense.year not in (None, ""):
                continue
            source = expense.date or expense.created_at
            if source is None or expense.id is None:
                logger.warning("Cannot derive period for expense %s: no date", expense.id)
                continue
            try:
                period = Period.from_date(source)
            except AggregationInputError as exc:
                logger.warning("Cannot derive period for expense %s: %s", expense.id, exc)
                continue
            self.repo.update_period(expense.id, period)
            fixed += 1
        logger.info("Normalized %d legacy expense(s)", fixed)
        return fixed
