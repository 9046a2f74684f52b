"""Installment plan service."""

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.entities import InstallmentPlan, PlanOverview
from pocketledger.domain.errors import NotFoundError, plan_not_found
from pocketledger.domain.installments import summarize_plans
from pocketledger.utils.clock import Clock


class PlanService:
    """Service for managing installment plans.

    Plans never store their progress; it is recomputed from the start date
    on every read.
    """

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        """Initialize plan service.

        Args:
            store: Store instance
            clock: Clock used for progress calculations
        """
        self.repository = LedgerRepository(store)
        self.clock = clock or Clock()

    def list_plans(self) -> list[InstallmentPlan]:
        """List all installment plans."""
        return self.repository.get_plans()

    def get_plan(self, plan_id: str) -> Optional[InstallmentPlan]:
        """Get plan by ID, or None if not found."""
        for plan in self.repository.get_plans():
            if plan.id == plan_id:
                return plan
        return None

    def create_plan(
        self,
        title: str,
        total_amount: Decimal,
        total_installments: int,
        start_date: Optional[date] = None,
        icon: str = "credit_card",
    ) -> InstallmentPlan:
        """Create an installment plan.

        Args:
            title: Plan title, also used as its pseudo-category
            total_amount: Total amount to pay
            total_installments: Number of monthly installments
            start_date: First installment date (defaults to today)
            icon: Icon token

        Returns:
            The created InstallmentPlan

        Raises:
            ValidationError: If the installment count is not positive or the
                title is empty
        """
        plan = InstallmentPlan(
            id=str(uuid.uuid4()),
            title=(title or "").strip(),
            total_amount=total_amount,
            total_installments=total_installments,
            start_date=start_date or self.clock.today(),
            icon=icon,
        )
        self.repository.save_plans([*self.repository.get_plans(), plan])
        return plan

    def update_plan(
        self,
        plan_id: str,
        title: Optional[str] = None,
        total_amount: Optional[Decimal] = None,
        total_installments: Optional[int] = None,
        start_date: Optional[date] = None,
        icon: Optional[str] = None,
    ) -> InstallmentPlan:
        """Edit an installment plan.

        Raises:
            NotFoundError: If the plan doesn't exist
            ValidationError: If the edited plan is invalid
        """
        current = self.get_plan(plan_id)
        if current is None:
            raise NotFoundError(plan_not_found(plan_id))

        updates = {
            key: value
            for key, value in {
                "title": title.strip() if title is not None else None,
                "total_amount": total_amount,
                "total_installments": total_installments,
                "start_date": start_date,
                "icon": icon,
            }.items()
            if value is not None
        }
        # replace() re-runs validation
        updated = replace(current, **updates)
        self.repository.save_plans(
            [updated if p.id == plan_id else p for p in self.repository.get_plans()]
        )
        return updated

    def remove_plan(self, plan_id: str) -> None:
        """Delete an installment plan.

        Raises:
            NotFoundError: If the plan doesn't exist
        """
        plans = self.repository.get_plans()
        remaining = [p for p in plans if p.id != plan_id]
        if len(remaining) == len(plans):
            raise NotFoundError(plan_not_found(plan_id))
        self.repository.save_plans(remaining)

    def overview(self) -> PlanOverview:
        """Progress of every plan as of today."""
        return summarize_plans(self.repository.get_plans(), self.clock.today())
