"""
Membership plans and plan checkout.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from storefront.db import DbClient, MemberRecord, PlanRecord, UserRecord
from storefront.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

_LEADING_COUNT = re.compile(r"^\s*(\d+)")


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the end of a shorter month."""
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def calculate_expiry_date(duration: Optional[str], now: datetime) -> datetime:
    """
    Expiry for a plan whose duration reads like ``"monthly"``, ``"1 year"`` or
    ``"3 months"``.
    """
    if not duration:
        raise InvalidRequestError("Missing plan duration")

    normalized = str(duration).lower().strip()
    match = _LEADING_COUNT.match(normalized)
    count = int(match.group(1)) if match else 1

    if "month" in normalized:
        return add_months(now, count)
    if "year" in normalized or "annual" in normalized:
        return add_months(now, 12 * count)
    raise InvalidRequestError("Invalid plan duration")


def list_plans(db: DbClient) -> list[dict]:
    return [plan.as_dict() for plan in db.list_plans()]


def get_plan_or_404(db: DbClient, plan_id: str) -> PlanRecord:
    plan = db.get_plan(plan_id)
    if not plan:
        raise NotFoundError("Plan not found.")
    return plan


def checkout_plan(
    db: DbClient, user_id: str, plan_id: str, now: Optional[datetime] = None
) -> MemberRecord:
    plan = get_plan_or_404(db, plan_id)
    now = now or datetime.now(timezone.utc)
    expiry = calculate_expiry_date(plan.duration, now)
    member = db.add_member(
        MemberRecord(
            user_id=user_id,
            plan_id=plan.plan_id,
            start_date=now.isoformat(),
            expiry_date=expiry.isoformat(),
        )
    )
    logger.info("User %s joined plan %s until %s", user_id, plan.plan_name, member.expiry_date)
    return member


def list_members(db: DbClient) -> list[dict]:
    users: dict[str, Optional[UserRecord]] = {}
    plans: dict[str, Optional[PlanRecord]] = {}
    members = []
    for member in db.list_members():
        if member.user_id not in users:
            users[member.user_id] = db.get_user(member.user_id)
        if member.plan_id not in plans:
            plans[member.plan_id] = db.get_plan(member.plan_id)
        user = users[member.user_id]
        plan = plans[member.plan_id]
        members.append(
            {
                "id": member.member_id,
                "user": (
                    {"f_name": user.f_name, "l_name": user.l_name, "email": user.email}
                    if user
                    else None
                ),
                "plan": {"plan_name": plan.plan_name, "price": plan.price} if plan else None,
                "start_date": member.start_date,
                "expiry_date": member.expiry_date,
            }
        )
    return members
