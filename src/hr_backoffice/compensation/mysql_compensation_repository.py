from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Allowances, Bonuses, CompensationBreakdown, CompensationRecord, Deductions
from .repository import CompensationRepository

_SELECT = """
    SELECT employee_id, annual_ctc, monthly_in_hand, effective_date,
           housing_allowance, transport_allowance, meal_allowance,
           performance_bonus, year_end_bonus,
           tax, health_insurance, provident_fund
    FROM employee_ctc
    WHERE employee_id=%s
"""


def _to_record(r: dict) -> CompensationRecord:
    return CompensationRecord(
        employee_id=int(r["employee_id"]),
        effective_date=r.get("effective_date"),
        breakdown=CompensationBreakdown(
            annual_ctc=float(r["annual_ctc"]),
            monthly_in_hand=float(r["monthly_in_hand"]),
            allowances=Allowances(
                housing=float(r["housing_allowance"]),
                transport=float(r["transport_allowance"]),
                meal=float(r["meal_allowance"]),
            ),
            bonuses=Bonuses(
                performance=float(r["performance_bonus"]),
                year_end=float(r["year_end_bonus"]),
            ),
            deductions=Deductions(
                tax=float(r["tax"]),
                health_insurance=float(r["health_insurance"]),
                provident_fund=float(r["provident_fund"]),
            ),
        ),
    )


def _figures(b: CompensationBreakdown) -> tuple:
    return (
        b.annual_ctc,
        b.monthly_in_hand,
        b.allowances.housing,
        b.allowances.transport,
        b.allowances.meal,
        b.bonuses.performance,
        b.bonuses.year_end,
        b.deductions.tax,
        b.deductions.health_insurance,
        b.deductions.provident_fund,
    )


class MySQLCompensationRepository(CompensationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee(self, employee_id: int) -> Optional[CompensationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT, (int(employee_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        breakdown: CompensationBreakdown,
        effective_date: Optional[date],
    ) -> CompensationRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_ctc(
                    employee_id, effective_date,
                    annual_ctc, monthly_in_hand,
                    housing_allowance, transport_allowance, meal_allowance,
                    performance_bonus, year_end_bonus,
                    tax, health_insurance, provident_fund
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), effective_date) + _figures(breakdown),
            )
            cur.execute(_SELECT, (int(employee_id),))
            return _to_record(fetchone(cur))

    def upsert_for_employee(self, *, employee_id: int, breakdown: CompensationBreakdown) -> CompensationRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_ctc(
                    employee_id,
                    annual_ctc, monthly_in_hand,
                    housing_allowance, transport_allowance, meal_allowance,
                    performance_bonus, year_end_bonus,
                    tax, health_insurance, provident_fund
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    annual_ctc=VALUES(annual_ctc),
                    monthly_in_hand=VALUES(monthly_in_hand),
                    housing_allowance=VALUES(housing_allowance),
                    transport_allowance=VALUES(transport_allowance),
                    meal_allowance=VALUES(meal_allowance),
                    performance_bonus=VALUES(performance_bonus),
                    year_end_bonus=VALUES(year_end_bonus),
                    tax=VALUES(tax),
                    health_insurance=VALUES(health_insurance),
                    provident_fund=VALUES(provident_fund)
                """,
                (int(employee_id),) + _figures(breakdown),
            )
            cur.execute(_SELECT, (int(employee_id),))
            return _to_record(fetchone(cur))
