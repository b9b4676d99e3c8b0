from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Allowances:
    housing: float
    transport: float
    meal: float


@dataclass(frozen=True)
class Bonuses:
    performance: float
    year_end: float


@dataclass(frozen=True)
class Deductions:
    tax: float
    health_insurance: float
    provident_fund: float


@dataclass(frozen=True)
class CompensationBreakdown:
    """CTC figures as submitted by HR, before they are tied to an employee."""

    annual_ctc: float
    monthly_in_hand: float
    allowances: Allowances
    bonuses: Bonuses
    deductions: Deductions


@dataclass(frozen=True)
class CompensationRecord:
    """The current CTC of one employee (one record per employee)."""

    employee_id: int
    effective_date: Optional[date]
    breakdown: CompensationBreakdown

    def to_dict(self) -> dict:
        b = self.breakdown
        return {
            "employeeId": self.employee_id,
            "annualCTC": b.annual_ctc,
            "monthlyInHand": b.monthly_in_hand,
            "effectiveDate": self.effective_date.isoformat() if self.effective_date else None,
            "otherComponents": {
                "allowances": {
                    "housingAllowance": b.allowances.housing,
                    "transportAllowance": b.allowances.transport,
                    "mealAllowance": b.allowances.meal,
                },
                "bonuses": {
                    "performanceBonus": b.bonuses.performance,
                    "yearEndBonus": b.bonuses.year_end,
                },
                "deductions": {
                    "tax": b.deductions.tax,
                    "healthInsurance": b.deductions.health_insurance,
                    "providentFund": b.deductions.provident_fund,
                },
            },
        }
