from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Property:
    property_id: str
    name: str
    address: str
    property_value: float
    loan_amount: float
    loan_rate: float
    loan_term_months: int
    loan_start_date: Optional[date] = None
    extra_monthly_payment: float = 0.0
    depreciation_amount: Optional[float] = None  # None : 85% x 3% de la valeur
    notes: str = ""


@dataclass
class RentPayment:
    payment_id: str
    property_id: str
    tenant_name: str
    date: date
    amount: float
    status: str = "PAID"  # PAID / PENDING / LATE


@dataclass
class Expense:
    expense_id: str
    property_id: str
    date: date
    amount: float
    category: str
    description: str = ""
    is_deductible: bool = True

