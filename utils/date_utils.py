from datetime import date
from typing import List

from dateutil.relativedelta import relativedelta


def add_months(d: date, months: int) -> date:
    """Ajoute N mois à une date"""
    return d + relativedelta(months=months)


def month_start(d: date) -> date:
    return d.replace(day=1)


def last_n_months(today: date, n: int = 12) -> List[date]:
    """Premiers jours des n derniers mois, du plus ancien au mois courant"""
    current = month_start(today)
    return [current - relativedelta(months=n - 1 - i) for i in range(n)]


def months_between(d1: date, d2: date) -> int:
    """Nombre de mois entiers écoulés entre deux dates"""
    delta = relativedelta(d2, d1)
    return delta.years * 12 + delta.months
