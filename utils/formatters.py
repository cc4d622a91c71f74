def fmt_amount(value: float, unit: str = "€") -> str:
    """Formate un montant : 1234567.891 -> 1 234 567,89 €"""
    text = f"{value:,.2f}".replace(",", " ").replace(".", ",")
    return f"{text} {unit}"


def fmt_amount_round(value: float) -> str:
    """Montant arrondi à l'euro : 1908.8 -> 1 909 €"""
    return f"{value:,.0f}".replace(",", " ") + " €"


def fmt_signed(value: float) -> str:
    """Montant signé pour les gains : -120 / +35"""
    sign = "+" if value >= 0 else "-"
    return f"{sign}{fmt_amount_round(abs(value))}"


def fmt_rate(value: float) -> str:
    """Taux en pourcentage : 4.0 -> 4,00 %"""
    return f"{value:.2f} %".replace(".", ",")


def fmt_percent(value: float) -> str:
    """Proportion : 0.3456 -> 34,56 %"""
    return fmt_rate(value * 100)


def fmt_months(months: int) -> str:
    """Mois en années et mois : 30 -> 2 ans 6 mois"""
    years = months // 12
    remain = months % 12
    if remain == 0:
        return f"{years} an" if years == 1 else f"{years} ans"
    if years == 0:
        return f"{remain} mois"
    year_part = f"{years} an" if years == 1 else f"{years} ans"
    return f"{year_part} {remain} mois"
