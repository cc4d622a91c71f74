"""Erreurs typées du moteur de calcul.

Les fonctions de `core` sont pures : elles ne rattrapent jamais ces erreurs,
l'appelant (page, CLI) décide du message à afficher.
"""


class FinancialInputError(ValueError):
    """Paramètres financiers invalides."""


class InvalidLoanConfiguration(FinancialInputError):
    """Prêt impossible à amortir ou paramètres hors bornes."""


class InvalidFiscalInputs(FinancialInputError):
    """Données fiscales négatives ou taux hors bornes."""


__all__ = [
    "FinancialInputError",
    "InvalidLoanConfiguration",
    "InvalidFiscalInputs",
]
