from enum import Enum


class Regime(str, Enum):
    MICRO = "micro"
    LMNP_REEL = "lmnp_reel"
    SCI_IS = "sci_is"

    @property
    def label(self) -> str:
        return {
            "micro": "Micro",
            "lmnp_reel": "LMNP Réel",
            "sci_is": "SCI IS",
        }[self.value]

    @property
    def description(self) -> str:
        return {
            "micro": "Simple, mais souvent coûteux. Abattement fixe de 30%.",
            "lmnp_reel": "Déduction des charges réelles, des intérêts et de l'amortissement.",
            "sci_is": "Impôt payé par la société : 15% jusqu'à 42 500 €, 25% au-delà.",
        }[self.value]


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @property
    def label(self) -> str:
        return {
            "INCOME": "Revenu",
            "EXPENSE": "Dépense",
        }[self.value]


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    LATE = "LATE"

    @property
    def label(self) -> str:
        return {
            "PAID": "Payé",
            "PENDING": "En attente",
            "LATE": "En retard",
        }[self.value]


class ExpenseCategory(str, Enum):
    TAXE_FONCIERE = "taxe_fonciere"
    COPROPRIETE = "copropriete"
    ASSURANCE = "assurance"
    TRAVAUX = "travaux"
    GESTION = "gestion"
    COMPTABILITE = "comptabilite"
    AUTRE = "autre"

    @property
    def label(self) -> str:
        return {
            "taxe_fonciere": "Taxe foncière",
            "copropriete": "Charges de copropriété",
            "assurance": "Assurance PNO",
            "travaux": "Travaux",
            "gestion": "Gestion locative",
            "comptabilite": "Comptabilité",
            "autre": "Autre",
        }[self.value]


class AlertLevel(str, Enum):
    SUCCESS = "SUCCESS"
    INFO = "INFO"
    TIP = "TIP"
    WARNING = "WARNING"


# Noms des feuilles
SHEET_PROPERTIES = "Biens"
SHEET_PAYMENTS = "Loyers"
SHEET_EXPENSES = "Dépenses"
SHEET_CONFIG = "Configuration"

# Colonnes
PROPERTIES_COLUMNS = [
    "property_id", "name", "address", "property_value",
    "loan_amount", "loan_rate", "loan_term_months", "loan_start_date",
    "extra_monthly_payment", "depreciation_amount", "notes",
]

PAYMENTS_COLUMNS = [
    "payment_id", "property_id", "tenant_name", "date", "amount", "status",
]

EXPENSES_COLUMNS = [
    "expense_id", "property_id", "date", "amount", "category",
    "description", "is_deductible",
]

CONFIG_COLUMNS = ["key", "value", "description", "updated_at"]

TRANSACTIONS_COLUMNS = [
    "id", "date", "amount", "type", "category", "description", "status",
]
