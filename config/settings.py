from pathlib import Path

# Racine du projet
PROJECT_ROOT = Path(__file__).parent.parent

# Fichiers de données
DATA_DIR = PROJECT_ROOT / "data"
EXCEL_FILE = DATA_DIR / "owner_data.xlsx"
BACKUP_DIR = DATA_DIR
BACKUP_KEEP = 5

# Prêt par défaut (%)
DEFAULT_LOAN_RATE = 4.0
DEFAULT_LOAN_TERM_MONTHS = 240
DEFAULT_LOAN_TO_VALUE = 0.70
DEFAULT_INSURANCE_RATE = 0.35

# Bornes des paramètres enregistrés (min, max)
CONFIG_BOUNDS = {
    "loan_rate": (0.0, 30.0),
    "loan_term_months": (12, 420),
    "loan_to_value": (0.0, 1.2),
    "insurance_rate": (0.0, 2.0),
    "marginal_tax_rate": (0.0, 45.0),
}

# Fiscalité (%)
DEFAULT_MARGINAL_TAX_RATE = 30.0
MARGINAL_TAX_RATES = (0.0, 11.0, 30.0, 41.0, 45.0)
SOCIAL_CONTRIBUTION_RATE = 17.2
MICRO_ABATEMENT = 0.30

# IS : taux réduit jusqu'au seuil, taux normal au-delà
IS_REDUCED_RATE = 0.15
IS_NORMAL_RATE = 0.25
IS_REDUCED_THRESHOLD = 42500.0

# Amortissement LMNP : 85% de la valeur (hors terrain) sur ~30 ans
DEPRECIABLE_SHARE = 0.85
DEPRECIATION_RATE = 0.03

# Plus-value immobilière
CAPITAL_GAINS_TAX_RATE = 0.19
CAPITAL_GAINS_ABATEMENT_START = 5
CAPITAL_GAINS_ABATEMENT_PER_YEAR = 0.06
CAPITAL_GAINS_FULL_EXEMPTION = 21

# Seuils d'alerte
LOW_DEDUCTIONS_RATIO = 0.10
LOW_DEDUCTIONS_ALERT_RATIO = 0.15
MICRO_TIP_INCOME_CEILING = 15000.0
YIELD_ALERT_THRESHOLD = 4.5

# DPE (kWh/m²/an) : borne haute exclusive de chaque classe
ENERGY_CLASS_THRESHOLDS = (
    ("A", 70),
    ("B", 110),
    ("C", 180),
    ("D", 250),
    ("E", 330),
    ("F", 420),
)
DEFAULT_ENERGY_IMPROVEMENT = 90

# Configuration des pages
PAGE_TITLE = "Cockpit Propriétaire"
PAGE_ICON = "🏠"
LAYOUT = "wide"

# Couleurs des graphiques
COLORS = {
    "primary": "#6366f1",
    "secondary": "#f59e0b",
    "success": "#10b981",
    "danger": "#ef4444",
    "warning": "#f59e0b",
    "info": "#17becf",
    "principal": "#6366f1",
    "interest": "#f59e0b",
    "income": "#10b981",
    "expense": "#ef4444",
    "micro": "#f59e0b",
    "lmnp_reel": "#10b981",
    "sci_is": "#6366f1",
}
