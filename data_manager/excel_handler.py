import logging
import shutil
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from config.constants import (
    SHEET_PROPERTIES, SHEET_PAYMENTS, SHEET_EXPENSES, SHEET_CONFIG,
    PROPERTIES_COLUMNS, PAYMENTS_COLUMNS, EXPENSES_COLUMNS, CONFIG_COLUMNS,
)
from config.settings import (
    EXCEL_FILE, DATA_DIR, BACKUP_KEEP, CONFIG_BOUNDS,
    DEFAULT_LOAN_RATE, DEFAULT_LOAN_TERM_MONTHS, DEFAULT_LOAN_TO_VALUE,
    DEFAULT_INSURANCE_RATE, DEFAULT_MARGINAL_TAX_RATE,
)

logger = logging.getLogger(__name__)


def _ensure_data_dir(filepath: Path):
    filepath.parent.mkdir(parents=True, exist_ok=True)


def _default_config_rows() -> List[dict]:
    now = datetime.now().isoformat()
    return [
        {"key": "loan_rate", "value": str(DEFAULT_LOAN_RATE), "description": "Taux du prêt par défaut (%)", "updated_at": now},
        {"key": "loan_term_months", "value": str(DEFAULT_LOAN_TERM_MONTHS), "description": "Durée du prêt par défaut (mois)", "updated_at": now},
        {"key": "loan_to_value", "value": str(DEFAULT_LOAN_TO_VALUE), "description": "Quotité financée par défaut", "updated_at": now},
        {"key": "insurance_rate", "value": str(DEFAULT_INSURANCE_RATE), "description": "Assurance emprunteur (%)", "updated_at": now},
        {"key": "marginal_tax_rate", "value": str(DEFAULT_MARGINAL_TAX_RATE), "description": "Tranche marginale d'imposition (%)", "updated_at": now},
    ]


def init_excel(filepath: Path = EXCEL_FILE):
    """Crée le classeur avec toutes les feuilles et leurs en-têtes"""
    _ensure_data_dir(filepath)
    if filepath.exists():
        return

    logger.info("Creating workbook %s", filepath)
    with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
        pd.DataFrame(columns=PROPERTIES_COLUMNS).to_excel(
            writer, sheet_name=SHEET_PROPERTIES, index=False)
        pd.DataFrame(columns=PAYMENTS_COLUMNS).to_excel(
            writer, sheet_name=SHEET_PAYMENTS, index=False)
        pd.DataFrame(columns=EXPENSES_COLUMNS).to_excel(
            writer, sheet_name=SHEET_EXPENSES, index=False)
        config_df = pd.DataFrame(_default_config_rows(), columns=CONFIG_COLUMNS)
        config_df.to_excel(writer, sheet_name=SHEET_CONFIG, index=False)


def backup_excel(filepath: Path = EXCEL_FILE, keep: int = BACKUP_KEEP):
    """Sauvegarde avant écriture, en ne gardant que les `keep` dernières copies"""
    if not filepath.exists():
        return
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = filepath.with_suffix(f".xlsx.bak_{ts}")
    shutil.copy2(filepath, backup_path)
    logger.debug("Backed up %s to %s", filepath, backup_path)
    backups = sorted(filepath.parent.glob(f"{filepath.stem}.xlsx.bak_*"))
    for old in backups[:-keep]:
        old.unlink()


def read_sheet(sheet_name: str, filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    """Lit une feuille ; une feuille absente donne un DataFrame vide"""
    init_excel(filepath)
    try:
        df = pd.read_excel(filepath, sheet_name=sheet_name, engine="openpyxl")
    except ValueError:
        logger.warning("Sheet %s missing from %s", sheet_name, filepath)
        df = pd.DataFrame()
    return df


def write_sheet(df: pd.DataFrame, sheet_name: str, filepath: Path = EXCEL_FILE):
    """Remplace une feuille en conservant les autres"""
    init_excel(filepath)
    backup_excel(filepath)

    from openpyxl import load_workbook
    wb = load_workbook(filepath)

    if sheet_name in wb.sheetnames:
        del wb[sheet_name]
    wb.save(filepath)

    with pd.ExcelWriter(filepath, engine="openpyxl", mode="a", if_sheet_exists="replace") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
    logger.debug("Wrote %d rows to sheet %s", len(df), sheet_name)


def _record(obj) -> dict:
    return obj if isinstance(obj, dict) else asdict(obj)


def _assign(df: pd.DataFrame, mask: pd.Series, col: str, value):
    # read_excel infère float64 ou str selon le contenu de la colonne
    if df[col].dtype != object:
        df[col] = df[col].astype(object)
    df.loc[mask, col] = value


def _upsert(sheet_name: str, key: str, record: dict, filepath: Path):
    df = read_sheet(sheet_name, filepath)
    if key in df.columns and (df[key] == record[key]).any():
        mask = df[key] == record[key]
        for col, value in record.items():
            if col in df.columns:
                _assign(df, mask, col, value)
    else:
        df = pd.concat([df, pd.DataFrame([record])], ignore_index=True)
    write_sheet(df, sheet_name, filepath)


def _for_property(sheet_name: str, property_id: Optional[str], filepath: Path) -> pd.DataFrame:
    df = read_sheet(sheet_name, filepath)
    if property_id is None or "property_id" not in df.columns:
        return df
    return df[df["property_id"] == property_id].reset_index(drop=True)


# ---- Biens ----

def get_all_properties(filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    return read_sheet(SHEET_PROPERTIES, filepath)


def get_property_by_id(property_id: str, filepath: Path = EXCEL_FILE) -> Optional[pd.Series]:
    df = get_all_properties(filepath)
    match = df[df["property_id"] == property_id]
    if match.empty:
        return None
    return match.iloc[0]


def save_property(prop, filepath: Path = EXCEL_FILE):
    _upsert(SHEET_PROPERTIES, "property_id", _record(prop), filepath)


def delete_property(property_id: str, filepath: Path = EXCEL_FILE):
    df = get_all_properties(filepath)
    df = df[df["property_id"] != property_id]
    write_sheet(df, SHEET_PROPERTIES, filepath)
    # Supprime aussi loyers et dépenses rattachés
    for sheet in [SHEET_PAYMENTS, SHEET_EXPENSES]:
        sdf = read_sheet(sheet, filepath)
        if "property_id" in sdf.columns:
            sdf = sdf[sdf["property_id"] != property_id]
            write_sheet(sdf, sheet, filepath)
    logger.info("Deleted property %s", property_id)


# ---- Loyers ----

def get_payments(property_id: Optional[str] = None, filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    return _for_property(SHEET_PAYMENTS, property_id, filepath)


def save_payment(payment, filepath: Path = EXCEL_FILE):
    _upsert(SHEET_PAYMENTS, "payment_id", _record(payment), filepath)


def delete_payment(payment_id: str, filepath: Path = EXCEL_FILE):
    df = read_sheet(SHEET_PAYMENTS, filepath)
    write_sheet(df[df["payment_id"] != payment_id], SHEET_PAYMENTS, filepath)


# ---- Dépenses ----

def get_expenses(property_id: Optional[str] = None, filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    return _for_property(SHEET_EXPENSES, property_id, filepath)


def save_expense(expense, filepath: Path = EXCEL_FILE):
    _upsert(SHEET_EXPENSES, "expense_id", _record(expense), filepath)


def delete_expense(expense_id: str, filepath: Path = EXCEL_FILE):
    df = read_sheet(SHEET_EXPENSES, filepath)
    write_sheet(df[df["expense_id"] != expense_id], SHEET_EXPENSES, filepath)


# ---- Configuration ----

def get_config(key: str, filepath: Path = EXCEL_FILE) -> Optional[str]:
    df = read_sheet(SHEET_CONFIG, filepath)
    if "key" not in df.columns:
        return None
    match = df[df["key"] == key]
    if match.empty:
        return None
    return str(match.iloc[0]["value"])


def get_config_float(key: str, default: float, filepath: Path = EXCEL_FILE) -> float:
    """Valeur de configuration numérique, ou `default` si absente, illisible ou hors bornes"""
    value = get_config(key, filepath)
    if value is None:
        return default
    try:
        number = float(value)
    except (ValueError, TypeError):
        return default
    low, high = CONFIG_BOUNDS.get(key, (float("-inf"), float("inf")))
    if not low <= number <= high:
        logger.warning("Config %s=%s outside %s..%s, using %s", key, value, low, high, default)
        return default
    return number


def get_all_config(filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    return read_sheet(SHEET_CONFIG, filepath)


def set_config(key: str, value: str, description: str = "", filepath: Path = EXCEL_FILE):
    df = read_sheet(SHEET_CONFIG, filepath)
    now = datetime.now().isoformat()
    if key in df["key"].values:
        mask = df["key"] == key
        _assign(df, mask, "value", value)
        _assign(df, mask, "updated_at", now)
        if description:
            _assign(df, mask, "description", description)
    else:
        new_row = pd.DataFrame([{
            "key": key, "value": value,
            "description": description, "updated_at": now,
        }])
        df = pd.concat([df, new_row], ignore_index=True)
    write_sheet(df, SHEET_CONFIG, filepath)
