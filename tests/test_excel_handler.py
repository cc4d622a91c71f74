"""Couche de données Excel"""
import pandas as pd

from config.constants import SHEET_PROPERTIES, SHEET_PAYMENTS, SHEET_EXPENSES, SHEET_CONFIG
from data_manager.excel_handler import (
    init_excel, read_sheet, write_sheet, backup_excel,
    save_property, get_all_properties, get_property_by_id, delete_property,
    save_payment, get_payments, delete_payment,
    save_expense, get_expenses, delete_expense,
    get_config, get_config_float, set_config, get_all_config,
)
from data_manager.schema import Property, RentPayment, Expense


def _property(pid="PR-1", name="Studio Lyon"):
    return Property(
        property_id=pid,
        name=name,
        address="12 rue de la République",
        property_value=200000.0,
        loan_amount=140000.0,
        loan_rate=4.0,
        loan_term_months=240,
        loan_start_date="2023-01-01",
    )


class TestInitExcel:
    def test_creates_file(self, temp_excel):
        assert temp_excel.exists()

    def test_has_all_sheets(self, temp_excel):
        xls = pd.ExcelFile(temp_excel, engine="openpyxl")
        for sheet in (SHEET_PROPERTIES, SHEET_PAYMENTS, SHEET_EXPENSES, SHEET_CONFIG):
            assert sheet in xls.sheet_names

    def test_default_config(self, temp_excel):
        assert get_config_float("loan_rate", 0.0, temp_excel) == 4.0
        assert get_config_float("marginal_tax_rate", 0.0, temp_excel) == 30.0

    def test_idempotent(self, temp_excel):
        set_config("loan_rate", "3.5", "", temp_excel)
        init_excel(temp_excel)
        assert get_config("loan_rate", temp_excel) == "3.5"

    def test_creates_parent_dir(self, tmp_path):
        filepath = tmp_path / "nested" / "data.xlsx"
        init_excel(filepath)
        assert filepath.exists()


class TestSheets:
    def test_missing_sheet_reads_empty(self, temp_excel):
        assert read_sheet("Inexistante", temp_excel).empty

    def test_write_keeps_other_sheets(self, temp_excel):
        write_sheet(pd.DataFrame([{"a": 1}]), SHEET_PROPERTIES, temp_excel)
        xls = pd.ExcelFile(temp_excel, engine="openpyxl")
        assert SHEET_CONFIG in xls.sheet_names
        assert read_sheet(SHEET_PROPERTIES, temp_excel)["a"].tolist() == [1]

    def test_backups_capped(self, temp_excel):
        for _ in range(8):
            backup_excel(temp_excel, keep=5)
        backups = list(temp_excel.parent.glob(f"{temp_excel.stem}.xlsx.bak_*"))
        assert len(backups) == 5


class TestPropertyCRUD:
    def test_save_and_get(self, temp_excel):
        save_property(_property(), temp_excel)
        properties = get_all_properties(temp_excel)
        assert len(properties) == 1
        assert properties.iloc[0]["property_id"] == "PR-1"

    def test_get_by_id(self, temp_excel):
        save_property(_property("PR-2", "T2 Nantes"), temp_excel)
        result = get_property_by_id("PR-2", temp_excel)
        assert result is not None
        assert result["name"] == "T2 Nantes"
        assert get_property_by_id("absent", temp_excel) is None

    def test_update(self, temp_excel):
        save_property(_property(), temp_excel)
        save_property(_property(name="Studio rénové"), temp_excel)
        properties = get_all_properties(temp_excel)
        assert len(properties) == 1
        assert properties.iloc[0]["name"] == "Studio rénové"

    def test_update_into_empty_column(self, temp_excel):
        save_property(Property("PR-2", "Garage", "", 15000.0, 0.0, 0.0, 0), temp_excel)
        save_property(Property("PR-2", "Garage", "3 impasse des Lilas", 16000.0, 0.0, 0.0, 0), temp_excel)
        result = get_property_by_id("PR-2", temp_excel)
        assert result["address"] == "3 impasse des Lilas"
        assert result["property_value"] == 16000.0

    def test_save_dict(self, temp_excel):
        save_property({"property_id": "PR-3", "name": "Garage", "property_value": 15000.0}, temp_excel)
        assert get_property_by_id("PR-3", temp_excel)["property_value"] == 15000.0

    def test_delete_cascades(self, temp_excel):
        save_property(_property(), temp_excel)
        save_property(_property("PR-2", "T2 Nantes"), temp_excel)
        save_payment(RentPayment("LY-1", "PR-1", "Martin", "2024-01-01", 750.0), temp_excel)
        save_payment(RentPayment("LY-2", "PR-2", "Durand", "2024-01-01", 900.0), temp_excel)
        save_expense(Expense("DP-1", "PR-1", "2024-02-01", 300.0, "travaux"), temp_excel)

        delete_property("PR-1", temp_excel)

        assert get_all_properties(temp_excel)["property_id"].tolist() == ["PR-2"]
        assert get_payments(filepath=temp_excel)["payment_id"].tolist() == ["LY-2"]
        assert get_expenses(filepath=temp_excel).empty


class TestPaymentsAndExpenses:
    def test_payments_by_property(self, temp_excel):
        save_payment(RentPayment("LY-1", "PR-1", "Martin", "2024-01-01", 750.0), temp_excel)
        save_payment(RentPayment("LY-2", "PR-2", "Durand", "2024-01-01", 900.0, "LATE"), temp_excel)
        assert len(get_payments(filepath=temp_excel)) == 2
        own = get_payments("PR-2", temp_excel)
        assert own["payment_id"].tolist() == ["LY-2"]
        assert own.iloc[0]["status"] == "LATE"

    def test_delete_payment(self, temp_excel):
        save_payment(RentPayment("LY-1", "PR-1", "Martin", "2024-01-01", 750.0), temp_excel)
        delete_payment("LY-1", temp_excel)
        assert get_payments("PR-1", temp_excel).empty

    def test_expenses(self, temp_excel):
        save_expense(Expense("DP-1", "PR-1", "2024-02-01", 300.0, "travaux", "Peinture", False), temp_excel)
        expenses = get_expenses("PR-1", temp_excel)
        assert expenses.iloc[0]["description"] == "Peinture"
        assert not bool(expenses.iloc[0]["is_deductible"])
        delete_expense("DP-1", temp_excel)
        assert get_expenses("PR-1", temp_excel).empty


class TestConfig:
    def test_set_and_get(self, temp_excel):
        set_config("test_key", "test_value", "test", temp_excel)
        assert get_config("test_key", temp_excel) == "test_value"

    def test_update_existing(self, temp_excel):
        set_config("loan_rate", "3.60", "", temp_excel)
        assert get_config_float("loan_rate", 0.0, temp_excel) == 3.6

    def test_missing_key_falls_back(self, temp_excel):
        assert get_config("absent", temp_excel) is None
        assert get_config_float("absent", 1.5, temp_excel) == 1.5

    def test_unreadable_value_falls_back(self, temp_excel):
        set_config("loan_rate", "abc", "", temp_excel)
        assert get_config_float("loan_rate", 4.0, temp_excel) == 4.0

    def test_out_of_bounds_value_falls_back(self, temp_excel):
        set_config("marginal_tax_rate", "150", "", temp_excel)
        assert get_config_float("marginal_tax_rate", 30.0, temp_excel) == 30.0

    def test_get_all_config(self, temp_excel):
        config_df = get_all_config(temp_excel)
        keys = config_df["key"].tolist()
        for key in ("loan_rate", "loan_term_months", "loan_to_value", "insurance_rate", "marginal_tax_rate"):
            assert key in keys
