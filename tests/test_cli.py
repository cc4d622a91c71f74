"""Interface en ligne de commande"""
import pytest
from click.testing import CliRunner

from cli import cli
from data_manager.excel_handler import get_config_float, save_payment, save_property, set_config
from data_manager.schema import Property, RentPayment


@pytest.fixture
def runner():
    return CliRunner()


class TestLoanCommands:
    def test_payment(self, runner):
        result = runner.invoke(cli, ["payment", "--principal", "315000", "--annual-rate", "4", "--term-months", "240"])
        assert result.exit_code == 0
        assert "Monthly payment: 1908.8" in result.output
        assert "Payoff month: 240" in result.output

    def test_payment_with_extra(self, runner):
        result = runner.invoke(cli, ["payment", "--principal", "315000", "--annual-rate", "4",
                                     "--term-months", "240", "--extra", "300"])
        assert result.exit_code == 0
        assert "Payoff month: 240" not in result.output

    def test_invalid_principal(self, runner):
        result = runner.invoke(cli, ["payment", "--principal", "0", "--annual-rate", "4", "--term-months", "240"])
        assert result.exit_code != 0
        assert "principal" in result.output

    def test_non_amortizing(self, runner):
        result = runner.invoke(cli, ["payment", "--principal", "100000", "--annual-rate", "100",
                                     "--term-months", "1000000"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_schedule_yearly(self, runner):
        result = runner.invoke(cli, ["schedule", "--principal", "120000", "--annual-rate", "0", "--term-months", "120"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "month,year,balance,interest,principal,payment"
        assert len(lines) == 11

    def test_schedule_monthly(self, runner):
        result = runner.invoke(cli, ["schedule", "--principal", "120000", "--annual-rate", "0",
                                     "--term-months", "120", "--monthly"])
        assert result.exit_code == 0
        assert len(result.output.strip().splitlines()) == 121

    def test_compare(self, runner):
        result = runner.invoke(cli, ["compare", "--principal", "315000", "--annual-rate", "4",
                                     "--term-months", "240", "--new-rate", "3"])
        assert result.exit_code == 0
        assert "Simulation" in result.output
        assert "Months saved: 0" in result.output

    def test_effective_rate(self, runner):
        result = runner.invoke(cli, ["effective-rate", "--principal", "200000", "--annual-rate", "4",
                                     "--term-months", "240", "--insurance-rate", "0",
                                     "--start-date", "2024-01-01"])
        assert result.exit_code == 0
        assert "Effective annual rate: 4.07" in result.output
        assert "Last payment: 2044-01" in result.output

    def test_bad_date(self, runner):
        result = runner.invoke(cli, ["effective-rate", "--principal", "200000", "--annual-rate", "4",
                                     "--term-months", "240", "--start-date", "01/01/2024"])
        assert result.exit_code != 0


class TestTaxCommands:
    def test_taxes(self, runner):
        result = runner.invoke(cli, ["taxes", "--income", "60000", "--expenses", "10000", "--tmi", "30"])
        assert result.exit_code == 0
        assert "8250.00" in result.output
        assert "Recommended: SCI IS" in result.output

    def test_invalid_tmi(self, runner):
        result = runner.invoke(cli, ["taxes", "--income", "1000", "--tmi", "150"])
        assert result.exit_code != 0


class TestToolCommands:
    def test_rent_index(self, runner):
        result = runner.invoke(cli, ["rent-index", "--rent", "800", "--old-index", "100", "--new-index", "103.5"])
        assert result.exit_code == 0
        assert "New rent: 828.00" in result.output
        assert "Increase: +28.00" in result.output

    def test_capital_gains(self, runner):
        result = runner.invoke(cli, ["capital-gains", "--purchase", "200000", "--selling", "260000", "--years", "8"])
        assert result.exit_code == 0
        assert "Abatement: 18%" in result.output
        assert "Tax: 17810.40" in result.output

    def test_energy_class(self, runner):
        result = runner.invoke(cli, ["energy-class", "--score", "230"])
        assert result.exit_code == 0
        assert "Current class: D" in result.output
        assert "Projected class: C" in result.output


class TestWorkbookCommands:
    def test_property_report(self, runner, temp_excel):
        save_property(Property("PR-1", "Studio Lyon", "", 200000.0, 0.0, 0.0, 0), temp_excel)
        save_payment(RentPayment("LY-1", "PR-1", "Martin", "2024-03-01", 1000.0), temp_excel)
        result = runner.invoke(cli, ["property-report", "--property-id", "PR-1",
                                     "--data-file", str(temp_excel), "--as-of", "2024-06-15"])
        assert result.exit_code == 0, result.output
        assert "Studio Lyon (2024)" in result.output
        assert "Income: 1000.00" in result.output
        assert "Recommended: LMNP Réel" in result.output

    def test_property_report_unknown(self, runner, temp_excel):
        result = runner.invoke(cli, ["property-report", "--property-id", "absent", "--data-file", str(temp_excel)])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_list_properties(self, runner, temp_excel):
        result = runner.invoke(cli, ["list-properties", "--data-file", str(temp_excel)])
        assert result.exit_code == 0
        assert "No properties." in result.output

    def test_config_roundtrip(self, runner, temp_excel):
        result = runner.invoke(cli, ["set-config", "--key", "loan_rate", "--value", "3.2",
                                     "--data-file", str(temp_excel)])
        assert result.exit_code == 0
        listing = runner.invoke(cli, ["list-configs", "--data-file", str(temp_excel)])
        assert "3.2" in listing.output

    def test_set_config_rejects_out_of_range(self, runner, temp_excel):
        result = runner.invoke(cli, ["set-config", "--key", "marginal_tax_rate", "--value", "150",
                                     "--data-file", str(temp_excel)])
        assert result.exit_code == 2
        assert "entre 0 et 45" in result.output
        assert get_config_float("marginal_tax_rate", 0.0, temp_excel) == 30.0

    def test_property_report_ignores_out_of_range_config(self, runner, temp_excel):
        set_config("marginal_tax_rate", "150", "", temp_excel)
        save_property(Property("PR-1", "Studio Lyon", "", 200000.0, 0.0, 0.0, 0), temp_excel)
        result = runner.invoke(cli, ["property-report", "--property-id", "PR-1",
                                     "--data-file", str(temp_excel), "--as-of", "2024-06-15"])
        assert result.exit_code == 0, result.output
