import logging
from datetime import date, datetime
from pathlib import Path

import click

from config.settings import (
    DEFAULT_ENERGY_IMPROVEMENT, DEFAULT_INSURANCE_RATE, DEFAULT_MARGINAL_TAX_RATE, EXCEL_FILE,
)
from core.amortization import (
    compare_scenarios, compute_schedule, effective_annual_rate, iter_months, payoff_date,
)
from core.comparison import compare_loan_scenarios, compare_regimes, schedule_to_frame
from core.errors import FinancialInputError
from core.financials import build_property_financials
from core.models import FiscalInputs, LoanTerms
from core.taxation import compare_all, recommend_regime
from core.tools import capital_gains_tax, energy_class, projected_energy_class, revise_rent
from data_manager.data_validator import validate_config
from data_manager.excel_handler import (
    get_all_config, get_all_properties, get_config_float, get_expenses, get_payments,
    get_property_by_id, set_config,
)

logger = logging.getLogger(__name__)


def _loan_terms(principal, annual_rate, term_months, extra=0.0) -> LoanTerms:
    try:
        return LoanTerms(principal, annual_rate, term_months, extra)
    except FinancialInputError as e:
        raise click.BadParameter(str(e))


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise click.BadParameter(f"invalid date '{value}', expected YYYY-MM-DD")


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """Landlord cockpit: loan amortization, tax regimes and property reports."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


@cli.command()
@click.option('--principal', type=float, required=True, help='Loan principal (EUR)')
@click.option('--annual-rate', type=float, required=True, help='Annual interest rate in percent')
@click.option('--term-months', type=int, required=True, help='Loan term in months')
@click.option('--extra', type=float, default=0.0, help='Extra monthly payment (EUR)')
def payment(principal, annual_rate, term_months, extra):
    """Monthly payment, total interest and payoff duration of a fixed-rate loan."""
    terms = _loan_terms(principal, annual_rate, term_months, extra)
    try:
        schedule = compute_schedule(terms)
    except FinancialInputError as e:
        raise click.ClickException(str(e))
    click.echo(f"Monthly payment: {schedule.monthly_payment:.2f}")
    click.echo(f"Total interest: {schedule.total_interest:.2f}")
    click.echo(f"Total paid: {schedule.total_paid:.2f}")
    click.echo(f"Payoff month: {schedule.payoff_month} ({schedule.payoff_years:.1f} years)")


@cli.command()
@click.option('--principal', type=float, required=True, help='Loan principal (EUR)')
@click.option('--annual-rate', type=float, required=True, help='Annual interest rate in percent')
@click.option('--term-months', type=int, required=True, help='Loan term in months')
@click.option('--extra', type=float, default=0.0, help='Extra monthly payment (EUR)')
@click.option('--monthly', is_flag=True, help='Output every month instead of yearly samples')
def schedule(principal, annual_rate, term_months, extra, monthly):
    """Amortization schedule as CSV."""
    terms = _loan_terms(principal, annual_rate, term_months, extra)
    try:
        points = iter_months(terms) if monthly else compute_schedule(terms).points
        df = schedule_to_frame(points)
    except FinancialInputError as e:
        raise click.ClickException(str(e))
    click.echo(df.to_csv(index=False, float_format='%.2f'))


@cli.command()
@click.option('--principal', type=float, required=True, help='Loan principal (EUR)')
@click.option('--annual-rate', type=float, required=True, help='Current annual rate in percent')
@click.option('--term-months', type=int, required=True, help='Current term in months')
@click.option('--new-rate', type=float, help='Renegotiated annual rate (defaults to the current rate)')
@click.option('--new-term-months', type=int, help='Renegotiated term (defaults to the current term)')
@click.option('--extra', type=float, default=0.0, help='Extra monthly payment in the simulation')
def compare(principal, annual_rate, term_months, new_rate, new_term_months, extra):
    """Compares the current loan with a renegotiated or prepaid one."""
    base = _loan_terms(principal, annual_rate, term_months)
    alternative = _loan_terms(
        principal,
        annual_rate if new_rate is None else new_rate,
        term_months if new_term_months is None else new_term_months,
        extra,
    )
    try:
        comparison = compare_scenarios(base, alternative)
    except FinancialInputError as e:
        raise click.ClickException(str(e))
    click.echo(compare_loan_scenarios(comparison).to_string(index=False))
    click.echo(f"\nMonthly gain: {comparison.monthly_gain:.2f}")
    click.echo(f"Interest saved: {comparison.interest_saved:.2f}")
    click.echo(f"Months saved: {comparison.months_saved}")
    click.echo(f"Remaining term: {comparison.remaining_term_years} years")


@cli.command('effective-rate')
@click.option('--principal', type=float, required=True, help='Loan principal (EUR)')
@click.option('--annual-rate', type=float, required=True, help='Annual interest rate in percent')
@click.option('--term-months', type=int, required=True, help='Loan term in months')
@click.option('--insurance-rate', type=float, default=DEFAULT_INSURANCE_RATE, show_default=True,
              help='Borrower insurance, percent of the initial principal per year')
@click.option('--start-date', type=str, help='First month of the loan (YYYY-MM-DD)')
def effective_rate_command(principal, annual_rate, term_months, insurance_rate, start_date):
    """Effective annual rate including borrower insurance."""
    terms = _loan_terms(principal, annual_rate, term_months)
    try:
        rate = effective_annual_rate(terms, insurance_rate)
    except FinancialInputError as e:
        raise click.ClickException(str(e))
    click.echo(f"Effective annual rate: {rate:.4f}%")
    if start_date:
        end = payoff_date(_parse_date(start_date), compute_schedule(terms))
        click.echo(f"Last payment: {end:%Y-%m}")


@cli.command()
@click.option('--income', type=float, required=True, help='Gross annual rental income')
@click.option('--expenses', type=float, default=0.0, help='Deductible expenses')
@click.option('--depreciation', type=float, default=0.0, help='Annual depreciation')
@click.option('--interest', type=float, default=0.0, help='Loan interest paid over the year')
@click.option('--tmi', type=float, default=DEFAULT_MARGINAL_TAX_RATE, show_default=True,
              help='Marginal income tax rate in percent')
def taxes(income, expenses, depreciation, interest, tmi):
    """Taxable base and estimated tax under Micro, LMNP reel and SCI IS."""
    try:
        inputs = FiscalInputs(income, expenses, depreciation, interest, tmi)
    except FinancialInputError as e:
        raise click.BadParameter(str(e))
    results = compare_all(inputs)
    table = compare_regimes(results)
    click.echo(table.drop(columns=['regime']).to_string(index=False, float_format=lambda v: f"{v:.2f}"))
    best = recommend_regime(results)
    click.echo(f"\nRecommended: {best.regime.label}")


@cli.command('property-report')
@click.option('--property-id', type=str, required=True, help='Property ID')
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=EXCEL_FILE,
              show_default=True, help='Workbook path')
@click.option('--as-of', type=str, help='Report date (YYYY-MM-DD), defaults to today')
def property_report(property_id, data_file, as_of):
    """Annual financial snapshot of a stored property."""
    prop = get_property_by_id(property_id, data_file)
    if prop is None:
        raise click.ClickException(f"Property with ID '{property_id}' not found.")
    today = _parse_date(as_of) if as_of else date.today()
    tmi = get_config_float('marginal_tax_rate', DEFAULT_MARGINAL_TAX_RATE, data_file)
    try:
        fin = build_property_financials(
            prop, get_payments(property_id, data_file), get_expenses(property_id, data_file),
            today=today, marginal_tax_rate=tmi,
        )
    except FinancialInputError as e:
        raise click.ClickException(str(e))

    logger.debug("Report for %s as of %s", property_id, today)
    click.echo(f"--- {fin.name} ({today.year}) ---")
    click.echo(f"Income: {fin.income:.2f}")
    click.echo(f"Expenses: {fin.expenses:.2f} (deductible {fin.deductible_expenses:.2f})")
    click.echo(f"Loan payments: {fin.loan_year.payments:.2f} (interest {fin.loan_year.interest:.2f})")
    click.echo(f"Cashflow: {fin.cashflow:.2f}")
    click.echo(f"Gross yield: {fin.yield_gross:.2f}%")
    click.echo(f"Depreciation: {fin.depreciation:.2f}")
    for result in fin.regimes:
        click.echo(f"{result.regime.label}: base {result.taxable_base:.2f}, tax {result.estimated_tax:.2f}")
    click.echo(f"Recommended: {fin.recommended.regime.label}")
    for item in fin.alerts + fin.suggestions:
        click.echo(f"[{item['type']}] {item['message']}")


@cli.command('list-properties')
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=EXCEL_FILE,
              show_default=True, help='Workbook path')
def list_properties(data_file):
    """Lists all stored properties."""
    properties = get_all_properties(data_file)
    if properties.empty:
        click.echo("No properties.")
        return
    click.echo(properties[['property_id', 'name', 'property_value', 'loan_amount']].to_string(index=False))


@cli.command('rent-index')
@click.option('--rent', type=float, required=True, help='Current monthly rent')
@click.option('--old-index', type=float, required=True, help='Reference IRL')
@click.option('--new-index', type=float, required=True, help='New IRL')
def rent_index(rent, old_index, new_index):
    """Annual rent revision from the rent reference index (IRL)."""
    try:
        revised, increase = revise_rent(rent, old_index, new_index)
    except ValueError as e:
        raise click.BadParameter(str(e))
    click.echo(f"New rent: {revised:.2f}")
    click.echo(f"Increase: {increase:+.2f}")


@cli.command('capital-gains')
@click.option('--purchase', type=float, required=True, help='Purchase price')
@click.option('--selling', type=float, required=True, help='Expected selling price')
@click.option('--years', type=int, required=True, help='Years of ownership')
def capital_gains(purchase, selling, years):
    """Latent tax on the capital gain of a sale."""
    try:
        result = capital_gains_tax(purchase, selling, years)
    except ValueError as e:
        raise click.BadParameter(str(e))
    click.echo(f"Gain: {result['gain']:.2f}")
    click.echo(f"Abatement: {result['abatement_rate'] * 100:.0f}%")
    click.echo(f"Taxable base: {result['taxable_base']:.2f}")
    click.echo(f"Tax: {result['tax']:.2f}")
    click.echo(f"Net: {result['net']:.2f}")


@cli.command('energy-class')
@click.option('--score', type=float, required=True, help='Energy use in kWh/m2/year')
@click.option('--improvement', type=float, default=DEFAULT_ENERGY_IMPROVEMENT, show_default=True,
              help='Expected gain from insulation works')
def energy_class_command(score, improvement):
    """DPE class now and after insulation works."""
    click.echo(f"Current class: {energy_class(score)}")
    click.echo(f"Projected class: {projected_energy_class(score, improvement)}")


@cli.command('list-configs')
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=EXCEL_FILE,
              show_default=True, help='Workbook path')
def list_configs(data_file):
    """Lists the stored default parameters."""
    click.echo(get_all_config(data_file).to_string(index=False))


@cli.command('set-config')
@click.option('--key', type=str, required=True, help='Config key')
@click.option('--value', type=str, required=True, help='Config value')
@click.option('--description', type=str, default='', help='Description')
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=EXCEL_FILE,
              show_default=True, help='Workbook path')
def set_config_command(key, value, description, data_file):
    """Sets a default parameter."""
    valid, msg = validate_config(key, value)
    if not valid:
        raise click.BadParameter(msg, param_hint="--value")
    set_config(key, value, description, data_file)
    click.echo(f"Config with key '{key}' set successfully.")


if __name__ == "__main__":
    cli()
