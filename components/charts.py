"""Fabrique de graphiques Plotly"""
from typing import Optional

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd

import plotly.io as pio
from config.settings import COLORS

# Thèmes Plotly du tableau de bord
pio.templates["owner_dashboard_light"] = go.layout.Template(
    layout=go.Layout(
        font=dict(family="sans-serif", color="#333"),
        title_font=dict(size=20, color="#333"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(
            gridcolor="#f4f4f5",
            linecolor="#e0e0e0",
            zerolinecolor="#e0e0e0",
            tickfont=dict(color="#666"),
            title_font=dict(color="#666"),
        ),
        yaxis=dict(
            gridcolor="#f4f4f5",
            linecolor="#e0e0e0",
            zerolinecolor="#e0e0e0",
            tickfont=dict(color="#666"),
            title_font=dict(color="#666"),
        ),
        legend=dict(
            font=dict(color="#666"),
            bgcolor="rgba(255,255,255,0.5)",
            bordercolor="#e0e0e0",
            borderwidth=1,
        ),
        colorway=px.colors.qualitative.Plotly,
    )
)

pio.templates["owner_dashboard_dark"] = go.layout.Template(
    layout=go.Layout(
        font=dict(family="sans-serif", color="#fafafa"),
        title_font=dict(size=20, color="#fafafa"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(
            gridcolor="#444",
            linecolor="#444",
            zerolinecolor="#444",
            tickfont=dict(color="#aaa"),
            title_font=dict(color="#aaa"),
        ),
        yaxis=dict(
            gridcolor="#444",
            linecolor="#444",
            zerolinecolor="#444",
            tickfont=dict(color="#aaa"),
            title_font=dict(color="#aaa"),
        ),
        legend=dict(
            font=dict(color="#aaa"),
            bgcolor="rgba(0,0,0,0.5)",
            bordercolor="#444",
            borderwidth=1,
        ),
        colorway=px.colors.qualitative.Plotly,
    )
)

pio.templates.default = "owner_dashboard_light"


def create_balance_area(
    schedule: pd.DataFrame,
    baseline: Optional[pd.DataFrame] = None,
    current_year: Optional[int] = None,
    template: str = "owner_dashboard_light",
) -> go.Figure:
    """Courbe d'amortissement : capital restant dû par année"""
    fig = go.Figure()

    if baseline is not None and not baseline.empty:
        fig.add_trace(go.Scatter(
            x=baseline["year"],
            y=baseline["balance"],
            mode="lines",
            name="Actuel",
            line=dict(color="#a1a1aa", width=2, dash="dash"),
            hovertemplate="Année %{x}<br>Capital restant: %{y:,.0f} €<extra></extra>",
        ))

    fig.add_trace(go.Scatter(
        x=schedule["year"],
        y=schedule["balance"],
        mode="lines",
        name="Simulation",
        fill="tozeroy",
        line=dict(color=COLORS["primary"], width=3),
        fillcolor="rgba(99, 102, 241, 0.1)",
        hovertemplate="Année %{x}<br>Capital restant: %{y:,.0f} €<extra></extra>",
    ))

    if current_year:
        fig.add_vline(x=current_year, line_dash="dash", line_color=COLORS["danger"],
                      annotation_text="Auj.", annotation_position="top")

    fig.update_layout(
        title="Courbe d'amortissement",
        xaxis_title="Années",
        yaxis_title="Capital restant dû (€)",
        hovermode="x unified",
        margin=dict(t=60, b=60, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_principal_interest_stack(schedule: pd.DataFrame, template: str = "owner_dashboard_light") -> go.Figure:
    """Répartition capital / intérêts de chaque mensualité"""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=schedule["month"],
        y=schedule["principal"],
        mode="lines",
        name="Capital",
        stackgroup="payment",
        line=dict(color=COLORS["principal"]),
        hovertemplate="Mois %{x}<br>Capital: %{y:,.2f} €<extra></extra>",
    ))

    fig.add_trace(go.Scatter(
        x=schedule["month"],
        y=schedule["interest"],
        mode="lines",
        name="Intérêts",
        stackgroup="payment",
        line=dict(color=COLORS["interest"]),
        hovertemplate="Mois %{x}<br>Intérêts: %{y:,.2f} €<extra></extra>",
    ))

    fig.update_layout(
        title="Capital / intérêts par mensualité",
        xaxis_title="Mois",
        yaxis_title="Montant (€)",
        hovermode="x unified",
        margin=dict(t=60, b=60, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_regime_bar(regimes: pd.DataFrame, template: str = "owner_dashboard_light") -> go.Figure:
    """Comparateur d'impôt annuel par régime"""
    colors = [COLORS.get(r, COLORS["primary"]) for r in regimes["regime"]]
    fig = go.Figure(go.Bar(
        x=regimes["Impôt estimé"],
        y=regimes["Régime"],
        orientation="h",
        marker_color=colors,
        text=[f"{v:,.0f} €".replace(",", " ") for v in regimes["Impôt estimé"]],
        textposition="auto",
        hovertemplate="%{y}<br>Impôt total: %{x:,.0f} €<extra></extra>",
    ))
    fig.update_layout(
        title="Comparateur d'impôt annuel",
        xaxis=dict(visible=False),
        yaxis=dict(autorange="reversed"),
        margin=dict(t=60, b=20, l=80, r=20),
        height=260,
        template=template,
    )
    return fig


def create_cashflow_waterfall(waterfall: pd.DataFrame, template: str = "owner_dashboard_light") -> go.Figure:
    """Cascade revenus -> charges -> crédit -> cashflow"""
    measures = ["total" if t == "total" else "relative" for t in waterfall["type"]]
    fig = go.Figure(go.Waterfall(
        x=waterfall["name"],
        y=waterfall["value"],
        measure=measures,
        increasing=dict(marker=dict(color=COLORS["income"])),
        decreasing=dict(marker=dict(color=COLORS["expense"])),
        totals=dict(marker=dict(color=COLORS["primary"])),
        hovertemplate="%{x}<br>%{y:,.0f} €<extra></extra>",
    ))
    fig.update_layout(
        title="Cascade du cashflow annuel",
        yaxis_title="Montant (€)",
        margin=dict(t=60, b=40, l=60, r=20),
        height=380,
        template=template,
    )
    return fig


def create_monthly_cashflow_bar(monthly: pd.DataFrame, template: str = "owner_dashboard_light") -> go.Figure:
    """Revenus et dépenses des 12 derniers mois, cashflow en courbe"""
    fig = go.Figure()

    fig.add_trace(go.Bar(
        name="Revenus",
        x=monthly["name"],
        y=monthly["income"],
        marker_color=COLORS["income"],
    ))

    fig.add_trace(go.Bar(
        name="Dépenses",
        x=monthly["name"],
        y=monthly["expenses"],
        marker_color=COLORS["expense"],
    ))

    fig.add_trace(go.Scatter(
        name="Cashflow",
        x=monthly["name"],
        y=monthly["cashflow"],
        mode="lines+markers",
        line=dict(color=COLORS["primary"], width=2),
    ))

    fig.update_layout(
        title="Flux mensuels",
        barmode="group",
        yaxis_title="Montant (€)",
        hovermode="x unified",
        margin=dict(t=60, b=40, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_pie_chart(
    labels: list,
    values: list,
    title: str = "",
    colors: list = None,
    hole: float = 0.45,
    template: str = "owner_dashboard_light",
) -> go.Figure:
    """Graphique en anneau"""
    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=values,
        hole=hole,
        marker_colors=colors,
        textinfo="label+percent",
        textposition="outside",
    )])
    fig.update_layout(
        title=title,
        showlegend=True,
        margin=dict(t=60, b=20, l=20, r=20),
        height=380,
        template=template,
    )
    return fig
