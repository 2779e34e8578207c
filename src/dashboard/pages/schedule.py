"""Schedule page: loan inputs, one extra payment, recast options, balance chart."""

from decimal import Decimal, InvalidOperation

import dash
from dash import html, dcc, callback, Input, Output, State, no_update

from src.config import settings
from src.dashboard.figures import balance_figure, cumulative_figure
from src.engine.comparison import build_params, compare_plans
from src.models.loan import PaymentIntent, RecurringFrequency
from src.models.results import PlanComparison

dash.register_page(__name__, path="/", name="Schedule")

SCHEDULE_PREVIEW_ROWS = 24

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "140px"})


layout = html.Div([
    html.H2("Amortization & Recast"),

    html.Div([
        _field("Loan Amount ($)", dcc.Input(id="principal", type="number", value=800000, style=FIELD_STYLE)),
        _field("Interest Rate (%)", dcc.Input(
            id="rate", type="number", value=float(settings.default_rate_pct), step=0.01, style=FIELD_STYLE,
        )),
        _field("Term (years)", dcc.Input(
            id="term-years", type="number", value=settings.default_term_years, style=FIELD_STYLE,
        )),
        _field("Start (YYYY-MM)", dcc.Input(id="start-ym", type="text", value="2025-01", style=FIELD_STYLE)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem", "flexWrap": "wrap"}),

    html.H4("Extra Payment"),
    html.Div([
        _field("Month", dcc.Input(id="extra-month", type="number", value=6, style=FIELD_STYLE)),
        _field("Amount ($)", dcc.Input(id="extra-amount", type="number", value=50000, style=FIELD_STYLE)),
        _field("Kind", dcc.Dropdown(
            id="extra-kind",
            options=[
                {"label": "Extra payment", "value": "extra"},
                {"label": "Forgiveness", "value": "forgiveness"},
            ],
            value="extra",
            clearable=False,
        )),
        _field("Repeat", dcc.Dropdown(
            id="extra-frequency",
            options=[
                {"label": "Once", "value": "once"},
                {"label": "Monthly", "value": "monthly"},
                {"label": "Annually", "value": "annually"},
            ],
            value="once",
            clearable=False,
        )),
        _field("Occurrences", dcc.Input(id="extra-count", type="number", value=1, min=1, style=FIELD_STYLE)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem", "flexWrap": "wrap"}),

    html.H4("Recast"),
    html.Div([
        _field("Recast months", dcc.Input(id="recast-months", type="text", placeholder="12, 24-26", style=FIELD_STYLE)),
        dcc.Checklist(
            id="auto-recast",
            options=[{"label": " Recast automatically after each extra payment", "value": "auto"}],
            value=["auto"],
            style={"alignSelf": "end"},
        ),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1.5rem", "flexWrap": "wrap"}),

    html.Button("Calculate", id="calculate-btn", n_clicks=0, style=BTN_STYLE),
    html.Div(id="schedule-results", style={"marginTop": "2rem"}),
])


def _decimal(value, default="0") -> Decimal:
    try:
        return Decimal(str(value)) if value is not None else Decimal(default)
    except InvalidOperation:
        return Decimal(default)


def _intent(month, amount, kind, frequency, count) -> PaymentIntent:
    recurring = frequency in ("monthly", "annually")
    return PaymentIntent(
        month=month,
        amount=_decimal(amount),
        is_forgiveness=kind == "forgiveness",
        is_recurring=recurring,
        recurring_quantity=int(count or 1) if recurring else None,
        recurring_frequency=RecurringFrequency(frequency) if recurring else RecurringFrequency.MONTHLY,
    )


@callback(
    Output("schedule-results", "children"),
    Input("calculate-btn", "n_clicks"),
    [
        State("principal", "value"),
        State("rate", "value"),
        State("term-years", "value"),
        State("start-ym", "value"),
        State("extra-month", "value"),
        State("extra-amount", "value"),
        State("extra-kind", "value"),
        State("extra-frequency", "value"),
        State("extra-count", "value"),
        State("recast-months", "value"),
        State("auto-recast", "value"),
    ],
)
def run_schedule(n_clicks, principal, rate, term_years, start_ym,
                 extra_month, extra_amount, extra_kind, extra_frequency, extra_count,
                 recast_months, auto_recast):
    if not principal or not start_ym:
        return no_update
    try:
        params = build_params(
            principal=_decimal(principal),
            annual_rate_pct=_decimal(rate),
            term_years=_decimal(term_years, default=str(settings.default_term_years)),
            start_ym=start_ym,
            intents=[_intent(extra_month, extra_amount, extra_kind, extra_frequency, extra_count)],
            recast_months_text=recast_months or "",
            auto_recast="auto" in (auto_recast or []),
        )
        comparison = compare_plans(params)
    except ValueError as e:
        return html.Div(f"Error: {e}", style={"color": "#e94560"})
    return _build_results(comparison)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _money(value) -> str:
    return f"${float(value):,.2f}"


def _metric_card(label, value):
    return html.Div([
        html.Div(value, style={"fontSize": "1.5rem", "fontWeight": "bold"}),
        html.Div(label, style={"fontSize": "0.85rem", "color": "#666"}),
    ], style={
        "backgroundColor": "white",
        "border": "1px solid #ddd",
        "borderRadius": "8px",
        "padding": "1rem 1.5rem",
        "minWidth": "150px",
        "textAlign": "center",
    })


def _build_results(comparison: PlanComparison):
    result = comparison.result
    payoff_date = result.rows[-1].payment_date if result.rows else "-"

    summary = html.Div([
        _metric_card("Initial Payment", _money(result.initial_payment)),
        _metric_card("Total Interest", _money(result.total_interest)),
        _metric_card("Interest Saved", _money(comparison.interest_saved)),
        _metric_card("Months Saved", str(comparison.months_saved)),
        _metric_card("Payoff", f"{payoff_date} (month {result.payoff_month})"),
        _metric_card("Forgiven", _money(result.total_forgiveness)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "2rem", "flexWrap": "wrap"})

    segments = html.Ul([
        html.Li(f"From month {s.start}: {_money(s.payment)}/mo") for s in result.segments
    ])

    table_header = html.Tr([
        html.Th("Month"), html.Th("Date"), html.Th("Payment"), html.Th("Interest"),
        html.Th("Principal"), html.Th("Extra"), html.Th("Forgiven"), html.Th("Balance"),
        html.Th("Recast"),
    ])
    table_rows = [
        html.Tr([
            html.Td(r.idx),
            html.Td(r.payment_date),
            html.Td(_money(r.scheduled_payment)),
            html.Td(_money(r.interest)),
            html.Td(_money(r.scheduled_principal)),
            html.Td(_money(r.extra_principal)),
            html.Td(_money(r.forgiven_principal)),
            html.Td(_money(r.loan_balance)),
            html.Td(_money(r.new_payment) if r.recast and r.new_payment else ""),
        ])
        for r in result.rows[:SCHEDULE_PREVIEW_ROWS]
    ]
    table = html.Table(
        [html.Thead(table_header), html.Tbody(table_rows)],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": "0.9rem"},
    )

    return html.Div([
        summary,
        html.Div([
            dcc.Graph(figure=balance_figure(result, comparison.baseline), style={"width": "50%"}),
            dcc.Graph(figure=cumulative_figure(result), style={"width": "50%"}),
        ], style={"display": "flex", "gap": "1rem"}),
        html.H3("Payment Segments", style={"marginTop": "2rem"}),
        segments,
        html.H3(f"Schedule (first {SCHEDULE_PREVIEW_ROWS} months)", style={"marginTop": "2rem"}),
        table,
    ])
