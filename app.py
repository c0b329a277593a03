import os

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from flask import jsonify, request

from aeroperf import (
    AeroPerfError,
    ResolutionError,
    dprint,
    from_range,
    get_default_provider,
    performance_summary,
)
from aeroperf.constants import (
    COLORS,
    DEFAULT_AIRCRAFT,
    DEFAULT_ALTITUDE,
    DEFAULT_DISTANCE,
    DEFAULT_LOAD_FACTOR,
    DEFAULT_MASS,
    DEFAULT_TAS,
    DEFAULT_VERTICAL_SPEED,
    FLAP_ANGLE_OPTIONS,
)

# ✅ Initialize Dash app
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.BOOTSTRAP],
    suppress_callback_exceptions=True,
)
app.title = "Aircraft Performance Explorer"
server = app.server

provider = get_default_provider()

# label, summary key, scale, unit, format
RESULT_ROWS = [
    ("Pressure", "pressure", 0.01, "hPa", "{:.1f}"),
    ("Density", "density", 1.0, "kg/m³", "{:.4f}"),
    ("Temperature", "temperature", 1.0, "K", "{:.2f}"),
    ("CAS", "cas_kts", 1.0, "kts", "{:.1f}"),
    ("Mach", "mach", 1.0, "", "{:.3f}"),
    ("Take-off Thrust", "thrust_takeoff", 0.001, "kN", "{:.1f}"),
    ("Climb Thrust", "thrust_climb", 0.001, "kN", "{:.1f}"),
    ("Idle Thrust", "thrust_idle", 0.001, "kN", "{:.1f}"),
    ("Drag", "drag", 0.001, "kN", "{:.1f}"),
    ("Fuel Flow", "fuel_flow", 1.0, "kg/s", "{:.3f}"),
    ("CO₂", "co2", 1.0, "g/s", "{:.1f}"),
    ("H₂O", "h2o", 1.0, "g/s", "{:.1f}"),
]

EMISSION_BARS = [("NOx", "nox"), ("CO", "co"), ("HC", "hc"), ("SOx", "sox"), ("Soot", "soot")]


def input_row(label, component_id, value, step=None, unit=None):
    return dbc.Row([
        dbc.Col(html.Label(label, className="input-label"), width=5),
        dbc.Col(dcc.Input(id=component_id, type="number", value=value, step=step or "any", debounce=True,
                          style={"width": "100%"}), width=5),
        dbc.Col(html.Span(unit or "", style={"fontSize": "13px", "color": "#666"}), width=2),
    ], className="mb-2", align="center")


def serve_layout():
    # aircraft list is re-read on every page load so new records show up
    aircraft_codes = provider.available_aircraft()
    default_ac = DEFAULT_AIRCRAFT if DEFAULT_AIRCRAFT in aircraft_codes else next(iter(aircraft_codes), None)

    return dbc.Container([
        html.Div("Aircraft Performance Explorer", style={
            "fontWeight": "600",
            "fontSize": "22px",
            "margin": "12px 0",
            "color": "#1b1e23"
        }),
        dbc.Row([
            # Sidebar Left
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader("Aircraft Configuration"),
                    dbc.CardBody([
                        html.Label("Aircraft", className="input-label"),
                        dcc.Dropdown(
                            id="aircraft-select",
                            options=[{"label": code, "value": code} for code in aircraft_codes],
                            value=default_ac,
                            placeholder="Select an Aircraft...",
                            className="mb-3",
                        ),
                        html.Label("Engine", className="input-label"),
                        dcc.Dropdown(id="engine-select", className="mb-3"),
                        html.Label("Flap Angle (deg)", className="input-label"),
                        dcc.Dropdown(
                            id="flap-select",
                            options=[{"label": f"{angle}°", "value": angle} for angle in FLAP_ANGLE_OPTIONS],
                            value=0,
                            clearable=False,
                            className="mb-3",
                        ),
                        dcc.Checklist(
                            id="gear-toggle",
                            options=[{"label": " Landing gear down", "value": "down"}],
                            value=[],
                        ),
                    ])
                ], className="mb-3"),

                dbc.Card([
                    dbc.CardHeader("Flight State"),
                    dbc.CardBody([
                        input_row("Mass", "mass-input", DEFAULT_MASS, step=100, unit="kg"),
                        input_row("TAS", "tas-input", DEFAULT_TAS, step=5, unit="kts"),
                        input_row("Altitude", "altitude-input", DEFAULT_ALTITUDE, step=500, unit="ft"),
                        input_row("Vertical Speed", "vs-input", DEFAULT_VERTICAL_SPEED, step=100, unit="fpm"),
                    ])
                ], className="mb-3"),

                dbc.Card([
                    dbc.CardHeader("Mass From Mission Range"),
                    dbc.CardBody([
                        input_row("Distance", "distance-input", DEFAULT_DISTANCE, step=50, unit="km"),
                        input_row("Load Factor", "load-factor-input", DEFAULT_LOAD_FACTOR, step=0.05),
                        dbc.Button("Estimate Mass", id="estimate-mass-button", color="info",
                                   className="mt-1", style={"fontWeight": "bold"}),
                        html.Div(id="mass-note", style={"fontSize": "13px", "marginTop": "6px"}),
                    ])
                ]),
            ], md=4),

            # Results Right
            dbc.Col([
                dbc.Alert(id="error-alert", color="danger", is_open=False),
                dbc.Card([
                    dbc.CardHeader("Performance"),
                    dbc.CardBody(html.Div(id="results-table")),
                ], className="mb-3"),
                dbc.Row([
                    dbc.Col(dcc.Graph(id="force-graph", config={"displayModeBar": False}), md=6),
                    dbc.Col(dcc.Graph(id="emission-graph", config={"displayModeBar": False}), md=6),
                ]),
            ], md=8),
        ]),
    ], fluid=True)


app.layout = serve_layout


def style_figure(fig, title, yaxis_title):
    fig.update_layout(
        title=title,
        yaxis_title=yaxis_title,
        paper_bgcolor="#f7f9fc",
        plot_bgcolor="#f7f9fc",
        font=dict(color="#1b1e23"),
        margin=dict(l=40, r=20, t=50, b=40),
        yaxis=dict(showgrid=True),
        dragmode=False,
        showlegend=False,
    )
    return fig


def results_table(result):
    rows = []
    for label, key, scale, unit, fmt in RESULT_ROWS:
        rows.append(html.Tr([
            html.Td(label),
            html.Td(fmt.format(result[key] * scale), style={"textAlign": "right"}),
            html.Td(unit),
        ]))
    header = html.Div(f"{result['aircraft']} / {result['engine']}", style={"fontWeight": "600", "marginBottom": "6px"})
    return [header, dbc.Table(html.Tbody(rows), bordered=False, striped=True, size="sm")]


def force_figure(result):
    labels = ["Take-off", "Climb", "Idle", "Drag"]
    values = [result["thrust_takeoff"], result["thrust_climb"], result["thrust_idle"], result["drag"]]
    colors = [COLORS["thrust"]] * 3 + [COLORS["drag"]]
    fig = go.Figure(go.Bar(x=labels, y=[v / 1000 for v in values], marker_color=colors))
    return style_figure(fig, "Thrust vs Drag", "kN")


def emission_figure(result):
    fig = go.Figure(go.Bar(
        x=[label for label, _ in EMISSION_BARS],
        y=[result[key] for _, key in EMISSION_BARS],
        marker_color=[COLORS[key] for _, key in EMISSION_BARS],
    ))
    return style_figure(fig, "Emission Rates", "g/s")


@app.callback(
    Output("engine-select", "options"),
    Output("engine-select", "value"),
    Input("aircraft-select", "value"),
)
def update_engine_options(ac_name):
    if not ac_name:
        raise PreventUpdate
    try:
        spec = provider.aircraft(ac_name)
        engines = provider.compatible_engines(spec)
    except AeroPerfError as e:
        dprint(f"[ERROR] Engine options for {ac_name}: {e}")
        return [], None

    default = spec.engine.default if spec.engine else None
    if default not in engines:
        default = next(iter(engines), None)
    return [{"label": name, "value": name} for name in engines], default


@app.callback(
    Output("mass-input", "value"),
    Output("mass-note", "children"),
    Input("estimate-mass-button", "n_clicks"),
    State("aircraft-select", "value"),
    State("distance-input", "value"),
    State("load-factor-input", "value"),
    prevent_initial_call=True,
)
def estimate_mass(n_clicks, ac_name, distance_km, load_factor):
    if not n_clicks or not ac_name or distance_km is None:
        raise PreventUpdate
    if load_factor is None:
        load_factor = DEFAULT_LOAD_FACTOR

    try:
        mass = from_range(ac_name, distance_km, load_factor=load_factor)
        fraction = from_range(ac_name, distance_km, load_factor=load_factor, fraction=True)
    except AeroPerfError as e:
        return dash.no_update, f"⚠️ {e}"

    return round(mass), f"{fraction:.1%} of MTOW"


@app.callback(
    Output("results-table", "children"),
    Output("force-graph", "figure"),
    Output("emission-graph", "figure"),
    Output("error-alert", "children"),
    Output("error-alert", "is_open"),
    Input("aircraft-select", "value"),
    Input("engine-select", "value"),
    Input("mass-input", "value"),
    Input("tas-input", "value"),
    Input("altitude-input", "value"),
    Input("vs-input", "value"),
    Input("flap-select", "value"),
    Input("gear-toggle", "value"),
)
def update_results(ac_name, engine_name, mass, tas, altitude_ft, vs_fpm, flap_angle, gear):
    if not ac_name or not engine_name or mass is None or tas is None or altitude_ft is None:
        raise PreventUpdate

    try:
        result = performance_summary(
            ac_name,
            engine_name,
            mass_kg=mass,
            tas_kts=tas,
            alt_ft=altitude_ft,
            vs_fpm=vs_fpm or 0,
            flap_angle_deg=flap_angle or 0,
            landing_gear="down" in (gear or []),
        )
    except AeroPerfError as e:
        dprint(f"[ERROR] {ac_name}/{engine_name}: {e}")
        return html.Div(), go.Figure(), go.Figure(), str(e), True

    dprint("SUMMARY:", result)
    return results_table(result), force_figure(result), emission_figure(result), "", False


@app.server.route("/api/summary")
def api_summary():
    """
    JSON performance summary, e.g.
    /api/summary?ac=A320&mass=65000&tas=250&alt=30000
    """
    args = request.args
    try:
        result = performance_summary(
            args.get("ac", DEFAULT_AIRCRAFT),
            args.get("eng") or None,
            mass_kg=args.get("mass", type=float),
            tas_kts=args.get("tas", type=float),
            alt_ft=args.get("alt", 0, type=float),
            vs_fpm=args.get("vs", 0, type=float),
            flap_angle_deg=args.get("flap", 0, type=float),
            landing_gear=args.get("gear", "0") == "1",
            use_synonym=args.get("synonym", "0") == "1",
        )
    except ResolutionError as e:
        return jsonify({"error": str(e)}), 404
    except (AeroPerfError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(result)


if __name__ == "__main__":
    # Use env var to control debug (1 = on, 0 = off)
    debug_mode = os.environ.get("AEROPERF_DEBUG", "0") == "1"

    app.run(debug=debug_mode, host="127.0.0.1", port=8050)
