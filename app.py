"""
Web application for Driving Demo Handling Analysis

Interactive dashboard to compare handling presets on scripted drives.
"""

from typing import Any, Dict, List

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import numpy as np
import plotly.express as px
import plotly.graph_objs as go

from vehicle import HANDLING_PRESETS, SCENARIOS, Channel, run_preset_comparison


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Driving Demo Handling Analysis"

# Define app layout
app.layout = html.Div([
    html.Div([
        html.H1("Driving Demo Handling Analysis",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            html.Div([
                html.Label("Presets (comma-separated):",
                          style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='preset-input',
                    type='text',
                    value=','.join(HANDLING_PRESETS),
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '30%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Scenario:",
                          style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Dropdown(
                    id='scenario-input',
                    options=[{'label': name, 'value': name} for name in sorted(SCENARIOS)],
                    value='slalom',
                    clearable=False,
                ),
            ], style={'width': '20%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Ticks:",
                          style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='ticks-input',
                    type='number',
                    value=300,
                    min=10,
                    max=3600,
                    step=10,
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '20%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Button('Run Simulation', id='run-button',
                       style={'width': '20%', 'padding': '10px', 'fontSize': '16px',
                              'backgroundColor': '#4CAF50', 'color': 'white',
                              'border': 'none', 'borderRadius': '5px', 'cursor': 'pointer'})
        ], style={'marginBottom': '30px', 'padding': '20px', 'backgroundColor': '#f5f5f5',
                  'borderRadius': '10px'}),

        html.Div(id='status-message', style={'marginBottom': '20px', 'fontSize': '14px'}),

        dcc.Loading(
            id="loading",
            type="default",
            children=[
                html.Div(id='results-container')
            ]
        )
    ], style={'maxWidth': '1400px', 'margin': '0 auto', 'padding': '20px'})
])


@app.callback(
    [Output("results-container", "children"), Output("status-message", "children")],
    [Input("run-button", "n_clicks")],
    [State("preset-input", "value"), State("scenario-input", "value"), State("ticks-input", "value")],
)
def update_results(
    n_clicks: int | None, preset_str: str, scenario: str, ticks: int
) -> tuple[Any, Any]:
    """Run simulation and update results"""
    if n_clicks is None:
        raise PreventUpdate

    presets = [p.strip() for p in (preset_str or "").split(",") if p.strip()]
    if not presets:
        return [], html.Div("Error: Enter at least one preset.", style={"color": "red"})

    if ticks is None or ticks < 10 or ticks > 3600:
        return [], html.Div(
            "Error: Ticks must be between 10 and 3600.",
            style={"color": "red"},
        )

    try:
        results = run_preset_comparison(presets, scenario=scenario, ticks=int(ticks))
    except ValueError as e:
        return [], html.Div(f"Error: {e}", style={"color": "red"})

    status_msg = html.Div(
        f"Simulation complete! Compared {len(presets)} presets on '{scenario}'.",
        style={"color": "green"},
    )
    return create_results_layout(results, presets), status_msg


def create_results_layout(
    results: Dict[str, Dict[str, Any]], presets: List[str]
) -> html.Div:
    """Create the results visualization layout"""
    colors = px.colors.qualitative.Set1

    # 1. Speed over time
    fig1 = go.Figure()
    for i, name in enumerate(presets):
        trace = results[name]["trace"]
        fig1.add_trace(
            go.Scatter(
                x=trace.time,
                y=trace.speed,
                mode="lines",
                name=name,
                line=dict(color=colors[i % len(colors)], width=2),
                hovertemplate=f"Preset: {name}<br>Time: %{{x:.2f}}s<br>Speed: %{{y:.3f}}<extra></extra>",
            )
        )
    fig1.update_layout(
        title="Speed Over Time",
        xaxis_title="Time (s)",
        yaxis_title="Speed (units/tick)",
        hovermode="closest",
        height=400,
        template="plotly_white",
    )

    # 2. Ground track (top-down)
    fig2 = go.Figure()
    for i, name in enumerate(presets):
        position = results[name]["trace"].position
        fig2.add_trace(
            go.Scatter(
                x=position[:, 0],
                y=position[:, 2],
                mode="lines",
                name=name,
                line=dict(color=colors[i % len(colors)], width=2),
            )
        )
    fig2.update_layout(
        title="Ground Track",
        xaxis_title="x",
        yaxis_title="z",
        yaxis=dict(scaleanchor="x", scaleratio=1),
        height=500,
        template="plotly_white",
    )

    # 3. Yaw rate over time
    fig3 = go.Figure()
    for i, name in enumerate(presets):
        trace = results[name]["trace"]
        fig3.add_trace(
            go.Scatter(
                x=trace.time,
                y=np.degrees(trace.angular_velocity),
                mode="lines",
                name=name,
                line=dict(color=colors[i % len(colors)], width=2),
            )
        )
    fig3.update_layout(
        title="Yaw Rate Over Time",
        xaxis_title="Time (s)",
        yaxis_title="Yaw Rate (deg/tick)",
        hovermode="closest",
        height=400,
        template="plotly_white",
    )

    # 4. Channel activity for the first preset, one lane per channel
    first = results[presets[0]]["trace"]
    fig4 = go.Figure()
    for lane, channel in enumerate(Channel):
        active = first.channel_activity[channel.value]
        fig4.add_trace(
            go.Scatter(
                x=first.time,
                y=np.where(active, lane, np.nan),
                mode="markers",
                marker=dict(size=4, color=colors[lane % len(colors)]),
                name=channel.value,
            )
        )
    fig4.update_layout(
        title=f"Audio Channel Activity ({presets[0]})",
        xaxis_title="Time (s)",
        yaxis=dict(
            tickmode="array",
            tickvals=list(range(len(Channel))),
            ticktext=[channel.value for channel in Channel],
        ),
        height=300,
        template="plotly_white",
    )

    # 5. Skid fraction by preset
    fig5 = go.Figure()
    skid = [results[name]["analysis"]["skid_fraction"] * 100 for name in presets]
    colors_bar = ["red" if results[name]["analysis"]["is_thrashing"] else "green" for name in presets]
    fig5.add_trace(
        go.Bar(
            x=presets,
            y=skid,
            marker_color=colors_bar,
            text=[f"{s:.1f}%" for s in skid],
            textposition="outside",
        )
    )
    fig5.update_layout(
        title="Ticks Spent Skidding by Preset",
        xaxis_title="Preset",
        yaxis_title="Skidding (%)",
        height=400,
        template="plotly_white",
    )

    table_rows = [
        html.Tr([
            html.Th("Preset"),
            html.Th("Top Speed"),
            html.Th("Ticks to Top Speed"),
            html.Th("Distance"),
            html.Th("Heading Change (deg)"),
            html.Th("Audio Thrashing"),
        ])
    ]
    for name in presets:
        analysis = results[name]["analysis"]
        thrash_color = "red" if analysis["is_thrashing"] else "green"
        table_rows.append(
            html.Tr([
                html.Td(name),
                html.Td(f"{analysis['top_speed']:.3f}"),
                html.Td(analysis["ticks_to_top_speed"]),
                html.Td(f"{analysis['distance']:.2f}"),
                html.Td(f"{np.degrees(analysis['heading_change']):.1f}"),
                html.Td(
                    "Yes" if analysis["is_thrashing"] else "No",
                    style={"color": thrash_color, "fontWeight": "bold"},
                ),
            ])
        )

    return html.Div([
        html.H2("Simulation Results", style={"marginTop": "30px", "marginBottom": "20px"}),
        html.Div([
            html.H3("Summary Table", style={"marginBottom": "15px"}),
            html.Table(
                table_rows,
                style={
                    "width": "100%",
                    "borderCollapse": "collapse",
                    "marginBottom": "30px",
                    "fontSize": "14px",
                },
            ),
        ], style={"marginBottom": "30px"}),
        html.Div([
            html.Div([dcc.Graph(figure=fig1)], style={"marginBottom": "30px"}),
            html.Div([
                html.Div(
                    [dcc.Graph(figure=fig2)],
                    style={"width": "48%", "display": "inline-block", "marginRight": "2%"},
                ),
                html.Div(
                    [dcc.Graph(figure=fig3)],
                    style={"width": "48%", "display": "inline-block"},
                ),
            ], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig4)], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig5)], style={"marginBottom": "30px"}),
        ]),
    ])


if __name__ == "__main__":
    app.run(debug=True, port=8050)
