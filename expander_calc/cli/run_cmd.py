"""CLI command for evaluating one expansion."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from expander_calc.core.config import CaseState, DEFAULT_INPUTS, definition_from_inputs, save_case_json
from expander_calc.core.context import AppContext
from expander_calc.core.fluids import get_fluid_info, resolve_fluid_name
from expander_calc.core.loader import OracleLoadError
from expander_calc.reports.summary import STATE_COLUMNS, state_rows, summary_rows


@click.command("run")
@click.option("--fluid", "-f", default="R245fa", show_default=True,
              help="Fluid display name or CoolProp name (e.g. R245fa, Water, CarbonDioxide).")
@click.option("--inlet-mode", type=click.Choice(["pt", "saturation"], case_sensitive=False),
              default=DEFAULT_INPUTS["inlet_mode"], show_default=True,
              help="Inlet given by pressure + temperature, or by saturation temperature + superheat.")
@click.option("--p-in", type=float, default=DEFAULT_INPUTS["inlet_pressure_bar"], show_default=True,
              help="Inlet pressure [bar].")
@click.option("--t-in", type=float, default=DEFAULT_INPUTS["inlet_temperature_c"], show_default=True,
              help="Inlet temperature [°C].")
@click.option("--t-sat", type=float, default=DEFAULT_INPUTS["saturation_temperature_c"], show_default=True,
              help="Inlet saturation temperature [°C].")
@click.option("--superheat", type=float, default=DEFAULT_INPUTS["superheat_k"], show_default=True,
              help="Superheat above saturation [K].")
@click.option("--outlet-mode", type=click.Choice(["pressure", "condensing"], case_sensitive=False),
              default=DEFAULT_INPUTS["outlet_mode"], show_default=True,
              help="Outlet given by pressure, or by condensing temperature.")
@click.option("--p-out", type=float, default=DEFAULT_INPUTS["outlet_pressure_bar"], show_default=True,
              help="Outlet pressure [bar].")
@click.option("--t-cond", type=float, default=DEFAULT_INPUTS["condensing_temperature_c"], show_default=True,
              help="Condensing temperature [°C].")
@click.option("--eta", type=float, default=DEFAULT_INPUTS["isentropic_efficiency_pct"], show_default=True,
              help="Isentropic efficiency [%].")
@click.option("--flow-mode", type=click.Choice(["mass", "displacement", "volume"], case_sensitive=False),
              default=DEFAULT_INPUTS["flow_mode"], show_default=True,
              help="How the flow rate is specified.")
@click.option("--mdot", type=float, default=DEFAULT_INPUTS["mass_flow_kg_s"], show_default=True,
              help="Mass flow [kg/s].")
@click.option("--displacement", type=float, default=DEFAULT_INPUTS["displacement_cm3"], show_default=True,
              help="Displacement per revolution [cm³].")
@click.option("--rpm", type=float, default=DEFAULT_INPUTS["rpm"], show_default=True,
              help="Rotational speed [rpm].")
@click.option("--eta-v", type=float, default=DEFAULT_INPUTS["volumetric_efficiency_pct"], show_default=True,
              help="Volumetric efficiency [%].")
@click.option("--vdot", type=float, default=DEFAULT_INPUTS["volume_flow_m3_h"], show_default=True,
              help="Inlet volume flow [m³/h].")
@click.option("--name", default="Untitled", help="Case name stored with the output file.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def run(
    ctx: click.Context,
    fluid: str,
    inlet_mode: str,
    p_in: float,
    t_in: float,
    t_sat: float,
    superheat: float,
    outlet_mode: str,
    p_out: float,
    t_cond: float,
    eta: float,
    flow_mode: str,
    mdot: float,
    displacement: float,
    rpm: float,
    eta_v: float,
    vdot: float,
    name: str,
    output: str | None,
) -> None:
    """Expand a fluid and report state points, mass flow and power."""
    console: Console = ctx.obj.get("console", Console())
    app: AppContext = ctx.obj.get("app") or AppContext()

    coolprop_name = resolve_fluid_name(fluid)
    try:
        category = get_fluid_info(coolprop_name)["category"]
    except KeyError:
        category = app.category

    definition = definition_from_inputs(
        coolprop_name,
        {
            "inlet_mode": inlet_mode.lower(),
            "inlet_pressure_bar": p_in,
            "inlet_temperature_c": t_in,
            "saturation_temperature_c": t_sat,
            "superheat_k": superheat,
            "outlet_mode": outlet_mode.lower(),
            "outlet_pressure_bar": p_out,
            "condensing_temperature_c": t_cond,
            "isentropic_efficiency_pct": eta,
            "flow_mode": flow_mode.lower(),
            "mass_flow_kg_s": mdot,
            "displacement_cm3": displacement,
            "rpm": rpm,
            "volumetric_efficiency_pct": eta_v,
            "volume_flow_m3_h": vdot,
        },
    )

    try:
        app.loader.load()
    except OracleLoadError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1)

    outcome = app.try_evaluate(definition)
    if not outcome.ok:
        console.print(f"[bold red]Error:[/bold red] {escape(outcome.message)}")
        raise SystemExit(1)

    result = outcome.result
    console.print(f"\n[bold]ExpanderCalc — {coolprop_name}[/bold] [dim](CoolProp {app.loader.version})[/dim]\n")

    state_table = Table(title="State Points")
    state_table.add_column("State", style="cyan")
    for col, unit in STATE_COLUMNS:
        header = f"{col} [{unit}]" if unit else col
        state_table.add_column(escape(header), justify="right" if unit else "left")
    for state_name, row in state_rows(result):
        state_table.add_row(state_name, *row)
    console.print(state_table)

    perf_table = Table(title="Performance")
    perf_table.add_column("Parameter", style="cyan")
    perf_table.add_column("Value", style="green", justify="right")
    perf_table.add_column("Unit", style="dim")
    for row in summary_rows(result):
        perf_table.add_row(*row)
    console.print(perf_table)

    if output:
        state = CaseState.from_result(
            definition,
            result,
            category=category,
            name=name,
            coolprop_version=app.loader.version or "",
        )
        save_case_json(state, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
