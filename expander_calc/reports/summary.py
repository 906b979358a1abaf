"""Result formatting and case report generation for ExpanderCalc.

Numbers are rendered with fixed precision per quantity: pressure and
temperature 2 decimals, enthalpy 2, entropy 4, specific volume 5,
power 2, mass flow 3 and volume flow 2.
"""

from __future__ import annotations

import html as html_mod
from datetime import datetime, timezone
from typing import Any

from expander_calc.core.config import CaseState
from expander_calc.core.phase import Phase, quality_label
from expander_calc.cycle.components.base import FluidState
from expander_calc.cycle.solver import CycleResult
from expander_calc.utils.constants import J_TO_KJ, PA_TO_BAR, SECONDS_PER_HOUR, T_CELSIUS_OFFSET, W_TO_KW

STATE_NAMES = ("Inlet (1)", "Ideal outlet (2s)", "Actual outlet (2a)")
STATE_KEYS = ("inlet", "ideal_outlet", "actual_outlet")
STATE_COLUMNS = (
    ("P", "bar"),
    ("T", "°C"),
    ("h", "kJ/kg"),
    ("s", "kJ/(kg·K)"),
    ("v", "m³/kg"),
    ("Phase / x", ""),
)


# --- Fixed-precision formatters ---


def fmt_pressure(p_pa: float) -> str:
    return f"{p_pa * PA_TO_BAR:.2f}"


def fmt_temperature(t_k: float) -> str:
    return f"{t_k - T_CELSIUS_OFFSET:.2f}"


def fmt_enthalpy(h: float) -> str:
    return f"{h * J_TO_KJ:.2f}"


def fmt_entropy(s: float) -> str:
    return f"{s * J_TO_KJ:.4f}"


def fmt_specific_volume(v: float) -> str:
    return f"{v:.5f}"


def fmt_power(w: float) -> str:
    return f"{w * W_TO_KW:.2f}"


def fmt_mass_flow(mdot: float) -> str:
    return f"{mdot:.3f}"


def fmt_volume_flow(vdot_m3_s: float) -> str:
    return f"{vdot_m3_s * SECONDS_PER_HOUR:.2f}"


# --- Table rows ---


def _row(pressure: float, temperature: float, enthalpy: float, entropy: float,
         specific_volume: float, label: str) -> tuple[str, ...]:
    return (
        fmt_pressure(pressure),
        fmt_temperature(temperature),
        fmt_enthalpy(enthalpy),
        fmt_entropy(entropy),
        fmt_specific_volume(specific_volume),
        label,
    )


def state_row(state: FluidState) -> tuple[str, ...]:
    """Formatted (P, T, h, s, v, phase/quality) for one state point."""
    return _row(
        state.pressure,
        state.temperature,
        state.enthalpy,
        state.entropy,
        state.specific_volume,
        state.quality_label,
    )


def state_rows(result: CycleResult) -> list[tuple[str, tuple[str, ...]]]:
    """Inlet, ideal-outlet and actual-outlet rows, each with its name."""
    return [(name, state_row(s)) for name, s in zip(STATE_NAMES, result.states)]


def summary_rows(result: CycleResult) -> list[tuple[str, str, str]]:
    """(parameter, value, unit) rows for the flow/power summary."""
    return [
        ("Shaft Power", fmt_power(result.power), "kW"),
        ("Mass Flow", fmt_mass_flow(result.mass_flow), "kg/s"),
        ("Inlet Volume Flow", fmt_volume_flow(result.inlet_volume_flow), "m³/h"),
        ("Pressure Ratio", f"{result.pressure_ratio:.2f}", "—"),
        ("Isentropic Δh", fmt_enthalpy(result.isentropic_enthalpy_drop), "kJ/kg"),
        ("Actual Δh", fmt_enthalpy(result.actual_enthalpy_drop), "kJ/kg"),
    ]


def _saved_state_row(d: dict[str, Any]) -> tuple[str, ...]:
    label = d.get("quality_label") or quality_label(
        Phase[d.get("phase", "UNKNOWN")], d.get("quality", -1.0)
    )
    return _row(
        d["pressure"], d["temperature"], d["enthalpy"], d["entropy"], d["specific_volume"], label
    )


def saved_state_rows(results: dict[str, Any]) -> list[tuple[str, tuple[str, ...]]]:
    """State rows rebuilt from a saved case's results dictionary."""
    return [
        (name, _saved_state_row(results[key]))
        for name, key in zip(STATE_NAMES, STATE_KEYS)
        if key in results
    ]


def saved_summary_rows(results: dict[str, Any]) -> list[tuple[str, str, str]]:
    rows = []
    if "power" in results:
        rows.append(("Shaft Power", fmt_power(results["power"]), "kW"))
    if "mass_flow" in results:
        rows.append(("Mass Flow", fmt_mass_flow(results["mass_flow"]), "kg/s"))
    if "inlet_volume_flow" in results:
        rows.append(("Inlet Volume Flow", fmt_volume_flow(results["inlet_volume_flow"]), "m³/h"))
    if "pressure_ratio" in results:
        rows.append(("Pressure Ratio", f"{results['pressure_ratio']:.2f}", "—"))
    if "isentropic_enthalpy_drop" in results:
        rows.append(("Isentropic Δh", fmt_enthalpy(results["isentropic_enthalpy_drop"]), "kJ/kg"))
    if "actual_enthalpy_drop" in results:
        rows.append(("Actual Δh", fmt_enthalpy(results["actual_enthalpy_drop"]), "kJ/kg"))
    return rows


def describe_inputs(state: CaseState) -> list[tuple[str, str]]:
    """Human-readable (label, value) pairs for a case's inputs."""
    d = state.definition
    lines = [("Fluid", d.fluid)]

    inlet = d.inlet
    if inlet.mode == "pt":
        lines.append(("Inlet", f"{fmt_pressure(inlet.pressure)} bar, {fmt_temperature(inlet.temperature)} °C"))
    else:
        lines.append((
            "Inlet",
            f"Tsat {fmt_temperature(inlet.saturation_temperature)} °C + {inlet.superheat:.2f} K superheat",
        ))

    outlet = d.outlet
    if outlet.mode == "pressure":
        lines.append(("Outlet", f"{fmt_pressure(outlet.pressure)} bar"))
    else:
        lines.append(("Outlet", f"condensing at {fmt_temperature(outlet.temperature)} °C"))

    lines.append(("Isentropic Efficiency", f"{d.isentropic_efficiency * 100:.1f} %"))

    flow = d.flow
    if flow.mode == "mass":
        lines.append(("Flow", f"{fmt_mass_flow(flow.mass_flow)} kg/s"))
    elif flow.mode == "displacement":
        lines.append((
            "Flow",
            f"{flow.displacement * 1e6:.1f} cm³ × {flow.rpm:.0f} rpm, "
            f"ηv {flow.volumetric_efficiency * 100:.1f} %",
        ))
    else:
        lines.append(("Flow", f"{flow.volume_flow:.2f} m³/h"))
    return lines


# --- Plain-text report ---


def generate_text_report(state: CaseState) -> str:
    """Generate a plain-text case report.

    Args:
        state: Saved case.

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _hr = "=" * 72

    lines.append(_hr)
    lines.append("  ExpanderCalc — Expansion Report")
    lines.append(f"  {state.meta.name}")
    lines.append(_hr)
    lines.append("")

    lines.append("INPUTS")
    lines.append("-" * 40)
    for label, value in describe_inputs(state):
        lines.append(f"  {label + ':':<24}{value}")
    lines.append("")

    if state.results:
        lines.append("STATE POINTS")
        lines.append("-" * 40)
        header = f"  {'':<20}" + "".join(f"{name:>12}" for name, _ in STATE_COLUMNS[:-1])
        lines.append(header + f"  {STATE_COLUMNS[-1][0]}")
        units = f"  {'':<20}" + "".join(f"{unit:>12}" for _, unit in STATE_COLUMNS[:-1])
        lines.append(units)
        for name, row in saved_state_rows(state.results):
            lines.append(f"  {name:<20}" + "".join(f"{v:>12}" for v in row[:-1]) + f"  {row[-1]}")
        lines.append("")

        lines.append("PERFORMANCE")
        lines.append("-" * 40)
        for label, value, unit in saved_summary_rows(state.results):
            lines.append(f"  {label + ':':<24}{value:>12} {unit}")
        lines.append("")
    else:
        lines.append("  (no results stored)")
        lines.append("")

    lines.append(_hr)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    if state.meta.coolprop_version:
        lines.append(f"  CoolProp {state.meta.coolprop_version}")
    lines.append(_hr)

    return "\n".join(lines)


# --- HTML report ---


def generate_html_report(state: CaseState) -> str:
    """Generate a self-contained HTML case report."""
    esc = html_mod.escape
    title = esc(state.meta.name)

    parts: list[str] = [
        "<!DOCTYPE html>",
        "<html><head><meta charset='utf-8'>",
        f"<title>ExpanderCalc — {title}</title>",
        "<style>",
        "body{font-family:sans-serif;margin:2em;color:#222}",
        "table{border-collapse:collapse;margin-bottom:1.5em}",
        "th,td{border:1px solid #ccc;padding:4px 10px}",
        "td.num{text-align:right;font-family:monospace}",
        "th{background:#eef}",
        "</style></head><body>",
        f"<h1>Expansion Report — {title}</h1>",
        "<h2>Inputs</h2><table>",
    ]
    for label, value in describe_inputs(state):
        parts.append(f"<tr><th>{esc(label)}</th><td>{esc(value)}</td></tr>")
    parts.append("</table>")

    if state.results:
        parts.append("<h2>State Points</h2><table><tr><th></th>")
        for name, unit in STATE_COLUMNS:
            head = f"{name} [{unit}]" if unit else name
            parts.append(f"<th>{esc(head)}</th>")
        parts.append("</tr>")
        for name, row in saved_state_rows(state.results):
            cells = "".join(f"<td class='num'>{esc(v)}</td>" for v in row[:-1])
            parts.append(f"<tr><th>{esc(name)}</th>{cells}<td>{esc(row[-1])}</td></tr>")
        parts.append("</table>")

        parts.append("<h2>Performance</h2><table>")
        for label, value, unit in saved_summary_rows(state.results):
            parts.append(
                f"<tr><th>{esc(label)}</th><td class='num'>{esc(value)}</td><td>{esc(unit)}</td></tr>"
            )
        parts.append("</table>")
    else:
        parts.append("<p><em>No results stored.</em></p>")

    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    parts.append(f"<p><small>Generated {esc(stamp)}</small></p>")
    parts.append("</body></html>")
    return "\n".join(parts)
