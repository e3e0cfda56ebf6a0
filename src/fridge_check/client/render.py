"""Plain-text rendering of wizard screens."""

from fridge_check.client.impact import ImpactEstimate, SessionImpact
from fridge_check.client.state import Screen, WizardState
from fridge_check.models.analysis import AnalysisResult, Mode, Recipe

# Rough per-request water estimates shown on the mode choice screen
MODE_WATER_HINTS = {
    Mode.PHOTO: "~2ml water",
    Mode.TEXT: "~0.2ml water",
}


def render(state: WizardState) -> str:
    """
    Render the current screen as text.

    Args:
        state: Wizard state to render

    Returns:
        Multi-line string
    """
    lines: list[str] = []

    if state.session_impact.scan_count > 0:
        lines.extend(render_session_impact(state.session_impact))
        lines.append("")

    match state.screen:
        case Screen.IDLE:
            lines.extend(_render_choice())
        case Screen.AWAITING_PHOTO:
            lines.append("Scan your fridge: provide a photo and AI will identify your ingredients.")
            lines.append(f"This scan will use approximately {MODE_WATER_HINTS[Mode.PHOTO]}.")
        case Screen.AWAITING_TEXT:
            lines.append("Quick list: what ingredients do you have?")
            lines.append(f"Eco mode: {MODE_WATER_HINTS[Mode.TEXT]} (90% savings vs photo scan).")
        case Screen.LOADING:
            if state.mode == Mode.PHOTO:
                lines.append("Analyzing with AI...")
            else:
                lines.append("Finding recipes...")
        case Screen.ERROR:
            lines.append(f"Error: {state.error}")
        case Screen.RESULT:
            if state.impact is not None:
                lines.extend(render_impact(state.impact, state.show_developer_stats))
                lines.append("")
            if state.result is not None:
                lines.extend(render_result(state.result))

    return "\n".join(lines)


def _render_choice() -> list[str]:
    return [
        "What's in your fridge?",
        f"  [photo] Scan Photo: upload a photo of your fridge or pantry ({MODE_WATER_HINTS[Mode.PHOTO]})",
        f"  [text]  Quick List: type your ingredients ({MODE_WATER_HINTS[Mode.TEXT]}, uses 90% less resources)",
    ]


def render_session_impact(session: SessionImpact) -> list[str]:
    return [
        f"Session impact: {session.water_ml:.1f}ml water over {session.scan_count} scan(s)",
    ]


def render_impact(impact: ImpactEstimate, show_developer_stats: bool = False) -> list[str]:
    """Render the environmental impact card for one request."""
    lines = [
        "Environmental impact of this request",
        f"  Water:  {impact.water_ml:.1f}ml",
        f"  Energy: {impact.energy_kwh * 1000:.1f}Wh",
        f"  CO2:    {impact.co2_grams:.2f}g",
        (
            f"  That's about {impact.drinking_glass_fraction * 100:.1f}% of a glass of water, "
            f"or enough energy to charge your phone {impact.phone_charge_fraction * 100:.1f}% of the way"
        ),
    ]
    if show_developer_stats:
        lines.extend([
            "  Developer stats:",
            f"    Input tokens: {impact.input_tokens}",
            f"    Output tokens: {impact.output_tokens}",
            f"    Total tokens: {impact.total_tokens}",
        ])
    return lines


def render_result(result: AnalysisResult) -> list[str]:
    """Render identified ingredients and recipe cards."""
    lines: list[str] = []

    if result.ingredients:
        lines.append("Ingredients found: " + ", ".join(result.ingredients))
        lines.append("")

    if not result.recipes:
        lines.append("No recipe ideas were returned.")
        return lines

    lines.append("Recipe ideas")
    for recipe in result.recipes:
        lines.append("")
        lines.extend(render_recipe(recipe))
    return lines


def render_recipe(recipe: Recipe) -> list[str]:
    header = recipe.name
    if recipe.time:
        header += f" ({recipe.time})"

    lines = [header]
    if recipe.description:
        lines.append(f"  {recipe.description}")

    if recipe.instructions:
        lines.append("  Instructions:")
        for number, step in enumerate(recipe.instructions, start=1):
            lines.append(f"    {number}. {step}")

    if recipe.missing:
        lines.append(f"  You might need: {', '.join(recipe.missing)}")

    return lines
