"""
Results Renderer
Paints a stored `{profession, evaluation}` record as terminal text.
"""

from typing import Any, Dict, Iterable, List, Optional

# Tier -> ANSI color
_TIER_COLORS = {
    "high": "\033[32m",    # green
    "medium": "\033[33m",  # yellow
    "low": "\033[31m",     # red
}
_RESET = "\033[0m"


def score_tier(score: Any) -> str:
    """Classify an average score: high (>= 8), medium (>= 6) or low."""
    try:
        value = float(score)
    except (TypeError, ValueError):
        return "low"
    if value >= 8:
        return "high"
    if value >= 6:
        return "medium"
    return "low"


def _paint(text: str, tier: str, color: bool) -> str:
    return f"{_TIER_COLORS[tier]}{text}{_RESET}" if color else text


def _section(title: str, items: Optional[Iterable[str]], tier: Optional[str], color: bool) -> List[str]:
    if not items:
        return []
    lines = ["", title]
    for item in items:
        line = f"  - {item}"
        lines.append(_paint(line, tier, color) if tier else line)
    return lines


def render_results(
    record: Dict[str, Any],
    profession_name: Optional[str] = None,
    color: bool = False
) -> List[str]:
    """
    Render the results view.

    Args:
        record: `{profession, evaluation}` as written by the chat driver
        profession_name: Display name; falls back to the profession id
        color: Emit ANSI colors for the score and list sections

    Returns:
        Lines of text; sections missing from the evaluation are skipped
    """
    evaluation = record.get("evaluation") or {}
    name = profession_name or record.get("profession") or "Interview"

    lines = [f"{name} - Interview Results", "=" * 40]

    average = evaluation.get("averageScore")
    if average is not None:
        lines.append(_paint(f"Average score: {average}/10", score_tier(average), color))

    ratings = evaluation.get("skillRatings")
    if ratings:
        lines += ["", "Skill ratings"]
        width = max(len(skill) for skill in ratings)
        lines += [f"  {skill.ljust(width)}  {score}/10" for skill, score in ratings.items()]

    lines += _section("Strengths", evaluation.get("strengths"), "high", color)
    lines += _section("Areas to improve", evaluation.get("weakPoints"), "medium", color)
    lines += _section("Recommendations", evaluation.get("recommendations"), None, color)
    return lines
