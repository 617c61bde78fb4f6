"""
ASCII terminal formatters for CLI commands.

Formatters accept ranked ``RecommendationScore`` lists and return plain
multi-line strings suitable for ``typer.echo()``. Rows appear in the order
given (already ranked by the engine).

Example::

  === Recommendations: posts ===
    User:  u1
    Count: 2

    Rank  Item                      Score  Reason
    -------------------------------------------------------------
       1  p3                       0.6000  liked by similar users
       2  p4                       0.3200  stock category — similar item
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from stockboard_recommender.models.recommendation import RecommendationScore

_ITEM_WIDTH = 24


def format_recommendation_table(
    scores:   Sequence[RecommendationScore],
    title:    str,
    user_id:  Optional[str] = None,
) -> str:
    """Format a ranked list as an ASCII table.

    Args:
        scores:  Ranked recommendations.
        title:   Header suffix, usually the recommendation type.
        user_id: Target user shown in the header, if any.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Recommendations: {title} ===")
    if user_id:
        lines.append(f"  User:  {user_id}")
    lines.append(f"  Count: {len(scores)}")

    if not scores:
        lines.append("")
        lines.append("  (no recommendations available)")
        return "\n".join(lines)

    lines.append("")
    header = f"  {'Rank':>4}  {'Item':<{_ITEM_WIDTH}}  {'Score':>9}  Reason"
    lines.append(header)
    lines.append("  " + "-" * (len(header) + 20))
    for rank, rec in enumerate(scores, start=1):
        item = rec.item_id[:_ITEM_WIDTH]
        lines.append(
            f"  {rank:>4}  {item:<{_ITEM_WIDTH}}  {rec.score:>9.4f}  {rec.reason}"
        )
    return "\n".join(lines)
