from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def bar_chart_spec(
    records: List[Mapping[str, Any]],
    *,
    label_field: str,
    value_field: str,
    title: str,
    color: str,
    value_format: str = "$,.0f",
    label_title: str = "",
    colors: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    df = pd.DataFrame(records, columns=[label_field, value_field])
    fill: Any = alt.value(color)
    if colors:
        fill = alt.Color(f"{label_field}:N", scale=alt.Scale(domain=list(colors), range=list(colors.values())), legend=None)
    bar = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            color=fill,
            x=alt.X(f"{label_field}:N", title=label_title or None, sort=None, axis=alt.Axis(grid=False)),
            y=alt.Y(f"{value_field}:Q", title=None, axis=alt.Axis(format=value_format, gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[
                alt.Tooltip(label_field, title=label_title or label_field),
                alt.Tooltip(f"{value_field}:Q", format=value_format),
            ],
        )
        .properties(title=title, height=260)
    )
    return to_vega_spec(bar)
