from __future__ import annotations

from chartbox.box import Padding
from chartbox.bubble import BubbleChart, BubbleValue
from chartbox.layout import Axis
from chartbox.stacked_bar import StackedBarChart, StackedBarValue
from chartbox.style import Style, style_show
from chartbox.value import Value


def demo_bubble_chart() -> BubbleChart:
    return BubbleChart(
        title="Test Bubble Chart",
        title_style=style_show(),
        background=Style(padding=Padding(top=40)),
        height=800,
        x_axis=Axis(style=style_show()),
        y_axis=Axis(style=style_show()),
        bubbles=[
            BubbleValue(value=Value(value=2.55, label="Blue"), x=1.0, y=1.0),
            BubbleValue(value=Value(value=1, label="Blue"), x=2.0, y=4.0),
            BubbleValue(value=Value(value=4.2, label="Blue"), x=3.0, y=5.0),
            BubbleValue(value=Value(value=3.2, label="Blue"), x=1.0, y=1.0),
            BubbleValue(value=Value(value=5.5, label="Blue"), x=1.6, y=1.5),
        ],
    )


def demo_stacked_bar_chart() -> StackedBarChart:
    return StackedBarChart(
        title="Test Stacked Bar Chart",
        title_style=style_show(),
        background=Style(padding=Padding(top=40)),
        height=600,
        x_axis=style_show(),
        y_axis=Axis(style=style_show()),
        bars=[
            StackedBarValue(name="Q1", values=(Value(value=10, label="a"), Value(value=5, label="b"))),
            StackedBarValue(name="Q2", values=(Value(value=7, label="a"), Value(value=8, label="b"))),
            StackedBarValue(name="Q3", values=(Value(value=12, label="a"), Value(value=3, label="b"))),
        ],
    )


DEMOS = {
    "bubble": demo_bubble_chart,
    "stacked-bar": demo_stacked_bar_chart,
}
