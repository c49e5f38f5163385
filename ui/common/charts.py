"""Построение диаграмм QtCharts для дашборда и отчётов."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from PySide6.QtCharts import (
    QBarCategoryAxis,
    QBarSeries,
    QBarSet,
    QChart,
    QChartView,
    QPieSeries,
    QValueAxis,
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter

from services.dto import SeriesItem


def make_chart_view(min_height: int = 220) -> QChartView:
    view = QChartView()
    view.setMinimumHeight(min_height)
    view.setRenderHint(QPainter.Antialiasing)
    return view


def bar_chart(items: Iterable[SeriesItem], label: str, title: str = "") -> QChart:
    """Столбчатая диаграмма по сериям ``label``/``total``."""
    chart = QChart()
    if title:
        chart.setTitle(title)
    bar_set = QBarSet(label)
    categories = []
    peak = 0.0
    for item in items:
        bar_set.append(item.total)
        categories.append(item.label)
        peak = max(peak, item.total)
    series = QBarSeries()
    series.append(bar_set)
    chart.addSeries(series)

    axis_x = QBarCategoryAxis()
    axis_x.append(categories)
    chart.addAxis(axis_x, Qt.AlignBottom)
    series.attachAxis(axis_x)

    axis_y = QValueAxis()
    axis_y.setRange(0, peak or 1)
    chart.addAxis(axis_y, Qt.AlignLeft)
    series.attachAxis(axis_y)

    chart.legend().setVisible(False)
    chart.setAnimationOptions(QChart.SeriesAnimations)
    return chart


def pie_chart(items: Iterable[SeriesItem], title: str = "") -> QChart:
    chart = QChart()
    if title:
        chart.setTitle(title)
    series = QPieSeries()
    for item in items:
        if item.total > 0:
            series.append(f"{item.label} ({item.total:g})", item.total)
    chart.addSeries(series)
    chart.legend().setAlignment(Qt.AlignRight)
    return chart


def counts_to_series(counts: Mapping[str, int], label_func=str) -> list[SeriesItem]:
    return [SeriesItem(label=label_func(key), total=float(value)) for key, value in counts.items()]
