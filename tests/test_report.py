from pathlib import Path

import pytest

from bootci.engine import confidence_interval, generate
from bootci.report import SummaryRenderer, build_summary_context, render_summary
from bootci.sample import Sample
from bootci.statistics import Proportion


@pytest.fixture()
def context(tmp_path: Path) -> dict:
    sample = Sample(["yes"] * 12 + ["no"] * 28, name="died")
    dist = generate(sample, Proportion("yes"), 400, 8)
    intervals = [confidence_interval(dist, 0.9), confidence_interval(dist, 0.95)]
    return build_summary_context(
        sample, dist, intervals, source="titanic.csv", figure=tmp_path / "figs" / "died.png"
    )


def test_build_summary_context(context: dict):
    assert context["sample_size"] == 40
    assert context["statistic"] == "prop"
    assert context["observed"] == pytest.approx(0.3)
    assert context["repetitions"] == 400
    assert [ci["level"] for ci in context["intervals"]] == [0.9, 0.95]


def test_render_summary_markdown(tmp_path: Path, context: dict):
    out = tmp_path / "report" / "summary.md"
    render_summary(context, out)
    text = out.read_text(encoding="utf-8")
    assert "# Bootstrap confidence interval: prop of `died`" in text
    assert "| Sample size (n) | 40 |" in text
    assert "| 90.0% | percentile |" in text
    assert "| 95.0% | percentile |" in text
    assert "![Bootstrap distribution](../figs/died.png)" in text


def test_render_without_figure_or_source(tmp_path: Path, context: dict):
    context = dict(context, figure=None, source="")
    text = SummaryRenderer().render(context)
    assert "![Bootstrap distribution]" not in text
    assert "Data source" not in text


def test_custom_template_dir(tmp_path: Path, context: dict):
    (tmp_path / "summary.md.jinja").write_text("{{ statistic }}={{ observed | num(2) }}", encoding="utf-8")
    out = render_summary(context, tmp_path / "custom.md", template_dir=tmp_path)
    assert out.read_text(encoding="utf-8") == "prop=0.3"
