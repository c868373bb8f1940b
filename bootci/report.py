"""Markdown summaries of bootstrap runs rendered from Jinja2 templates."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable
import logging
import os

import jinja2

from bootci.engine import BootstrapDistribution, ConfidenceInterval
from bootci.sample import Sample
from bootci.utils import ensure_dir


_LOGGER = logging.getLogger(__name__)

_TEMPLATE_NAME = "summary.md.jinja"


def _format_number(value: Any, digits: int = 4) -> str:
    if value is None:
        return "n/a"
    return f"{float(value):.{digits}g}"


class SummaryRenderer:
    def __init__(self, template_dir: Path | None = None) -> None:
        base = template_dir if template_dir is not None else Path(__file__).parent / "templates"
        self._template_dir = Path(base)
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(self._template_dir),
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["num"] = _format_number

    def render(self, context: dict[str, Any]) -> str:
        return self._env.get_template(_TEMPLATE_NAME).render(**context)


def build_summary_context(
    sample: Sample,
    distribution: BootstrapDistribution,
    intervals: Iterable[ConfidenceInterval],
    *,
    source: str | None = None,
    figure: Path | None = None,
) -> dict[str, Any]:
    """Assemble the template context for one bootstrap run."""

    return {
        "source": source or "",
        "column": sample.name or "",
        "sample_size": sample.size,
        "statistic": distribution.statistic,
        "repetitions": distribution.repetitions,
        "seed": distribution.seed,
        "observed": distribution.observed,
        "bootstrap_mean": distribution.mean,
        "bootstrap_se": distribution.std,
        "intervals": [ci.to_dict() for ci in intervals],
        "figure": figure.as_posix() if figure is not None else None,
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }


def render_summary(
    context: dict[str, Any],
    output_path: Path,
    *,
    template_dir: Path | None = None,
) -> Path:
    """Render the Markdown summary for ``context`` to ``output_path``.

    A figure path in the context is rewritten relative to the output file so
    the Markdown renders from its own directory.
    """

    ctx = dict(context)
    if ctx.get("figure"):
        ctx["figure"] = Path(os.path.relpath(ctx["figure"], output_path.parent)).as_posix()
    rendered = SummaryRenderer(template_dir).render(ctx)
    ensure_dir(output_path.parent)
    output_path.write_text(rendered, encoding="utf-8")
    _LOGGER.info("Wrote summary %s", output_path)
    return output_path


__all__ = ["SummaryRenderer", "build_summary_context", "render_summary"]
