# File: link_scout/report/html_report.py
"""link_scout.report.html_report: HTML report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from link_scout.aggregator import ScrapingResult

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    result: ScrapingResult,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render the HTML report from a template and save it.

    Args:
        result: finished ScrapingResult.
        output_path: path of the HTML file to write.
        template_dir: folder containing ``report.html.j2``; the bundled
            template is used when omitted.

    Returns:
        Path of the saved HTML file.

    Example:
    ```python
    from link_scout.report.html_report import render_html
    html_path = render_html(result, output_path='reports/report.html')
    ```
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "result": result,
        "statistics": result.statistics,
        "classified": {c.value: links for c, links in result.classified_links.items() if links},
        "summary": {c.value: n for c, n in result.category_summary.items()},
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
