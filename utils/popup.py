"""
Philadelphia Energy Burden Explorer: Tooltip and Result HTML Generation
Transforms tract values and burden estimates into text/HTML for Leaflet.
"""
import math
from html import escape

from config import NO_DATA_LABEL


# CSS classes injected once into the page (via branding.py build_popup_styles)
POPUP_CSS = """
<style>
.eb-p{font-family:Arial,sans-serif;width:260px;font-size:13px;line-height:1.5;margin:0;padding:0}
.eb-h{color:#222;padding:8px 12px;border-radius:6px 6px 0 0;font-size:11px;font-weight:bold;letter-spacing:.5px;text-transform:uppercase}
.eb-b{padding:10px 12px}
.eb-sl{font-size:11px;color:#555;text-transform:uppercase;letter-spacing:.5px;margin-bottom:4px}
.eb-d{border-top:1px solid #eee;margin:8px 0}
.eb-m{color:#888;font-size:11px}
.eb-big{font-size:22px;font-weight:bold}
.eb-tt{font-family:Arial,sans-serif;font-size:12px;padding:4px 8px;max-width:220px;line-height:1.4}
</style>
"""


def format_percent(value, digits: int = 1) -> str:
    """Format a burden percentage, or "N/A" for missing values."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    try:
        return f"{float(value):.{digits}f}%"
    except (ValueError, TypeError):
        return "N/A"


def build_tract_tooltip(geoid: str, value) -> str:
    """Hover text for a tract polygon."""
    geoid = escape(str(geoid))
    if value is None or format_percent(value) == "N/A":
        return f"Tract {geoid}: {NO_DATA_LABEL}"
    return f"Tract {geoid}: {format_percent(value)} energy burden"


def build_marker_tooltip(address: str, geoid: str | None) -> str:
    label = escape(address) if address else "Selected location"
    if geoid is None:
        return f"{label} (outside mapped tracts)"
    return f"{label} (tract {geoid})"


def build_estimate_html(estimate) -> str:
    """Result card for a predicted burden, with the tract's observed value for context."""
    observed = format_percent(estimate.observed)
    return (
        f'<div class="eb-p">'
        f'<div class="eb-h" style="background:{estimate.band_color}">{estimate.band_label}</div>'
        f'<div class="eb-b">'
        f'<div class="eb-sl">Predicted energy burden</div>'
        f'<div class="eb-big">{format_percent(estimate.predicted)}</div>'
        f'<div class="eb-m">{escape(estimate.housing)} &middot; {escape(estimate.income)}</div>'
        f'<div class="eb-d"></div>'
        f'<div class="eb-sl">Tract {estimate.tract_geoid}</div>'
        f'<div>Observed tract average: {observed}</div>'
        f'</div></div>'
    )
