"""
Philadelphia Energy Burden Explorer: Branding & UI Chrome
Title bar, band legend, attribution, reset view button, result panel and popup CSS.
"""
from html import escape

import folium

from config import NO_DATA_COLOR, NO_DATA_LABEL
from utils.popup import POPUP_CSS, build_estimate_html


def build_popup_styles() -> folium.Element:
    """Inject shared CSS classes for tooltip/result HTML."""
    return folium.Element(POPUP_CSS)


def build_title_bar() -> folium.Element:
    """Fixed-position title bar at the top of the map."""
    html = '''
    <div id="title-bar" style="
        position:fixed; top:0; left:0; right:0; z-index:1000;
        background:rgba(255,255,255,0.95);
        padding:10px 20px;
        box-shadow:0 2px 6px rgba(0,0,0,0.15);
        font-family:Arial,sans-serif;
        max-height:65px; overflow:hidden;
    ">
        <div style="font-size:14px;font-weight:bold;letter-spacing:0.5px;color:#222">
            PHILADELPHIA ENERGY BURDEN EXPLORER
        </div>
        <div style="font-size:12px;color:#555;margin-top:2px">
            What share of household income goes to home energy? Explore
            observed burden by census tract.
        </div>
        <div style="font-size:11px;color:#999;margin-top:1px">
            Hover a tract for its observed burden &middot; Estimates use a fixed regression model
        </div>
    </div>
    '''
    return folium.Element(html)


def build_legend(bands: list[dict]) -> folium.Element:
    """Discrete legend matching the burden bands, positioned bottom-left."""
    rows = ""
    for band in bands + [{"label": NO_DATA_LABEL, "color": NO_DATA_COLOR}]:
        rows += (
            f'<div style="margin:3px 0">'
            f'<span style="background:{band["color"]};display:inline-block;'
            f'width:14px;height:14px;border:1px solid #999;vertical-align:middle"></span> '
            f'<span style="vertical-align:middle">{band["label"]}</span></div>\n'
        )

    html = f'''
    <div id="legend" style="
        position:fixed; bottom:30px; left:10px; z-index:1000;
        background:white; padding:12px 16px; border-radius:6px;
        box-shadow:0 1px 4px rgba(0,0,0,0.2);
        font-family:Arial,sans-serif; font-size:12px;
        line-height:1.4; max-width:260px;
    ">
        <div style="font-weight:bold;margin-bottom:6px">
            Energy Burden (% of income)
        </div>
        {rows}
    </div>
    '''
    return folium.Element(html)


def build_attribution(text: str = "Tracts: US Census Bureau &middot; Geocoding: OpenStreetMap Nominatim") -> folium.Element:
    """Data source badge in the bottom-right corner."""
    html = f'''
    <div id="attribution" style="
        position:fixed; bottom:10px; right:10px; z-index:1000;
        background:white; padding:6px 12px; border-radius:4px;
        font-family:Arial,sans-serif; font-size:11px; color:#555;
        box-shadow:0 1px 3px rgba(0,0,0,0.2);
    ">{text}</div>
    '''
    return folium.Element(html)


def build_reset_view_button(center: list, zoom: int) -> folium.Element:
    """Button that resets the map to the default city view."""
    lat, lon = center
    html = f'''
    <button id="reset-view-btn" onclick="
        var maps = Object.values(window).filter(function(v) {{
            return v instanceof L.Map;
        }});
        if (maps.length > 0) maps[0].setView([{lat}, {lon}], {zoom});
    " style="
        position:fixed; top:75px; right:10px; z-index:1000;
        background:white; border:1px solid #ccc; border-radius:4px;
        padding:6px 12px; cursor:pointer;
        font-family:Arial,sans-serif; font-size:12px; color:#333;
    " onmouseover="this.style.background='#f0f0f0'"
       onmouseout="this.style.background='white'"
    >&#8635; Reset View</button>
    '''
    return folium.Element(html)


def build_result_panel(state, message: str = "") -> folium.Element:
    """
    Results box (top-left, under the title bar): the located tract, the
    estimate if one was calculated, and any prompt or error message.
    """
    parts = []
    if state.status == "located":
        if state.address:
            parts.append(f'<div class="eb-m">{escape(state.address)}</div>')
        if state.tract_geoid:
            parts.append(f'<div><b>Tract GEOID:</b> {escape(state.tract_geoid)}</div>')
        else:
            parts.append('<div>Could not determine census tract.</div>')
    if state.estimate is not None:
        parts.append(build_estimate_html(state.estimate))
    elif state.tract_geoid:
        parts.append('<div class="eb-m">Select housing + income to calculate burden.</div>')
    if message:
        parts.append(f'<div style="color:#B22222">{escape(message)}</div>')

    if not parts:
        parts.append('<div class="eb-m">Search for an address to see its tract.</div>')

    html = f'''
    <div id="results" style="
        position:fixed; top:75px; left:10px; z-index:1000;
        background:white; padding:10px 14px; border-radius:6px;
        box-shadow:0 1px 4px rgba(0,0,0,0.2);
        font-family:Arial,sans-serif; font-size:12px; max-width:290px;
    ">
        <div style="font-weight:bold;margin-bottom:4px">Results</div>
        {''.join(parts)}
    </div>
    '''
    return folium.Element(html)
