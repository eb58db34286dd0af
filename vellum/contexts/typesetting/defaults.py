"""
Default values for VELLUM page layout.

All lengths are PDF points (1/72 inch). Spacing is written in millimetres
and converted with reportlab.lib.units.mm (1 mm = 2.8346 pt).

Provides shared defaults used by:
- layout_settings.py (LayoutSettings field defaults)
- layout_presets.yaml (presets override a subset of these keys)
"""

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

# A4 portrait with a 20mm margin on every side
DEFAULT_PAGE = {
    "width": A4[0],
    "height": A4[1],
    "margin": 20 * mm,
}

# Font sizes in points
DEFAULT_TYPOGRAPHY = {
    "font_family": "Helvetica",
    "name_size": 16.0,
    "contact_size": 9.0,
    "heading_size": 11.0,
    "body_size": 10.0,
    "line_height_factor": 1.5,
}

# Vertical gaps and minimum-space thresholds
DEFAULT_SPACING = {
    "header_gap": 3 * mm,
    "section_gap": 3 * mm,
    "section_min_space": 15 * mm,
    "entry_min_space": 15 * mm,
    "bullet_min_space": 6 * mm,
    "line_min_space": 8 * mm,
    "rule_raise": 3.5 * mm,
    "rule_gap": 1.5 * mm,
    "rule_thickness": 0.35 * mm,
    "indent": 5 * mm,
    "skill_label_gap": 3 * mm,
    "skill_category_gap": 3 * mm,
    "education_gap": 2 * mm,
    "entry_gap": 4 * mm,
}

# Presets tried in order when a single page is preferred
SINGLE_PAGE_PRESETS = ("spacing_standard", "spacing_compact", "spacing_tight")
