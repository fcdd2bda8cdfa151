"""
Workbook look: portal-purple palette, fonts, fills, borders and number formats.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

PORTAL_PURPLE = "5E35B1"
DEEP_PURPLE = "311B92"
MIST = "EDE7F6"
STRIPE = "F5F5F5"
GOLD = "FFF8DC"
TOTAL_BG = "E3F2FD"
GRID = "CCCCCC"
MUTED = "666666"


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side,
                  top=Side(style=top, color=color), bottom=Side(style=bottom, color=color))


def _font(size: int, color: str = "000000", **kw) -> Font:
    return Font(name="Calibri", size=size, color=color, **kw)


# Fonts
TITLE_FONT = _font(24, DEEP_PURPLE, bold=True)
SUBTITLE_FONT = _font(12, MUTED, italic=True)
SECTION_FONT = _font(14, DEEP_PURPLE, bold=True)
HEADER_FONT = _font(11, "FFFFFF", bold=True)
BODY_FONT = _font(10)
TOTAL_FONT = _font(10, bold=True)
CARD_VALUE_FONT = _font(28, PORTAL_PURPLE, bold=True)
CARD_LABEL_FONT = _font(10, MUTED)

# Fills
HEADER_FILL = _solid(DEEP_PURPLE)
STRIPE_FILL = _solid(STRIPE)
TOTAL_FILL = _solid(TOTAL_BG)

# Row highlight by ownership status
STATUS_FILLS = {
    "trade": _solid(GOLD),
    "owned": _solid(MIST),
}

# Borders
GRID_BORDER = _box(GRID)
HEADER_BORDER = _box(DEEP_PURPLE, bottom="medium")
TOTAL_BORDER = _box("999999", top="medium", bottom="medium")

# Alignment per column kind
ALIGN = {
    "text": Alignment(horizontal="left", vertical="center"),
    "flag": Alignment(horizontal="center", vertical="center"),
    "number": Alignment(horizontal="right", vertical="center"),
    "currency": Alignment(horizontal="right", vertical="center"),
    "percent": Alignment(horizontal="right", vertical="center"),
}
CENTER = Alignment(horizontal="center", vertical="center")

# Number format per column kind
NUMBER_FORMATS = {
    "number": "#,##0",
    "currency": '"$"#,##0.00',
    "percent": '0.0"%"',
}
