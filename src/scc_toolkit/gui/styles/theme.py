"""
Theme definitions for the SCC Toolkit viewer.
"""


class Colors:
    # Primary Colors
    PRIMARY = "#06b6d4"
    PRIMARY_HOVER = "#22d3ee"
    PRIMARY_PRESSED = "#0891b2"

    # Backgrounds (chart canvas uses ChartConfig.background_color)
    BACKGROUND = "#071020"
    SURFACE = "#0f1d33"
    HOVER = "#16294a"
    DISABLED_BG = "#1e293b"

    # Text
    TEXT_PRIMARY = "#e2e8f0"
    TEXT_SECONDARY = "#94a3b8"
    TEXT_DISABLED = "#64748b"
    TEXT_ON_PRIMARY = "#0a1628"

    # Borders & Dividers
    BORDER = "#1e3a5f"
    DIVIDER = "#13233d"

    # Status
    ERROR = "#ef4444"
    SUCCESS = "#22c55e"
    WARNING = "#f59e0b"
    INFO = "#38bdf8"

    # Celeration trend colors in the stats panel
    TREND_POSITIVE = "#22c55e"
    TREND_NEGATIVE = "#ef4444"
    TREND_NEUTRAL = "#94a3b8"


class Fonts:
    # Font Families
    UI_FONT = "-apple-system, 'SF Pro Text', 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"

    # Sizes
    H1 = "16pt"
    H2 = "13pt"
    BODY = "11pt"
    SMALL = "9pt"

    # Weights
    WEIGHT_REGULAR = "400"
    WEIGHT_MEDIUM = "500"
    WEIGHT_BOLD = "600"


TREND_COLORS = {
    "positive": Colors.TREND_POSITIVE,
    "negative": Colors.TREND_NEGATIVE,
    "neutral": Colors.TREND_NEUTRAL,
}


GLOBAL_STYLESHEET = f"""
    QWidget {{
        font-family: {Fonts.UI_FONT};
        font-size: {Fonts.BODY};
        color: {Colors.TEXT_PRIMARY};
        background-color: {Colors.BACKGROUND};
    }}
    QGroupBox {{
        background-color: {Colors.SURFACE};
        border: 1px solid {Colors.BORDER};
        border-radius: 8px;
        margin-top: 18px;
        padding: 8px;
        font-weight: {Fonts.WEIGHT_BOLD};
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 4px;
        color: {Colors.PRIMARY};
    }}
    QGroupBox QWidget {{
        background-color: {Colors.SURFACE};
    }}
    QPushButton {{
        background-color: {Colors.SURFACE};
        border: 1px solid {Colors.BORDER};
        border-radius: 6px;
        padding: 6px 12px;
        font-weight: {Fonts.WEIGHT_MEDIUM};
    }}
    QPushButton:hover {{
        background-color: {Colors.HOVER};
    }}
    QPushButton:checked {{
        background-color: {Colors.PRIMARY};
        color: {Colors.TEXT_ON_PRIMARY};
        border-color: {Colors.PRIMARY};
    }}
    QPushButton:disabled {{
        background-color: {Colors.DISABLED_BG};
        color: {Colors.TEXT_DISABLED};
    }}
    QPushButton#primaryButton {{
        background-color: {Colors.PRIMARY};
        color: {Colors.TEXT_ON_PRIMARY};
        border: none;
    }}
    QPushButton#primaryButton:hover {{
        background-color: {Colors.PRIMARY_HOVER};
    }}
    QPushButton#primaryButton:pressed {{
        background-color: {Colors.PRIMARY_PRESSED};
    }}
    QListWidget {{
        border: none;
        background-color: {Colors.SURFACE};
    }}
    QListWidget::item:hover {{
        background-color: {Colors.HOVER};
    }}
    QStatusBar {{
        background-color: {Colors.SURFACE};
        color: {Colors.TEXT_SECONDARY};
        border-top: 1px solid {Colors.DIVIDER};
    }}
    QLabel#chartSubtitle {{
        color: {Colors.TEXT_SECONDARY};
        font-size: {Fonts.SMALL};
    }}
    QLabel#chartTitle {{
        font-size: {Fonts.H1};
        font-weight: {Fonts.WEIGHT_BOLD};
    }}
    QToolTip {{
        background-color: {Colors.SURFACE};
        color: {Colors.TEXT_PRIMARY};
        border: 1px solid {Colors.PRIMARY};
        padding: 4px;
    }}
"""


def apply_global_stylesheet(app) -> None:
    """
    Apply the shared stylesheet and default font to the QApplication.
    """
    from PySide6.QtGui import QFont

    font = QFont()
    font.setFamily(Fonts.UI_FONT.split(",")[0].strip(" '\""))
    try:
        font.setPointSize(int(Fonts.BODY.replace("pt", "")))
    except ValueError:
        pass
    app.setFont(font)

    app.setStyleSheet(GLOBAL_STYLESHEET)
