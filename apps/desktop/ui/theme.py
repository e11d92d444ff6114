"""
Colors and QSS for the settings window, light and dark.
"""

from __future__ import annotations

from typing import Literal

from packages.core.horn.types import BadgeColor

SPACING = {
    "sm": "8px",
    "md": "12px",
    "lg": "16px",
    "xl": "24px",
}

TYPOGRAPHY = {
    "font_family": "Segoe UI, -apple-system, BlinkMacSystemFont, sans-serif",
    "font_size_sm": "13px",
    "font_size_base": "15px",
    "font_size_lg": "17px",
    "font_size_2xl": "28px",
    "font_weight_medium": "500",
    "font_weight_semibold": "600",
    "font_weight_bold": "700",
}

COLOR_ACCENTS = {
    "blue": "#007AFF",
    "green": "#34C759",
    "brown": "#A2845E",
    "gray": "#8E8E93",
    "amber": BadgeColor.AMBER.value,
    "red": BadgeColor.RED.value,
}

LIGHT_COLORS = {
    "background": "#F5F5F7",
    "surface": "#FFFFFF",
    "text_primary": "#000000",
    "text_secondary": "#6E6E73",
    "border": "#E5E5EA",
}

DARK_COLORS = {
    "background": "#000000",
    "surface": "#1C1C1E",
    "text_primary": "#FFFFFF",
    "text_secondary": "#98989D",
    "border": "#38383A",
}

ThemeMode = Literal["light", "dark"]


class Theme:
    def __init__(self, mode: ThemeMode = "dark"):
        self.mode = mode
        self.colors = LIGHT_COLORS if mode == "light" else DARK_COLORS

    def toggle_mode(self) -> None:
        self.mode = "light" if self.mode == "dark" else "dark"
        self.colors = LIGHT_COLORS if self.mode == "light" else DARK_COLORS

    def get_stylesheet(self) -> str:
        colors = self.colors
        font_family = TYPOGRAPHY["font_family"]

        return f"""
        QMainWindow, QWidget#Root {{
            background-color: {colors["background"]};
            color: {colors["text_primary"]};
            font-family: {font_family};
        }}

        QLabel#TitleLabel {{
            font-size: {TYPOGRAPHY["font_size_2xl"]};
            font-weight: {TYPOGRAPHY["font_weight_bold"]};
            color: {colors["text_primary"]};
        }}

        QLabel#SectionLabel {{
            font-size: {TYPOGRAPHY["font_size_lg"]};
            font-weight: {TYPOGRAPHY["font_weight_semibold"]};
            color: {colors["text_primary"]};
        }}

        QLabel#HintLabel {{
            font-size: {TYPOGRAPHY["font_size_sm"]};
            color: {colors["text_secondary"]};
        }}

        QLabel, QCheckBox {{
            font-size: {TYPOGRAPHY["font_size_base"]};
            color: {colors["text_primary"]};
        }}

        QFrame#Card {{
            background-color: {colors["surface"]};
            border-radius: 16px;
            border: 1px solid {colors["border"]};
        }}

        QPushButton#PrimaryButton {{
            background-color: {COLOR_ACCENTS["blue"]};
            color: #FFFFFF;
            border: none;
            border-radius: 20px;
            padding: {SPACING["sm"]} {SPACING["xl"]};
            font-weight: {TYPOGRAPHY["font_weight_semibold"]};
            min-height: 36px;
        }}

        QLabel#StatusPill {{
            background-color: {colors["surface"]};
            color: {colors["text_secondary"]};
            border: 1px solid {colors["border"]};
            border-radius: 12px;
            padding: 4px {SPACING["md"]};
            font-weight: {TYPOGRAPHY["font_weight_medium"]};
        }}

        QLabel#StatusPillActive {{
            background-color: {COLOR_ACCENTS["green"]};
            color: #FFFFFF;
            border-radius: 12px;
            padding: 4px {SPACING["md"]};
            font-weight: {TYPOGRAPHY["font_weight_medium"]};
        }}
        """
