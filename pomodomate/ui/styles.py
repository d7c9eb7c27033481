"""
Warm light stylesheet for the entire application.
Tomato / amber palette; each mode has its own accent color.
"""

from pomodomate.data.models import Mode

MODE_COLORS = {
    Mode.WORK: "#ef4444",
    Mode.SHORT_BREAK: "#22c55e",
    Mode.LONG_BREAK: "#f97316",
}

MODE_TEXT_COLORS = {
    Mode.WORK: "#dc2626",
    Mode.SHORT_BREAK: "#16a34a",
    Mode.LONG_BREAK: "#ea580c",
}

APP_STYLESHEET = """
/* ── Base ────────────────────────────────────────────────────────── */
QWidget {
    background-color: #fffbeb;
    color: #1f2937;
    font-family: "Segoe UI", "Inter", sans-serif;
    font-size: 13px;
}

QFrame#card {
    background-color: #ffffff;
    border-radius: 16px;
}

/* ── Buttons ─────────────────────────────────────────────────────── */
QPushButton {
    background-color: #ffffff;
    color: #374151;
    border: 1px solid #e5e7eb;
    border-radius: 8px;
    padding: 8px 14px;
    font-weight: 600;
    min-height: 24px;
}

QPushButton:hover {
    background-color: #fef2f2;
}

QPushButton#round {
    border-radius: 32px;
    min-width: 64px;
    min-height: 64px;
    max-width: 64px;
    max-height: 64px;
    font-size: 22px;
    color: #ffffff;
    border: none;
}

QPushButton#primary {
    background-color: #ef4444;
    color: #ffffff;
    border: none;
}

QPushButton#primary:hover {
    background-color: #dc2626;
}

/* ── Inputs ──────────────────────────────────────────────────────── */
QSpinBox {
    background-color: #ffffff;
    border: 1px solid #d1d5db;
    border-radius: 8px;
    padding: 6px 10px;
}

QSpinBox:focus {
    border-color: #ef4444;
}

/* ── Labels ──────────────────────────────────────────────────────── */
QLabel {
    background: transparent;
}

QLabel#title {
    font-size: 26px;
    font-weight: 700;
    color: #dc2626;
}

QLabel#coins {
    background-color: #fef9c3;
    color: #a16207;
    border-radius: 12px;
    padding: 4px 12px;
    font-weight: 600;
}

QLabel#streak {
    background-color: #ffedd5;
    color: #c2410c;
    border-radius: 12px;
    padding: 4px 12px;
    font-weight: 600;
}

QLabel#timer {
    font-size: 64px;
    font-weight: 700;
    font-family: "Consolas", "Courier New", monospace;
}

QLabel#mascot {
    font-size: 56px;
}

QLabel#mascot_name {
    font-size: 18px;
    font-weight: 700;
    color: #dc2626;
}

QLabel#subtitle {
    font-size: 13px;
    color: #4b5563;
}

QLabel#muted {
    font-size: 11px;
    color: #6b7280;
}

/* ── Progress Bar ────────────────────────────────────────────────── */
QProgressBar {
    background-color: #e5e7eb;
    border: none;
    border-radius: 4px;
    max-height: 8px;
}
"""


def mode_button_style(mode: Mode, active: bool) -> str:
    color = MODE_COLORS[mode]
    if active:
        return f"QPushButton {{ background-color: {color}; color: #ffffff; border: none; }}"
    return (
        f"QPushButton {{ background-color: #ffffff; color: {MODE_TEXT_COLORS[mode]}; }}"
    )


def accent_style(mode: Mode) -> str:
    return f"background-color: {MODE_COLORS[mode]};"


def progress_chunk_style(mode: Mode) -> str:
    return (
        "QProgressBar::chunk { border-radius: 4px; "
        f"background-color: {MODE_COLORS[mode]}; }}"
    )
