from .main_window import MainWindow
from .settings_dialog import SettingsDialog
from .celebration_overlay import CelebrationOverlay

__all__ = ["MainWindow", "SettingsDialog", "CelebrationOverlay"]
