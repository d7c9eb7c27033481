"""
Celebration Overlay — the bouncing card shown for a few seconds after a
countdown finishes. Visibility is driven by TimerSnapshot.celebration_visible.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEasingCurve, QPoint, QPropertyAnimation, Qt
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget


class CelebrationOverlay(QWidget):
    """Semi-transparent cover over the parent window with a centered card."""

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)
        self.setStyleSheet("CelebrationOverlay { background-color: rgba(0, 0, 0, 128); }")

        self.card = QFrame(self)
        self.card.setObjectName("card")
        self.card.setFixedSize(300, 200)
        layout = QVBoxLayout(self.card)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        party = QLabel("\U0001F389")
        party.setObjectName("mascot")
        party.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(party)

        self.phrase_label = QLabel("")
        self.phrase_label.setObjectName("mascot_name")
        self.phrase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.phrase_label.setWordWrap(True)
        layout.addWidget(self.phrase_label)

        self.coin_label = QLabel("\U0001FA99 +1 coin earned!")
        self.coin_label.setStyleSheet("color: #ca8a04; font-weight: 700;")
        self.coin_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.coin_label)

        self._bounce: Optional[QPropertyAnimation] = None
        self.hide()

    def show_celebration(self, phrase: str, coin_awarded: bool) -> None:
        self.phrase_label.setText(phrase)
        self.coin_label.setVisible(coin_awarded)
        self.setGeometry(self.parentWidget().rect())
        self._center_card()
        self.show()
        self.raise_()
        self._start_bounce()

    def hide_celebration(self) -> None:
        if self._bounce is not None:
            self._bounce.stop()
            self._bounce = None
        self.hide()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._center_card()

    def _center_card(self) -> None:
        x = (self.width() - self.card.width()) // 2
        y = (self.height() - self.card.height()) // 2
        self.card.move(x, y)

    def _start_bounce(self) -> None:
        rest = self.card.pos()
        anim = QPropertyAnimation(self.card, b"pos", self)
        anim.setDuration(1000)
        anim.setStartValue(rest)
        anim.setKeyValueAt(0.5, rest - QPoint(0, 24))
        anim.setEndValue(rest)
        anim.setEasingCurve(QEasingCurve.Type.OutBounce)
        anim.setLoopCount(-1)
        anim.start()
        self._bounce = anim
