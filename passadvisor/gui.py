# passadvisor/gui.py
# PassAdvisor GUI: live strength meter, suggestions, personal hints, generator with clipboard auto-clear

import sys
import typing
from functools import partial

from PySide6.QtCore import QTimer
from PySide6.QtGui import QClipboard
from PySide6.QtWidgets import (
    QApplication, QWidget, QHBoxLayout, QVBoxLayout, QLabel, QLineEdit,
    QPushButton, QCheckBox, QTextEdit, QGroupBox, QGridLayout, QMessageBox,
    QProgressBar,
)

from passadvisor.config import CONTEXT_KEYS, load_config, save_config
from passadvisor.evaluator import ContextInfo, StrengthLevel, analyze
from passadvisor.generator import RandomSourceUnavailable, generate
from passadvisor.logger import configure_logging

CFG = load_config()
DEFAULT_CLEAR_CLIP_SECONDS = int(CFG.get("clipboard_clear_seconds", 20))

# meter colours belong to the UI, the evaluator only returns levels
LEVEL_COLORS = {
    StrengthLevel.VERY_WEAK: "#e74c3c",
    StrengthLevel.WEAK: "#e67e22",
    StrengthLevel.MEDIUM: "#f1c40f",
    StrengthLevel.STRONG: "#2ecc71",
    StrengthLevel.VERY_STRONG: "#27ae60",
}

CONTEXT_LABELS = {
    "name": "Name:",
    "birth_year": "Birth year:",
    "mobile": "Mobile:",
    "fav_word": "Favorite word:",
}

# ---------------- UI building helpers ----------------

def make_evaluator_group():
    box = QGroupBox("Evaluator")
    layout = QVBoxLayout()
    box.setLayout(layout)

    input_pw = QLineEdit()
    input_pw.setEchoMode(QLineEdit.Password)
    chk_show = QCheckBox("Show password")

    meter = QProgressBar()
    meter.setRange(0, 100)
    meter.setValue(0)
    meter.setTextVisible(False)

    lbl_label = QLabel("Strength: None")
    lbl_crack = QLabel("Crack time: N/A")
    lbl_breach = QLabel("This password appears in lists of leaked passwords!")
    lbl_breach.setStyleSheet("color: #e74c3c; font-weight: bold;")
    lbl_breach.setVisible(False)
    lbl_personal = QLabel("This password contains your personal information.")
    lbl_personal.setStyleSheet("color: #e67e22; font-weight: bold;")
    lbl_personal.setVisible(False)

    txt_suggestions = QTextEdit()
    txt_suggestions.setReadOnly(True)
    txt_suggestions.setMaximumHeight(160)

    layout.addWidget(QLabel("Type or paste a password (live evaluation):"))
    layout.addWidget(input_pw)
    layout.addWidget(chk_show)
    layout.addWidget(meter)
    layout.addWidget(lbl_label)
    layout.addWidget(lbl_crack)
    layout.addWidget(lbl_breach)
    layout.addWidget(lbl_personal)
    layout.addWidget(QLabel("Suggestions:"))
    layout.addWidget(txt_suggestions)

    return {
        "widget": box,
        "input_pw": input_pw,
        "chk_show": chk_show,
        "meter": meter,
        "lbl_label": lbl_label,
        "lbl_crack": lbl_crack,
        "lbl_breach": lbl_breach,
        "lbl_personal": lbl_personal,
        "txt_suggestions": txt_suggestions,
    }


def make_side_group(context: typing.Dict[str, typing.Optional[str]]):
    box = QGroupBox("Personal hints && generator")
    layout = QGridLayout()
    box.setLayout(layout)

    fields = {}
    for row, key in enumerate(CONTEXT_KEYS):
        edit = QLineEdit()
        edit.setText(context.get(key) or "")
        layout.addWidget(QLabel(CONTEXT_LABELS[key]), row, 0)
        layout.addWidget(edit, row, 1)
        fields[key] = edit

    btn_save_context = QPushButton("Remember hints")
    btn_generate = QPushButton("Generate")
    btn_copy = QPushButton("Copy (auto-clear)")

    row = len(CONTEXT_KEYS)
    layout.addWidget(btn_save_context, row, 0, 1, 2)
    layout.addWidget(btn_generate, row + 1, 0)
    layout.addWidget(btn_copy, row + 1, 1)

    return {
        "widget": box,
        "fields": fields,
        "btn_save_context": btn_save_context,
        "btn_generate": btn_generate,
        "btn_copy": btn_copy,
    }


class PassAdvisorGUI(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("PassAdvisor — Strength Checker & Generator")
        self.setMinimumSize(820, 420)
        self.clip_timer: typing.Optional[QTimer] = None

        self.cfg = load_config()
        self.clip_clear_seconds = int(self.cfg.get("clipboard_clear_seconds", DEFAULT_CLEAR_CLIP_SECONDS))
        self.generate_length = int(self.cfg.get("generate_length", 16))

        main = QHBoxLayout()
        self.setLayout(main)

        evalg = make_evaluator_group()
        side = make_side_group(self.cfg.get("context") or {})
        main.addWidget(evalg["widget"], 3)
        main.addWidget(side["widget"], 2)

        evalg["input_pw"].textChanged.connect(self.refresh)
        evalg["chk_show"].toggled.connect(partial(self.on_toggle_visibility, evalg))
        for edit in side["fields"].values():
            edit.textChanged.connect(self.refresh)
        side["btn_save_context"].clicked.connect(self.on_save_context)
        side["btn_generate"].clicked.connect(self.on_generate_click)
        side["btn_copy"].clicked.connect(self.on_copy)

        self.evalg = evalg
        self.side = side

    # ----------------- Evaluator -----------------
    def context(self) -> ContextInfo:
        return ContextInfo.from_mapping({k: e.text() for k, e in self.side["fields"].items()})

    def refresh(self, *_):
        evalg = self.evalg
        result = analyze(evalg["input_pw"].text(), self.context())
        if result is None:
            evalg["meter"].setValue(0)
            evalg["meter"].setStyleSheet("")
            evalg["lbl_label"].setText("Strength: None")
            evalg["lbl_label"].setStyleSheet("")
            evalg["lbl_crack"].setText("Crack time: N/A")
            evalg["lbl_breach"].setVisible(False)
            evalg["lbl_personal"].setVisible(False)
            evalg["txt_suggestions"].setPlainText("")
            return

        color = LEVEL_COLORS[result.level]
        evalg["meter"].setValue(round(result.level.meter_fraction * 100))
        evalg["meter"].setStyleSheet(f"QProgressBar::chunk {{ background-color: {color}; }}")
        evalg["lbl_label"].setText(f"Strength: {result.level.label} ({result.score} / 100)")
        evalg["lbl_label"].setStyleSheet(f"color: {color};")
        evalg["lbl_crack"].setText(f"Crack time: {result.crack_time}")
        evalg["lbl_breach"].setVisible(result.breach_detected)
        evalg["lbl_personal"].setVisible(result.personal_info_detected)
        evalg["txt_suggestions"].setPlainText("\n".join("• " + s for s in result.suggestions))

    def on_toggle_visibility(self, evalg, checked: bool):
        evalg["input_pw"].setEchoMode(QLineEdit.Normal if checked else QLineEdit.Password)

    def on_save_context(self):
        self.cfg["context"] = {k: (e.text().strip() or None) for k, e in self.side["fields"].items()}
        try:
            save_config(self.cfg)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to save hints: {e}")
            return
        QMessageBox.information(self, "Saved", "Personal hints saved.")

    # ----------------- Generator -----------------
    def on_generate_click(self):
        try:
            pw = generate(length=self.generate_length)
        except RandomSourceUnavailable as e:
            self.side["btn_generate"].setEnabled(False)
            QMessageBox.critical(self, "Generator unavailable", str(e))
            return
        except ValueError as e:
            QMessageBox.warning(self, "Generator", str(e))
            return
        self.evalg["input_pw"].setText(pw)

    def on_copy(self):
        pw = self.evalg["input_pw"].text()
        if not pw:
            return
        clipboard: QClipboard = QApplication.clipboard()
        clipboard.setText(pw, mode=QClipboard.Clipboard)

        btn = self.side["btn_copy"]
        old_text = btn.text()
        btn.setText("Copied ✓")
        btn.setEnabled(False)
        QTimer.singleShot(2000, lambda: (btn.setText(old_text), btn.setEnabled(True)))

        self.start_clipboard_clear_timer(self.clip_clear_seconds)

    # ----------------- Clipboard -----------------
    def start_clipboard_clear_timer(self, seconds: int):
        if self.clip_timer and self.clip_timer.isActive():
            self.clip_timer.stop()
        self.clip_timer = QTimer(self)
        self.clip_timer.setSingleShot(True)
        self.clip_timer.timeout.connect(self.clear_clipboard)
        self.clip_timer.start(seconds * 1000)

    def clear_clipboard(self):
        QApplication.clipboard().setText("", mode=QClipboard.Clipboard)


def main():
    configure_logging(CFG.get("log_level", "WARNING"))
    app = QApplication(sys.argv)
    gui = PassAdvisorGUI()
    gui.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
