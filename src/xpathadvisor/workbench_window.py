from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QColor
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from .best_practices import XPATH_BEST_PRACTICES
from .models import StrategyResult, ValidationReport
from .report_export import EXPORT_FORMATS, write_export
from .ui_state import (
    CONFIG_DIR,
    WorkbenchState,
    compute_workbench_button_state,
    load_workbench_state,
    save_workbench_state,
)
from .xpath_generator import XPathGenerator

TABLE_HEADERS = ("Strategy", "XPath", "Specificity", "Robustness", "Maintainability", "Verdict")
VERDICT_COLORS = {
    "good": "#16a34a",
    "warning": "#ca8a04",
    "poor": "#dc2626",
}


class WorkbenchWindow(QMainWindow):
    def __init__(self, generator: XPathGenerator | None = None) -> None:
        super().__init__()
        self.logger = self._build_logger()
        self.setWindowTitle("xpathadvisor")
        self.resize(1280, 820)

        self.generator = generator or XPathGenerator()
        self.state: WorkbenchState = load_workbench_state()
        self.current_results: list[StrategyResult] = []
        self.current_validations: list[ValidationReport] = []
        self._populating_table = False

        self.markup_input = QPlainTextEdit()
        self.markup_input.setPlaceholderText('<button id="save" class="btn primary">Save</button>')
        self.markup_input.setPlainText(self.state.last_markup)
        self.markup_input.textChanged.connect(self._refresh_button_state)

        self.generate_button = QPushButton("Generate XPath")
        self.generate_button.clicked.connect(self._generate)
        self.clear_selection_button = QPushButton("Clear Selection")
        self.clear_selection_button.clicked.connect(self._clear_selection)

        self.export_buttons: dict[str, QPushButton] = {}
        for fmt in EXPORT_FORMATS:
            button = QPushButton(f"Export {fmt.upper()}")
            button.clicked.connect(lambda _checked=False, value=fmt: self._export(value))
            self.export_buttons[fmt] = button
        self.export_dir_button = QPushButton("Export Folder...")
        self.export_dir_button.clicked.connect(self._choose_export_dir)

        self.results_table = QTableWidget(0, len(TABLE_HEADERS))
        self.results_table.setHorizontalHeaderLabels(list(TABLE_HEADERS))
        self.results_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.results_table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.results_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.results_table.currentCellChanged.connect(self._show_details)
        self.results_table.itemChanged.connect(self._on_item_changed)

        self.details_view = QPlainTextEdit()
        self.details_view.setReadOnly(True)
        self.details_view.setMaximumHeight(140)

        self.best_practices_view = QPlainTextEdit()
        self.best_practices_view.setReadOnly(True)
        self.best_practices_view.setPlainText(
            "\n".join(f"{index}. {item}" for index, item in enumerate(XPATH_BEST_PRACTICES, start=1))
        )

        self.status_label = QLabel("Paste HTML and press Generate XPath.")
        self.status_label.setWordWrap(True)

        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.addWidget(QLabel("HTML Content"))
        left_layout.addWidget(self.markup_input, 1)
        left_layout.addWidget(self.generate_button)
        left_layout.addWidget(QLabel("Best Practices"))
        left_layout.addWidget(self.best_practices_view)

        export_row = QHBoxLayout()
        export_row.addWidget(self.clear_selection_button)
        export_row.addStretch(1)
        export_row.addWidget(self.export_dir_button)
        for button in self.export_buttons.values():
            export_row.addWidget(button)

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addWidget(self.results_table, 1)
        right_layout.addWidget(self.details_view)
        right_layout.addLayout(export_row)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(left)
        splitter.addWidget(right)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)

        root = QWidget()
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(12, 12, 12, 12)
        root_layout.setSpacing(8)
        root_layout.addWidget(splitter, 1)
        root_layout.addWidget(self.status_label)
        self.setCentralWidget(root)

        self._refresh_button_state()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 (Qt API)
        self._persist_state()
        super().closeEvent(event)

    def _generate(self) -> None:
        markup = self.markup_input.toPlainText()
        if not markup.strip():
            self._set_status("Please enter HTML content to generate XPath selectors.")
            return

        try:
            self.current_results = self.generator.generate_xpaths(markup)
            self.current_validations = self.generator.validate_results(self.current_results, markup)
        except Exception as exc:
            self._handle_ui_exception("Could not generate XPath selectors.", exc)
            return

        self._populate_table()
        total = sum(len(result.xpaths) for result in self.current_results)
        self.logger.info("Generated %d XPath selector(s) from %d characters of markup.", total, len(markup))
        self._set_status(f"Generated {total} XPath selectors")
        self._persist_state()
        self._refresh_button_state()

    def _populate_table(self) -> None:
        self._populating_table = True
        try:
            self.results_table.setRowCount(0)
            reports = iter(self.current_validations)
            for result in self.current_results:
                for xpath in result.xpaths:
                    report = next(reports)
                    self._append_row(result.strategy, xpath, report)
        finally:
            self._populating_table = False

    def _append_row(self, strategy: str, xpath: str, report: ValidationReport) -> None:
        row = self.results_table.rowCount()
        self.results_table.insertRow(row)

        xpath_item = QTableWidgetItem(xpath)
        xpath_item.setFlags(xpath_item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
        xpath_item.setCheckState(Qt.CheckState.Unchecked)

        verdict_item = QTableWidgetItem(report.verdict)
        verdict_item.setForeground(QColor(VERDICT_COLORS[report.verdict]))

        cells = (
            QTableWidgetItem(strategy),
            xpath_item,
            QTableWidgetItem(str(report.specificity)),
            QTableWidgetItem(str(report.robustness)),
            QTableWidgetItem(str(report.maintainability)),
            verdict_item,
        )
        for column, item in enumerate(cells):
            self.results_table.setItem(row, column, item)

    def _selected_xpaths(self) -> list[str]:
        selected: list[str] = []
        for row in range(self.results_table.rowCount()):
            item = self.results_table.item(row, 1)
            if item is not None and item.checkState() == Qt.CheckState.Checked:
                selected.append(item.text())
        return selected

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._populating_table or item.column() != 1:
            return
        self._refresh_button_state()

    def _clear_selection(self) -> None:
        self._populating_table = True
        try:
            for row in range(self.results_table.rowCount()):
                item = self.results_table.item(row, 1)
                if item is not None:
                    item.setCheckState(Qt.CheckState.Unchecked)
        finally:
            self._populating_table = False
        self._refresh_button_state()

    def _show_details(self, row: int, *_args) -> None:
        if row < 0 or row >= len(self.current_validations):
            self.details_view.clear()
            return
        report = self.current_validations[row]
        lines = [
            report.xpath,
            f"Valid: {'yes' if report.is_valid else 'no'}  Overall: {report.overall_score:.1f}",
        ]
        if report.issues:
            lines.append("Issues: " + ", ".join(report.issues))
        if report.suggestions:
            lines.append("Suggestions: " + ", ".join(report.suggestions))
        self.details_view.setPlainText("\n".join(lines))

    def _choose_export_dir(self) -> None:
        chosen = QFileDialog.getExistingDirectory(self, "Select export folder", self.state.export_dir)
        if not chosen:
            return
        self.state.export_dir = chosen
        self._persist_state()
        self._set_status(f"Export folder: {chosen}")

    def _export(self, fmt: str) -> None:
        if not self.current_results:
            self._set_status("Please generate XPath first.")
            return

        try:
            target, error = write_export(
                Path(self.state.export_dir),
                fmt,
                self.markup_input.toPlainText(),
                self.current_results,
                self.current_validations,
                selected=self._selected_xpaths(),
            )
        except Exception as exc:
            self._handle_ui_exception("Export failed.", exc)
            return

        if error:
            self.logger.warning("Export failed: %s", error)
            self._set_status(error)
            return

        self._persist_state()
        self.logger.info("Exported XPath selectors to %s", target)
        self._set_status(f"XPath selectors exported as {fmt.upper()} file: {target}")

    def _refresh_button_state(self) -> None:
        state = compute_workbench_button_state(
            has_markup=bool(self.markup_input.toPlainText().strip()),
            has_results=bool(self.current_results),
            has_selection=bool(self._selected_xpaths()),
        )
        self.generate_button.setEnabled(state.can_generate)
        self.clear_selection_button.setEnabled(state.can_clear_selection)
        for button in self.export_buttons.values():
            button.setEnabled(state.can_export)

    def _persist_state(self) -> None:
        self.state.last_markup = self.markup_input.toPlainText()
        ok, message = save_workbench_state(self.state)
        if not ok:
            self.logger.warning("Failed to persist workbench state: %s", message)

    def _set_status(self, message: str) -> None:
        self.status_label.setText(message)

    @staticmethod
    def _build_logger() -> logging.Logger:
        logger = logging.getLogger("xpathadvisor.ui")
        if logger.handlers:
            return logger

        logger.setLevel(logging.INFO)
        logger.propagate = False
        try:
            CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(CONFIG_DIR / "ui.log", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            logger.addHandler(file_handler)
        except OSError:
            stream_handler = logging.StreamHandler()
            stream_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            logger.addHandler(stream_handler)
        return logger

    def _handle_ui_exception(self, user_message: str, exc: Exception) -> None:
        self.logger.exception("%s: %s", user_message, exc)
        self._set_status(user_message)
