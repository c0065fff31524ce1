import logging
from typing import Callable, Optional

from PyQt6.QtWidgets import QDialog, QHBoxLayout, QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget

from components.notification_widget import NotificationWidget
from components.ref_dialog import RefDialog
from history_errors import HistoryError
from history_model import HistoryModel
from history_view import HistoryGraphView
from settings import Settings, settings as default_settings


class HistoryWindow(QMainWindow):
    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        self.settings = settings or default_settings
        self.setWindowTitle(self.tr("Commit History"))

        self.notification_widget = NotificationWidget(self)
        self.graph_view = HistoryGraphView(self)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_widget.setLayout(main_layout)

        # --- Top bar ---
        top_bar = QHBoxLayout()
        top_bar.setContentsMargins(10, 5, 10, 5)
        top_bar.setSpacing(10)

        self.commit_button = QPushButton(self.tr("Commit"))
        self.commit_button.clicked.connect(self.make_commit)
        top_bar.addWidget(self.commit_button)

        self.branch_button = QPushButton(self.tr("Branch..."))
        self.branch_button.clicked.connect(self.show_branch_dialog)
        top_bar.addWidget(self.branch_button)

        self.checkout_button = QPushButton(self.tr("Checkout..."))
        self.checkout_button.clicked.connect(self.show_checkout_dialog)
        top_bar.addWidget(self.checkout_button)

        self.reset_button = QPushButton(self.tr("Reset..."))
        self.reset_button.clicked.connect(self.show_reset_dialog)
        top_bar.addWidget(self.reset_button)

        top_bar.addStretch(1)
        self.branch_label = QLabel()
        top_bar.addWidget(self.branch_label)

        main_layout.addLayout(top_bar)
        main_layout.addWidget(self.graph_view, 1)

        self.graph_view.commit_item_clicked.connect(self.select_commit)
        self.graph_view.checkout_requested.connect(self.checkout_ref)
        self.graph_view.reset_requested.connect(self.reset_to)

        self.selected_commit_id: Optional[str] = None
        self.model = HistoryModel.from_settings(self.settings, renderer=self.graph_view)
        self._update_branch_label()

        view_config = self.settings.view_config()
        self.resize(int(view_config["width"]) + 60, int(view_config["height"]) + 100)

    # --- Operations ---

    def make_commit(self) -> bool:
        return self._run(self.model.commit)

    def create_branch(self, name: str) -> bool:
        return self._run(self.model.branch, name)

    def checkout_ref(self, ref: str) -> bool:
        return self._run(self.model.checkout, ref)

    def reset_to(self, ref: str) -> bool:
        return self._run(self.model.reset, ref)

    def select_commit(self, commit_id: str) -> bool:
        """Remembers the clicked commit as the default target of checkout and reset."""
        try:
            commit = self.model.get_commit(commit_id)
        except HistoryError as e:
            logging.warning("Cannot select %s: %s", commit_id, e)
            self.selected_commit_id = None
            return False

        self.selected_commit_id = commit.id
        refs = ", ".join(commit.tags) or "-"
        self.notification_widget.show_message(f"{commit.id}\nparent: {commit.parent}\nrefs: {refs}")
        return True

    def _run(self, operation: Callable, *args) -> bool:
        try:
            operation(*args)
        except HistoryError as e:
            logging.warning("%s%s failed: %s", operation.__name__, args, e)
            self.notification_widget.show_error(e)
            return False
        finally:
            self._update_branch_label()
        return True

    def _update_branch_label(self):
        self.branch_label.setText(self.model.current_branch_label)

    # --- Dialogs ---

    def show_branch_dialog(self):
        dialog = RefDialog(self.tr("Create New Branch"), self.tr("Branch Name:"), self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.create_branch(dialog.get_ref())

    def show_checkout_dialog(self):
        dialog = RefDialog(
            self.tr("Checkout"), self.tr("Ref:"), self, refs=self._known_refs(), default=self.selected_commit_id or ""
        )
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.checkout_ref(dialog.get_ref())

    def show_reset_dialog(self):
        dialog = RefDialog(
            self.tr("Reset"), self.tr("Reset to:"), self, refs=self._known_refs(), default=self.selected_commit_id or ""
        )
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.reset_to(dialog.get_ref())

    def _known_refs(self) -> list[str]:
        refs = self.model.branches
        refs.extend(c.id for c in reversed(self.model.graph.commits))
        return refs

    def closeEvent(self, event):
        self.model.close()
        super().closeEvent(event)
