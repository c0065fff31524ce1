# history_view.py

import logging

from PyQt6.QtCore import QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QFont, QPainter
from PyQt6.QtWidgets import QApplication, QGraphicsScene, QGraphicsSimpleTextItem, QGraphicsView, QMenu

from history_items import CommitCircle, IdLabel, PointerLine, TagLabel
from history_snapshot import HistorySnapshot

CURRENT_BRANCH_POS = (10, 25)


class HistoryGraphView(QGraphicsView):
    commit_item_clicked = pyqtSignal(str)
    checkout_requested = pyqtSignal(str)
    reset_requested = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)  # Enable panning
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)  # Zoom towards mouse

        self.snapshot: HistorySnapshot | None = None
        self._commit_items: dict[str, CommitCircle] = {}
        self._pointer_items: list[PointerLine] = []
        self._tag_items: list[TagLabel] = []
        self._id_labels: list[IdLabel] = []
        self.current_branch_item: QGraphicsSimpleTextItem | None = None

        self._zoom_factor_base = 1.1  # Base factor for zooming

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

    def clear_graph(self):
        self.scene.clear()
        self._commit_items.clear()
        self._pointer_items.clear()
        self._tag_items.clear()
        self._id_labels.clear()
        self.current_branch_item = None

    def show_snapshot(self, snapshot: HistorySnapshot):
        """Redraws the whole scene from a freshly laid out snapshot."""
        self.clear_graph()
        self.snapshot = snapshot
        radius = snapshot.params.commit_radius

        for pointer in snapshot.pointers:
            pointer_item = PointerLine(pointer)
            self.scene.addItem(pointer_item)
            self._pointer_items.append(pointer_item)

        for commit in snapshot.commits:
            commit_item = CommitCircle(commit, radius)
            self.scene.addItem(commit_item)
            self._commit_items[commit.id] = commit_item

            id_label = IdLabel(commit, radius)
            self.scene.addItem(id_label)
            self._id_labels.append(id_label)

        for tag in snapshot.tags:
            tag_item = TagLabel(tag)
            self.scene.addItem(tag_item)
            self._tag_items.append(tag_item)

        self.current_branch_item = QGraphicsSimpleTextItem(snapshot.current_branch_label)
        self.current_branch_item.setFont(QFont("Arial", 11))
        self.current_branch_item.setPos(*CURRENT_BRANCH_POS)
        self.scene.addItem(self.current_branch_item)

        params = snapshot.params
        view_rect = QRectF(0, 0, params.width, params.height)
        self.scene.setSceneRect(view_rect.united(self.scene.itemsBoundingRect()).adjusted(-10, -10, 10, 10))
        logging.debug(
            "Rendered %s: %d commits, %d tags, head=%s",
            snapshot.name,
            len(snapshot.commits),
            len(snapshot.tags),
            snapshot.head_id,
        )

    def commit_item(self, commit_id: str) -> CommitCircle | None:
        return self._commit_items.get(commit_id)

    def tag_items(self) -> list[TagLabel]:
        return list(self._tag_items)

    def pointer_items(self) -> list[PointerLine]:
        return list(self._pointer_items)

    def wheelEvent(self, event):
        """Handle mouse wheel events for zooming."""
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            if event.angleDelta().y() > 0:
                self.zoom_in()
            else:
                self.zoom_out()
            event.accept()
        else:
            super().wheelEvent(event)

    def zoom_in(self):
        self.scale(self._zoom_factor_base, self._zoom_factor_base)

    def zoom_out(self):
        self.scale(1.0 / self._zoom_factor_base, 1.0 / self._zoom_factor_base)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            item = self.itemAt(event.pos())
            if isinstance(item, CommitCircle):
                self.commit_item_clicked.emit(item.commit.id)
        super().mousePressEvent(event)

    def _show_context_menu(self, pos):
        """Show context menu for right-click on a commit circle."""
        scene_pos = self.mapToScene(pos)
        item = self.scene.itemAt(scene_pos, self.transform())

        if isinstance(item, CommitCircle):
            commit_id = item.commit.id
            menu = QMenu(self)

            checkout_action = QAction("Checkout", self)
            checkout_action.triggered.connect(lambda: self.checkout_requested.emit(commit_id))
            menu.addAction(checkout_action)

            reset_action = QAction("Reset Current Branch Here", self)
            reset_action.triggered.connect(lambda: self.reset_requested.emit(commit_id))
            menu.addAction(reset_action)

            copy_action = QAction("Copy Commit Id", self)
            copy_action.triggered.connect(lambda: QApplication.clipboard().setText(commit_id))
            menu.addAction(copy_action)

            menu.exec(self.viewport().mapToGlobal(pos))
