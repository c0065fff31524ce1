# history_items.py

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainterPath, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsPathItem,
    QGraphicsRectItem,
    QGraphicsSimpleTextItem,
)

from history_geometry import TAG_HEIGHT, TAG_KIND_HEAD, TAG_KIND_REMOTE, TAG_TEXT_BASELINE, tag_width
from history_snapshot import CommitSnapshot, PointerSnapshot, TagSnapshot

# --- Configuration for items ---
DEFAULT_COMMIT_COLOR = QColor("#EEEEEE")
DEFAULT_COMMIT_BORDER = QColor("#888888")
CURRENT_COMMIT_COLOR = QColor("#CCFFCC")
CURRENT_COMMIT_BORDER = QColor("#339900")
COMMIT_BORDER_WIDTH = 3

POINTER_COLOR = QColor("#666666")
POINTER_THICKNESS = 2
ARROW_LENGTH = 8
ARROW_HALF_WIDTH = 3

TAG_COLOR_BRANCH = QColor("#FFCC66")
TAG_COLOR_REMOTE = QColor("#FFCC66").darker(120)
TAG_COLOR_HEAD = QColor("#CCFFCC")
TAG_TEXT_COLOR = QColor(Qt.GlobalColor.black)
TAG_FONT = ("Arial", 8)

ID_LABEL_COLOR = QColor("#444444")
ID_LABEL_OFFSET = 14
ID_LABEL_FONT = ("Courier New", 9)


class CommitCircle(QGraphicsEllipseItem):
    def __init__(self, commit: CommitSnapshot, radius: float, parent: QGraphicsItem = None):
        super().__init__(-radius, -radius, 2 * radius, 2 * radius, parent)
        self.commit = commit
        self.setPos(commit.cx, commit.cy)
        self.setToolTip(f"{commit.id}\nparent: {commit.parent}")
        self.set_current(commit.is_current)

    def set_current(self, is_current: bool):
        self.is_current = is_current
        if is_current:
            self.setBrush(QBrush(CURRENT_COMMIT_COLOR))
            self.setPen(QPen(CURRENT_COMMIT_BORDER, COMMIT_BORDER_WIDTH))
        else:
            self.setBrush(QBrush(DEFAULT_COMMIT_COLOR))
            self.setPen(QPen(DEFAULT_COMMIT_BORDER, COMMIT_BORDER_WIDTH))


class PointerLine(QGraphicsPathItem):
    """Line from a commit to its parent, ending in an arrowhead at the parent side."""

    def __init__(self, pointer: PointerSnapshot, parent: QGraphicsItem = None):
        super().__init__(parent)
        self.pointer = pointer

        self.setPen(QPen(POINTER_COLOR, POINTER_THICKNESS, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        self.setBrush(QBrush(POINTER_COLOR))
        self.setZValue(-1)  # Draw pointers behind commits

        self.update_path()

    def update_path(self):
        start = QPointF(self.pointer.x1, self.pointer.y1)
        end = QPointF(self.pointer.x2, self.pointer.y2)

        path = QPainterPath()
        path.moveTo(start)
        path.lineTo(end)

        direction = end - start
        length = (direction.x() ** 2 + direction.y() ** 2) ** 0.5
        if length > 0:
            ux, uy = direction.x() / length, direction.y() / length
            base = end - QPointF(ux, uy) * ARROW_LENGTH
            normal = QPointF(-uy, ux) * ARROW_HALF_WIDTH
            path.addPolygon(QPolygonF([end, base + normal, base - normal, end]))
        self.setPath(path)


class TagLabel(QGraphicsRectItem):
    def __init__(self, tag: TagSnapshot, parent: QGraphicsItem = None):
        width = tag_width(tag.name)
        super().__init__(QRectF(tag.x - width / 2, tag.y, width, TAG_HEIGHT), parent)
        self.tag = tag

        if tag.kind == TAG_KIND_HEAD:
            color = TAG_COLOR_HEAD
        elif tag.kind == TAG_KIND_REMOTE:
            color = TAG_COLOR_REMOTE
        else:  # Branch
            color = TAG_COLOR_BRANCH
        self.setBrush(QBrush(color))
        self.setPen(QPen(color.darker(130), 1))

        self.text_item = QGraphicsSimpleTextItem(tag.name, self)
        self.text_item.setFont(QFont(*TAG_FONT))
        self.text_item.setBrush(QBrush(TAG_TEXT_COLOR))
        # Text is centered on the commit; its baseline sits 14px below the label top
        text_rect = self.text_item.boundingRect()
        self.text_item.setPos(tag.x - text_rect.width() / 2, tag.y + TAG_TEXT_BASELINE - text_rect.height() * 0.8)


class IdLabel(QGraphicsSimpleTextItem):
    def __init__(self, commit: CommitSnapshot, radius: float, parent: QGraphicsItem = None):
        super().__init__(f"{commit.id}..", parent)
        self.setFont(QFont(*ID_LABEL_FONT))
        self.setBrush(QBrush(ID_LABEL_COLOR))
        text_rect = self.boundingRect()
        self.setPos(commit.cx - text_rect.width() / 2, commit.cy + radius + ID_LABEL_OFFSET - text_rect.height())
