"""Dialog asking for a branch name or a ref to move to."""

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
)


class RefDialog(QDialog):
    """Ref 输入对话框（新建分支 / 检出 / 重置）"""

    def __init__(self, title: str, label: str, parent=None, refs: Optional[list[str]] = None, default: str = ""):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumWidth(350)

        # 主布局
        layout = QVBoxLayout(self)

        ref_layout = QHBoxLayout()
        ref_layout.addWidget(QLabel(label))
        self.ref_combo = QComboBox()
        self.ref_combo.setEditable(True)
        for ref in refs or []:
            self.ref_combo.addItem(ref)
        self.ref_combo.setCurrentText(default)

        ref_layout.addWidget(self.ref_combo, 1)
        layout.addLayout(ref_layout)

        # 按钮
        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Cancel | QDialogButtonBox.StandardButton.Ok,
            Qt.Orientation.Horizontal,
            self,
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

    def get_ref(self) -> str:
        """获取输入的 ref；保留内部空格，交给模型校验"""
        return self.ref_combo.currentText().strip()
