from typing import Optional

from PySide6.QtWidgets import QInputDialog, QLineEdit, QMessageBox, QWidget


class QtEditorDialogs:
    """Modal confirmation, rename and icon-pick dialogs for the layout editor."""

    def __init__(self, parent: Optional[QWidget] = None, icons=None):
        self.parent = parent
        self.icons = list(icons) if icons else []

    def confirm(self, message: str) -> bool:
        answer = QMessageBox.question(self.parent, "Confirm", message,
                                      QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        return answer == QMessageBox.Yes

    def rename(self, current: str, title: str) -> Optional[str]:
        name, ok = QInputDialog.getText(self.parent, title, title, QLineEdit.Normal, current)
        if not ok:
            return None
        return name.strip() or None

    def pick_icon(self, current: str) -> Optional[str]:
        if not self.icons:
            return None
        index = self.icons.index(current) if current in self.icons else 0
        icon, ok = QInputDialog.getItem(self.parent, "Tab icon", "Icon", self.icons, index, False)
        return icon if ok else None
