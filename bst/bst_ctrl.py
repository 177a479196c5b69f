import logging

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from bst.bst_output import format_output_html
from bst.bst_view import BSTView
from bst_query.query_interp import SEARCH_ANIMATION, TRAVERSAL_ANIMATION, QuerySession
from viz_core.global_ctrl import GlobalController

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Welcome to BST Prolog Visualizer!\n"
    "Type a command or click an example to get started.\n\n"
    "Example: build_tree([50,30,70,20,40,60,80], T)"
)

EXAMPLE_QUERIES = (
    "build_tree([50,30,70,20,40,60,80], T)",
    "insert(45, T)",
    "delete(30, T)",
    "lookup(60, T)",
    "inorder(T, L)",
    "preorder(T, L)",
    "postorder(T, L)",
    "is_valid_bst(T)",
    "size(T, N)",
    "height(T, H)",
    "find_min(T, Min)",
    "find_max(T, Max)",
    "count_leaves(T, Count)",
    "clear",
)


class BSTController(QWidget):
    """
    Builds the query panel and bridges the session, the view and the output pane.
    """

    def __init__(self, global_ctrl: GlobalController):
        super().__init__()
        self.settings = global_ctrl.settings
        self.session = QuerySession()
        self.view = BSTView(global_ctrl, self.session.model)

        self._build_inputs()
        self.panel = self._create_panel()
        self.output_panel = self._create_output_panel()

        self.view.nodeSelected.connect(self._on_node_selected)
        self._refresh_history()
        self.show_output(WELCOME_TEXT)

    # ---------- UI 构建 ----------
    def _build_inputs(self):
        self.query_edit = QLineEdit()
        self.query_edit.setObjectName("queryInput")
        self.query_edit.setPlaceholderText("?- build_tree([50,30,70], T).")
        self.query_edit.returnPressed.connect(self.execute_query)

        self.output_box = QTextEdit()
        self.output_box.setObjectName("messageBox")
        self.output_box.setReadOnly(True)

        self.history_list = QListWidget()
        self.history_list.setObjectName("commandHistory")
        self.history_list.itemClicked.connect(self._on_history_clicked)

    def _create_panel(self):
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)

        query_group = QGroupBox("Query")
        query_group.setStyleSheet("QGroupBox { color: white; }")
        query_layout = QHBoxLayout(query_group)
        query_layout.setContentsMargins(12, 8, 12, 12)
        query_layout.setSpacing(6)
        run_btn = QPushButton("Execute")
        run_btn.clicked.connect(self.execute_query)
        query_layout.addWidget(self.query_edit, 1)
        query_layout.addWidget(run_btn)
        layout.addWidget(query_group)

        examples_group = QGroupBox("Examples")
        examples_group.setStyleSheet("QGroupBox { color: white; }")
        grid = QGridLayout(examples_group)
        grid.setContentsMargins(12, 8, 12, 12)
        grid.setHorizontalSpacing(6)
        grid.setVerticalSpacing(6)
        columns = 4
        for idx, query in enumerate(EXAMPLE_QUERIES):
            btn = QPushButton(query)
            btn.clicked.connect(lambda _checked=False, q=query: self.set_query(q))
            grid.addWidget(btn, idx // columns, idx % columns)
        layout.addWidget(examples_group)

        self.run_btn = run_btn
        return container

    def _create_output_panel(self):
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        output_group = QGroupBox("Output")
        output_group.setStyleSheet("QGroupBox { color: white; }")
        output_layout = QVBoxLayout(output_group)
        output_layout.addWidget(self.output_box)
        layout.addWidget(output_group, 3)

        history_group = QGroupBox("History")
        history_group.setStyleSheet("QGroupBox { color: white; }")
        history_layout = QVBoxLayout(history_group)
        history_layout.addWidget(self.history_list)
        layout.addWidget(history_group, 1)
        return container

    def build_panel(self):
        return self.panel

    # ---------- 生命周期 ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)
        graphics_view.sceneClicked.connect(self.view.select_at)
        graphics_view.resized.connect(self.view.render)
        self.view.render()

    def on_deactivate(self):
        self.view.stop_all_animations()

    # ---------- 操作回调 ----------

    def set_query(self, query: str):
        self.query_edit.setText(query)
        self.query_edit.setFocus()

    def take_keystroke(self, text: str) -> bool:
        """Move focus to the query input and type ``text`` there unless it already has focus."""
        if self.query_edit.hasFocus():
            return False
        self.query_edit.setFocus()
        self.query_edit.insert(text)
        return True

    def execute_query(self):
        query = self.query_edit.text().strip()
        self.view.stop_all_animations()

        try:
            result = self.session.run(query)
        except Exception as exc:
            logger.exception("Query %r raised", query)
            self.show_output(f"?- {query}\nError: {exc}")
            self.query_edit.clear()
            return

        self._refresh_history()
        if not query:
            self.show_output(result.output)
            return

        self.show_output(f"?- {query}\n{result.output}")
        if result.update_tree:
            self.view.render()
            if result.animation == SEARCH_ANIMATION:
                self.view.animate_search(result.highlight, result.found)
            elif result.animation == TRAVERSAL_ANIMATION:
                self.view.animate_traversal(result.highlight)
        self.query_edit.clear()

    def show_output(self, message: str):
        self.output_box.setHtml(format_output_html(message))
        bar = self.output_box.verticalScrollBar()
        bar.setValue(bar.maximum())

    def _on_history_clicked(self, item: QListWidgetItem):
        query = item.data(Qt.UserRole)
        if query:
            self.set_query(query)

    def _on_node_selected(self, value):
        self.show_output(f"Selected node: {value}")

    # ---------- 状态管理 ----------

    def _refresh_history(self):
        self.history_list.clear()
        entries = self.session.history.recent(self.settings.history_display)
        if not entries:
            placeholder = QListWidgetItem("No command history yet...")
            placeholder.setFlags(Qt.NoItemFlags)
            self.history_list.addItem(placeholder)
            return
        for query in entries:
            item = QListWidgetItem(f"?- {query}")
            item.setData(Qt.UserRole, query)
            self.history_list.addItem(item)
