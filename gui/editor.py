"""
PRG editor widget with syntax highlighting, line numbers and dark mode.
"""
import re
from PySide6.QtWidgets import QPlainTextEdit, QWidget, QTextEdit
from PySide6.QtGui import (QColor, QTextFormat, QPainter, QFont, QSyntaxHighlighter,
                           QTextCharFormat, QPalette)
from PySide6.QtCore import Qt, QRect, QSize


def _char_format(color, bold=False, italic=False):
    fmt = QTextCharFormat()
    fmt.setForeground(QColor(color))
    if bold:
        fmt.setFontWeight(QFont.Weight.Bold)
    fmt.setFontItalic(italic)
    return fmt


class PRGHighlighter(QSyntaxHighlighter):
    """PRG syntax highlighter with dark mode colors."""

    KEYWORD_PATTERN = re.compile(r'^\s*(MSEG|ENDS|LINE|ARC2|PTP)\S*', re.IGNORECASE)
    CONTROL_PATTERN = re.compile(r'^\s*(IF|END(?!S)|STOP|TILL|WAIT)\w*', re.IGNORECASE)
    SHUTTER_PATTERN = re.compile(r'SHUTTER(OPEN|CLOSE)', re.IGNORECASE)
    AXES_PATTERN = re.compile(r'\(\s*X\s*,\s*Y\s*\)', re.IGNORECASE)
    NUMBER_PATTERN = re.compile(r'(?<![\w.])[+-]?(?:\d+\.?\d*|\.\d+)')

    def __init__(self, document):
        super().__init__(document)

        self.keyword_formats = {
            'PTP': _char_format('#ff6b6b', bold=True),   # Red for rapid moves
            'LINE': _char_format('#51cf66', bold=True),  # Green for lines
            'ARC2': _char_format('#ffd43b', bold=True),  # Yellow for arcs
            'MSEG': _char_format('#74c0fc', bold=True),  # Light blue for segments
            'ENDS': _char_format('#74c0fc', bold=True),
        }
        self.control_format = _char_format('#ff8cc8')
        self.shutter_open_format = _char_format('#20c997', bold=True)
        self.shutter_close_format = _char_format('#ffa500', bold=True)
        self.axes_format = _char_format('#cc99ff')
        self.number_format = _char_format('#ffff99')
        self.comment_format = _char_format('#6c757d', italic=True)
        self.header_format = _char_format('#adb5bd', bold=True)

    def highlightBlock(self, text):
        """Apply syntax highlighting to a block of text."""
        stripped = text.lstrip()
        start = len(text) - len(stripped)

        if stripped.startswith('!'):
            self.setFormat(start, len(stripped), self.comment_format)
            return
        if stripped.startswith('#'):
            self.setFormat(start, len(stripped), self.header_format)
            return

        control = self.CONTROL_PATTERN.match(text)
        if control:
            self.setFormat(control.start(1), control.end() - control.start(1),
                           self.control_format)

        for match in self.SHUTTER_PATTERN.finditer(text):
            fmt = (self.shutter_open_format if match.group(1).upper() == 'OPEN'
                   else self.shutter_close_format)
            self.setFormat(match.start(), match.end() - match.start(), fmt)

        keyword = self.KEYWORD_PATTERN.match(text)
        if keyword:
            fmt = self.keyword_formats[keyword.group(1).upper()]
            self.setFormat(keyword.start(1), keyword.end() - keyword.start(1), fmt)

        for match in self.AXES_PATTERN.finditer(text):
            self.setFormat(match.start(), match.end() - match.start(), self.axes_format)

        for match in self.NUMBER_PATTERN.finditer(text):
            self.setFormat(match.start(), match.end() - match.start(), self.number_format)


class LineNumberArea(QWidget):
    """Line number area widget for the editor."""

    def __init__(self, editor):
        super().__init__(editor)
        self.editor = editor

    def sizeHint(self):
        return QSize(self.editor.lineNumberAreaWidth(), 0)

    def paintEvent(self, event):
        self.editor.lineNumberAreaPaintEvent(event)


class Editor(QPlainTextEdit):
    """PRG editor with syntax highlighting and warning line markers."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self.setup_dark_mode()
        self.lineNumberArea = LineNumberArea(self)
        self.warning_lines = set()
        self.setup_editor()
        self.highlighter = PRGHighlighter(self.document())

        self.blockCountChanged.connect(self.updateLineNumberAreaWidth)
        self.updateRequest.connect(self.updateLineNumberArea)
        self.cursorPositionChanged.connect(self.update_extra_selections)

    def setup_dark_mode(self):
        """Configure dark mode appearance."""
        palette = self.palette()
        palette.setColor(QPalette.Base, QColor('#2b2b2b'))
        palette.setColor(QPalette.Text, QColor('#f8f8f2'))
        palette.setColor(QPalette.Highlight, QColor('#44475a'))
        palette.setColor(QPalette.HighlightedText, QColor('#f8f8f2'))
        self.setPalette(palette)

    def setup_editor(self):
        """Configure the editor appearance and behavior."""
        self.setLineWrapMode(QPlainTextEdit.NoWrap)

        font = QFont("Consolas", 11)
        if not font.exactMatch():
            font = QFont("Courier New", 11)
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setFixedPitch(True)
        self.setFont(font)

        tab_width = self.fontMetrics().horizontalAdvance(' ') * 4
        self.setTabStopDistance(tab_width)
        self.updateLineNumberAreaWidth(0)

    def highlight_warning_lines(self, lines):
        """Mark lines that were skipped or produced degenerate geometry."""
        self.warning_lines = set(lines) if lines else set()
        self.update_extra_selections()
        self.lineNumberArea.update()

    def clear_warning_highlights(self):
        self.highlight_warning_lines([])

    def update_extra_selections(self):
        """Update current line and warning line highlighting."""
        selections = []

        cursor = self.textCursor()
        if not self.isReadOnly() and not cursor.hasSelection():
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor('#44475a'))
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = cursor
            selection.cursor.clearSelection()
            selections.append(selection)

        for line_num in self.warning_lines:
            block = self.document().findBlockByNumber(line_num - 1)
            if line_num > 0 and block.isValid():
                selection = QTextEdit.ExtraSelection()
                selection.format.setBackground(QColor('#5c4a00'))  # Dark amber
                selection.format.setProperty(QTextFormat.FullWidthSelection, True)
                selection.cursor = self.textCursor()
                selection.cursor.setPosition(block.position())
                selection.cursor.clearSelection()
                selections.append(selection)

        self.setExtraSelections(selections)

    # Line number area methods
    def lineNumberAreaWidth(self):
        """Calculate the width needed for line numbers."""
        digits = len(str(max(1, self.blockCount())))
        return 3 + self.fontMetrics().horizontalAdvance('9') * digits

    def updateLineNumberAreaWidth(self, _):
        self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

    def updateLineNumberArea(self, rect, dy):
        """Update the line number area when scrolling."""
        if dy:
            self.lineNumberArea.scroll(0, dy)
        else:
            self.lineNumberArea.update(0, rect.y(), self.lineNumberArea.width(), rect.height())

        if rect.contains(self.viewport().rect()):
            self.updateLineNumberAreaWidth(0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.lineNumberArea.setGeometry(QRect(cr.left(), cr.top(), self.lineNumberAreaWidth(), cr.height()))

    def lineNumberAreaPaintEvent(self, event):
        """Paint the line number area."""
        painter = QPainter(self.lineNumberArea)
        painter.fillRect(event.rect(), QColor('#383838'))

        block = self.firstVisibleBlock()
        blockNumber = block.blockNumber()
        top = self.blockBoundingGeometry(block).translated(self.contentOffset()).top()
        bottom = top + self.blockBoundingRect(block).height()

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                if (blockNumber + 1) in self.warning_lines:
                    painter.setPen(QColor('#ffd43b'))
                else:
                    painter.setPen(QColor('#6c757d'))

                painter.drawText(0, int(top), self.lineNumberArea.width() - 3,
                                 self.fontMetrics().height(), Qt.AlignRight, str(blockNumber + 1))

            block = block.next()
            top = bottom
            bottom = top + self.blockBoundingRect(block).height()
            blockNumber += 1

