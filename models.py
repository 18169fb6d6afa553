import logging

from PyQt6.QtCore import Qt, QAbstractTableModel, QModelIndex

from errors import EquationError, MalformedNumeral
from numerals import parse_numeral
from parsing import format_number
from units import SI_UNITS

logger = logging.getLogger('swequations.' + __name__)

COLUMNS = ['Variable', 'Value', 'SI Value', 'Comment']


class EquationModel(QAbstractTableModel):
    def __init__(self, store, cfg, parent=None, readonly=False):
        super().__init__(parent)
        self.store = store
        self.cfg = cfg
        self.readonly = readonly
        self.reload()

    def reload(self):
        self.beginResetModel()
        self.equations = [{'name': n, 'value': v} for n, v in self.store.get_all().items()]
        self.endResetModel()

    def names(self):
        return [e['name'] for e in self.equations]

    def si_text(self, name):
        try:
            eq = self.store.get_equation(name)
        except EquationError as e:
            logger.debug('No SI value for %s: %s', name, e)
            return ''
        if eq is None:
            return ''
        return f'{format_number(eq.value_si)} {SI_UNITS[eq.category]}'

    def rowCount(self, parent=QModelIndex()):
        return len(self.equations)

    def columnCount(self, parent=QModelIndex()):
        return len(COLUMNS)

    def headerData(self, section, orientation, role=Qt.ItemDataRole.DisplayRole):
        if role == Qt.ItemDataRole.DisplayRole and orientation == Qt.Orientation.Horizontal:
            return COLUMNS[section]
        return None

    def data(self, index, role=Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        item = self.equations[index.row()]
        col = index.column()
        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.EditRole):
            if col == 0:
                return item['name']
            elif col == 1:
                return item['value']
            elif col == 2:
                return self.si_text(item['name'])
            elif col == 3:
                return self.cfg.get('comments', {}).get(item['name'], '')
        return None

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        flags = Qt.ItemFlag.ItemIsSelectable | Qt.ItemFlag.ItemIsEnabled
        if index.column() == 3 or (index.column() == 1 and not self.readonly):
            flags |= Qt.ItemFlag.ItemIsEditable
        return flags

    def setData(self, index, value, role=Qt.ItemDataRole.EditRole):
        if role != Qt.ItemDataRole.EditRole or not index.isValid():
            return False
        row = index.row()
        item = self.equations[row]
        col = index.column()
        if col == 1:
            if self.readonly:
                return False
            try:
                number = parse_numeral(str(value).strip())
            except MalformedNumeral:
                logger.debug('Rejected value %r for %s', value, item['name'])
                return False
            try:
                changed = self.store.set_one(item['name'], number)
            except EquationError as e:
                logger.warning('Cannot set %s: %s', item['name'], e)
                return False
            except OSError:
                logger.exception('Failed to write %s', item['name'])
                return False
            if not changed:
                return False
            # the rewrite can touch the name too, so re-read every slot
            self.reload()
            return True
        elif col == 3:
            self.cfg.setdefault('comments', {})[item['name']] = str(value)
            self.dataChanged.emit(index, index)
            return True
        return False
