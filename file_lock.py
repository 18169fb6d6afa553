import logging
import os
import sys
from pathlib import Path

from parsing import join_equation_text, split_equation_text

logger = logging.getLogger('swequations.' + __name__)


def is_bundled():
    """Check if the application is running in a bundled environment"""
    return hasattr(sys, '_MEIPASS')


class FileHandleLock:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.file = None
        self.locked = False
        self.readonly = False
        self._lock_len = 0

    def acquire(self):
        try:
            self.file = open(self.path, 'r+', encoding='utf-8')
        except PermissionError:
            try:
                self.file = open(self.path, 'r', encoding='utf-8')
            except OSError:
                logger.exception('Could not open %s', self.path)
                self.file = None
                return False
            self.readonly = True
            return True
        except OSError:
            logger.exception('Could not open %s', self.path)
            self.file = None
            return False

        try:
            if os.name == 'nt':
                import msvcrt
                self._lock_len = self._size()
                msvcrt.locking(self.file.fileno(), msvcrt.LK_NBLCK, self._lock_len)
            else:
                import fcntl
                fcntl.flock(self.file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            # Another program holds the file; open it anyway but refuse writes
            # unless running bundled, where locking is unreliable.
            logger.warning('Could not lock %s', self.path)
            self.locked = False
            self.readonly = not is_bundled()
            return True
        self.locked = True
        self.readonly = False
        return True

    def _size(self):
        self.file.seek(0, os.SEEK_END)
        size = self.file.tell()
        self.file.seek(0)
        return max(1, size)

    def release(self):
        if self.file is None:
            return
        try:
            if self.locked:
                if os.name == 'nt':
                    import msvcrt
                    if self._lock_len <= 0:
                        self._lock_len = self._size()
                    self.file.seek(0)
                    msvcrt.locking(self.file.fileno(), msvcrt.LK_UNLCK, self._lock_len)
                else:
                    import fcntl
                    fcntl.flock(self.file.fileno(), fcntl.LOCK_UN)
        except OSError:
            logger.warning('Could not unlock %s', self.path)
        finally:
            self.file.close()
            self.file = None
            self.locked = False
            self._lock_len = 0

    def read_all(self) -> str:
        if not self.file:
            return ''
        self.file.seek(0)
        return self.file.read()

    def write_all(self, text: str):
        if not self.file or self.readonly:
            raise IOError("File is read-only or not open.")
        self.file.seek(0)
        self.file.truncate(0)
        self.file.write(text)
        self.file.flush()
        os.fsync(self.file.fileno())


class EquationFileSlots:
    """Slot collection backed by an exported SolidWorks equations file.

    Each non-blank line is one slot. ``set_text`` rewrites the whole file
    through the held lock.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.fhlock = FileHandleLock(self.path)
        if not self.fhlock.acquire():
            raise IOError(f'Failed to open file: {self.path}')
        self.slots = split_equation_text(self.fhlock.read_all())
        logger.info('Loaded %d equations from %s', len(self.slots), self.path)

    @property
    def readonly(self):
        return self.fhlock.readonly

    def count(self):
        return len(self.slots)

    def get_text(self, index):
        return self.slots[index]

    def set_text(self, index, text):
        if self.readonly:
            raise IOError(f'{self.path} is open read-only.')
        slots = list(self.slots)
        slots[index] = text
        self.fhlock.write_all(join_equation_text(slots))
        self.slots = slots

    def close(self):
        self.fhlock.release()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
