import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from config_io import cfg_path_for, load_cfg
from logging_config import setup_logging
from main_window import MainWindow


def main():
    app = QApplication(sys.argv)

    start_path = None
    level = 'INFO'
    if len(sys.argv) > 1:
        start_path = Path(sys.argv[1])
        if start_path.exists():
            start_path = start_path.resolve()
            level = load_cfg(cfg_path_for(start_path)).get('log_level', 'INFO')
        else:
            print(f"Warning: File not found: {start_path}")
            start_path = None

    setup_logging(level)
    win = MainWindow(start_path)
    win.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
