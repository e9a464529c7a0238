# Rev 0.1.0

# buildtrack/main.py  (Rev 0.1.0)
import sys
from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication

from .repositories.db import Database
from .repositories.sqlite_schedule_repository import SQLiteScheduleRepository
from .services.critical_path_provider import AdjacencyCriticalPathProvider
from .services.schedule_service import ScheduleService
from .ui.main_window import GanttWindow
from .utils.config import load_view_settings, save_view_settings
from .utils.logging_setup import setup_logging
from .utils.paths import DB_PATH, ensure_dirs
from .viewmodels.gantt_viewmodel import GanttViewModel


def build_viewmodel(db_path=DB_PATH) -> GanttViewModel:
    db = Database(db_path)
    db.run_migrations()
    repo = SQLiteScheduleRepository(db)
    provider = AdjacencyCriticalPathProvider(repo.list_phases)
    service = ScheduleService(repo, provider)
    return GanttViewModel(repo, service, load_view_settings(), save_settings=save_view_settings)


def main():
    app = QApplication(sys.argv)

    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    QCoreApplication.setOrganizationName("buildtrack")
    QCoreApplication.setApplicationName("buildtrack")

    ensure_dirs()
    logfile = setup_logging("buildtrack")

    # --- DI wiring ---
    vm = build_viewmodel()

    # --- UI ---
    win = GanttWindow(vm, logfile=logfile)
    win.show()
    vm.reload()

    # Keep a strong ref just in case someone stores nothing at module level
    app.setProperty("mainWindow", win)
    app.setFont(QFont("Sans Serif", 10))

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
