import logging
import tkinter as tk

from core.config.config_service import get_config_service
from core.logging.logging_setup import configure_logging
import incomingdocs

logger = logging.getLogger(__name__)


class MainWindow(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("ERP Console")
        self.geometry("1280x780")

        view = incomingdocs.create_feature_view(self)
        view.pack(fill="both", expand=True)


def main():
    cfg = get_config_service()
    configure_logging(cfg.logging)
    logger.info("backend %s", cfg.backend.base_url)
    app = MainWindow()
    app.mainloop()


if __name__ == "__main__":
    main()
