#!/usr/bin/env python3
"""
Mapa de Recursos - Main Entry Point

Run with: python -m resource_map (or the resource-map console script)
"""

from tkinter import messagebox

from .logging_utils import setup_logging, get_log_file_path, log_info, log_exception


def main():
    """Main entry point: load settings, wire the store and exporter, run the wizard."""
    from .config import APP_NAME, APP_VERSION, load_settings
    from .core.exporter import Exporter
    from .core.persistence import LocalStorage, PersistenceManager
    from .processing.card_renderer import PillowCardRenderer
    from .ui.full_wizard import run_wizard

    # Initialize logging first thing
    setup_logging()

    print(f"\n{'=' * 60}")
    print(f"  {APP_NAME} v{APP_VERSION}")
    print(f"{'=' * 60}\n")

    settings = load_settings()
    log_info(f"CONFIG: Store at {settings.storage_path}")
    log_info(f"CONFIG: Downloads to {settings.downloads_dir} (scale {settings.export_scale})")

    persistence = PersistenceManager(LocalStorage(settings.storage_path))
    renderer = PillowCardRenderer()
    exporter = Exporter(renderer, settings.downloads_dir, settings.export_scale)

    try:
        session = run_wizard(persistence, exporter, preview_renderer=renderer)
        log_info(f"Wizard closed on step {session.step.name}")
    except Exception as e:
        log_exception(f"Error in resource map wizard: {e}")
        messagebox.showerror(
            "Error",
            f"Ocurrió un error:\n{e}\n\nRegistro: {get_log_file_path()}",
        )
        print(f"[ERROR] {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
