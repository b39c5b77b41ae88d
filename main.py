"""
Main entry point for the PRG to SVG viewer.
Without an output file, starts the Qt application; with --svg, renders headless.
"""

import argparse
import logging
import sys
from config.render_config import ConfigManager
from prg_processor import PRGProcessor
from utils.errors import ConfigError

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Render PRG motion programs as SVG.")
    parser.add_argument("input", nargs="?", help="PRG program file")
    parser.add_argument("--svg", metavar="OUT", help="Write SVG to OUT instead of opening the GUI")
    parser.add_argument("--preset", default="screen", choices=ConfigManager.preset_names())
    parser.add_argument("--config", help="JSON render configuration file")
    parser.add_argument("--width", type=float)
    parser.add_argument("--height", type=float)
    parser.add_argument("--line-thickness", type=float)
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def resolve_config(args):
    """Build the render configuration from preset, file and overrides."""
    if args.config:
        config = ConfigManager.load_config(args.config)
    else:
        config = ConfigManager.get_config(args.preset)

    for attr in ("width", "height", "line_thickness"):
        value = getattr(args, attr)
        if value is not None:
            setattr(config, attr, value)
    config.validate()
    return config


def render_file(input_path, output_path, config) -> int:
    """Render a PRG file to an SVG file. Returns a process exit code."""
    with open(input_path, 'r', encoding='utf-8') as f:
        prg_text = f.read()

    processor = PRGProcessor()
    processor.process_program(prg_text)
    for error in processor.get_all_errors():
        logger.warning("%s", error)
    processor.save_svg(output_path, config)
    return 0


def run_gui(config, input_path=None) -> int:
    """Initializes and runs the PySide6 application."""
    from PySide6.QtWidgets import QApplication
    from gui.main_window import MainWindow

    app = QApplication(sys.argv)
    window = MainWindow(config)
    if input_path:
        with open(input_path, 'r', encoding='utf-8') as f:
            window.set_program_text(f.read())
    window.show()
    return app.exec()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_config(args)
    except ConfigError as e:
        parser.error(str(e))

    if args.svg:
        if not args.input:
            parser.error("an input PRG file is required with --svg")
        return render_file(args.input, args.svg, config)

    return run_gui(config, args.input)


if __name__ == '__main__':
    sys.exit(main())
