from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from PyQt6.QtWidgets import QApplication

from grid_field.field_config import VARIANTS, FieldConfig, load_field_config
from grid_field.field_widget import FieldWidget, create_qt_engine
from grid_field.host_inputs import HostContext
from grid_field.logging_utils import configure_logging

_LOGGER = logging.getLogger("GridField.Launcher")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cartesian grid with annotated circles")
    parser.add_argument("--size", type=int, help="Square surface size in pixels")
    parser.add_argument("--width", type=int, help="Surface width in pixels (overrides --size)")
    parser.add_argument("--height", type=int, help="Surface height in pixels (overrides --size)")
    parser.add_argument("--axis-limit", type=float, help="Symmetric axis limit for both axes")
    parser.add_argument("--axis-limit-x", type=float, help="X axis limit (overrides --axis-limit)")
    parser.add_argument("--axis-limit-y", type=float, help="Y axis limit (overrides --axis-limit)")
    parser.add_argument("--circles", help="Path to a JSON file with circle records")
    parser.add_argument("--variant", choices=VARIANTS, help="Circle source and paint order")
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument("--log-dir", help="Directory for the rotating log file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def read_circle_file(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    circle_path = Path(path).expanduser()
    try:
        return circle_path.read_text(encoding="utf-8")
    except OSError as exc:
        _LOGGER.warning("Failed to read circle data from %s: %s", circle_path, exc)
        return None


def build_host_context(args: argparse.Namespace) -> HostContext:
    values: Dict[str, Any] = {
        "control_size": args.size,
        "control_width": args.width,
        "control_height": args.height,
        "axis_limit": args.axis_limit,
        "axis_limit_x": args.axis_limit_x,
        "axis_limit_y": args.axis_limit_y,
        "circle_json": read_circle_file(args.circles),
    }
    return HostContext.from_values(**values)


def resolve_config(args: argparse.Namespace) -> FieldConfig:
    config = load_field_config(Path(args.config).expanduser() if args.config else None)
    if args.variant:
        config = replace(config, variant=args.variant)
    if args.debug:
        config = replace(config, debug=True)
    return config


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = resolve_config(args)
    configure_logging(config.debug, log_dir=Path(args.log_dir).expanduser() if args.log_dir else None)
    _LOGGER.info("Starting grid field (pid=%s variant=%s)", os.getpid(), config.variant)

    app = QApplication(sys.argv if argv is None else [sys.argv[0], *argv])
    widget = FieldWidget(config)
    widget.setWindowTitle("Grid Field")
    engine = create_qt_engine(config, widget)
    context = build_host_context(args)
    engine.initialize(context, None, None, widget)
    engine.refresh(context)
    widget.show()

    exit_code = app.exec()
    engine.teardown()
    _LOGGER.info("Grid field exiting with code %s", exit_code)
    return int(exit_code)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
