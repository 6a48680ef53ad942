"""Command-line interface."""
import argparse
import logging
import sys
from typing import Optional, Sequence

from lightcycle.config import DEFAULT_PATH_NAME
from lightcycle.logging_config import setup_logging
from lightcycle.main import DEMO_PATH_NAME, build_orchestrator, load_registry, run_headless
from lightcycle.model.projections import RenderTarget
from lightcycle.utils import format_pi_fraction

logger = logging.getLogger("lightcycle")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lightcycle", description="Animate cyclic light-direction paths.")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="list available paths")
    p_list.add_argument("--data", default=None, help="light-angle JSON file")
    p_list.add_argument("--angles", action="store_true", help="print keyframe angles as multiples of pi")

    for name, help_text in (("run", "run the headless animation loop"), ("preview", "plot full-cycle paths")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--data", default=None, help="light-angle JSON file")
        p.add_argument("--path", default=DEFAULT_PATH_NAME, help=f"path name, or '{DEMO_PATH_NAME}'")
        p.add_argument("--overlay", action="append", default=[], help="additional path shown alongside")
        p.add_argument("--target", choices=[t.value for t in RenderTarget], default=RenderTarget.SPHERE.value)

    p_run = sub.choices["run"]
    p_run.add_argument("--frames", type=int, default=60)
    p_run.add_argument("--fps", type=float, default=30.0)

    sub.choices["preview"].add_argument("--output", default=None, help="save to this image instead of showing")
    return parser


def _cmd_list(args: argparse.Namespace) -> None:
    registry = load_registry(args.data)
    for entry in registry:
        print(f"{entry.name:24s} {len(entry.segments)} segment(s)  {entry.label}")
        if args.angles:
            for seg in entry.segments:
                for kf in seg.timeline.keyframes:
                    vertical, horizontal = kf.direction.to_angles()
                    print(
                        f"    [{seg.id}] {kf.time:6.2f} h  "
                        f"x: {format_pi_fraction(vertical)}  y: {format_pi_fraction(horizontal)}"
                    )


def _cmd_animate(args: argparse.Namespace) -> None:
    registry = None if args.path == DEMO_PATH_NAME else load_registry(args.data)
    orchestrator = build_orchestrator(registry, args.path, args.overlay, RenderTarget(args.target))

    if args.command == "run":
        run_headless(orchestrator, frames=args.frames, fps=args.fps)
        return

    # matplotlib is only needed for previews
    from lightcycle.view.preview import render_preview, show_or_save

    fig = render_preview(orchestrator, title=args.path)
    show_or_save(fig, args.output)
    orchestrator.stop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        if args.command == "list":
            _cmd_list(args)
        else:
            _cmd_animate(args)
    except (FileNotFoundError, KeyError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
