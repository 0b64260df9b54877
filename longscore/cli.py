from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.table import Table

from .audio import SAMPLE_RATE, write_wav
from .blend import apply_smoothing
from .dispatch import DispatchAdapter
from .extended import plan_segments
from .logging_utils import configure_logging, debug_enabled, log_exception
from .plan import MAX_SEGMENT_SECONDS, GenerationPlan
from .spinner import ProgressBar, render_error
from .tone import ToneGenerator

_LOGGER = logging.getLogger("longscore.cli")
_CONSOLE = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="longscore")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a prompt to a WAV file.")
    render.add_argument("prompt", type=str)
    render.add_argument("--seconds", type=int, default=60)
    render.add_argument("--output", type=str, default="longscore.wav")
    render.add_argument("--sample-rate", type=int, default=SAMPLE_RATE)
    render.add_argument(
        "--smoothing-ms",
        type=float,
        default=0.0,
        help="Fade both ends of the result over this many milliseconds.",
    )

    plan = sub.add_parser("plan", help="Show how a request would be segmented.")
    plan.add_argument("--seconds", type=int, default=240)
    plan.add_argument("--prompt", type=str, default="ambient piano")
    return parser


def _run_render(args: argparse.Namespace) -> int:
    sample_rate = args.sample_rate
    adapter = DispatchAdapter(ToneGenerator(sample_rate), GenerationPlan.from_env(), sample_rate)

    with ProgressBar(f"Rendering {args.seconds}s") as bar:

        def _on_progress(elapsed: float, total: float) -> bool:
            bar.update(elapsed / total if total > 0 else 1.0)
            return False

        audio = adapter.process(args.prompt, args.seconds, _on_progress)

    if args.smoothing_ms > 0:
        audio = apply_smoothing(audio, int(sample_rate * args.smoothing_ms / 1000.0))

    path = write_wav(args.output, audio, sample_rate=sample_rate)
    _CONSOLE.print(f"Wrote {audio.size} samples to {path} (sr={sample_rate})")
    return 0


def _run_plan(args: argparse.Namespace) -> int:
    if args.seconds <= MAX_SEGMENT_SECONDS:
        _CONSOLE.print(f"{args.seconds}s fits in a single generation call.")
        return 0

    plan = GenerationPlan.from_env().with_target(args.seconds)
    table = Table(
        title=(
            f"{plan.segment_count()} segments of {plan.segment_duration}s, "
            f"{plan.overlap_duration}s overlap, {plan.crossfade_duration:g}s crossfade"
        )
    )
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Prompt")
    for request in plan_segments(plan, args.prompt):
        table.add_row(
            str(request.index + 1),
            f"{min(request.start, plan.target_duration):g}s",
            f"{min(request.end, plan.target_duration):g}s",
            request.prompt,
        )
    _CONSOLE.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging(log_file=True)
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        if args.command == "render":
            return _run_render(args)
        if args.command == "plan":
            return _run_plan(args)

        parser.print_help()
        return 1
    except Exception as exc:
        _LOGGER.warning("longscore CLI failed: %s", exc, exc_info=debug_enabled())
        log_exception("longscore CLI", exc)
        render_error("longscore CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
