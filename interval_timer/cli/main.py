"""Terminal CLI entrypoint for the interval timer."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from interval_timer.core.engine import PhaseEngine
from interval_timer.ui.feedback import TerminalFeedback, status_line
from interval_timer.workout.config_store import load_config, save_config
from interval_timer.workout.model import ConfigError, WorkoutConfig
from interval_timer.workout.presets import get_preset, list_presets
from interval_timer.workout.runner import TimerRunner

_OVERRIDES: tuple[tuple[str, str], ...] = (
    ("prep", "prep_seconds"),
    ("work", "work_seconds"),
    ("rest", "rest_seconds"),
    ("rounds", "rounds"),
    ("cooldown", "cooldown_seconds"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interval workout timer")
    parser.add_argument("--preset", default=None, help="Start from a built-in preset")
    parser.add_argument("--list-presets", action="store_true", help="List built-in presets")
    parser.add_argument("--prep", type=int, default=None, help="Preparation seconds")
    parser.add_argument("--work", type=int, default=None, help="Work seconds per round")
    parser.add_argument("--rest", type=int, default=None, help="Rest seconds between rounds")
    parser.add_argument("--rounds", type=int, default=None, help="Number of rounds")
    parser.add_argument(
        "--cooldown",
        type=int,
        default=None,
        help="Cooldown seconds after the last round (0 to skip)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default ~/.interval-timer/config.json)",
    )
    parser.add_argument("--show", action="store_true", help="Print the resolved config")
    parser.add_argument("--save", action="store_true", help="Persist the resolved config")
    parser.add_argument("--run", action="store_true", help="Run the workout in the terminal")
    parser.add_argument("--no-bell", action="store_true", help="Disable the terminal bell")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI)",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8089, help="Port for --ui-web")
    parser.add_argument("--tick-interval", type=float, default=1.0, help=argparse.SUPPRESS)
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def resolve_config(args: argparse.Namespace) -> WorkoutConfig:
    if args.preset:
        try:
            config = get_preset(args.preset).config
        except KeyError as exc:
            raise ConfigError(f"Unknown preset '{args.preset}'") from exc
    else:
        config = load_config(args.config)

    changes = {
        field: getattr(args, flag)
        for flag, field in _OVERRIDES
        if getattr(args, flag) is not None
    }
    if changes:
        config = config.with_changes(**changes)
    return config


def print_config(config: WorkoutConfig) -> None:
    print(f"Prep:     {config.prep_display}")
    print(f"Work:     {config.work_display}")
    print(f"Rest:     {config.rest_display}")
    print(f"Rounds:   {config.rounds_display}")
    print(f"Cooldown: {config.cooldown_display}")
    print(f"Total:    {config.total_duration_display}")


def print_presets() -> None:
    for preset in list_presets():
        print(
            f"{preset.key:<16} {preset.name:<16} "
            f"{preset.config.total_duration_display:>8}  {preset.description}"
        )


async def run_terminal(
    config: WorkoutConfig,
    *,
    bell: bool = True,
    tick_interval: float = 1.0,
) -> int:
    engine = PhaseEngine(config)
    feedback = TerminalFeedback(bell=bell)
    feedback.attach(engine)
    runner = TimerRunner(
        engine,
        tick_interval_sec=tick_interval,
        on_update=lambda _snapshot: print(status_line(engine)),
    )

    await runner.start()
    try:
        await runner.join()
    finally:
        await runner.stop()
    return 0 if engine.is_finished else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_presets:
        print_presets()
        return 0

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}")
        return 2

    if args.save:
        saved = save_config(config, args.config)
        print(f"Saved configuration to {saved}")
    if args.show:
        print_config(config)

    if args.ui_web:
        from interval_timer.ui.web_app import run_web_ui

        return run_web_ui(
            config=config,
            config_path=args.config,
            host=args.web_host,
            port=args.web_port,
        )

    if args.run:
        try:
            return asyncio.run(
                run_terminal(
                    config,
                    bell=not args.no_bell,
                    tick_interval=max(0.001, args.tick_interval),
                )
            )
        except KeyboardInterrupt:
            print("\nStopped")
            return 130

    if not (args.save or args.show):
        parser.print_help()
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
