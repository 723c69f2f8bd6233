"""NiceGUI web UI for the interval timer."""

from __future__ import annotations

from pathlib import Path

from nicegui import ui

from interval_timer.core.engine import PhaseEngine
from interval_timer.core.state import Phase, RunState
from interval_timer.workout.config_store import save_config
from interval_timer.workout.model import ConfigError, WorkoutConfig
from interval_timer.workout.presets import get_preset, list_presets
from interval_timer.workout.runner import TimerRunner

PHASE_COLORS: dict[Phase, str] = {
    Phase.PREP: "#ffcc00",
    Phase.WORK: "#00d95a",
    Phase.REST: "#f24040",
    Phase.COOLDOWN: "#6699ff",
    Phase.DONE: "#ff9900",
}

_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("prep_seconds", "Prep (s)", 0),
    ("work_seconds", "Work (s)", 0),
    ("rest_seconds", "Rest (s)", 0),
    ("rounds", "Rounds", 1),
    ("cooldown_seconds", "Cooldown (s)", 0),
)


def _toggle_label(state: RunState) -> str:
    if state is RunState.RUNNING:
        return "Pause"
    if state is RunState.PAUSED:
        return "Resume"
    if state is RunState.FINISHED:
        return "Restart"
    return "Start"


def run_web_ui(
    *,
    config: WorkoutConfig,
    config_path: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 8089,
) -> int:
    engine = PhaseEngine(config)
    runner = TimerRunner(engine)

    ui.add_head_html(
        """
        <style>
          body { background: #0b1220; color: #e5e7eb; font-family: Arial, sans-serif; }
          .it-clock { font-size: 7rem; font-weight: bold; line-height: 1; }
          .it-phase { font-size: 2rem; font-weight: bold; letter-spacing: .08em; }
        </style>
        """
    )

    with ui.column().classes("w-full items-center gap-4 p-6"):
        phase_label = ui.label("").classes("it-phase")
        clock_label = ui.label("00:00").classes("it-clock")
        round_label = ui.label("").classes("text-lg")
        phase_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-2/3")
        total_label = ui.label("").classes("text-sm")
        with ui.row().classes("gap-2"):
            toggle_btn = ui.button("Start")
            reset_btn = ui.button("Reset").props("outline color=white")

        with ui.card().classes("w-full max-w-3xl"):
            ui.label("Configuration").classes("text-base font-medium")
            preset_select = ui.select(
                {preset.key: preset.name for preset in list_presets()},
                label="Preset",
                value=None,
            ).classes("w-64")
            inputs: dict[str, ui.number] = {}
            with ui.row().classes("w-full gap-2"):
                for name, label, minimum in _FIELDS:
                    inputs[name] = ui.number(
                        label,
                        value=getattr(config, name),
                        min=minimum,
                        step=1,
                        format="%d",
                    ).classes("w-28")
            save_btn = ui.button("Save as default")

    def fill_inputs(values: WorkoutConfig) -> None:
        for name, _label, _minimum in _FIELDS:
            inputs[name].value = getattr(values, name)

    def refresh_ui() -> None:
        phase_label.text = engine.phase.display_name.upper()
        phase_label.style(f"color: {PHASE_COLORS[engine.phase]}")
        clock_label.text = engine.formatted_time
        round_label.text = engine.round_display
        phase_bar.value = engine.progress
        total_label.text = f"Total: {engine.config.total_duration_display}"
        toggle_btn.text = _toggle_label(engine.run_state)
        editable = engine.run_state in (RunState.IDLE, RunState.FINISHED)
        for element in (*inputs.values(), preset_select, save_btn):
            if editable:
                element.enable()
            else:
                element.disable()

    def apply_config(candidate: WorkoutConfig) -> bool:
        if not engine.update_config(candidate):
            ui.notify("Stop the workout before editing", color="warning")
            return False
        refresh_ui()
        return True

    def on_input_change() -> None:
        try:
            candidate = WorkoutConfig(
                **{name: int(inputs[name].value or 0) for name, _l, _m in _FIELDS}
            )
        except ConfigError as exc:
            ui.notify(str(exc), color="negative")
            return
        apply_config(candidate)

    def on_preset_change() -> None:
        if not preset_select.value:
            return
        preset = get_preset(str(preset_select.value))
        if apply_config(preset.config):
            fill_inputs(preset.config)

    def on_save() -> None:
        saved = save_config(engine.config, config_path)
        ui.notify(f"Saved to {saved}", color="positive")

    async def on_toggle() -> None:
        await runner.toggle()
        refresh_ui()

    async def on_reset() -> None:
        await runner.reset()
        refresh_ui()

    for element in inputs.values():
        element.on_value_change(lambda _: on_input_change())
    preset_select.on_value_change(lambda _: on_preset_change())
    save_btn.on_click(on_save)
    toggle_btn.on_click(on_toggle)
    reset_btn.on_click(on_reset)

    refresh_ui()
    ui.timer(0.25, refresh_ui)
    ui.run(host=host, port=port, reload=False, title="Interval Timer")
    return 0
