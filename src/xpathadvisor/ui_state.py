from __future__ import annotations

from dataclasses import asdict, dataclass
import json
from pathlib import Path
import tempfile

CONFIG_DIR = Path.home() / ".xpathadvisor"
CONFIG_PATH = CONFIG_DIR / "config.json"
DEFAULT_EXPORT_DIR = str(Path.home() / "Downloads")


@dataclass(slots=True)
class WorkbenchState:
    export_dir: str = DEFAULT_EXPORT_DIR
    last_markup: str = ""


@dataclass(frozen=True, slots=True)
class WorkbenchButtonState:
    can_generate: bool
    can_export: bool
    can_clear_selection: bool


def load_workbench_state(config_path: Path | None = None) -> WorkbenchState:
    path = config_path or CONFIG_PATH
    if not path.exists() or not path.is_file():
        return WorkbenchState()

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, TypeError):
        return WorkbenchState()

    if not isinstance(payload, dict):
        return WorkbenchState()

    return WorkbenchState(
        export_dir=str(payload.get("export_dir", DEFAULT_EXPORT_DIR) or DEFAULT_EXPORT_DIR),
        last_markup=str(payload.get("last_markup", "") or ""),
    )


def save_workbench_state(state: WorkbenchState, config_path: Path | None = None) -> tuple[bool, str | None]:
    path = config_path or CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, f"Could not create config folder: {exc}"

    payload = json.dumps(asdict(state), ensure_ascii=True, indent=2, sort_keys=True)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
            handle.flush()
            temp_path = Path(handle.name)

        temp_path.replace(path)
    except OSError as exc:
        if temp_path and temp_path.exists():
            temp_path.unlink(missing_ok=True)
        return False, f"Could not write workbench state: {exc}"

    return True, None


def compute_workbench_button_state(
    *,
    has_markup: bool,
    has_results: bool,
    has_selection: bool,
) -> WorkbenchButtonState:
    return WorkbenchButtonState(
        can_generate=has_markup,
        can_export=has_results,
        can_clear_selection=has_results and has_selection,
    )
