"""
JSON-based storage for program settings and the session plan.

Handles reading, writing, and locating the planner's data files.
"""

import json
from pathlib import Path

from ..core.models import ProgramSettings, Session
from .serializers import (
    ValidationError,
    dict_to_session,
    dict_to_settings,
    sessions_to_json,
    settings_to_dict,
)


class PlanStore:
    """
    Manages the planner's data directory.

    Two files live side by side:
    - settings.json: the ProgramSettings record
    - plan.json: the session list, in plan order

    Nothing is written implicitly; callers save after each mutation.
    """

    def __init__(self, plan_dir: str | Path):
        """
        Initialize the plan store.

        Args:
            plan_dir: Directory holding settings.json and plan.json
        """
        self.plan_dir = Path(plan_dir)
        self.settings_path = self.plan_dir / "settings.json"
        self.plan_path = self.plan_dir / "plan.json"

    def exists(self) -> bool:
        """Check if the settings file exists."""
        return self.settings_path.exists()

    def init(self) -> None:
        """
        Create the data directory and an empty plan file if missing.
        """
        self.plan_dir.mkdir(parents=True, exist_ok=True)

        if not self.plan_path.exists():
            self.plan_path.write_text("[]\n")

    def load_settings(self) -> ProgramSettings:
        """
        Load program settings from settings.json.

        Returns:
            ProgramSettings

        Raises:
            FileNotFoundError: If the settings file doesn't exist
            ValidationError: If the file is not valid
        """
        if not self.settings_path.exists():
            raise FileNotFoundError(
                f"Settings not found: {self.settings_path}. Run 'init' first."
            )

        try:
            with open(self.settings_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Error parsing {self.settings_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError(f"Error parsing {self.settings_path}: expected an object")
        return dict_to_settings(data)

    def save_settings(self, settings: ProgramSettings) -> None:
        """
        Save program settings to settings.json.

        Args:
            settings: Settings to save
        """
        self.plan_dir.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, "w") as f:
            json.dump(settings_to_dict(settings), f, indent=2)

    def load_sessions(self) -> list[Session]:
        """
        Load the session list from plan.json.

        Returns:
            Sessions in stored (plan) order; empty if the file is missing

        Raises:
            ValidationError: If the file or an entry is invalid
        """
        if not self.plan_path.exists():
            return []

        try:
            with open(self.plan_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Error parsing {self.plan_path}: {e}") from e

        if not isinstance(data, list):
            raise ValidationError(f"Error parsing {self.plan_path}: expected a list")

        sessions: list[Session] = []
        for entry_num, entry in enumerate(data, 1):
            try:
                sessions.append(dict_to_session(entry))
            except ValidationError as e:
                raise ValidationError(
                    f"Error parsing entry {entry_num} in {self.plan_path}: {e}"
                ) from e
        return sessions

    def save_sessions(self, sessions: list[Session]) -> None:
        """
        Write the session list to plan.json.

        Args:
            sessions: Sessions to write
        """
        self.plan_dir.mkdir(parents=True, exist_ok=True)
        self.plan_path.write_text(sessions_to_json(sessions) + "\n")


def get_default_plan_dir() -> Path:
    """
    Get the default data directory.

    Returns:
        ~/.couch-planner
    """
    return Path.home() / ".couch-planner"
