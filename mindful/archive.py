"""Archive of generated meditation scripts."""

import json
from datetime import datetime
from pathlib import Path

from .meditation.request import MeditationRequest
from .meditation.script import MeditationScript


class ScriptArchive:
    """Saves generated scripts alongside the request that produced them.

    Each script is written as JSON (for reloading) and as plain text
    (for reading aloud or editing before synthesis).
    """

    def __init__(self, save_directory: str | Path = "scripts"):
        """Initialize script archive.

        Args:
            save_directory: Directory to save scripts in
        """
        self.save_directory = Path(save_directory)

    def save_script(
        self,
        script: MeditationScript,
        request: MeditationRequest | None = None,
        script_id: str | None = None,
    ) -> Path:
        """Save a script as JSON.

        Args:
            script: The generated script
            request: The request it was generated from
            script_id: Optional ID (timestamp-based if not provided)

        Returns:
            Path to the saved file
        """
        if script_id is None:
            script_id = datetime.now().strftime("%Y-%m-%d-%H%M%S")

        self.save_directory.mkdir(parents=True, exist_ok=True)
        filepath = self.save_directory / f"{script_id}.json"

        output = {
            "version": "1.0",
            "script_id": script_id,
            "saved_at": datetime.now().isoformat(),
            "request": request.to_dict() if request else None,
            **script.to_dict(),
        }

        with open(filepath, "w") as f:
            json.dump(output, f, indent=2)

        return filepath

    def save_script_text(self, script: MeditationScript, script_id: str) -> Path:
        """Save the script content as human-readable text.

        Returns:
            Path to the saved text file
        """
        self.save_directory.mkdir(parents=True, exist_ok=True)
        filepath = self.save_directory / f"{script_id}.txt"

        lines = [
            "=" * 60,
            f"Meditation Script: {script_id}",
            "=" * 60,
            "",
        ]

        pauses = script.pauses()
        if pauses:
            lines.append(f"Pauses: {len(pauses)} ({format_duration(sum(pauses))} total)")
        for name, marker in script.timing_markers.items():
            lines.append(f"{name.capitalize()}: {marker}")

        lines.append("")
        lines.append("-" * 60)
        lines.append("")
        lines.append(script.content)

        with open(filepath, "w") as f:
            f.write("\n".join(lines))

        return filepath

    def list_scripts(self) -> list[dict]:
        """List all saved scripts, newest first.

        Returns:
            List of script metadata (id, date, technique, length)
        """
        scripts = []

        if not self.save_directory.exists():
            return scripts

        for filepath in sorted(self.save_directory.glob("*.json"), reverse=True):
            try:
                with open(filepath) as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError):
                continue
            if not isinstance(data, dict):
                continue

            request = data.get("request")
            if not isinstance(request, dict):
                request = {}
            scripts.append({
                "script_id": data.get("script_id", filepath.stem),
                "date": data.get("saved_at", "unknown"),
                "technique": request.get("technique"),
                "session_length": request.get("session_length"),
                "filepath": str(filepath),
            })

        return scripts

    def load_script(self, script_id: str) -> MeditationScript | None:
        """Load a saved script.

        Returns:
            The script, or None if not found

        Raises:
            ValueError: If the file does not hold a saved script
        """
        filepath = self.save_directory / f"{script_id}.json"

        if not filepath.exists():
            return None

        with open(filepath) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{filepath} does not hold a saved script")
        return MeditationScript.from_dict(data)


def format_duration(seconds: float) -> str:
    """Format duration as human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "45s" or "5m 30s"
    """
    if seconds < 60:
        return f"{int(seconds)}s"
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}m {secs}s"
