import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class CommandHistory:
    """
    Keeps the latest generated commands in a JSON file.

    The history is only shown to the user; it is never sent to a provider.
    """

    def __init__(self, history_file: str, max_history: int = 100):
        self.history_file = history_file
        self.max_history = max_history

    def _load(self) -> List[Dict]:
        if not os.path.exists(self.history_file):
            return []
        try:
            with open(self.history_file, 'r') as f:
                entries = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to read history file {self.history_file}: {str(e)}")
            return []
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def record(self, provider: str, instruction: str, command: str) -> bool:
        """
        Append one generation to the history, dropping the oldest entries past max_history.

        Returns:
            True if the history file was written
        """
        entries = self._load()
        entries.append({
            "datetime": datetime.now().isoformat(timespec="seconds"),
            "provider": provider,
            "instruction": instruction,
            "command": command,
        })
        # max_history <= 0 keeps nothing
        entries = entries[-self.max_history:] if self.max_history > 0 else []

        try:
            os.makedirs(os.path.dirname(self.history_file) or ".", exist_ok=True)
            with open(self.history_file, 'w') as f:
                json.dump(entries, f, indent=2)
        except IOError as e:
            logger.error(f"Failed to write history file {self.history_file}: {e}")
            return False
        return True

    def get_history(self, limit: Optional[int] = None) -> List[Dict]:
        """
        Get recorded commands, newest first.

        Args:
            limit: Maximum number of entries to return
        """
        entries = list(reversed(self._load()))
        if limit is not None:
            entries = entries[:limit]
        return entries
