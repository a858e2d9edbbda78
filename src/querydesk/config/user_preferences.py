"""
User Preferences - Persistent storage for query execution settings
"""
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Union

from ..constants import DEFAULT_PAGE_SIZE, HISTORY_MAX_ENTRIES

logger = logging.getLogger(__name__)


class UserPreferences:
    """
    Manages user preferences with persistent storage

    Preferences include:
    - default_limit: Rows per page for query results
    - record_history: Whether executed editor queries go to history
    - history_size: Maximum number of history entries kept
    """

    DEFAULT_PREFERENCES = {
        'default_limit': DEFAULT_PAGE_SIZE,
        'record_history': True,
        'history_size': HISTORY_MAX_ENTRIES,
    }

    _instance: Optional['UserPreferences'] = None

    def __init__(self, config_dir: Union[str, Path] = '_AppConfig'):
        """Initialize user preferences"""
        self._preferences = self.DEFAULT_PREFERENCES.copy()
        self._config_dir = Path(config_dir)
        self._config_file = self._config_dir / 'querydesk_preferences.json'
        self._observers = {}  # Key -> list of callbacks

        self.load()

    @classmethod
    def get_instance(cls) -> 'UserPreferences':
        """Get singleton instance of UserPreferences"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a preference value

        Args:
            key: Preference key
            default: Default value if key not found

        Returns:
            Preference value or default
        """
        return self._preferences.get(key, default)

    def set(self, key: str, value: Any, save: bool = True):
        """
        Set a preference value

        Args:
            key: Preference key
            value: New value
            save: Whether to save to disk immediately
        """
        old_value = self._preferences.get(key)
        self._preferences[key] = value

        if save:
            self.save()

        if old_value != value:
            self._notify_observers(key, value)

        logger.info(f"Preference changed: {key} = {value}")

    def get_default_limit(self) -> int:
        """Rows per page for tabular results"""
        return int(self.get('default_limit', DEFAULT_PAGE_SIZE))

    def set_default_limit(self, limit: int):
        self.set('default_limit', int(limit))

    def load(self):
        """Load preferences from file"""
        try:
            if self._config_file.exists():
                with open(self._config_file, 'r', encoding='utf-8') as f:
                    loaded_prefs = json.load(f)
                # Merge with defaults to ensure all keys exist
                self._preferences = self.DEFAULT_PREFERENCES.copy()
                self._preferences.update(loaded_prefs)
                logger.info(f"Loaded preferences from {self._config_file}")
            else:
                logger.debug("No preferences file found, using defaults")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading preferences: {e}")
            self._preferences = self.DEFAULT_PREFERENCES.copy()

    def save(self):
        """Save preferences to file"""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(self._config_file, 'w', encoding='utf-8') as f:
                json.dump(self._preferences, f, indent=2)
            logger.debug(f"Saved preferences to {self._config_file}")
        except OSError as e:
            logger.error(f"Error saving preferences: {e}")

    def reset_to_defaults(self):
        """Reset all preferences to default values"""
        self._preferences = self.DEFAULT_PREFERENCES.copy()
        self.save()
        logger.info("Preferences reset to defaults")

        for key in self._preferences:
            self._notify_observers(key, self._preferences[key])

    def register_observer(self, key: str, callback):
        """
        Register a callback for preference changes

        Args:
            key: Preference key to observe
            callback: Function(new_value) to call on change
        """
        callbacks = self._observers.setdefault(key, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def unregister_observer(self, key: str, callback):
        if key in self._observers and callback in self._observers[key]:
            self._observers[key].remove(callback)

    def _notify_observers(self, key: str, value: Any):
        """Notify observers of a preference change"""
        for callback in self._observers.get(key, []):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Error notifying preference observer {callback}: {e}")

    def get_all(self) -> Dict[str, Any]:
        """Get all preferences as a dictionary"""
        return self._preferences.copy()


def get_preferences() -> UserPreferences:
    """Get the global UserPreferences instance"""
    return UserPreferences.get_instance()
