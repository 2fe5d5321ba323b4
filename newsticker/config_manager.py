import json
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from newsticker.exceptions import ConfigError
from newsticker.logging_config import get_logger


class ConfigManager:
    def __init__(self, config_path: Optional[str] = None, template_path: Optional[str] = None) -> None:
        # Use current working directory as base
        self.config_path: str = config_path or "config/config.json"
        self.template_path: str = template_path or "config/config.template.json"
        self.config: Dict[str, Any] = {}
        self.logger: logging.Logger = get_logger(__name__)

    def get_config_path(self) -> str:
        return self.config_path

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from JSON, filling missing keys from the template."""
        try:
            if not os.path.exists(self.config_path):
                self._create_config_from_template()
            
            self.logger.info(f"Attempting to load config from: {os.path.abspath(self.config_path)}")
            with open(self.config_path, 'r') as f:
                self.config = json.load(f)

            template_config = self._load_template()
            if template_config and self._has_new_keys(self.config, template_config):
                self.logger.info("Config is missing keys present in the template - applying template defaults")
                self._merge_template_defaults(self.config, template_config)
            
            return self.config
            
        except json.JSONDecodeError as e:
            error_msg = f"Error parsing configuration file {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e
        except (IOError, OSError, PermissionError) as e:
            error_msg = f"Error loading configuration from {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e

    def save_config(self, new_config_data: Dict[str, Any]) -> None:
        """Save configuration to the main JSON file."""
        try:
            Path(self.config_path).parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                json.dump(new_config_data, f, indent=4)
            self.config = new_config_data
            self.logger.info(f"Configuration successfully saved to {os.path.abspath(self.config_path)}")
        except (IOError, OSError, PermissionError) as e:
            error_msg = f"Error writing configuration to file {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e

    def _load_template(self) -> Optional[Dict[str, Any]]:
        if not os.path.exists(self.template_path):
            self.logger.warning(f"Template file not found at {os.path.abspath(self.template_path)}, skipping defaults")
            return None
        with open(self.template_path, 'r') as f:
            return json.load(f)

    def _create_config_from_template(self) -> None:
        """Create config.json from template if it doesn't exist."""
        if not os.path.exists(self.template_path):
            error_msg = f"Template file not found at {os.path.abspath(self.template_path)}"
            self.logger.error(error_msg)
            raise ConfigError(error_msg, config_path=self.template_path)
        
        self.logger.info(f"Creating config.json from template at {os.path.abspath(self.template_path)}")
        Path(self.config_path).parent.mkdir(parents=True, exist_ok=True)
        
        with open(self.template_path, 'r') as template_file:
            template_data = json.load(template_file)
        
        with open(self.config_path, 'w') as config_file:
            json.dump(template_data, config_file, indent=4)

    def _has_new_keys(self, current: Dict[str, Any], template: Dict[str, Any]) -> bool:
        """Check if template has keys missing from the current config."""
        for key, value in template.items():
            if key not in current:
                return True
            if isinstance(value, dict) and isinstance(current[key], dict):
                if self._has_new_keys(current[key], value):
                    return True
        return False

    def _merge_template_defaults(self, current: Dict[str, Any], template: Dict[str, Any]) -> None:
        """Recursively add template keys that are missing from current, keeping user values."""
        for key, value in template.items():
            if key not in current:
                current[key] = value
            elif isinstance(value, dict) and isinstance(current[key], dict):
                self._merge_template_defaults(current[key], value)

    def get_ticker_config(self) -> Dict[str, Any]:
        """Get ticker widget configuration."""
        return self.get_config().get('ticker', {})

    def get_server_config(self) -> Dict[str, Any]:
        """Get backend server configuration."""
        return self.get_config().get('server', {})

    def get_video_config(self) -> Dict[str, Any]:
        """Get video player configuration."""
        return self.get_config().get('video', {})

    def get_config(self) -> Dict[str, Any]:
        """Get the full configuration dictionary.
        
        Returns:
            The complete configuration dictionary. If config hasn't been loaded yet,
            it will be loaded first.
        """
        if not self.config:
            self.load_config()
        return self.config
